"""Exceptions raised while building or restoring identifier resolvers."""


class ResolverError(Exception):
    """Base class for all resolver errors."""


class ConfigError(ResolverError):
    """Configuration is malformed or missing, e.g. an unset reference file path."""


class ParseError(ResolverError):
    """A reference file or resolver snapshot could not be read."""


class PartialCoverageWarning(UserWarning):
    """Some requested organisms had no records in the reference file."""


__all__ = ["ResolverError", "ConfigError", "ParseError", "PartialCoverageWarning"]
