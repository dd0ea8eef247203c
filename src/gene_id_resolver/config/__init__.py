"""Configuration: bundled per-organism settings and runtime properties."""

from .properties import (
    CACHE_FILE_PROPERTY,
    DEFAULT_CACHE_FILE,
    ENTREZ_FILE_PROPERTY,
    load_properties,
    read_properties,
)
from .resolver_config import ConfigKey, ConfigSuffix, ResolverConfig

__all__ = [
    "ResolverConfig",
    "ConfigKey",
    "ConfigSuffix",
    "load_properties",
    "read_properties",
    "ENTREZ_FILE_PROPERTY",
    "CACHE_FILE_PROPERTY",
    "DEFAULT_CACHE_FILE",
]
