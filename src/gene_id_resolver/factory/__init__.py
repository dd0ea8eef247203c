"""Factories that build identifier resolvers from reference data."""

from .entrez_resolver_factory import EntrezGeneIdResolverFactory
from .id_resolver_factory import BuildOutcome, IdResolverFactory

__all__ = ["IdResolverFactory", "EntrezGeneIdResolverFactory", "BuildOutcome"]
