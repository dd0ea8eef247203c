"""
gene-id-resolver: resolution of gene identifiers to primary identifiers.

Architecture
============

* :mod:`.config`: per-organism configuration and runtime properties
* :mod:`.wrappers`: readers for reference data files such as NCBI gene_info
* :mod:`.store`: resolvers mapping identifiers to primary identifiers, with snapshots
* :mod:`.factory`: builds resolvers on request, reusing snapshots where possible


"""
import importlib_metadata

try:
    __version__ = importlib_metadata.version(__name__)
except importlib_metadata.PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"  # pragma: no cover

from gene_id_resolver.factory import BuildOutcome, EntrezGeneIdResolverFactory
from gene_id_resolver.store import IdResolver, ResolverStore

__all__ = ["ResolverStore", "IdResolver", "EntrezGeneIdResolverFactory", "BuildOutcome"]
