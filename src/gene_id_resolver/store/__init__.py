"""Stores for resolved identifiers.

* Base class: :class:`ResolverStore`

Currently only an in-memory implementation is provided, persisted as a
JSON lines snapshot.
"""

from .in_memory_resolver import IdResolver
from .resolver_store import DEFAULT_CLASS, EntryKind, ResolverEntry, ResolverStore

__all__ = ["ResolverStore", "IdResolver", "ResolverEntry", "EntryKind", "DEFAULT_CLASS", "get_store"]


def get_all_subclasses(cls):
    """Recursively get all subclasses of a given class."""
    direct_subclasses = cls.__subclasses__()
    return direct_subclasses + [
        s for subclass in direct_subclasses for s in get_all_subclasses(subclass)
    ]


def get_store(name: str, *args, **kwargs) -> ResolverStore:
    for c in get_all_subclasses(ResolverStore):
        if c.name == name:
            return c(*args, **kwargs)
    raise ValueError(f"Unknown store {name}, not found in {get_all_subclasses(ResolverStore)}")
