"""Wrappers on top of reference data files.

Wrappers turn a local data file into records that can be loaded into a resolver.
"""

from gene_id_resolver.wrappers.base_wrapper import BaseWrapper
from gene_id_resolver.wrappers.gene_info_wrapper import GeneInfoRecord, GeneInfoWrapper

__all__ = [
    "BaseWrapper",
    "GeneInfoWrapper",
    "GeneInfoRecord",
    "get_wrapper",
]


def get_all_subclasses(cls):
    """Recursively get all subclasses of a given class."""
    direct_subclasses = cls.__subclasses__()
    return direct_subclasses + [
        s for subclass in direct_subclasses for s in get_all_subclasses(subclass)
    ]


def get_wrapper(name: str, **kwargs) -> BaseWrapper:
    for c in get_all_subclasses(BaseWrapper):
        if c.name == name:
            return c(**kwargs)
    raise ValueError(f"Unknown wrapper {name}, not found in {get_all_subclasses(BaseWrapper)}")
