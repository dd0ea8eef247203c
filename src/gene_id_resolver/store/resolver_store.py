"""Abstract resolver store."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Iterable, Iterator, List, Optional, Set, Union

from pydantic import BaseModel

DEFAULT_CLASS = "gene"
PATH_LIKE = Union[str, Path]


class EntryKind(str, Enum):
    MAIN = "main"
    SYNONYM = "synonym"


class ResolverEntry(BaseModel):
    """
    One primary identifier and the identifiers that resolve to it.

    This is the unit written to and read from resolver snapshots.
    """

    taxon_id: str
    cls: str = DEFAULT_CLASS
    primary_id: str
    kind: EntryKind
    ids: List[str] = []


@dataclass
class ResolverStore(ABC):
    """
    Base class for identifier resolvers.

    A resolver maps identifiers of an organism to primary identifiers. For each
    organism and class of object (e.g. gene) it holds, per primary identifier,
    a set of *main* ids and a set of *synonyms*.

    >>> from gene_id_resolver.store import get_store
    >>> resolver = get_store("in_memory")
    >>> resolver.add_main_ids("10116", "RGD:2004", ["24152", "A2m"])
    >>> resolver.resolve_id("10116", "A2m")
    {'RGD:2004'}
    """

    name: ClassVar[str] = "base"

    cls: str = DEFAULT_CLASS
    """Default class of object, used when none is passed"""

    def _get_cls(self, cls: Optional[str] = None) -> str:
        return cls if cls is not None else self.cls

    # Write operations

    @abstractmethod
    def add_resolver_entry(
        self,
        taxon_id: str,
        primary_id: str,
        ids: Iterable[str],
        main_id: bool,
        cls: Optional[str] = None,
    ):
        """
        Record that each of ``ids`` resolves to ``primary_id``.

        :param taxon_id:
        :param primary_id:
        :param ids:
        :param main_id: True for main ids, False for synonyms
        :param cls:
        :return:
        """

    def add_main_ids(
        self, taxon_id: str, primary_id: str, ids: Iterable[str], cls: Optional[str] = None
    ):
        self.add_resolver_entry(taxon_id, primary_id, ids, True, cls=cls)

    def add_synonyms(
        self, taxon_id: str, primary_id: str, ids: Iterable[str], cls: Optional[str] = None
    ):
        self.add_resolver_entry(taxon_id, primary_id, ids, False, cls=cls)

    def add_entry(self, entry: ResolverEntry):
        self.add_resolver_entry(
            entry.taxon_id, entry.primary_id, entry.ids, entry.kind == EntryKind.MAIN, cls=entry.cls
        )

    # Coverage

    @abstractmethod
    def get_taxons(self, cls: Optional[str] = None) -> Set[str]:
        """
        Return the taxa this resolver holds identifiers for.

        :param cls:
        :return:
        """

    def has_taxon(self, taxon_id: str, cls: Optional[str] = None) -> bool:
        return taxon_id in self.get_taxons(cls)

    def has_taxons(self, taxon_ids: Iterable[str], cls: Optional[str] = None) -> bool:
        """
        Check the resolver covers every taxon in ``taxon_ids``.

        :param taxon_ids:
        :param cls:
        :return:
        """
        return set(taxon_ids) <= self.get_taxons(cls)

    @abstractmethod
    def has_class(self, cls: str) -> bool:
        """True if any identifiers are held for ``cls``."""

    # Query operations

    @abstractmethod
    def resolve_id(self, taxon_id: str, id: str, cls: Optional[str] = None) -> Set[str]:
        """
        Return the primary identifiers ``id`` resolves to.

        A primary identifier resolves to itself; otherwise main ids take
        precedence over synonyms. Unknown ids give an empty set.

        :param taxon_id:
        :param id:
        :param cls:
        :return:
        """

    def count_resolutions(self, taxon_id: str, id: str, cls: Optional[str] = None) -> int:
        return len(self.resolve_id(taxon_id, id, cls=cls))

    @abstractmethod
    def is_primary_identifier(self, taxon_id: str, id: str, cls: Optional[str] = None) -> bool:
        """True if ``id`` is a primary identifier for the taxon."""

    @abstractmethod
    def get_synonyms(self, taxon_id: str, primary_id: str, cls: Optional[str] = None) -> Set[str]:
        """
        All main ids and synonyms recorded for a primary identifier.

        :param taxon_id:
        :param primary_id:
        :param cls:
        :return:
        """

    @abstractmethod
    def size(self, taxon_id: str, cls: Optional[str] = None) -> int:
        """Number of primary identifiers held for a taxon."""

    @abstractmethod
    def entries(self) -> Iterator[ResolverEntry]:
        """Yield every entry held by the resolver."""

    # Loading and dumping

    @abstractmethod
    def write_to_file(self, path: PATH_LIKE):
        """
        Persist the resolver to a snapshot file.

        :param path:
        :return:
        """

    @abstractmethod
    def populate_from_file(self, path: PATH_LIKE):
        """
        Extend the resolver with the contents of a snapshot file.

        :param path:
        :return:
        """
