"""Simple in-memory identifier resolver, persisted as JSON lines."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Dict, Iterable, Iterator, Optional, Set

import jsonlines
from pydantic import BaseModel, ValidationError

from gene_id_resolver.errors import ParseError
from gene_id_resolver.store.resolver_store import (
    PATH_LIKE,
    EntryKind,
    ResolverEntry,
    ResolverStore,
)

logger = logging.getLogger(__name__)


class IdMap(BaseModel):
    """Identifier maps for one taxon and class."""

    main_ids: Dict[str, Set[str]] = {}
    """primary id -> main ids"""

    synonyms: Dict[str, Set[str]] = {}
    """primary id -> synonyms"""

    main_index: Dict[str, Set[str]] = {}
    """main id -> primary ids"""

    synonym_index: Dict[str, Set[str]] = {}
    """synonym -> primary ids"""

    def add(self, primary_id: str, ids: Iterable[str], main_id: bool) -> None:
        forward = self.main_ids if main_id else self.synonyms
        index = self.main_index if main_id else self.synonym_index
        known = forward.setdefault(primary_id, set())
        for id in ids:
            known.add(id)
            index.setdefault(id, set()).add(primary_id)


class IdMapIndex(BaseModel):

    maps: Dict[str, Dict[str, IdMap]] = {}
    """taxon id -> class -> maps"""

    def get_map(self, taxon_id: str, cls: str) -> IdMap:
        maps_by_cls = self.maps.setdefault(taxon_id, {})
        if cls not in maps_by_cls:
            maps_by_cls[cls] = IdMap()
        return maps_by_cls[cls]


@dataclass
class IdResolver(ResolverStore):
    """
    In-memory resolver.

    Snapshots are written as JSON lines, one :class:`ResolverEntry` per line.
    """

    name: ClassVar[str] = "in_memory"

    id_map_index: IdMapIndex = field(default_factory=IdMapIndex)

    def _lookup(self, taxon_id: str, cls: Optional[str]) -> Optional[IdMap]:
        return self.id_map_index.maps.get(taxon_id, {}).get(self._get_cls(cls))

    # Write operations

    def add_resolver_entry(
        self,
        taxon_id: str,
        primary_id: str,
        ids: Iterable[str],
        main_id: bool,
        cls: Optional[str] = None,
    ):
        id_map = self.id_map_index.get_map(taxon_id, self._get_cls(cls))
        id_map.add(primary_id, ids, main_id)

    # Coverage

    def get_taxons(self, cls: Optional[str] = None) -> Set[str]:
        cls = self._get_cls(cls)
        return {taxon_id for taxon_id, maps in self.id_map_index.maps.items() if cls in maps}

    def has_class(self, cls: str) -> bool:
        return any(cls in maps for maps in self.id_map_index.maps.values())

    # Query operations

    def is_primary_identifier(self, taxon_id: str, id: str, cls: Optional[str] = None) -> bool:
        id_map = self._lookup(taxon_id, cls)
        if id_map is None:
            return False
        return id in id_map.main_ids or id in id_map.synonyms

    def resolve_id(self, taxon_id: str, id: str, cls: Optional[str] = None) -> Set[str]:
        id_map = self._lookup(taxon_id, cls)
        if id_map is None:
            return set()
        if id in id_map.main_ids or id in id_map.synonyms:
            return {id}
        if id in id_map.main_index:
            return set(id_map.main_index[id])
        return set(id_map.synonym_index.get(id, set()))

    def get_synonyms(self, taxon_id: str, primary_id: str, cls: Optional[str] = None) -> Set[str]:
        id_map = self._lookup(taxon_id, cls)
        if id_map is None:
            return set()
        return id_map.main_ids.get(primary_id, set()) | id_map.synonyms.get(primary_id, set())

    def entries(self) -> Iterator[ResolverEntry]:
        for taxon_id, maps in self.id_map_index.maps.items():
            for cls, id_map in maps.items():
                for kind, forward in (
                    (EntryKind.MAIN, id_map.main_ids),
                    (EntryKind.SYNONYM, id_map.synonyms),
                ):
                    for primary_id, ids in forward.items():
                        yield ResolverEntry(
                            taxon_id=taxon_id,
                            cls=cls,
                            primary_id=primary_id,
                            kind=kind,
                            ids=sorted(ids),
                        )

    def size(self, taxon_id: str, cls: Optional[str] = None) -> int:
        id_map = self._lookup(taxon_id, cls)
        if id_map is None:
            return 0
        return len(set(id_map.main_ids) | set(id_map.synonyms))

    # Loading and dumping

    def write_to_file(self, path: PATH_LIKE):
        """
        Write the snapshot next to ``path`` and move it into place.

        An interrupted write leaves any earlier snapshot untouched.
        """
        path = Path(path)
        logger.info(f"Writing resolver snapshot to {path}")
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with jsonlines.open(tmp_path, mode="w") as writer:
                writer.write_all(entry.model_dump(mode="json") for entry in self.entries())
            tmp_path.replace(path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def populate_from_file(self, path: PATH_LIKE):
        logger.info(f"Restoring resolver from {path}")
        n = 0
        with jsonlines.open(path) as reader:
            try:
                for obj in reader:
                    self.add_entry(ResolverEntry(**obj))
                    n += 1
            except (jsonlines.InvalidLineError, ValidationError, TypeError) as e:
                raise ParseError(f"Malformed resolver snapshot {path}: {e}") from e
        logger.info(f"Restored {n} entries for taxa {sorted(self.get_taxons())}")
