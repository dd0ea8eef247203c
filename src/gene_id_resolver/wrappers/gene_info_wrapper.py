"""Reader for the NCBI gene_info file."""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, Iterator, List, Optional, Set, TextIO

from pydantic import BaseModel

from gene_id_resolver.errors import ParseError
from gene_id_resolver.wrappers.base_wrapper import BaseWrapper

logger = logging.getLogger(__name__)

MISSING = "-"
LIST_SEPARATOR = "|"

TAX_ID = 0
GENE_ID = 1
SYMBOL = 2
LOCUS_TAG = 3
SYNONYMS = 4
DB_XREFS = 5
TYPE_OF_GENE = 9
OFFICIAL_SYMBOL = 10
OFFICIAL_NAME = 11
MIN_COLUMNS = OFFICIAL_NAME + 1


def _value(col: str) -> Optional[str]:
    col = col.strip()
    if not col or col == MISSING:
        return None
    return col


def _values(col: str) -> Set[str]:
    return {v.strip() for v in col.split(LIST_SEPARATOR) if v.strip() and v.strip() != MISSING}


def parse_xrefs(col: str) -> Dict[str, Set[str]]:
    """
    Parse a dbXrefs column.

    Each entry is split on the first colon only, so namespaced ids keep their own prefix.

    >>> parse_xrefs("MGI:MGI:96677|Ensembl:ENSMUSG00000000001")
    {'MGI': {'MGI:96677'}, 'Ensembl': {'ENSMUSG00000000001'}}

    :param col:
    :return: dictionary of namespace to ids
    """
    xrefs = {}
    for entry in col.split(LIST_SEPARATOR):
        entry = entry.strip()
        if not entry or entry == MISSING:
            continue
        if ":" not in entry:
            logger.debug(f"Ignoring cross-reference without namespace: {entry}")
            continue
        db, xref_id = entry.split(":", 1)
        xrefs.setdefault(db, set()).add(xref_id)
    return xrefs


class GeneInfoRecord(BaseModel):
    """A single gene from gene_info."""

    entrez: str
    """NCBI GeneID, the native identifier"""

    taxon_id: str

    default_symbol: Optional[str] = None

    official_symbol: Optional[str] = None
    """Symbol from nomenclature authority"""

    official_name: Optional[str] = None

    locus_tag: Optional[str] = None

    gene_type: Optional[str] = None

    xrefs: Dict[str, Set[str]] = {}
    """Cross-references keyed by namespace, e.g. ``{"RGD": {"2004"}}``"""

    synonyms: Set[str] = set()

    @property
    def main_ids(self) -> Set[str]:
        """Identifiers the record itself treats as canonical."""
        ids = {self.entrez}
        for v in (self.official_symbol, self.default_symbol, self.locus_tag):
            if v:
                ids.add(v)
        return ids

    @property
    def symbol(self) -> Optional[str]:
        return self.official_symbol or self.default_symbol

    def all_xref_ids(self) -> Set[str]:
        """Union of cross-reference ids over all namespaces."""
        ids = set()
        for xref_ids in self.xrefs.values():
            ids.update(xref_ids)
        return ids


@dataclass
class GeneInfoWrapper(BaseWrapper):
    """
    A wrapper over the NCBI gene_info tab-separated file.

    Lines starting with ``#`` are headers. Only rows for the requested
    taxa are turned into records.
    """

    name: ClassVar[str] = "gene_info"

    taxon_ids: Optional[Set[str]] = field(default=None)
    """Taxa to read; None reads every taxon"""

    def record_from_row(self, cols: List[str]) -> GeneInfoRecord:
        return GeneInfoRecord(
            taxon_id=cols[TAX_ID].strip(),
            entrez=cols[GENE_ID].strip(),
            default_symbol=_value(cols[SYMBOL]),
            locus_tag=_value(cols[LOCUS_TAG]),
            synonyms=_values(cols[SYNONYMS]),
            xrefs=parse_xrefs(cols[DB_XREFS]),
            gene_type=_value(cols[TYPE_OF_GENE]),
            official_symbol=_value(cols[OFFICIAL_SYMBOL]),
            official_name=_value(cols[OFFICIAL_NAME]),
        )

    def iter_records(
        self, file: TextIO, taxon_ids: Optional[Iterable[str]] = None
    ) -> Iterator[GeneInfoRecord]:
        """
        Yield records from an open gene_info file.

        :param file:
        :param taxon_ids: taxa to keep; None keeps all
        :return:
        """
        if taxon_ids is not None:
            taxon_ids = set(taxon_ids)
        for line_number, line in enumerate(file, start=1):
            if line.startswith("#") or not line.strip():
                continue
            cols = line.rstrip("\r\n").split("\t")
            if len(cols) < MIN_COLUMNS:
                raise ParseError(
                    f"Line {line_number}: expected at least {MIN_COLUMNS} columns, got {len(cols)}"
                )
            if taxon_ids is not None and cols[TAX_ID].strip() not in taxon_ids:
                continue
            yield self.record_from_row(cols)

    def records_from_file(
        self, file: TextIO, taxon_ids: Optional[Iterable[str]] = None
    ) -> Dict[str, List[GeneInfoRecord]]:
        """
        Read gene_info records grouped by taxon.

        Taxa with no rows in the file are absent from the result.

        :param file:
        :param taxon_ids:
        :return: dictionary of taxon id to records
        """
        records = defaultdict(list)
        for record in self.iter_records(file, taxon_ids):
            records[record.taxon_id].append(record)
        for taxon_id, taxon_records in records.items():
            self._report_duplicate_symbols(taxon_id, taxon_records)
        return dict(records)

    def objects_from_file(
        self, file: TextIO, object_ids: Optional[Iterable[str]] = None, **kwargs
    ) -> Iterator[Dict]:
        """
        Yield records as dictionaries.

        :param file:
        :param object_ids: taxon ids; defaults to the wrapper's taxon_ids
        :return:
        """
        if object_ids is None:
            object_ids = self.taxon_ids
        for record in self.iter_records(file, object_ids):
            yield record.model_dump()

    @staticmethod
    def _report_duplicate_symbols(taxon_id: str, records: List[GeneInfoRecord]):
        genes_by_symbol = defaultdict(set)
        for record in records:
            if record.symbol:
                genes_by_symbol[record.symbol].add(record.entrez)
        duplicates = {s: ids for s, ids in genes_by_symbol.items() if len(ids) > 1}
        if duplicates:
            logger.debug(f"Symbols shared by several genes in taxon {taxon_id}: {duplicates}")
