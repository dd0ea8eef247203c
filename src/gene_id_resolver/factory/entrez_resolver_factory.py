"""Identifier resolver built from the NCBI gene_info file."""
import logging
import warnings
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, List, Set, TextIO

from gene_id_resolver.config.properties import ENTREZ_FILE_PROPERTY
from gene_id_resolver.config.resolver_config import ResolverConfig
from gene_id_resolver.errors import ParseError, PartialCoverageWarning
from gene_id_resolver.factory.id_resolver_factory import BuildOutcome, IdResolverFactory
from gene_id_resolver.wrappers.gene_info_wrapper import GeneInfoRecord, GeneInfoWrapper

logger = logging.getLogger(__name__)


@dataclass
class EntrezGeneIdResolverFactory(IdResolverFactory):
    """
    Resolver for Entrez genes.

    Per-organism configuration decides which cross-reference becomes the
    primary identifier, e.g. RGD ids for rat. Organisms without a configured
    cross-reference keep the Entrez GeneID.

    >>> from gene_id_resolver.factory import EntrezGeneIdResolverFactory
    >>> factory = EntrezGeneIdResolverFactory(properties={})
    >>> factory.get_id_resolver(set()) is None
    True
    """

    name: ClassVar[str] = "entrez"

    config: ResolverConfig = field(default_factory=ResolverConfig.load)

    wrapper: GeneInfoWrapper = field(default_factory=GeneInfoWrapper)

    def filter_taxa(self, taxon_ids: Set[str]) -> Set[str]:
        remaining = taxon_ids - self.config.ignored_taxa
        logger.info(
            f"Ignore taxons: {sorted(self.config.ignored_taxa)}, remain taxons: {sorted(remaining)}"
        )
        return remaining

    def build(self, taxon_ids: Set[str]) -> BuildOutcome:
        file_name = (self.properties.get(ENTREZ_FILE_PROPERTY) or "").strip()
        if not file_name:
            logger.warning(
                f"Entrez gene resolver has no file name specified, set {ENTREZ_FILE_PROPERTY}"
                " to the location of the gene_info file."
            )
            return BuildOutcome.NO_CONFIGURED_SOURCE
        logger.info("Creating id resolver from data file and caching it.")
        self.wrapper.source_locator = file_name
        with self.wrapper.open_source() as file:
            self.create_from_file(file, taxon_ids)
        self.resolver.write_to_file(self.cache_path)
        return BuildOutcome.BUILT

    def create_from_file(self, file: TextIO, taxon_ids: Iterable[str]):
        """
        Add genes for the given taxa from an open gene_info file.

        Some organisms are listed in gene_info under a strain taxon, e.g. yeast.
        Records are read under the strain id and filed under each requested id
        that maps to it.

        :param file:
        :param taxon_ids: requested taxon ids
        :return:
        """
        taxon_ids = set(taxon_ids)
        new_taxon_ids = self.config.get_strains(taxon_ids)
        logger.info(f"New taxons: {sorted(new_taxon_ids)}, original taxons: {sorted(taxon_ids)}")
        records = self.wrapper.records_from_file(file, new_taxon_ids.keys())
        if not records:
            raise ParseError("Failed to read any records from gene_info file.")

        missing = {
            taxon_id
            for new_taxon, requested in new_taxon_ids.items()
            if new_taxon not in records
            for taxon_id in requested
        }
        if missing:
            message = f"No records in gene_info file for species: {sorted(missing)}"
            logger.warning(message)
            warnings.warn(message, PartialCoverageWarning, stacklevel=2)

        for new_taxon, genes in records.items():
            for taxon_id in sorted(new_taxon_ids[new_taxon]):
                if self.resolver.has_taxon(taxon_id):
                    continue
                self.process_genes(taxon_id, genes)

    def process_genes(self, taxon_id: str, genes: List[GeneInfoRecord]):
        for record in genes:
            primary_id = self.primary_identifier(taxon_id, record)
            self.resolver.add_main_ids(taxon_id, primary_id, record.main_ids)
            self.resolver.add_synonyms(taxon_id, primary_id, record.all_xref_ids())
            self.resolver.add_synonyms(taxon_id, primary_id, record.synonyms)
        logger.info(f"Added {len(genes)} genes for taxon {taxon_id}")

    def primary_identifier(self, taxon_id: str, record: GeneInfoRecord) -> str:
        """
        Choose the primary identifier for a gene.

        ``taxon_id`` is the requested taxon, not the strain. When the configured
        cross-reference has several ids the smallest is used.

        >>> config = ResolverConfig(
        ...     xref_by_taxon={"10116": "RGD"}, prefix_by_taxon={"10116": "RGD:"}
        ... )
        >>> factory = EntrezGeneIdResolverFactory(config=config)
        >>> record = GeneInfoRecord(entrez="123", taxon_id="10116", xrefs={"RGD": {"456"}})
        >>> factory.primary_identifier("10116", record)
        'RGD:456'

        :param taxon_id:
        :param record:
        :return:
        """
        namespace = self.config.xref_for(taxon_id)
        xref_ids = record.xrefs.get(namespace) if namespace else None
        if not xref_ids:
            return record.entrez
        primary_id = min(xref_ids)
        prefix = self.config.prefix_for(taxon_id)
        if prefix:
            primary_id = prefix + primary_id
        return primary_id

    def resolution_summary(self) -> Dict[str, int]:
        """Number of primary identifiers per covered taxon."""
        if self.resolver is None:
            return {}
        return {
            taxon_id: self.resolver.size(taxon_id) for taxon_id in sorted(self.resolver.get_taxons())
        }
