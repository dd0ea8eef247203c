"""Base class for factories that build and cache identifier resolvers."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, Iterable, Optional, Set, Union

from gene_id_resolver.config.properties import CACHE_FILE_PROPERTY, DEFAULT_CACHE_FILE
from gene_id_resolver.errors import ResolverError
from gene_id_resolver.store import DEFAULT_CLASS, ResolverStore, get_store

TAXA = Union[str, Iterable[str]]

logger = logging.getLogger(__name__)


class BuildOutcome(str, Enum):
    """What a call to :meth:`IdResolverFactory.create_id_resolver` did."""

    NOTHING_REQUESTED = "nothing_requested"
    ALREADY_COVERED = "already_covered"
    RESTORED = "restored"
    BUILT = "built"
    NO_CONFIGURED_SOURCE = "no_configured_source"


@dataclass
class IdResolverFactory(ABC):
    """
    Builds a resolver on request and keeps it for the lifetime of the factory.

    The factory owns a single resolver that is extended in place as more taxa
    are requested. Before reading reference data it tries to restore a snapshot
    written by an earlier run, and after every build it writes the snapshot.

    The first error raised while building is remembered and later requests do
    not retry: they raise again, or return whatever resolver exists when
    ``fail_on_error`` is False. A factory is not thread safe, callers must
    serialise access.
    """

    name: ClassVar[str] = "base"

    properties: Dict[str, str] = field(default_factory=dict)
    """Runtime properties, e.g. location of reference and snapshot files"""

    cls: str = DEFAULT_CLASS
    """Class of object the resolver holds"""

    store_name: str = "in_memory"

    resolver: Optional[ResolverStore] = None

    caught_error: Optional[Exception] = None
    """First error raised while building, if any"""

    restore_attempted: bool = False

    @property
    def cache_path(self) -> Path:
        return Path(self.properties.get(CACHE_FILE_PROPERTY) or DEFAULT_CACHE_FILE)

    def get_id_resolver(
        self, taxon_ids: Optional[TAXA], fail_on_error: bool = True
    ) -> Optional[ResolverStore]:
        """
        Return a resolver covering the given taxa, building it if needed.

        If ``fail_on_error`` is False any error is logged and the current
        resolver (possibly None) is returned, which lets callers carry on
        without identifier resolution. Once an error has been recorded, a later
        call with ``fail_on_error`` raises again instead of quietly returning
        the stored resolver, so a caller that asks for failures always sees them.

        :param taxon_ids: a taxon id or collection of taxon ids
        :param fail_on_error: if True, raise a :class:`ResolverError` on failure
        :return: the resolver, or None if nothing was requested or built
        """
        if taxon_ids is None:
            return None
        if isinstance(taxon_ids, str):
            taxon_ids = {taxon_ids}
        taxon_ids = set(taxon_ids)
        if not taxon_ids:
            return None
        if self.caught_error is not None:
            if fail_on_error:
                raise ResolverError(
                    f"{self.name} resolver previously failed: {self.caught_error}"
                ) from self.caught_error
            logger.debug(f"Not retrying {self.name} resolver after {self.caught_error!r}")
            return self.resolver
        try:
            self.create_id_resolver(taxon_ids)
        except Exception as e:
            self.caught_error = e
            if fail_on_error:
                raise ResolverError(f"Failed to create {self.name} resolver: {e}") from e
            logger.error(f"Failed to create {self.name} resolver, continuing without: {e}")
        return self.resolver

    def create_id_resolver(self, taxon_ids: Iterable[str]) -> BuildOutcome:
        """
        Make sure the resolver covers the given taxa.

        :param taxon_ids:
        :return: what was done
        """
        taxon_ids = self.filter_taxa(set(taxon_ids))
        if not taxon_ids:
            return BuildOutcome.NOTHING_REQUESTED
        if self.resolver is not None and self.resolver.has_taxons(taxon_ids):
            return BuildOutcome.ALREADY_COVERED
        created = self.resolver is None
        if created:
            self.resolver = get_store(self.store_name, cls=self.cls)
        restored = self.restore_from_file()
        if restored and self.resolver.has_taxons(taxon_ids):
            return BuildOutcome.RESTORED
        outcome = self.build(taxon_ids)
        if outcome == BuildOutcome.NO_CONFIGURED_SOURCE and created and not restored:
            self.resolver = None
        return outcome

    def filter_taxa(self, taxon_ids: Set[str]) -> Set[str]:
        """
        Remove taxa that should never be resolved.

        :param taxon_ids:
        :return:
        """
        return taxon_ids

    def restore_from_file(self) -> bool:
        """
        Extend the resolver from the snapshot file, once per factory.

        :return: True if a snapshot was read by this call
        """
        if self.restore_attempted:
            return False
        self.restore_attempted = True
        path = self.cache_path
        if not path.exists():
            logger.debug(f"No resolver snapshot at {path}")
            return False
        self.resolver.populate_from_file(path)
        return True

    def reset(self):
        """Forget a previous error so the next request retries."""
        self.caught_error = None

    @abstractmethod
    def build(self, taxon_ids: Set[str]) -> BuildOutcome:
        """
        Read reference data for the given taxa into the resolver and write the snapshot.

        :param taxon_ids:
        :return:
        """
