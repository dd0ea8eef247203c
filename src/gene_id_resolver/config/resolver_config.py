"""Per-organism configuration for identifier resolution."""
import logging
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Set, TextIO, Union

from pydantic import BaseModel, ConfigDict

from gene_id_resolver.config.properties import read_properties
from gene_id_resolver.errors import ConfigError

CONFIG_RESOURCE = "entrez_resolver_config.properties"
IGNORED_KEY = "taxon.ignored"

logger = logging.getLogger(__name__)


class ConfigSuffix(str, Enum):
    XREF = "xref"
    PREFIX = "prefix"
    STRAINS = "strains"


class ConfigKey(BaseModel):
    """A ``<taxon>.<suffix>`` configuration key."""

    model_config = ConfigDict(frozen=True)

    taxon_id: str
    suffix: ConfigSuffix

    @classmethod
    def parse(cls, key: str) -> "ConfigKey":
        """
        Parse a key such as ``10116.prefix``.

        >>> ConfigKey.parse("10116.prefix").suffix.value
        'prefix'

        :param key:
        :return:
        """
        parts = key.split(".")
        if len(parts) != 2 or not parts[0]:
            raise ConfigError(f"Cannot parse configuration key: {key}")
        try:
            suffix = ConfigSuffix(parts[1])
        except ValueError:
            raise ConfigError(f"Unknown configuration key suffix in {key}") from None
        return cls(taxon_id=parts[0], suffix=suffix)


def parse_ignored(value: str) -> FrozenSet[str]:
    """
    Parse a comma separated list of taxon ids.

    >>> sorted(parse_ignored(" 7227 , 6239"))
    ['6239', '7227']
    """
    return frozenset(v.strip() for v in value.split(",") if v.strip())


class ResolverConfig(BaseModel):
    """
    Which cross-reference supplies the primary identifier of each organism.

    Loaded once from a properties resource and immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    xref_by_taxon: Dict[str, str] = {}
    """Cross-reference namespace used as primary identifier source, e.g. ``RGD``"""

    prefix_by_taxon: Dict[str, str] = {}
    """Literal prefix for the chosen cross-reference id, e.g. ``RGD:``"""

    strain_by_taxon: Dict[str, str] = {}
    """Taxon id under which an organism is listed in the reference file"""

    ignored_taxa: FrozenSet[str] = frozenset()
    """Organisms excluded from every resolution request"""

    @classmethod
    def from_properties(cls, properties: Dict[str, str]) -> "ResolverConfig":
        xrefs = {}
        prefixes = {}
        strains = {}
        ignored = set()
        for key, value in properties.items():
            if key == IGNORED_KEY:
                ignored.update(parse_ignored(value))
                continue
            config_key = ConfigKey.parse(key)
            if not value:
                logger.debug(f"Skipping empty configuration value for {key}")
                continue
            if config_key.suffix == ConfigSuffix.STRAINS:
                strains[config_key.taxon_id] = value
            elif config_key.suffix == ConfigSuffix.XREF:
                xrefs[config_key.taxon_id] = value
            else:
                prefixes[config_key.taxon_id] = value
        return cls(
            xref_by_taxon=xrefs,
            prefix_by_taxon=prefixes,
            strain_by_taxon=strains,
            ignored_taxa=frozenset(ignored),
        )

    @classmethod
    def from_file(cls, file: TextIO) -> "ResolverConfig":
        return cls.from_properties(read_properties(file))

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "ResolverConfig":
        """
        Load configuration from a properties file.

        If no path is given, the configuration bundled with the package is used.

        :param path:
        :return:
        """
        if path is None:
            resource = resources.files(__package__).joinpath(CONFIG_RESOURCE)
            if not resource.is_file():
                raise ConfigError(f"Missing configuration resource {CONFIG_RESOURCE}")
            with resource.open("r", encoding="utf-8") as file:
                return cls.from_file(file)
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        with open(path, encoding="utf-8") as file:
            return cls.from_file(file)

    def xref_for(self, taxon_id: str) -> Optional[str]:
        return self.xref_by_taxon.get(taxon_id)

    def prefix_for(self, taxon_id: str) -> Optional[str]:
        return self.prefix_by_taxon.get(taxon_id)

    def strain_for(self, taxon_id: str) -> str:
        """Taxon id to look up in the reference file; one level, no chains."""
        return self.strain_by_taxon.get(taxon_id, taxon_id)

    def get_strains(self, taxon_ids: Iterable[str]) -> Dict[str, Set[str]]:
        """
        Map the taxon ids used in the reference file back to the requested ids.

        An organism and its strain may both be requested, so one lookup id can
        stand for several requested ids.

        >>> config = ResolverConfig(strain_by_taxon={"4932": "559292"})
        >>> config.get_strains(["4932"])
        {'559292': {'4932'}}
        >>> sorted(config.get_strains(["4932", "559292"])["559292"])
        ['4932', '559292']

        :param taxon_ids: requested taxon ids
        :return: dictionary of lookup id to requested ids
        """
        strains: Dict[str, Set[str]] = {}
        for taxon_id in taxon_ids:
            strains.setdefault(self.strain_for(taxon_id), set()).add(taxon_id)
        return strains
