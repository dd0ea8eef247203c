from typing import Dict

import pytest
from click.testing import CliRunner

from gene_id_resolver.config import (
    CACHE_FILE_PROPERTY,
    ENTREZ_FILE_PROPERTY,
    ResolverConfig,
)
from gene_id_resolver.factory import EntrezGeneIdResolverFactory
from tests import GENE_INFO, RESOLVER_CONFIG


@pytest.fixture
def config() -> ResolverConfig:
    return ResolverConfig.load(RESOLVER_CONFIG)


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "idresolver.cache"


@pytest.fixture
def properties(cache_path) -> Dict[str, str]:
    return {
        ENTREZ_FILE_PROPERTY: str(GENE_INFO),
        CACHE_FILE_PROPERTY: str(cache_path),
    }


@pytest.fixture
def factory(config, properties) -> EntrezGeneIdResolverFactory:
    return EntrezGeneIdResolverFactory(properties=properties, config=config)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
