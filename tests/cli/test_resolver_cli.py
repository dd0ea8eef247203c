import pytest
import yaml

from gene_id_resolver.cli import main
from tests import GENE_INFO, RESOLVER_CONFIG


@pytest.fixture
def empty_properties(tmp_path):
    path = tmp_path / "resolver.properties"
    path.write_text("# no properties\n")
    return str(path)


def test_build_and_resolve(runner, empty_properties, cache_path):
    common = ["-P", empty_properties, "-C", str(cache_path), "--config", str(RESOLVER_CONFIG)]
    result = runner.invoke(main, ["build", "-g", str(GENE_INFO), *common, "10116", "7227"])
    assert result.exit_code == 0, result.output
    summary = yaml.safe_load(result.output)
    assert summary["taxa"] == {"10116": 4}
    assert cache_path.exists()

    # no gene_info needed, the snapshot covers the taxon
    result = runner.invoke(main, ["resolve", "-t", "10116", *common, "A2m", "Mdr1", "nope"])
    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output) == {
        "A2m": ["RGD:2004"],
        "Mdr1": ["RGD:3042"],
        "nope": [],
    }

    result = runner.invoke(main, ["taxa", "-P", empty_properties, "-C", str(cache_path)])
    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output) == {"10116": 4}


def test_build_without_source(runner, empty_properties, cache_path):
    args = ["build", "-P", empty_properties, "-C", str(cache_path), "10116"]
    result = runner.invoke(main, args)
    assert result.exit_code == 0
    assert "taxa: {}" in result.output
    assert not cache_path.exists()


def test_build_failure(runner, empty_properties, cache_path, tmp_path):
    args = ["-P", empty_properties, "-C", str(cache_path), "-g", str(tmp_path / "absent")]
    result = runner.invoke(main, ["build", *args, "10116"])
    assert result.exit_code == 1
    assert "Reference file not found" in result.output
    result = runner.invoke(main, ["build", "--no-fail", *args, "10116"])
    assert result.exit_code == 0


def test_taxa_without_snapshot(runner, empty_properties, cache_path):
    result = runner.invoke(main, ["taxa", "-P", empty_properties, "-C", str(cache_path)])
    assert result.exit_code == 1
    assert "No resolver snapshot" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
