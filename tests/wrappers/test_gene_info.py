from io import StringIO

import pytest

from gene_id_resolver.errors import ParseError
from gene_id_resolver.wrappers import GeneInfoWrapper, get_wrapper
from gene_id_resolver.wrappers.gene_info_wrapper import parse_xrefs
from tests import GENE_INFO


@pytest.fixture
def wrapper() -> GeneInfoWrapper:
    return GeneInfoWrapper(source_locator=GENE_INFO)


def test_records_from_file(wrapper):
    with wrapper.open_source() as file:
        records = wrapper.records_from_file(file, {"10116", "559292", "4932"})
    assert set(records) == {"10116", "559292"}
    assert len(records["10116"]) == 4
    acs1 = records["559292"][0]
    assert acs1.entrez == "851229"
    assert acs1.locus_tag == "YAL054C"
    assert acs1.main_ids == {"851229", "ACS1", "YAL054C"}
    assert acs1.synonyms == {"FUN44"}
    assert acs1.xrefs == {"SGD": {"S000000050"}}


def test_all_taxa(wrapper):
    with wrapper.open_source() as file:
        records = wrapper.records_from_file(file)
    assert set(records) == {"9606", "7227", "10090", "10116", "559292"}


def test_missing_values(wrapper):
    with wrapper.open_source() as file:
        records = wrapper.records_from_file(file, ["10116"])
    loc = [r for r in records["10116"] if r.entrez == "100909521"][0]
    assert loc.official_symbol is None
    assert loc.xrefs == {}
    assert loc.synonyms == set()
    assert loc.symbol == "LOC100909521"
    assert loc.main_ids == {"100909521", "LOC100909521"}


def test_xrefs():
    assert parse_xrefs("MIM:103950|HGNC:HGNC:7|Ensembl:ENSG00000175899") == {
        "MIM": {"103950"},
        "HGNC": {"HGNC:7"},
        "Ensembl": {"ENSG00000175899"},
    }
    assert parse_xrefs("RGD:619951|RGD:3042") == {"RGD": {"619951", "3042"}}
    assert parse_xrefs("-") == {}
    assert parse_xrefs("nonamespace") == {}


def test_short_row(wrapper):
    file = StringIO("#tax_id\tGeneID\n9606\t1\tA1BG\n")
    with pytest.raises(ParseError, match="Line 2"):
        wrapper.records_from_file(file)


def test_objects():
    wrapper = get_wrapper("gene_info", source_locator=GENE_INFO, taxon_ids={"9606"})
    objs = list(wrapper.objects())
    assert [obj["entrez"] for obj in objs] == ["1", "2"]
    assert objs[1]["official_symbol"] == "A2M"


def test_gzipped_source(tmp_path):
    import gzip

    path = tmp_path / "gene_info.gz"
    with gzip.open(path, "wt") as out, open(GENE_INFO) as src:
        out.write(src.read())
    wrapper = GeneInfoWrapper(source_locator=path)
    with wrapper.open_source() as file:
        records = wrapper.records_from_file(file, {"10090"})
    assert len(records["10090"]) == 2


def test_missing_source(tmp_path):
    with pytest.raises(ParseError):
        GeneInfoWrapper(source_locator=tmp_path / "absent").open_source()
    with pytest.raises(ParseError):
        GeneInfoWrapper().open_source()


def test_unknown_wrapper():
    with pytest.raises(ValueError):
        get_wrapper("no_such_wrapper")


def test_utf8_source(tmp_path):
    row = [
        "10090", "11287", "Pzp", "-", "A1m", "MGI:MGI:87854", "6", "-",
        "-", "protein-coding", "Pzp", "pregnancy zone protein, β-chain", "O", "-", "-", "-",
    ]
    path = tmp_path / "gene_info"
    path.write_bytes(("\t".join(row) + "\n").encode("utf-8"))
    wrapper = GeneInfoWrapper(source_locator=path)
    with wrapper.open_source() as file:
        records = wrapper.records_from_file(file)
    assert records["10090"][0].official_name == "pregnancy zone protein, β-chain"
