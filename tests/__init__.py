"""Tests for gene-id-resolver."""
from pathlib import Path

this_directory = Path(__file__).resolve().parent
INPUT_DIR = this_directory / "input"
GENE_INFO = INPUT_DIR / "gene_info_sample.tsv"
RESOLVER_CONFIG = INPUT_DIR / "resolver_config.properties"
