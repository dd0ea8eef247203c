"""Command line interface for gene-id-resolver."""
import logging
from typing import Dict, List, Optional

import click
import yaml
from click_default_group import DefaultGroup

from gene_id_resolver import __version__
from gene_id_resolver.config import (
    CACHE_FILE_PROPERTY,
    ENTREZ_FILE_PROPERTY,
    ResolverConfig,
    load_properties,
)
from gene_id_resolver.errors import ResolverError
from gene_id_resolver.factory import EntrezGeneIdResolverFactory
from gene_id_resolver.store import IdResolver

__all__ = [
    "main",
]

properties_option = click.option(
    "-P", "--properties", help="Path to a runtime properties file."
)
gene_info_option = click.option(
    "-g",
    "--gene-info",
    help=f"Path to the NCBI gene_info file; overrides {ENTREZ_FILE_PROPERTY}.",
)
cache_option = click.option(
    "-C", "--cache", help=f"Path to the resolver snapshot; overrides {CACHE_FILE_PROPERTY}."
)
config_option = click.option(
    "--config", help="Per-organism configuration file; defaults to the bundled configuration."
)
taxon_option = click.option("-t", "--taxon", required=True, help="Taxon id, e.g. 10116.")
fail_option = click.option(
    "--fail/--no-fail",
    default=True,
    show_default=True,
    help="Whether to exit with an error if the resolver cannot be built.",
)


def make_factory(
    properties: Optional[str],
    gene_info: Optional[str],
    cache: Optional[str],
    config: Optional[str],
) -> EntrezGeneIdResolverFactory:
    props = load_properties(properties)
    if gene_info:
        props[ENTREZ_FILE_PROPERTY] = gene_info
    if cache:
        props[CACHE_FILE_PROPERTY] = cache
    return EntrezGeneIdResolverFactory(properties=props, config=ResolverConfig.load(config))


@click.group(
    cls=DefaultGroup,
    default="resolve",
)
@click.option("-v", "--verbose", count=True)
@click.option("-q", "--quiet", is_flag=True)
@click.version_option(__version__)
def main(verbose: int, quiet: bool):
    """CLI for gene-id-resolver.

    :param verbose: Verbosity while running.
    :param quiet: Boolean to be quiet or verbose.
    """
    logging.basicConfig()
    logger = logging.root
    if verbose >= 2:
        logger.setLevel(level=logging.DEBUG)
    elif verbose == 1:
        logger.setLevel(level=logging.INFO)
    else:
        logger.setLevel(level=logging.WARNING)
    if quiet:
        logger.setLevel(level=logging.ERROR)
    logger.info(f"Logger {logger.name} set to level {logger.level}")


@main.command()
@properties_option
@gene_info_option
@cache_option
@config_option
@fail_option
@click.argument("taxa", nargs=-1, required=True)
def build(taxa: List[str], properties, gene_info, cache, config, fail: bool):
    """Build or restore a resolver for the given taxa.

    Example:

        gene-id-resolver build -g gene_info.gz 10090 10116

    """
    try:
        factory = make_factory(properties, gene_info, cache, config)
        resolver = factory.get_id_resolver(set(taxa), fail_on_error=fail)
    except ResolverError as e:
        raise click.ClickException(str(e)) from e
    if resolver is None:
        click.echo("No resolver built", err=True)
    summary = {
        "snapshot": str(factory.cache_path),
        "taxa": factory.resolution_summary(),
    }
    click.echo(yaml.dump(summary, sort_keys=False))


@main.command()
@properties_option
@gene_info_option
@cache_option
@config_option
@taxon_option
@click.argument("ids", nargs=-1, required=True)
def resolve(ids: List[str], taxon: str, properties, gene_info, cache, config):
    """Resolve identifiers to primary identifiers.

    Example:

        gene-id-resolver resolve -t 10116 A2m 24152

    """
    try:
        factory = make_factory(properties, gene_info, cache, config)
        resolver = factory.get_id_resolver(taxon)
    except ResolverError as e:
        raise click.ClickException(str(e)) from e
    results: Dict[str, List[str]] = {}
    for id in ids:
        results[id] = sorted(resolver.resolve_id(taxon, id)) if resolver else []
    click.echo(yaml.dump(results, sort_keys=False))


@main.command()
@properties_option
@cache_option
def taxa(properties, cache):
    """List the taxa held in a resolver snapshot."""
    try:
        factory = make_factory(properties, None, cache, None)
        path = factory.cache_path
        if not path.exists():
            raise click.ClickException(f"No resolver snapshot at {path}")
        resolver = IdResolver()
        resolver.populate_from_file(path)
    except ResolverError as e:
        raise click.ClickException(str(e)) from e
    counts = {taxon_id: resolver.size(taxon_id) for taxon_id in sorted(resolver.get_taxons())}
    click.echo(yaml.dump(counts, sort_keys=False))


if __name__ == "__main__":
    main()
