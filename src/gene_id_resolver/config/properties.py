"""Reading of ``key=value`` properties files."""
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Optional, TextIO, Union

from gene_id_resolver.errors import ConfigError

PROPERTIES_ENV_VAR = "GENE_ID_RESOLVER_PROPERTIES"
DEFAULT_PROPERTIES_PATH = Path.home() / ".gene_id_resolver" / "resolver.properties"

ENTREZ_FILE_PROPERTY = "resolver.entrez.file"
CACHE_FILE_PROPERTY = "resolver.cache.file"
DEFAULT_CACHE_FILE = "idresolver.cache"

COMMENT_CHARS = ("#", "!")
SEPARATORS = ("=", ":")

logger = logging.getLogger(__name__)


def _logical_lines(lines: Iterable[str]) -> Iterable[str]:
    """Join lines ending in a backslash with the line that follows."""
    buffer = ""
    for line in lines:
        line = line.rstrip("\r\n")
        if not buffer and line.lstrip().startswith(COMMENT_CHARS):
            continue
        if line.endswith("\\"):
            buffer += line[:-1].lstrip() if buffer else line[:-1]
            continue
        yield buffer + line.lstrip() if buffer else line
        buffer = ""
    if buffer:
        yield buffer


def split_property(line: str):
    """
    Split a properties line into key and value.

    >>> split_property("10116.prefix=RGD:")
    ('10116.prefix', 'RGD:')

    :param line:
    :return: tuple of stripped key and value
    """
    positions = [line.find(sep) for sep in SEPARATORS if sep in line]
    if not positions:
        raise ConfigError(f"No separator found in properties line: {line!r}")
    pos = min(positions)
    return line[:pos].strip(), line[pos + 1 :].strip()


def read_properties(file: TextIO) -> Dict[str, str]:
    """
    Read a properties file into a dictionary.

    Blank lines and lines starting with ``#`` or ``!`` are skipped.
    Later entries for the same key replace earlier ones.

    :param file: an open text file
    :return:
    """
    props = {}
    for line in _logical_lines(file):
        if not line.strip():
            continue
        key, value = split_property(line)
        props[key] = value
    return props


def load_properties(path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """
    Load the runtime properties store.

    If no path is given, the path is taken from the ``GENE_ID_RESOLVER_PROPERTIES``
    environment variable, falling back to ``~/.gene_id_resolver/resolver.properties``.
    A missing default file gives an empty store; a missing explicit file is an error.

    :param path:
    :return:
    """
    explicit = path is not None or PROPERTIES_ENV_VAR in os.environ
    if path is None:
        path = os.environ.get(PROPERTIES_ENV_VAR, DEFAULT_PROPERTIES_PATH)
    path = Path(path)
    if not path.exists():
        if explicit:
            raise ConfigError(f"Properties file not found: {path}")
        logger.debug(f"No properties file at {path}")
        return {}
    logger.info(f"Loading properties from {path}")
    with open(path, encoding="utf-8") as file:
        return read_properties(file)
