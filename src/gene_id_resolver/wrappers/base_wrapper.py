"""Base class for readers of reference data files."""

import gzip
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, Iterable, Iterator, Optional, TextIO, Union

from gene_id_resolver.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass
class BaseWrapper(ABC):
    """
    A view over a local reference data file.
    """

    source_locator: Optional[Union[str, Path]] = None
    """Path to the reference file; files ending in .gz are decompressed on the fly."""

    name: ClassVar[str] = "__base__"

    def open_source(self) -> TextIO:
        """
        Open the reference file for reading.

        :return: a text file handle, to be used as a context manager
        """
        if not self.source_locator:
            raise ParseError(f"No source file set for {self.name}")
        path = Path(self.source_locator)
        if not path.exists():
            raise ParseError(f"Reference file not found: {path}")
        logger.info(f"Opening {path}")
        if path.suffix == ".gz":
            return gzip.open(path, "rt", encoding="utf-8")
        return open(path, encoding="utf-8")

    def objects(self, object_ids: Optional[Iterable[str]] = None, **kwargs) -> Iterator[Dict]:
        """
        Yield all objects in the source file.

        :param object_ids: optional ids to restrict to
        :param kwargs:
        :return:
        """
        with self.open_source() as file:
            yield from self.objects_from_file(file, object_ids=object_ids, **kwargs)

    @abstractmethod
    def objects_from_file(
        self, file: TextIO, object_ids: Optional[Iterable[str]] = None, **kwargs
    ) -> Iterator[Dict]:
        """
        Yield objects parsed from an open file.

        :param file:
        :param object_ids:
        :param kwargs:
        :return:
        """
