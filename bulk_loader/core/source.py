import csv
from typing import IO, Iterator, List, Optional

from ..setup.logging import logger
from .exceptions import RowSourceError, SourceUnavailableError


class CsvRowSource:
    """
    Delimited file read one record at a time, in file order.

    The first record yielded is the header; the source itself does not treat
    it specially.
    """

    def __init__(self, file_path: str, delimiter: str = ",", encoding: str = "utf-8"):
        self.file_path = file_path
        self.delimiter = delimiter
        self.encoding = encoding
        self._file: Optional[IO[str]] = None

    def open(self) -> "CsvRowSource":
        """
        Open the underlying file.

        Raises:
            SourceUnavailableError: If the file cannot be opened
        """
        logger.info(f"[RowSource] Opening {self.file_path}...")
        try:
            self._file = open(self.file_path, "r", newline="", encoding=self.encoding)
        except (OSError, LookupError) as e:
            raise SourceUnavailableError(f"Cannot open {self.file_path}: {e}") from e
        return self

    def __iter__(self) -> Iterator[List[str]]:
        if self._file is None:
            raise SourceUnavailableError(f"Source {self.file_path} is not open")

        reader = csv.reader(self._file, delimiter=self.delimiter)
        while True:
            try:
                record = next(reader)
            except StopIteration:
                return
            except (csv.Error, UnicodeDecodeError) as e:
                raise RowSourceError(f"{self.file_path}, line {reader.line_num}: {e}") from e
            if not record:
                continue
            yield record

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "CsvRowSource":
        if self._file is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
