"""Word-and-clue sources: CSV files, CSV over HTTP, or in-memory records."""

from __future__ import annotations

import csv
import io
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import List, Protocol, Sequence, Tuple, Union

import requests

from ..core.exceptions import WordSupplyError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

Record = Union[str, Tuple[str, str]]

HEADER_MARKERS = ("clue", "word")


class WordSource(Protocol):
    """Anything that can hand the assembler a list of raw records."""

    def fetch(self) -> List[Record]:
        ...

    def fetch_async(self, executor: Executor) -> "Future[List[Record]]":
        ...


def parse_csv_records(text: str) -> List[Record]:
    """Parse ``clue,word`` rows; single-column rows are bare words.

    A first row with a cell reading "clue" or "word" is treated as a header.
    """

    rows = [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]
    if rows and any(cell.strip().lower() in HEADER_MARKERS for cell in rows[0]):
        rows = rows[1:]
    records: List[Record] = []
    for row in rows:
        cells = [cell.strip() for cell in row]
        if len(cells) == 1:
            records.append(cells[0])
        else:
            records.append((cells[0], cells[1]))
    return records


class CsvWordSource:
    """Reads CSV word lists from a local path or an ``http(s)`` URL."""

    def __init__(self, location: Union[str, Path], timeout_seconds: float = 10.0) -> None:
        self.location = str(location)
        self.timeout_seconds = timeout_seconds

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    def fetch(self) -> List[Record]:
        text = self._download() if self.is_remote else self._read_local()
        records = parse_csv_records(text)
        if not records:
            raise WordSupplyError(f"Word list at {self.location} is empty")
        LOGGER.info("Fetched %s records from %s", len(records), self.location)
        return records

    def fetch_async(self, executor: Executor) -> "Future[List[Record]]":
        return executor.submit(self.fetch)

    def _download(self) -> str:
        try:
            response = requests.get(self.location, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordSupplyError(f"Word list request failed: {exc}") from exc
        return response.text

    def _read_local(self) -> str:
        try:
            return Path(self.location).read_text(encoding="utf-8")
        except OSError as exc:
            raise WordSupplyError(f"Cannot read word list {self.location}: {exc}") from exc


class StaticWordSource:
    """Wraps records already in memory, e.g. an emergency word list."""

    def __init__(self, records: Sequence[Record]) -> None:
        self.records = list(records)

    def fetch(self) -> List[Record]:
        if not self.records:
            raise WordSupplyError("Static word source is empty")
        return list(self.records)

    def fetch_async(self, executor: Executor) -> "Future[List[Record]]":
        return executor.submit(self.fetch)
