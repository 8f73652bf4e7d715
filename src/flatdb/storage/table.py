"""
Table Module - Append-only record table over a single file
Restores the record count from the file size, appends through the page
cache, and persists populated pages on flush/close.
"""

import logging
from typing import List, Tuple
from .cursor import Cursor
from .pager import Pager
from .record import Record, encode_record, decode_record
from ..constants import RECORD_SIZE, RECORDS_PER_PAGE, MAX_RECORDS, PAGE_SIZE
from ..exceptions import StorageIOError, TableClosedError, TableFullError

logger = logging.getLogger(__name__)


def records_in_file(file_length: int) -> Tuple[int, int]:
    """
    Recover the record count from a table file's length

    Full pages are saved whole, padding included; only the trailing partial
    page is cut at its last record. A file within its first page therefore
    holds file_length // RECORD_SIZE records.

    Returns:
        (record_count, stray_bytes) - stray bytes belong to a torn record
        and are ignored
    """
    full_pages, tail = divmod(file_length, PAGE_SIZE)
    tail_records = min(tail // RECORD_SIZE, RECORDS_PER_PAGE)
    stray = tail - tail_records * RECORD_SIZE
    return full_pages * RECORDS_PER_PAGE + tail_records, stray


class Table:
    """Ordered, append-only sequence of fixed-width records"""

    def __init__(self, pager: Pager, record_count: int):
        """
        Initialize table over an open pager

        Args:
            pager: Pager owning the backing file and page buffers
            record_count: Number of populated record slots
        """
        self.pager = pager
        self.record_count = record_count

    @classmethod
    def open(cls, db_path: str) -> "Table":
        """
        Open or create a table file

        Args:
            db_path: Path to the table file

        Returns:
            Table with its record count recovered from the file length

        Raises:
            StorageIOError: If the file cannot be opened or holds more
                records than a table can
        """
        pager = Pager.open(db_path)
        record_count, torn = records_in_file(pager.file_length)

        if torn:
            logger.warning("%s ends with a partial record (%d stray bytes); ignoring it",
                           db_path, torn)

        if record_count > MAX_RECORDS:
            pager.close()
            raise StorageIOError(
                f"{db_path} holds {record_count} records, more than {MAX_RECORDS}")

        logger.info("Opened table %s with %d records", db_path, record_count)
        return cls(pager, record_count)

    @property
    def closed(self) -> bool:
        return self.pager.closed

    def _ensure_open(self) -> None:
        if self.pager.closed:
            raise TableClosedError("Table is closed")

    def append(self, record: Record) -> None:
        """
        Add a record at the end of the table

        Args:
            record: Record to append

        Raises:
            TableFullError: If the table already holds MAX_RECORDS records
        """
        self._ensure_open()
        if self.record_count >= MAX_RECORDS:
            raise TableFullError(f"Table full ({MAX_RECORDS} records)")

        page, byte_offset = Cursor.at_end(self).resolve()
        encode_record(record, page, byte_offset)
        self.record_count += 1

    def select_all(self) -> List[Record]:
        """Return every record in insertion order"""
        self._ensure_open()
        records = []
        cursor = Cursor.at_start(self)
        while not cursor.end_of_table:
            page, byte_offset = cursor.resolve()
            records.append(decode_record(page, byte_offset))
            cursor.advance()
        return records

    def flush(self) -> None:
        """
        Persist all populated pages

        Full pages are written whole; a trailing partial page is written only
        up to its last record, so no zero padding is mistaken for records
        when the file is reopened.
        """
        self._ensure_open()
        full_pages, trailing_records = divmod(self.record_count, RECORDS_PER_PAGE)

        for page_index in range(full_pages):
            self.pager.flush(page_index, PAGE_SIZE)

        if trailing_records > 0:
            self.pager.flush(full_pages, trailing_records * RECORD_SIZE)

        self.pager.sync()
        logger.debug("Flushed %d records (%d full pages)", self.record_count, full_pages)

    def close(self) -> None:
        """Flush and release the backing file; closing twice is a no-op"""
        if self.pager.closed:
            return
        try:
            self.flush()
        finally:
            self.pager.close()
        logger.info("Closed table %s with %d records", self.pager.db_path, self.record_count)

    def __len__(self) -> int:
        return self.record_count

    def __enter__(self) -> "Table":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Table(path={self.pager.db_path}, records={self.record_count})"
