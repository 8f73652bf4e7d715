"""
Cursor Module - Logical position within a table
Maps a record index to its page and byte offset for scanning and appending.
"""

from typing import NamedTuple, Tuple, TYPE_CHECKING
from .page import Page
from ..constants import RECORDS_PER_PAGE, RECORD_SIZE

if TYPE_CHECKING:
    from .table import Table


class Location(NamedTuple):
    """Page index and in-page byte offset of one record slot"""
    page_index: int
    byte_offset: int


def locate(record_index: int) -> Location:
    """Map a record index to its (page, byte offset) slot"""
    if record_index < 0:
        raise IndexError(f"Negative record index {record_index}")
    page_index, slot = divmod(record_index, RECORDS_PER_PAGE)
    return Location(page_index, slot * RECORD_SIZE)


class Cursor:
    """Position in a table; end_of_table marks one past the last record"""

    def __init__(self, table: "Table", record_index: int, end_of_table: bool):
        self.table = table
        self.record_index = record_index
        self.end_of_table = end_of_table

    @classmethod
    def at_start(cls, table: "Table") -> "Cursor":
        """Cursor on the first record, or at end when the table is empty"""
        return cls(table, 0, table.record_count == 0)

    @classmethod
    def at_end(cls, table: "Table") -> "Cursor":
        """Cursor one past the last record; always the append target"""
        return cls(table, table.record_count, True)

    def advance(self) -> None:
        """Move to the next record, even when already at the end"""
        self.record_index += 1
        if self.record_index >= self.table.record_count:
            self.end_of_table = True

    def location(self) -> Location:
        return locate(self.record_index)

    def resolve(self) -> Tuple[Page, int]:
        """
        Fetch the page holding the current slot

        Returns:
            (page, byte_offset) - the pager's own page buffer and the slot's
            offset inside it
        """
        page_index, byte_offset = self.location()
        return self.table.pager.fetch(page_index), byte_offset

    def __repr__(self) -> str:
        return (f"Cursor(index={self.record_index}, "
                f"end_of_table={self.end_of_table})")
