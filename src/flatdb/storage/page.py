"""
Page Module - Core storage unit for FlatDB
Handles the fixed-size page buffer and bounds-checked typed data access.
"""

import struct
from ..constants import PAGE_SIZE


class Page:
    """Fixed-size page buffer with typed data access methods"""

    def __init__(self, page_id: int, data: bytes = b""):
        """
        Initialize a page

        Args:
            page_id: Index of this page within the backing file
            data: Bytes loaded from disk; may be shorter than a page,
                the remainder stays zero-filled
        """
        if len(data) > PAGE_SIZE:
            raise ValueError(f"Page data exceeds {PAGE_SIZE} bytes")

        self.page_id = page_id
        self.data = bytearray(PAGE_SIZE)
        self.data[:len(data)] = data
        self.is_dirty = False

    def _check_region(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > PAGE_SIZE:
            raise IndexError(
                f"Region [{offset}, {offset + length}) out of page bounds")

    # --------------------------------------------------------------------
    # Typed Data Access Methods
    # --------------------------------------------------------------------

    def write_int(self, offset: int, value: int) -> None:
        """Write 4-byte unsigned integer (big-endian)"""
        self._check_region(offset, 4)
        struct.pack_into('>I', self.data, offset, value)
        self.is_dirty = True

    def read_int(self, offset: int) -> int:
        """Read 4-byte unsigned integer (big-endian)"""
        self._check_region(offset, 4)
        return struct.unpack_from('>I', self.data, offset)[0]

    def write_bytes(self, offset: int, data: bytes) -> None:
        """Write raw bytes at offset"""
        self._check_region(offset, len(data))
        self.data[offset:offset + len(data)] = data
        self.is_dirty = True

    def read_bytes(self, offset: int, length: int) -> bytes:
        """Read raw bytes from offset"""
        self._check_region(offset, length)
        return bytes(self.data[offset:offset + length])

    def fill(self, offset: int, length: int, value: int = 0) -> None:
        """Overwrite a region with a single byte value"""
        self._check_region(offset, length)
        self.data[offset:offset + length] = bytes([value & 0xFF]) * length
        self.is_dirty = True

    def prefix(self, byte_count: int) -> bytes:
        """First byte_count bytes of the page, as written to disk"""
        self._check_region(0, byte_count)
        return bytes(self.data[:byte_count])

    def __repr__(self) -> str:
        return f"Page(id={self.page_id}, dirty={self.is_dirty})"
