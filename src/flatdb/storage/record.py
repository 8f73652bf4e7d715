"""
Record Module - Fixed-width record codec
Encodes one (id, username, email) record to and from a region of a page.

Wire layout (RECORD_SIZE = 291 bytes):
    [id:4 big-endian][username:32][email:255]
Text fields are UTF-8, NUL-filled past the value's length.
"""

from dataclasses import dataclass
from .page import Page
from ..constants import (ID_OFFSET, USERNAME_OFFSET, EMAIL_OFFSET, USERNAME_SIZE,
                         EMAIL_SIZE, RECORD_SIZE, MAX_ID)


@dataclass(frozen=True)
class Record:
    """One fixed-schema row"""
    id: int
    username: str
    email: str

    def __post_init__(self):
        """Validate field widths against the wire layout"""
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Record id must be an integer, got {self.id!r}")
        if self.id < 0 or self.id > MAX_ID:
            raise ValueError(f"Record id {self.id} does not fit in 32 bits")

        if len(self.username.encode('utf-8')) > USERNAME_SIZE:
            raise ValueError(f"Username exceeds {USERNAME_SIZE} bytes")
        if len(self.email.encode('utf-8')) > EMAIL_SIZE:
            raise ValueError(f"Email exceeds {EMAIL_SIZE} bytes")

        # NUL is the column fill byte
        if "\x00" in self.username or "\x00" in self.email:
            raise ValueError("Username and email must not contain NUL characters")

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}

    def __str__(self) -> str:
        return f"({self.id}, {self.username}, {self.email})"


def _write_text(page: Page, offset: int, value: str, size: int) -> None:
    encoded = value.encode('utf-8')
    page.write_bytes(offset, encoded)
    page.fill(offset + len(encoded), size - len(encoded))


def _read_text(page: Page, offset: int, size: int) -> str:
    raw = page.read_bytes(offset, size)
    # Undecodable bytes are dropped so the result still fits its column
    return raw.rstrip(b'\x00').decode('utf-8', errors='ignore')


def encode_record(record: Record, page: Page, byte_offset: int) -> None:
    """
    Serialize a record into a page region

    Args:
        record: Record to write
        page: Target page buffer
        byte_offset: Start of the record slot within the page

    Raises:
        IndexError: If the slot does not fit inside the page
    """
    if byte_offset < 0 or byte_offset + RECORD_SIZE > len(page.data):
        raise IndexError(f"Record slot at {byte_offset} exceeds page bounds")

    page.write_int(byte_offset + ID_OFFSET, record.id)
    _write_text(page, byte_offset + USERNAME_OFFSET, record.username, USERNAME_SIZE)
    _write_text(page, byte_offset + EMAIL_OFFSET, record.email, EMAIL_SIZE)


def decode_record(page: Page, byte_offset: int) -> Record:
    """
    Deserialize the record stored at a page region

    Args:
        page: Source page buffer
        byte_offset: Start of the record slot within the page

    Returns:
        Decoded Record

    Raises:
        IndexError: If the slot does not fit inside the page
    """
    if byte_offset < 0 or byte_offset + RECORD_SIZE > len(page.data):
        raise IndexError(f"Record slot at {byte_offset} exceeds page bounds")

    return Record(
        id=page.read_int(byte_offset + ID_OFFSET),
        username=_read_text(page, byte_offset + USERNAME_OFFSET, USERNAME_SIZE),
        email=_read_text(page, byte_offset + EMAIL_OFFSET, EMAIL_SIZE),
    )
