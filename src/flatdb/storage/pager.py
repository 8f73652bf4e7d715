"""
Pager Module - Page cache backed by a single database file
Loads pages lazily on first access, serves repeat accesses from memory,
and writes pages back only when asked to.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional
from .page import Page
from ..constants import PAGE_SIZE, MAX_PAGES
from ..exceptions import StorageIOError, TableClosedError

logger = logging.getLogger(__name__)


class Pager:
    """Fixed-capacity page cache; never evicts, capacity equals table capacity"""

    def __init__(self, file, db_path: Path, capacity: int = MAX_PAGES):
        """
        Initialize pager around an already opened file

        Args:
            file: Binary file object opened for reading and writing
            db_path: Path of the backing file (for messages)
            capacity: Number of page slots
        """
        self.file = file
        self.db_path = db_path
        self.capacity = capacity
        self.pages: List[Optional[Page]] = [None] * capacity
        self.hits = 0
        self.misses = 0

    @classmethod
    def open(cls, db_path: str, capacity: int = MAX_PAGES) -> "Pager":
        """
        Open or create the backing file without truncating it

        Args:
            db_path: Path to database file
            capacity: Number of page slots

        Raises:
            StorageIOError: If the file cannot be created or opened
        """
        path = Path(db_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
            # r+b: positioned writes; append mode would ignore seek()
            file = open(path, 'r+b')
        except OSError as e:
            raise StorageIOError(f"Cannot open database file {path}: {e}") from e

        return cls(file, path, capacity)

    @property
    def closed(self) -> bool:
        return self.file is None

    @property
    def file_length(self) -> int:
        """Current size of the backing file in bytes"""
        self._ensure_open()
        try:
            return os.fstat(self.file.fileno()).st_size
        except OSError as e:
            raise StorageIOError(f"Cannot stat {self.db_path}: {e}") from e

    def _ensure_open(self) -> None:
        if self.file is None:
            raise TableClosedError(f"Pager for {self.db_path} is closed")

    def _check_index(self, page_index: int) -> None:
        if page_index < 0 or page_index >= self.capacity:
            raise IndexError(
                f"Page index {page_index} out of range (max {self.capacity - 1})")

    # --------------------------------------------------------------------
    # Cache Access
    # --------------------------------------------------------------------

    def fetch(self, page_index: int) -> Page:
        """
        Get the cached page, loading or allocating it on first access

        Args:
            page_index: Page number within the file

        Returns:
            The single cached Page for this index; writes through it are
            visible to every later fetch

        Raises:
            IndexError: If page_index is outside the cache
            StorageIOError: If the page cannot be read completely
        """
        self._ensure_open()
        self._check_index(page_index)

        page = self.pages[page_index]
        if page is not None:
            self.hits += 1
            return page

        self.misses += 1
        file_length = self.file_length
        pages_on_disk = (file_length + PAGE_SIZE - 1) // PAGE_SIZE

        if page_index < pages_on_disk:
            offset = page_index * PAGE_SIZE
            # The final page may have been saved with only its populated prefix
            expected = min(PAGE_SIZE, file_length - offset)
            try:
                self.file.seek(offset)
                data = self.file.read(PAGE_SIZE)
            except OSError as e:
                raise StorageIOError(f"Cannot read page {page_index}: {e}") from e

            if len(data) < expected:
                raise StorageIOError(
                    f"Short read on page {page_index}: "
                    f"got {len(data)} of {expected} bytes")

            page = Page(page_index, data)
            logger.debug("Loaded page %d (%d bytes) from %s",
                         page_index, len(data), self.db_path)
        else:
            page = Page(page_index)
            logger.debug("Allocated page %d", page_index)

        self.pages[page_index] = page
        return page

    def flush(self, page_index: int, byte_count: int = PAGE_SIZE) -> None:
        """
        Write the first byte_count bytes of a cached page to disk

        Args:
            page_index: Page number within the file
            byte_count: Length of the populated prefix to persist

        Note:
            Pages that were never fetched have nothing to persist and are skipped
        """
        self._ensure_open()
        self._check_index(page_index)
        if byte_count <= 0 or byte_count > PAGE_SIZE:
            raise ValueError(f"byte_count must be in 1..{PAGE_SIZE}, got {byte_count}")

        page = self.pages[page_index]
        if page is None:
            return

        try:
            self.file.seek(page_index * PAGE_SIZE)
            self.file.write(page.prefix(byte_count))
        except OSError as e:
            raise StorageIOError(f"Cannot write page {page_index}: {e}") from e

        page.is_dirty = False
        logger.debug("Flushed page %d (%d bytes)", page_index, byte_count)

    def sync(self) -> None:
        """Force buffered writes down to disk"""
        self._ensure_open()
        try:
            self.file.flush()
            os.fsync(self.file.fileno())
        except OSError as e:
            raise StorageIOError(f"Cannot sync {self.db_path}: {e}") from e

    def close(self) -> None:
        """Sync and release the file handle; cached pages are dropped"""
        if self.file is None:
            return
        try:
            self.sync()
        finally:
            self.file.close()
            self.file = None
            self.pages = [None] * self.capacity

    # --------------------------------------------------------------------
    # Utility Methods
    # --------------------------------------------------------------------

    def cached_pages(self) -> int:
        return sum(1 for page in self.pages if page is not None)

    def get_stats(self) -> dict:
        """Get page cache statistics"""
        total_accesses = self.hits + self.misses
        hit_ratio = self.hits / total_accesses if total_accesses > 0 else 0

        return {
            "capacity": self.capacity,
            "cached_pages": self.cached_pages(),
            "hits": self.hits,
            "misses": self.misses,
            "hit_ratio": f"{hit_ratio:.2%}",
        }

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (f"Pager(path={self.db_path}, "
                f"cached={stats['cached_pages']}/{stats['capacity']}, "
                f"hit_ratio={stats['hit_ratio']})")
