# src/projctx/core/cache.py
import logging
import os
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from projctx.errors import FileReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentCacheEntry:
    content: str
    mtime: float
    read_at: datetime

    @property
    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime)


class ContentCache:
    """
    File contents keyed by absolute path.

    With the defaults the cache never evicts and never re-reads a path once it
    has been stored, even if the file changes on disk. `max_entries` turns on
    least-recently-used eviction; `revalidate` re-reads a file whose
    modification time no longer matches the stored one.
    """

    def __init__(self, max_entries: Optional[int] = None, revalidate: bool = False):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self.revalidate = revalidate
        self._entries: "OrderedDict[str, ContentCacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path) -> bool:
        return str(path) in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get(self, path: Path) -> ContentCacheEntry:
        """
        Returns the cached entry for path, reading the file on a miss.
        Raises FileReadError if the file cannot be read.
        """
        key = str(path)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)

        if entry is not None and not self._is_stale(path, entry):
            logger.debug("Cache hit: %s", key)
            return entry

        fresh = _read_file(path)
        with self._lock:
            current = self._entries.get(key)
            # Concurrent misses on one key: the first stored entry wins.
            if current is not None and current is not entry:
                return current
            self._entries[key] = fresh
            self._entries.move_to_end(key)
            self._evict()
        return fresh

    def _is_stale(self, path: Path, entry: ContentCacheEntry) -> bool:
        if not self.revalidate:
            return False
        try:
            return os.stat(path).st_mtime != entry.mtime
        except OSError:
            # Let the re-read surface the failure.
            return True

    def _evict(self) -> None:
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s from content cache", evicted)


def _read_file(path: Path) -> ContentCacheEntry:
    try:
        mtime = os.stat(path).st_mtime
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()
    except OSError as e:
        raise FileReadError(path, f"Cannot read file ({e.strerror or e})") from e
    return ContentCacheEntry(content=content, mtime=mtime, read_at=datetime.now())
