"""Per-orchestrator cache of raw retrieval results."""

import threading
from typing import Any, Callable, Dict, Optional, Tuple

from contracts import ICP, UseCase


CacheKey = Tuple[str, str, str]

_MISSING = object()


class RetrievalCache:
    """Deduplicates repeated stream queries for the same normalized context.

    Keys are (stream, icp, use_case). Entries live as long as the cache object
    and are never evicted automatically; call clear() to invalidate.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(stream: str, icp: ICP, use_case: UseCase) -> CacheKey:
        return (stream, icp.value, use_case.value)

    def get(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def get_or_fetch(self, key: CacheKey, fetch: Callable[[], Any]) -> Any:
        """Return the cached value or call fetch() and store its result.

        The fetch runs outside the lock; two threads missing the same key may
        both fetch, and the later write wins with an equal value. Exceptions
        from fetch propagate and nothing is stored.
        """
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is not _MISSING:
                self.hits += 1
                return value
            self.misses += 1

        value = fetch()
        self.set(key, value)
        return value

    def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
