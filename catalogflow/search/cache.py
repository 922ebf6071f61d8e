"""In-memory cache for search responses."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .text import normalize_text

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 1000


def make_cache_key(query: str, filters: Optional[Dict[str, object]] = None) -> str:
    """Derive the cache key for a query and its active filters.

    Filters with empty values are ignored and the rest are serialized
    with sorted keys, so equivalent filter sets share a key.
    """
    active = {k: v for k, v in (filters or {}).items() if v not in (None, "")}
    serialized = json.dumps(active, sort_keys=True, ensure_ascii=False, default=str)
    return f"search:{normalize_text(query)}:{serialized}"


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    timestamp: float


class SearchCache:
    """Process-local, time-bounded cache with insertion-order eviction.

    Entries older than ``ttl_seconds`` are treated as absent and
    dropped on lookup.  When a new key would grow the cache past
    ``max_entries`` the earliest inserted entry is evicted; reads do
    not refresh an entry's position.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp > self.ttl_seconds:
            logger.debug("Cache entry %s expired", key)
            del self._entries[key]
            return None
        return entry.value

    def put(self, key: str, value: Any) -> None:
        # Re-inserting moves the key to the end of the eviction order.
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            logger.debug("Cache full, evicting %s", oldest)
            del self._entries[oldest]
        self._entries[key] = _CacheEntry(value=value, timestamp=self._clock())

    def clear(self) -> None:
        self._entries.clear()
