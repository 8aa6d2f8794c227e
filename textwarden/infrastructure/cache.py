"""
Name: Response Cache

Responsibilities:
  - Cache merged analysis results to avoid redundant detection calls
  - Provide TTL-based expiration (lazy, on lookup)
  - Bound memory with LRU eviction
  - Build deterministic keys from text + preferences

Collaborators:
  - domain.cache.ResponseCachePort: Interface implementation
  - domain.entities.Preferences: canonical form for keys
  - metrics: cache hit/miss counters

Constraints:
  - In-memory only (no durability across restarts)
  - No internal locking: one owner (AnalysisContext) mutates it

Notes:
  - Key = SHA-256 over the exact text and canonical preferences JSON
  - Text is not whitespace-normalized: cached spans must stay valid
  - Preference kinds are sorted before hashing so key stability does not
    depend on set iteration order
"""

from __future__ import annotations

import hashlib
import json
import time
from collections import OrderedDict
from typing import Callable, Sequence

from ..domain.cache import CacheEntry
from ..domain.entities import Issue, Preferences
from ..metrics import record_cache_hit, record_cache_miss

_KEY_VERSION = "v1"


def build_cache_key(text: str, preferences: Preferences) -> str:
    """R: Build stable cache key from exact text + full preferences."""
    canonical_prefs = json.dumps(
        preferences.canonical(), sort_keys=True, separators=(",", ":")
    )
    payload = f"{_KEY_VERSION}|{canonical_prefs}|{text}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class InMemoryResponseCache:
    """
    LRU cache of analysis results with per-entry TTL.

    Attributes:
        capacity: Maximum number of cached analyses
        ttl_seconds: Entry lifetime measured from insertion
    """

    def __init__(
        self,
        capacity: int = 50,
        ttl_seconds: float = 30 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {ttl_seconds}")
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._capacity = capacity
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._hits = 0
        self._misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at > self._ttl_seconds

    def get(self, key: str) -> CacheEntry | None:
        """Get entry for key; refreshes its recency on hit."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            record_cache_miss()
            return None
        if self._is_expired(entry):
            del self._entries[key]
            self._misses += 1
            record_cache_miss()
            return None
        self._entries.move_to_end(key)
        self._hits += 1
        record_cache_hit()
        return entry

    def put(self, key: str, issues: Sequence[Issue]) -> CacheEntry:
        """Cache issues under key. Evicts the least recently used entry if full."""
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._capacity:
            self._entries.popitem(last=False)

        entry = CacheEntry(key=key, issues=tuple(issues), created_at=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        """Clear all cached entries."""
        self._entries.clear()

    def stats(self) -> dict:
        """Return cache statistics."""
        total = self._hits + self._misses
        return {
            "backend": "in-memory",
            "size": len(self._entries),
            "capacity": self._capacity,
            "ttl_seconds": self._ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }
