"""
Name: Response Cache Port

Responsibilities:
  - Define the contract for caching merged analysis results
  - Keep the use case independent from the cache implementation

Collaborators:
  - infrastructure.cache: in-memory LRU/TTL implementation
  - application.use_cases.analyze_text: reads before detection, writes after

Constraints:
  - get() never raises for a miss; expired entries count as misses
  - Implementations decide eviction (TTL + capacity)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

from .entities import Issue


@dataclass(frozen=True)
class CacheEntry:
    """R: Cached analysis result."""

    key: str
    issues: Tuple[Issue, ...]
    created_at: float


class ResponseCachePort(Protocol):
    def get(self, key: str) -> CacheEntry | None:
        """R: Entry for key, or None if missing/expired."""
        ...

    def put(self, key: str, issues: Sequence[Issue]) -> CacheEntry:
        """R: Store issues under key, evicting as needed."""
        ...

    def clear(self) -> None:
        """R: Drop every entry."""
        ...

    def stats(self) -> dict:
        ...
