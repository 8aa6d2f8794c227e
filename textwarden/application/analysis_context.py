"""
Name: Analysis Context

Responsibilities:
  - Own the long-lived analysis state (detectors, cache, dictionary)
  - Clear the cache whenever the dictionary changes

Collaborators:
  - container.build_analysis_context: Composition root
  - application.use_cases.analyze_text: Reads the context per call
  - routes: Dictionary and cache endpoints

Constraints:
  - One context per app; no module-level singletons
  - Mutated from the event loop only (no locking)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Optional

from ..domain.cache import ResponseCachePort
from ..domain.services import IssueDetector, TextSegmenterService
from ..logger import logger
from .dictionary_filter import normalize_dictionary

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class AnalysisContext:
    """
    R: Everything one analysis needs besides its input.

    Attributes:
        segmenter: Splits documents into chunks
        remote_detector: Model-backed detector (None when disabled)
        local_detector: Rule-based fallback detector
        cache: Response cache
        dictionary: Lower-cased user dictionary
        pacing_delay_seconds: Wait before every chunk after the first
        max_text_chars: Maximum accepted document length
        sleep: Awaitable sleep (injectable for tests)
    """

    segmenter: TextSegmenterService
    remote_detector: Optional[IssueDetector]
    local_detector: IssueDetector
    cache: ResponseCachePort
    dictionary: frozenset[str] = frozenset()
    pacing_delay_seconds: float = 0.5
    max_text_chars: int = 100_000
    sleep: Sleep = field(default=asyncio.sleep)

    @property
    def remote_enabled(self) -> bool:
        return self.remote_detector is not None

    def update_dictionary(self, words: Iterable[str]) -> bool:
        """
        R: Replace the dictionary.

        Returns:
            True when the dictionary changed (and the cache was cleared)
        """
        new_dictionary = normalize_dictionary(words)
        if new_dictionary == self.dictionary:
            return False

        self.dictionary = new_dictionary
        self.cache.clear()
        logger.info(
            "Dictionary updated, cache cleared",
            extra={"dictionary_size": len(new_dictionary)},
        )
        return True

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Response cache cleared")
