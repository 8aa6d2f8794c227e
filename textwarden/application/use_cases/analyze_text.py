"""
Name: Analyze Text Use Case (Dispatcher)

Responsibilities:
  - Validate the document and serve cached results
  - Split the document and detect issues chunk by chunk
  - Fall back from the remote model to the local rules per chunk
  - Merge, filter by the user dictionary, and cache the result
  - Measure and report stage timings

Collaborators:
  - application.analysis_context.AnalysisContext: Detectors, cache, dictionary
  - application.aggregator: Offset and merge
  - application.dictionary_filter: User dictionary suppression
  - infrastructure.cache.build_cache_key: Deterministic cache keys
  - timing.StageTimings, metrics: Observability

Constraints:
  - No HTTP concerns
  - Chunks are processed strictly one after another, paced by a delay
  - A failing chunk contributes no issues; it never fails the whole call

Notes:
  - Cached issues are already dictionary-filtered; the context clears the
    cache when the dictionary changes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ...context import chunk_scope
from ...domain.entities import (
    Chunk,
    DetectedIssues,
    DetectionUnavailable,
    Issue,
    Preferences,
)
from ...exceptions import InvalidInputError
from ...infrastructure.cache import build_cache_key
from ...logger import logger
from ...metrics import (
    record_analysis_latency,
    record_chunk_failure,
    record_detection,
)
from ...timing import StageTimings
from ..aggregator import offset_and_merge
from ..analysis_context import AnalysisContext
from ..dictionary_filter import apply_dictionary


@dataclass
class AnalyzeTextInput:
    """
    R: Input data for AnalyzeText use case.

    Attributes:
        text: Document to analyze
        preferences: Locale and enabled issue kinds
    """

    text: str
    preferences: Preferences = field(default_factory=Preferences)


@dataclass
class AnalyzeTextResult:
    """
    R: Issues in document positions plus run metadata.

    Attributes:
        issues: Sorted, dictionary-filtered issues
        cached: True when served from the response cache
        metadata: Chunk counts, detector usage and stage timings
    """

    issues: List[Issue]
    cached: bool = False
    metadata: dict = field(default_factory=dict)


class AnalyzeTextUseCase:
    """
    R: Dispatcher for a full document analysis.
    """

    def __init__(self, context: AnalysisContext):
        self.context = context

    def validate(self, text: str) -> None:
        """R: Reject empty or oversized text (InvalidInputError)."""
        if not text or not text.strip():
            raise InvalidInputError("Text must not be empty")
        if len(text) > self.context.max_text_chars:
            raise InvalidInputError(
                f"Text too long: {len(text)} characters "
                f"(maximum {self.context.max_text_chars})"
            )

    async def _detect_chunk(
        self, chunk: Chunk, preferences: Preferences
    ) -> Tuple[Sequence[Issue], str]:
        """
        R: Detect issues in one chunk: remote first, local on unavailability.

        Returns:
            (chunk-local issues, name of the detector that produced them)
        """
        remote = self.context.remote_detector
        if remote is not None:
            outcome = await remote.detect(chunk, preferences)
            if isinstance(outcome, DetectedIssues):
                record_detection(remote.name, "detected")
                return outcome.issues, remote.name

            record_detection(remote.name, "unavailable")
            logger.info(
                "Remote detection unavailable, using local rules",
                extra={"reason": outcome.reason, "chunk_offset": chunk.origin_offset},
            )

        local = self.context.local_detector
        outcome = await local.detect(chunk, preferences)
        if isinstance(outcome, DetectionUnavailable):
            record_detection(local.name, "unavailable")
            return (), local.name
        record_detection(local.name, "detected")
        return outcome.issues, local.name

    async def execute(self, input_data: AnalyzeTextInput) -> AnalyzeTextResult:
        """
        R: Analyze a document: cache lookup -> split -> detect -> merge -> filter.

        Raises:
            InvalidInputError: Empty or oversized text
        """
        text = input_data.text
        preferences = input_data.preferences
        self.validate(text)

        timings = StageTimings()

        if not preferences.enabled_kinds:
            logger.info("No issue kinds enabled, skipping detection")
            return AnalyzeTextResult(issues=[], metadata=timings.to_dict())

        cache_key = build_cache_key(text, preferences)
        entry = self.context.cache.get(cache_key)
        if entry is not None:
            logger.info(
                "Analysis served from cache",
                extra={"text_chars": len(text), "issues": len(entry.issues)},
            )
            return AnalyzeTextResult(
                issues=list(entry.issues), cached=True, metadata=timings.to_dict()
            )

        with timings.measure("segment"):
            chunks = self.context.segmenter.split(text)

        per_chunk: List[Tuple[Sequence[Issue], int]] = []
        detectors_used: dict[str, int] = {}
        failed_chunks = 0

        for index, chunk in enumerate(chunks):
            if index > 0 and self.context.pacing_delay_seconds > 0:
                await self.context.sleep(self.context.pacing_delay_seconds)

            try:
                with timings.measure("detect"), chunk_scope(index, chunk.origin_offset):
                    issues, detector_name = await self._detect_chunk(chunk, preferences)
            except Exception as e:
                failed_chunks += 1
                record_chunk_failure()
                logger.error(
                    "Chunk detection failed, chunk contributes no issues",
                    exc_info=True,
                    extra={
                        "chunk_index": index,
                        "chunk_offset": chunk.origin_offset,
                        "error_type": type(e).__name__,
                    },
                )
                per_chunk.append(((), chunk.origin_offset))
                continue

            detectors_used[detector_name] = detectors_used.get(detector_name, 0) + 1
            per_chunk.append((issues, chunk.origin_offset))
            logger.debug(
                "Chunk analyzed",
                extra={
                    "chunk_index": index,
                    "chunk_count": len(chunks),
                    "detector": detector_name,
                    "issues": len(issues),
                },
            )

        with timings.measure("merge"):
            merged = offset_and_merge(per_chunk)
            issues = apply_dictionary(merged, self.context.dictionary)

        self.context.cache.put(cache_key, issues)

        record_analysis_latency(timings.total_seconds)
        metadata = {
            "chunks": len(chunks),
            "failed_chunks": failed_chunks,
            "detectors": detectors_used,
            **timings.to_dict(),
        }
        logger.info(
            "Text analyzed",
            extra={
                "text_chars": len(text),
                "issues": len(issues),
                "suppressed": len(merged) - len(issues),
                **metadata,
            },
        )
        return AnalyzeTextResult(issues=issues, metadata=metadata)

    async def analyze(
        self, text: str, preferences: Optional[Preferences] = None
    ) -> List[Issue]:
        """R: Convenience wrapper returning only the issues."""
        result = await self.execute(
            AnalyzeTextInput(text=text, preferences=preferences or Preferences())
        )
        return result.issues
