"""Domain layer exports"""

from .cache import CacheEntry, ResponseCachePort
from .entities import (
    ALL_KINDS,
    Chunk,
    DetectedIssues,
    DetectionOutcome,
    DetectionUnavailable,
    Issue,
    IssueKind,
    Preferences,
    Span,
)
from .services import IssueDetector, TextGenerationService, TextSegmenterService

__all__ = [
    "ALL_KINDS",
    "CacheEntry",
    "Chunk",
    "DetectedIssues",
    "DetectionOutcome",
    "DetectionUnavailable",
    "Issue",
    "IssueDetector",
    "IssueKind",
    "Preferences",
    "ResponseCachePort",
    "Span",
    "TextGenerationService",
    "TextSegmenterService",
]
