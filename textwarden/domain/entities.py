"""
Name: Domain Entities

Responsibilities:
  - Define core value objects for text analysis (Issue, Chunk, Preferences)
  - Define detection outcomes (DetectedIssues / DetectionUnavailable)
  - Enforce structural invariants at construction time

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Frozen dataclasses: values are transient and never mutated in place

Notes:
  - Span positions are 0-based and half-open
  - Chunk-local spans are shifted into document space by the aggregator
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple, Union


class IssueKind(str, Enum):
    """R: Issue categories (values match the wire format)."""

    GRAMMAR = "grammar"
    SPELLING = "spelling"
    STYLE = "style"
    CLARITY = "clarity"

    @classmethod
    def parse(cls, value: object) -> "IssueKind | None":
        """R: Case-insensitive lookup; None for unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


ALL_KINDS: frozenset[IssueKind] = frozenset(IssueKind)


@dataclass(frozen=True)
class Span:
    """
    R: Half-open character range [start, end).

    Raises:
        ValueError: If start < 0 or end <= start
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"span start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(
                f"span end ({self.end}) must be greater than start ({self.start})"
            )

    def shifted(self, offset: int) -> "Span":
        return Span(self.start + offset, self.end + offset)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Issue:
    """
    R: A single detected problem in the text.

    Attributes:
        id: Issue identifier (provided by the detector or synthesized)
        kind: Grammar, spelling, style or clarity
        span: Position of the flagged text
        flagged_text: Exact text at span when the issue was produced
        replacements: 1-3 non-empty candidate corrections
        explanation: Short human readable explanation
    """

    id: str
    kind: IssueKind
    span: Span
    flagged_text: str
    replacements: Tuple[str, ...]
    explanation: str

    def __post_init__(self):
        if not self.replacements:
            raise ValueError("issue requires at least one replacement")
        if any(not r for r in self.replacements):
            raise ValueError("issue replacements must be non-empty strings")

    def shifted(self, offset: int) -> "Issue":
        """R: Copy of this issue with its span moved by offset characters."""
        if offset == 0:
            return self
        return replace(self, span=self.span.shifted(offset))


@dataclass(frozen=True)
class Chunk:
    """
    R: Bounded slice of the document plus its origin offset.

    Attributes:
        text: Chunk content
        origin_offset: Index of text[0] in the original document
    """

    text: str
    origin_offset: int = 0

    @property
    def end_offset(self) -> int:
        return self.origin_offset + len(self.text)


@dataclass(frozen=True)
class Preferences:
    """
    R: Immutable per-call analysis preferences.

    Attributes:
        locale: Language tag (e.g. en-US, en-GB)
        enabled_kinds: Issue kinds to report
    """

    locale: str = "en-US"
    enabled_kinds: frozenset[IssueKind] = field(default_factory=lambda: ALL_KINDS)

    def __post_init__(self):
        if not self.locale or not self.locale.strip():
            raise ValueError("locale must be a non-empty language tag")
        # R: Accept any iterable of kinds but store a frozenset
        kinds = frozenset(IssueKind(k) for k in self.enabled_kinds)
        object.__setattr__(self, "enabled_kinds", kinds)

    def is_enabled(self, kind: IssueKind) -> bool:
        return kind in self.enabled_kinds

    def canonical(self) -> dict:
        """R: Order-independent representation used for cache keys."""
        return {
            "enabled_kinds": sorted(kind.value for kind in self.enabled_kinds),
            "locale": self.locale,
        }


@dataclass(frozen=True)
class DetectedIssues:
    """R: Successful detection (possibly with zero issues)."""

    issues: Tuple[Issue, ...] = ()


@dataclass(frozen=True)
class DetectionUnavailable:
    """R: Detector could not produce a usable result; caller should fall back."""

    reason: str


DetectionOutcome = Union[DetectedIssues, DetectionUnavailable]
