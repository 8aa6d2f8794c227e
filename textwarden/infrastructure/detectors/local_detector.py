"""
Name: Local Rule Detector

Responsibilities:
  - Detect issues without any network access
  - Apply the misspelling table with whole-word matching
  - Apply the regex rule table for grammar, style and clarity
  - Serve as the fallback whenever remote detection is unavailable

Collaborators:
  - domain.services.IssueDetector: Interface implementation
  - infrastructure.detectors.rules: Spelling table and pattern rules

Constraints:
  - Deterministic and side-effect free (same input -> same issues, same ids)
  - Total: never raises, always returns DetectedIssues
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

from ...domain.entities import (
    Chunk,
    DetectedIssues,
    Issue,
    IssueKind,
    Preferences,
    Span,
)
from .rules import (
    PATTERN_RULES,
    SPELLING_CORRECTIONS,
    PatternRule,
    match_case,
)


def _is_word_boundary(text: str, index: int) -> bool:
    """R: True when index is outside text or points at a non-letter."""
    return index < 0 or index >= len(text) or not text[index].isalpha()


def find_spelling_issues(
    text: str, corrections: Mapping[str, str] = SPELLING_CORRECTIONS
) -> List[Issue]:
    """
    R: Whole-word, case-insensitive scan for known misspellings.

    Emits one issue per occurrence, in table order then text order.
    """
    issues: List[Issue] = []
    lowered = text.lower()

    for misspelling, correction in corrections.items():
        index = lowered.find(misspelling)
        while index != -1:
            end = index + len(misspelling)
            if _is_word_boundary(text, index - 1) and _is_word_boundary(text, end):
                flagged = text[index:end]
                replacement = match_case(flagged, correction)
                issues.append(
                    Issue(
                        id=f"local-spelling-{misspelling}-{index}",
                        kind=IssueKind.SPELLING,
                        span=Span(index, end),
                        flagged_text=flagged,
                        replacements=(replacement,),
                        explanation=(
                            f'"{flagged}" is misspelled. '
                            f'The correct spelling is "{replacement}".'
                        ),
                    )
                )
            index = lowered.find(misspelling, index + 1)

    return issues


def find_pattern_issues(
    text: str, rules: Sequence[PatternRule] = PATTERN_RULES
) -> List[Issue]:
    """R: One issue per regex match of every rule."""
    issues: List[Issue] = []

    for rule in rules:
        for match in rule.pattern.finditer(text):
            start, end = match.span(rule.group)
            if end <= start:
                continue
            flagged = text[start:end]
            replacement = rule.resolve(match)
            if not replacement or replacement == flagged:
                continue
            issues.append(
                Issue(
                    id=f"local-{rule.name}-{start}",
                    kind=rule.kind,
                    span=Span(start, end),
                    flagged_text=flagged,
                    replacements=(replacement,),
                    explanation=rule.explain(flagged, replacement),
                )
            )

    return issues


class LocalRuleDetector:
    """
    R: Rule-based IssueDetector used when the remote model is unavailable.

    Only kinds enabled in the preferences are scanned.
    """

    name = "local"

    def __init__(
        self,
        corrections: Mapping[str, str] = SPELLING_CORRECTIONS,
        rules: Sequence[PatternRule] = PATTERN_RULES,
    ):
        self._corrections = {k.lower(): v for k, v in corrections.items()}
        self._rules = tuple(rules)

    def find_issues(self, text: str, preferences: Preferences) -> List[Issue]:
        """R: Synchronous core of detect(); chunk-local positions."""
        issues: List[Issue] = []
        if preferences.is_enabled(IssueKind.SPELLING):
            issues.extend(find_spelling_issues(text, self._corrections))

        enabled_rules = [r for r in self._rules if preferences.is_enabled(r.kind)]
        if enabled_rules:
            issues.extend(find_pattern_issues(text, enabled_rules))

        return issues

    async def detect(self, chunk: Chunk, preferences: Preferences) -> DetectedIssues:
        return DetectedIssues(tuple(self.find_issues(chunk.text, preferences)))
