"""
Name: Dictionary Filter

Responsibilities:
  - Suppress issues whose flagged text the user added to their dictionary

Constraints:
  - Case-insensitive exact match on the whole flagged text
  - Order-preserving, idempotent, never mutates its input
"""

from typing import AbstractSet, Iterable, List

from ..domain.entities import Issue


def normalize_dictionary(words: Iterable[str]) -> frozenset[str]:
    """R: Lower-cased, stripped, non-empty dictionary entries."""
    return frozenset(w.strip().lower() for w in words if w and w.strip())


def apply_dictionary(issues: Iterable[Issue], dictionary: AbstractSet[str]) -> List[Issue]:
    """R: Keep issues whose lower-cased flagged text is not in dictionary."""
    if not dictionary:
        return list(issues)
    return [issue for issue in issues if issue.flagged_text.lower() not in dictionary]
