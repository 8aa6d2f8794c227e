"""
Name: Issue Aggregator

Responsibilities:
  - Shift chunk-local spans into document space
  - Merge per-chunk results into one list ordered by start position

Constraints:
  - Stable: issues with equal starts keep chunk order, then detector order
  - No deduplication; overlapping chunks may report the same issue twice
"""

from typing import List, Sequence, Tuple

from ..domain.entities import Issue


def offset_and_merge(per_chunk: Sequence[Tuple[Sequence[Issue], int]]) -> List[Issue]:
    """
    R: Shift each chunk's issues by its origin offset and merge.

    Args:
        per_chunk: (chunk-local issues, chunk origin offset) pairs in chunk order

    Returns:
        Issues in document positions, sorted by span.start
    """
    merged = [
        issue.shifted(offset) for issues, offset in per_chunk for issue in issues
    ]
    # R: sorted() is stable
    return sorted(merged, key=lambda issue: issue.span.start)
