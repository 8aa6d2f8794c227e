"""Unit tests for offset_and_merge."""

import pytest

from textwarden.application.aggregator import offset_and_merge
from textwarden.domain.entities import Issue, IssueKind, Span

pytestmark = pytest.mark.unit


def _issue(issue_id: str, start: int) -> Issue:
    return Issue(
        id=issue_id,
        kind=IssueKind.STYLE,
        span=Span(start, start + 2),
        flagged_text="xx",
        replacements=("y",),
        explanation="e",
    )


def test_shifts_by_chunk_offset():
    merged = offset_and_merge([([_issue("a", 3)], 100)])
    assert merged[0].span == Span(103, 105)


def test_sorted_by_start():
    merged = offset_and_merge(
        [
            ([_issue("a", 50), _issue("b", 5)], 0),
            ([_issue("c", 0)], 20),
        ]
    )
    starts = [i.span.start for i in merged]
    assert starts == sorted(starts)
    assert [i.id for i in merged] == ["b", "c", "a"]


def test_stable_for_equal_starts_and_keeps_duplicates():
    merged = offset_and_merge(
        [
            ([_issue("first", 10)], 0),
            ([_issue("second", 0)], 10),
        ]
    )
    assert [i.id for i in merged] == ["first", "second"]
    assert merged[0].span == merged[1].span


def test_empty_input():
    assert offset_and_merge([]) == []
    assert offset_and_merge([([], 0), ([], 500)]) == []
