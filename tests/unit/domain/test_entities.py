"""
Name: Domain Entity Tests

Responsibilities:
  - Validate Span/Issue invariants
  - Validate Preferences coercion and canonical form
"""

import pytest

from textwarden.domain.entities import (
    ALL_KINDS,
    Issue,
    IssueKind,
    Preferences,
    Span,
)

pytestmark = pytest.mark.unit


def _issue(start=0, end=4, replacements=("fix",)):
    return Issue(
        id="i-1",
        kind=IssueKind.SPELLING,
        span=Span(start, end),
        flagged_text="teh ",
        replacements=replacements,
        explanation="x",
    )


class TestSpan:
    def test_rejects_negative_start(self):
        with pytest.raises(ValueError):
            Span(-1, 3)

    def test_rejects_empty_range(self):
        with pytest.raises(ValueError):
            Span(5, 5)

    def test_shifted(self):
        assert Span(2, 6).shifted(10) == Span(12, 16)
        assert Span(2, 6).length == 4


class TestIssue:
    def test_requires_replacement(self):
        with pytest.raises(ValueError):
            _issue(replacements=())

    def test_rejects_empty_replacement(self):
        with pytest.raises(ValueError):
            _issue(replacements=("ok", ""))

    def test_shifted_keeps_other_fields(self):
        issue = _issue()
        moved = issue.shifted(100)
        assert moved.span == Span(100, 104)
        assert moved.id == issue.id
        assert moved.replacements == issue.replacements

    def test_shifted_zero_returns_same_object(self):
        issue = _issue()
        assert issue.shifted(0) is issue


class TestIssueKind:
    @pytest.mark.parametrize("raw", ["grammar", "GRAMMAR", " Grammar "])
    def test_parse_case_insensitive(self, raw):
        assert IssueKind.parse(raw) is IssueKind.GRAMMAR

    @pytest.mark.parametrize("raw", ["punctuation", "", None, 3])
    def test_parse_unknown(self, raw):
        assert IssueKind.parse(raw) is None


class TestPreferences:
    def test_defaults_enable_everything(self):
        prefs = Preferences()
        assert prefs.locale == "en-US"
        assert prefs.enabled_kinds == ALL_KINDS

    def test_coerces_kind_values(self):
        prefs = Preferences(enabled_kinds=["spelling", IssueKind.STYLE])
        assert prefs.enabled_kinds == frozenset({IssueKind.SPELLING, IssueKind.STYLE})
        assert prefs.is_enabled(IssueKind.STYLE)
        assert not prefs.is_enabled(IssueKind.GRAMMAR)

    def test_rejects_blank_locale(self):
        with pytest.raises(ValueError):
            Preferences(locale="  ")

    def test_canonical_is_order_independent(self):
        a = Preferences(enabled_kinds=[IssueKind.STYLE, IssueKind.GRAMMAR])
        b = Preferences(enabled_kinds=[IssueKind.GRAMMAR, IssueKind.STYLE])
        assert a.canonical() == b.canonical()
        assert a.canonical()["enabled_kinds"] == ["grammar", "style"]
