"""
Name: Local Rule Detector Tests

Responsibilities:
  - Spelling table: whole-word, case-insensitive, case-preserving
  - Pattern rules: one test per rule family
  - Preference filtering and determinism
"""

import re

import pytest

from textwarden.domain.entities import (
    Chunk,
    DetectedIssues,
    IssueKind,
    Preferences,
)
from textwarden.infrastructure.detectors.local_detector import (
    LocalRuleDetector,
    find_pattern_issues,
    find_spelling_issues,
)
from textwarden.infrastructure.detectors.rules import (
    PATTERN_RULES,
    SPELLING_CORRECTIONS,
    PatternRule,
    match_case,
)

pytestmark = pytest.mark.unit

ALL = Preferences()


def _only(issues, kind):
    return [i for i in issues if i.kind is kind]


class TestSpelling:
    def test_flags_misspelling_at_exact_offset(self):
        text = "Their are also some grammar mistakes in this sentance."
        issues = find_spelling_issues(text)

        assert len(issues) == 1
        issue = issues[0]
        assert (issue.span.start, issue.span.end) == (45, 53)
        assert issue.flagged_text == "sentance"
        assert issue.replacements == ("sentence",)

    def test_their_is_never_flagged(self):
        assert "their" not in SPELLING_CORRECTIONS
        issues = LocalRuleDetector().find_issues("Their dog is there.", ALL)
        assert all(i.flagged_text.lower() != "their" for i in issues)

    def test_whole_word_only(self):
        assert find_spelling_issues("time items tehran") == []

    def test_one_issue_per_occurrence(self):
        text = "teh cat and teh dog"
        issues = find_spelling_issues(text)
        assert [i.span.start for i in issues] == [0, 12]

    @pytest.mark.parametrize(
        "word,expected", [("Teh", "The"), ("TEH", "THE"), ("teh", "the")]
    )
    def test_replacement_preserves_case(self, word, expected):
        issues = find_spelling_issues(f"{word} end")
        assert issues[0].replacements == (expected,)

    def test_multi_word_correction(self):
        issues = find_spelling_issues("I like it alot.")
        assert issues[0].replacements == ("a lot",)

    def test_ids_are_deterministic(self):
        text = "I recieve it"
        assert find_spelling_issues(text) == find_spelling_issues(text)


class TestPatternRules:
    @pytest.mark.parametrize(
        "text,flagged,replacement,kind",
        [
            ("Its a trap.", "Its a", "It's a", IssueKind.GRAMMAR),
            ("Oh, your welcome!", "your welcome", "you're welcome", IssueKind.GRAMMAR),
            ("We could of won.", "could of", "could have", IssueKind.GRAMMAR),
            ("Should of known.", "Should of", "Should have", IssueKind.GRAMMAR),
            ("It had an affect on me.", "affect", "effect", IssueKind.GRAMMAR),
            ("This will effect sales.", "effect", "affect", IssueKind.GRAMMAR),
            ("Eat a apple.", "a", "an", IssueKind.GRAMMAR),
            ("It is the the best.", "the the", "the", IssueKind.GRAMMAR),
            ("That is very good news.", "very good", "excellent", IssueKind.STYLE),
            ("A really bad day.", "really bad", "terrible", IssueKind.STYLE),
            ("Very big house.", "Very big", "Huge", IssueKind.STYLE),
            ("A very small mouse.", "very small", "tiny", IssueKind.STYLE),
            ("Run in order to win.", "in order to", "to", IssueKind.CLARITY),
            ("Due to the fact that it rained.", "Due to the fact that", "Because", IssueKind.CLARITY),
            ("Stop at this point in time.", "at this point in time", "now", IssueKind.CLARITY),
            ("Call in the event that it fails.", "in the event that", "if", IssueKind.CLARITY),
        ],
    )
    def test_rule_detects_and_replaces(self, text, flagged, replacement, kind):
        issues = find_pattern_issues(text)
        matching = [i for i in issues if i.flagged_text == flagged]

        assert len(matching) == 1, issues
        issue = matching[0]
        assert issue.kind is kind
        assert issue.replacements == (replacement,)
        assert text[issue.span.start : issue.span.end] == flagged
        assert issue.explanation

    def test_article_rule_ignores_consonants_and_capitals(self):
        assert find_pattern_issues("a banana and a European trip") == []

    def test_repeated_word_allows_had_had(self):
        assert find_pattern_issues("She had had enough.") == []

    def test_clean_text_has_no_issues(self):
        assert find_pattern_issues("The quick brown fox jumps over the lazy dog.") == []

    def test_rule_requires_exactly_one_replacement_source(self):
        with pytest.raises(ValueError):
            PatternRule(name="bad", pattern=re.compile("x"), kind=IssueKind.STYLE)
        with pytest.raises(ValueError):
            PatternRule(
                name="bad",
                pattern=re.compile("x"),
                kind=IssueKind.STYLE,
                replacement="y",
                resolver=lambda m: "z",
            )

    def test_rule_names_are_unique(self):
        names = [rule.name for rule in PATTERN_RULES]
        assert len(names) == len(set(names))


class TestMatchCase:
    def test_title(self):
        assert match_case("In order to", "to") == "To"

    def test_upper(self):
        assert match_case("VERY GOOD", "excellent") == "EXCELLENT"

    def test_single_capital_letter_is_title_not_upper(self):
        assert match_case("A", "an") == "An"


class TestLocalRuleDetector:
    @pytest.mark.asyncio
    async def test_detect_returns_detected_issues(self):
        detector = LocalRuleDetector()
        outcome = await detector.detect(Chunk("teh end"), ALL)

        assert isinstance(outcome, DetectedIssues)
        assert outcome.issues[0].flagged_text == "teh"

    def test_filters_disabled_kinds(self):
        text = "Teh result is very good in order to win."
        detector = LocalRuleDetector()

        only_style = Preferences(enabled_kinds=[IssueKind.STYLE])
        issues = detector.find_issues(text, only_style)
        assert issues
        assert all(i.kind is IssueKind.STYLE for i in issues)

        nothing = Preferences(enabled_kinds=[])
        assert detector.find_issues(text, nothing) == []

    def test_all_kinds_reported_when_enabled(self):
        text = "Teh result is very good in order to win. Its a deal."
        issues = LocalRuleDetector().find_issues(text, ALL)
        for kind in IssueKind:
            assert _only(issues, kind), kind

    def test_custom_tables(self):
        detector = LocalRuleDetector(corrections={"Colour": "color"}, rules=())
        issues = detector.find_issues("My colour", ALL)
        assert [i.replacements for i in issues] == [("color",)]
