"""
Name: Local Detection Rules

Responsibilities:
  - Declare the fixed misspelling -> correction table
  - Declare regex rules for grammar, style and clarity issues
  - Provide explanation templates per issue kind

Collaborators:
  - infrastructure.detectors.local_detector: Applies these tables

Constraints:
  - Pure data + tiny resolver functions (no IO, deterministic)
  - Every rule carries either a fixed replacement or a contextual resolver

Notes:
  - This is a best-effort pattern matcher, not a grammar engine
  - Homophone errors that need sentence understanding ("Their are") are
    intentionally absent: the local rules never guess them
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from ...domain.entities import IssueKind

Resolver = Callable[["re.Match[str]"], str]

# R: Misspelling -> correction (keys are lowercase)
SPELLING_CORRECTIONS: Mapping[str, str] = {
    "teh": "the",
    "thier": "their",
    "recieve": "receive",
    "recieved": "received",
    "definately": "definitely",
    "seperate": "separate",
    "occured": "occurred",
    "alot": "a lot",
    "cant": "can't",
    "dont": "don't",
    "im": "I'm",
    "sentance": "sentence",
    "contians": "contains",
    "wich": "which",
    "untill": "until",
    "accomodate": "accommodate",
    "occurence": "occurrence",
    "beleive": "believe",
    "goverment": "government",
    "enviroment": "environment",
    "tommorow": "tomorrow",
    "wierd": "weird",
    "begining": "beginning",
    "truely": "truly",
    "neccessary": "necessary",
    "acheive": "achieve",
    "existance": "existence",
    "independant": "independent",
    "reccomend": "recommend",
    "succesful": "successful",
}

EXPLANATION_TEMPLATES: Mapping[IssueKind, str] = {
    IssueKind.SPELLING: '"{flagged}" is misspelled. The correct spelling is "{replacement}".',
    IssueKind.GRAMMAR: '"{flagged}" contains a grammar error. Consider using "{replacement}" instead.',
    IssueKind.STYLE: 'Consider replacing "{flagged}" with "{replacement}" for more impactful writing.',
    IssueKind.CLARITY: '"{flagged}" is wordy. "{replacement}" is more concise.',
}


def match_case(source: str, replacement: str) -> str:
    """R: Give replacement the capitalisation pattern of source."""
    if len(source) > 1 and source.isupper():
        return replacement.upper()
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def preserve_case(replacement: str) -> Resolver:
    """R: Resolver returning replacement cased like the flagged text."""

    def _resolve(match: "re.Match[str]") -> str:
        return match_case(match.group(0), replacement)

    return _resolve


def _modal_have(match: "re.Match[str]") -> str:
    return f"{match.group(1)} have"


def _collapse_repeat(match: "re.Match[str]") -> str:
    return match.group(1)


@dataclass(frozen=True)
class PatternRule:
    """
    R: One regex rule.

    Attributes:
        name: Stable identifier (used in issue ids)
        pattern: Compiled regex
        kind: Issue kind reported for each match
        replacement: Fixed replacement text
        resolver: Computes the replacement from the match
        group: Regex group that delimits the flagged text
        explanation: Optional template overriding EXPLANATION_TEMPLATES

    Raises:
        ValueError: Unless exactly one of replacement/resolver is given
    """

    name: str
    pattern: "re.Pattern[str]"
    kind: IssueKind
    replacement: Optional[str] = None
    resolver: Optional[Resolver] = None
    group: int = 0
    explanation: Optional[str] = None

    def __post_init__(self):
        if (self.replacement is None) == (self.resolver is None):
            raise ValueError(
                f"rule {self.name!r} needs exactly one of replacement or resolver"
            )

    def resolve(self, match: "re.Match[str]") -> str:
        if self.resolver is not None:
            return self.resolver(match)
        return self.replacement

    def explain(self, flagged: str, replacement: str) -> str:
        template = self.explanation or EXPLANATION_TEMPLATES[self.kind]
        return template.format(flagged=flagged, replacement=replacement)


def _rx(pattern: str, flags: int = re.IGNORECASE) -> "re.Pattern[str]":
    return re.compile(pattern, flags)


PATTERN_RULES: Tuple[PatternRule, ...] = (
    # Grammar
    PatternRule(
        name="its-a",
        pattern=_rx(r"\bits a\b"),
        kind=IssueKind.GRAMMAR,
        resolver=preserve_case("it's a"),
    ),
    PatternRule(
        name="your-welcome",
        pattern=_rx(r"\byour welcome\b"),
        kind=IssueKind.GRAMMAR,
        resolver=preserve_case("you're welcome"),
    ),
    PatternRule(
        name="modal-of",
        pattern=_rx(r"\b(could|would|should|must|might) of\b"),
        kind=IssueKind.GRAMMAR,
        resolver=_modal_have,
        explanation='"{flagged}" should be "{replacement}"; "of" is not a verb.',
    ),
    PatternRule(
        name="affect-as-noun",
        pattern=_rx(r"\b(?:an?|the|any|no)\s+(affect)\b"),
        kind=IssueKind.GRAMMAR,
        replacement="effect",
        group=1,
        explanation='After an article the noun "{replacement}" is expected, not "{flagged}".',
    ),
    PatternRule(
        name="effect-as-verb",
        pattern=_rx(r"\b(?:will|can|could|would|may|might|does|did|won't|can't)\s+(effect)\b"),
        kind=IssueKind.GRAMMAR,
        replacement="affect",
        group=1,
        explanation='After a helper verb the verb "{replacement}" is expected, not "{flagged}".',
    ),
    PatternRule(
        name="a-before-vowel",
        pattern=_rx(r"\b(a)\s+(?=[aei][a-z])", 0),
        kind=IssueKind.GRAMMAR,
        replacement="an",
        group=1,
        explanation='Use "{replacement}" before a word starting with a vowel sound.',
    ),
    PatternRule(
        name="repeated-word",
        pattern=_rx(r"\b(?!(?:had|that)\b)([a-z]+)\s+\1\b"),
        kind=IssueKind.GRAMMAR,
        resolver=_collapse_repeat,
        explanation='"{flagged}" repeats a word. Use "{replacement}".',
    ),
    # Style
    PatternRule(
        name="very-good",
        pattern=_rx(r"\bvery good\b"),
        kind=IssueKind.STYLE,
        resolver=preserve_case("excellent"),
    ),
    PatternRule(
        name="really-bad",
        pattern=_rx(r"\breally bad\b"),
        kind=IssueKind.STYLE,
        resolver=preserve_case("terrible"),
    ),
    PatternRule(
        name="very-big",
        pattern=_rx(r"\bvery big\b"),
        kind=IssueKind.STYLE,
        resolver=preserve_case("huge"),
    ),
    PatternRule(
        name="very-small",
        pattern=_rx(r"\bvery small\b"),
        kind=IssueKind.STYLE,
        resolver=preserve_case("tiny"),
    ),
    # Clarity
    PatternRule(
        name="in-order-to",
        pattern=_rx(r"\bin order to\b"),
        kind=IssueKind.CLARITY,
        resolver=preserve_case("to"),
    ),
    PatternRule(
        name="due-to-the-fact-that",
        pattern=_rx(r"\bdue to the fact that\b"),
        kind=IssueKind.CLARITY,
        resolver=preserve_case("because"),
    ),
    PatternRule(
        name="at-this-point-in-time",
        pattern=_rx(r"\bat this point in time\b"),
        kind=IssueKind.CLARITY,
        resolver=preserve_case("now"),
    ),
    PatternRule(
        name="in-the-event-that",
        pattern=_rx(r"\bin the event that\b"),
        kind=IssueKind.CLARITY,
        resolver=preserve_case("if"),
    ),
)
