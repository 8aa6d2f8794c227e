"""
Name: Model Response Parser

Responsibilities:
  - Extract a JSON array of issue objects from noisy model output
  - Validate each object and convert it to a domain Issue
  - Drop malformed objects individually (never the whole batch)

Collaborators:
  - infrastructure.detectors.remote_detector: Main consumer
  - domain.entities.Issue

Constraints:
  - Never raises for malformed input
  - Produced spans always satisfy text[start:end] == flagged_text

Algorithm (stages, first success wins):
  1. Parse the whole response as JSON
  2. Parse the contents of a fenced code block
  3. Parse the substring from the first "[" to the last "]"
  4. Scan for objects holding type/position/text/suggestions, repair
     unquoted keys and trailing commas, parse each one independently

Notes:
  - Models sometimes report offsets that are slightly off; spans that do
    not cover the flagged text are realigned to the nearest occurrence
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Optional, Tuple
from uuid import uuid4

from ...domain.entities import Issue, IssueKind, Span
from ...logger import logger

MAX_REPLACEMENTS = 3
REQUIRED_KEYS = ("type", "position", "text", "suggestions")
# R: Wrapper keys some models use around the array
_WRAPPER_KEYS = ("suggestions", "issues", "results")

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
# R: Object with at most one level of nested braces (the position object)
_OBJECT_RE = re.compile(r"\{(?:[^{}]|\{[^{}]*\})*\}")
_UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_]\w*)\s*:")
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def _key_pattern(key: str) -> "re.Pattern[str]":
    return re.compile(rf"[\"']?\b{key}\b[\"']?\s*:")


_REQUIRED_KEY_RES = tuple(_key_pattern(key) for key in REQUIRED_KEYS)


def _is_object_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def _as_issue_list(payload: Any) -> Optional[List[Any]]:
    """R: Issue objects held by payload; a list of strings is not an issue array."""
    if _is_object_list(payload):
        return payload
    if isinstance(payload, dict):
        if "type" in payload and "position" in payload:
            return [payload]
        for key in _WRAPPER_KEYS:
            if _is_object_list(payload.get(key)):
                return payload[key]
    return None


def _try_parse_array(candidate: str) -> Optional[List[Any]]:
    try:
        payload = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return None
    return _as_issue_list(payload)


def _parse_direct(text: str) -> Optional[List[Any]]:
    return _try_parse_array(text.strip())


def _parse_fenced(text: str) -> Optional[List[Any]]:
    for match in _FENCE_RE.finditer(text):
        parsed = _try_parse_array(match.group(1))
        if parsed is not None:
            return parsed
    return None


def _parse_bracketed(text: str) -> Optional[List[Any]]:
    first = text.find("[")
    last = text.rfind("]")
    if first == -1 or last <= first:
        return None
    return _try_parse_array(text[first : last + 1])


def _repair_object(candidate: str) -> str:
    repaired = _UNQUOTED_KEY_RE.sub(r'\1"\2":', candidate)
    return _TRAILING_COMMA_RE.sub(r"\1", repaired)


def _parse_structural(text: str) -> Optional[List[Any]]:
    recovered: List[Any] = []
    for match in _OBJECT_RE.finditer(text):
        candidate = match.group(0)
        if not all(key_re.search(candidate) for key_re in _REQUIRED_KEY_RES):
            continue
        try:
            obj = json.loads(_repair_object(candidate))
        except json.JSONDecodeError:
            logger.debug(
                "Discarding unparseable issue candidate",
                extra={"candidate_prefix": candidate[:50]},
            )
            continue
        if isinstance(obj, dict):
            recovered.append(obj)
    return recovered or None


_STAGES = (
    ("direct", _parse_direct),
    ("fenced", _parse_fenced),
    ("bracketed", _parse_bracketed),
    ("structural", _parse_structural),
)


def extract_issue_objects(response_text: str) -> Optional[List[Any]]:
    """
    R: Run the parsing stages in order.

    Returns:
        Raw issue objects (possibly empty for a valid "[]"), or None when
        every stage failed
    """
    if not response_text or not response_text.strip():
        return None

    for stage, parse in _STAGES:
        parsed = parse(response_text)
        if parsed is not None:
            if stage != "direct":
                logger.info(
                    "Recovered issue array from noisy response",
                    extra={"stage": stage, "objects": len(parsed)},
                )
            return parsed

    logger.warning(
        "Model response could not be parsed",
        extra={
            "response_chars": len(response_text),
            "response_prefix": response_text[:200],
        },
    )
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _coerce_replacements(value: Any, flagged: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    replacements: List[str] = []
    for item in value:
        if isinstance(item, str) and item.strip() and item != flagged:
            if item not in replacements:
                replacements.append(item)
    return tuple(replacements[:MAX_REPLACEMENTS])


def _align_span(text: str, flagged: str, start: int, end: int) -> Optional[Span]:
    """
    R: Span covering flagged within text, closest to the reported start.

    Returns None when flagged does not occur in text.
    """
    if 0 <= start < end <= len(text) and text[start:end] == flagged:
        return Span(start, end)

    best: Optional[int] = None
    index = text.find(flagged)
    while index != -1:
        if best is None or abs(index - start) < abs(best - start):
            best = index
        index = text.find(flagged, index + 1)

    if best is None:
        return None
    return Span(best, best + len(flagged))


def build_issue(raw: Any, chunk_text: str) -> Optional[Issue]:
    """
    R: Validate one raw object and convert it to an Issue.

    Required: type, position.start, position.end, text, suggestions.
    Synthesized: id (when missing), explanation (from first replacement).

    Returns:
        Issue with chunk-local span, or None when the object is invalid
    """
    if not isinstance(raw, dict):
        return None

    kind = IssueKind.parse(raw.get("type"))
    if kind is None:
        return None

    position = raw.get("position")
    if not isinstance(position, dict):
        return None
    start = _as_int(position.get("start"))
    end = _as_int(position.get("end"))
    if start is None or end is None:
        return None

    flagged = raw.get("text")
    if not isinstance(flagged, str) or not flagged:
        return None

    replacements = _coerce_replacements(raw.get("suggestions"), flagged)
    if not replacements:
        return None

    span = _align_span(chunk_text, flagged, start, end)
    if span is None:
        return None

    issue_id = raw.get("id")
    if not isinstance(issue_id, (str, int)) or isinstance(issue_id, bool) or not str(issue_id):
        issue_id = f"remote-{uuid4().hex[:8]}"

    explanation = raw.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = f'Consider replacing "{flagged}" with "{replacements[0]}".'

    return Issue(
        id=str(issue_id),
        kind=kind,
        span=span,
        flagged_text=flagged,
        replacements=replacements,
        explanation=explanation,
    )


def build_issues(raw_objects: List[Any], chunk_text: str) -> List[Issue]:
    """R: Convert raw objects, dropping invalid ones individually."""
    issues: List[Issue] = []
    dropped = 0
    for raw in raw_objects:
        issue = build_issue(raw, chunk_text)
        if issue is None:
            dropped += 1
            continue
        issues.append(issue)

    if dropped:
        logger.info(
            "Dropped invalid issue objects",
            extra={"dropped": dropped, "kept": len(issues)},
        )
    return issues


def parse_issues(response_text: str, chunk_text: str) -> List[Issue]:
    """
    R: Full parse: extract + validate.

    Returns:
        Valid issues; an empty list when nothing could be parsed
    """
    raw_objects = extract_issue_objects(response_text)
    if raw_objects is None:
        return []
    return build_issues(raw_objects, chunk_text)
