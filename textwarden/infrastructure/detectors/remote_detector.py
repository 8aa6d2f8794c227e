"""
Name: Remote Model Detector

Responsibilities:
  - Format the detection prompt for one chunk
  - Call the TextGenerationService
  - Parse and validate the reply into chunk-local issues
  - Report failures as DetectionUnavailable (never raise)

Collaborators:
  - domain.services.TextGenerationService: Gemini or fake
  - infrastructure.prompts.PromptLoader: Prompt template
  - infrastructure.detectors.response_parser: Tolerant JSON extraction

Constraints:
  - Returns only kinds enabled in the preferences
  - A valid empty array is a successful detection with zero issues
"""

from __future__ import annotations

from typing import Optional

from ...domain.entities import (
    Chunk,
    DetectedIssues,
    DetectionOutcome,
    DetectionUnavailable,
    Preferences,
)
from ...domain.services import TextGenerationService
from ...exceptions import DetectionError
from ...logger import logger
from ..prompts import PromptLoader, get_prompt_loader
from .response_parser import build_issues, extract_issue_objects

UNPARSEABLE_RESPONSE = "unparseable response"


class RemoteDetector:
    """R: IssueDetector backed by a remote language model."""

    name = "remote"

    def __init__(
        self,
        generation_service: TextGenerationService,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        self._generation_service = generation_service
        self._prompt_loader = prompt_loader or get_prompt_loader()

    async def detect(self, chunk: Chunk, preferences: Preferences) -> DetectionOutcome:
        prompt = self._prompt_loader.format(chunk.text, preferences)

        try:
            reply = await self._generation_service.generate(prompt)
        except DetectionError as e:
            return DetectionUnavailable(e.message)
        except Exception as e:
            logger.warning(
                "RemoteDetector: unexpected generation error",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            return DetectionUnavailable(f"{type(e).__name__}: {e}")

        raw_objects = extract_issue_objects(reply)
        if raw_objects is None:
            return DetectionUnavailable(UNPARSEABLE_RESPONSE)

        issues = [
            issue
            for issue in build_issues(raw_objects, chunk.text)
            if preferences.is_enabled(issue.kind)
        ]
        return DetectedIssues(tuple(issues))
