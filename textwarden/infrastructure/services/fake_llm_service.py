"""
Name: Fake Text Generation Service (Deterministic)

Responsibilities:
  - Provide scripted replies for tests/CI (FAKE_LLM=1)
  - Simulate failures by scripting exceptions
  - Avoid external dependencies (no API calls)
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Sequence, Union

from ...exceptions import DetectionError
from ...logger import logger

Reply = Union[str, BaseException]

# R: Prompts kept for inspection (oldest dropped first)
PROMPT_HISTORY_SIZE = 32


class FakeTextGenerationService:
    """
    R: Deterministic TextGenerationService.

    Replies are consumed in order; once exhausted the last one repeats.
    A scripted exception is raised instead of returned. An empty string
    is reported as DetectionError, like an empty model reply.
    Only the most recent history_size prompts are kept.
    """

    MODEL_ID = "fake-llm-v1"

    def __init__(
        self,
        replies: Sequence[Reply] | None = None,
        history_size: int = PROMPT_HISTORY_SIZE,
    ) -> None:
        self._replies: List[Reply] = list(replies) if replies else ["[]"]
        self.prompts: Deque[str] = deque(maxlen=history_size)
        self._calls = 0
        logger.info("FakeTextGenerationService initialized")

    @property
    def model_id(self) -> str:
        return self.MODEL_ID

    @property
    def calls(self) -> int:
        return self._calls

    async def generate(self, prompt: str) -> str:
        index = min(self._calls, len(self._replies) - 1)
        self._calls += 1
        self.prompts.append(prompt)
        reply = self._replies[index]

        if isinstance(reply, BaseException):
            raise reply
        if not reply.strip():
            raise DetectionError("Empty response from model")
        return reply
