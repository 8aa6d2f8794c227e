"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for issue detection, text generation and segmentation
  - Enable dependency inversion (the pipeline doesn't depend on any provider)

Collaborators:
  - Implementations in infrastructure.detectors, infrastructure.services
    and infrastructure.text

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Provider-agnostic (cloud model or local rules)

Notes:
  - Using typing.Protocol for structural subtyping
  - Detectors report DetectionUnavailable instead of raising, so the
    dispatcher decides the fallback explicitly
"""

from typing import List, Protocol

from .entities import Chunk, DetectionOutcome, Preferences


class IssueDetector(Protocol):
    """
    R: Interface for chunk-level issue detection.

    Implementations must provide:
      - Chunk-local positions (0-based within chunk.text)
      - Only kinds enabled in the preferences
    """

    name: str

    async def detect(self, chunk: Chunk, preferences: Preferences) -> DetectionOutcome:
        """
        R: Detect issues in a single chunk.

        Args:
            chunk: Text slice to analyze
            preferences: Locale and enabled issue kinds

        Returns:
            DetectedIssues on success, DetectionUnavailable otherwise
        """
        ...


class TextGenerationService(Protocol):
    """
    R: Interface for the remote language model.

    Raises:
        DetectionError: On network failure, non-2xx status or empty reply
    """

    @property
    def model_id(self) -> str:
        ...

    async def generate(self, prompt: str) -> str:
        """R: Send a single prompt and return the raw text reply."""
        ...


class TextSegmenterService(Protocol):
    """
    R: Interface for splitting documents into bounded chunks.

    Implementations must provide:
      - Deterministic output for same input
      - Chunks that cover every character of the input
    """

    def split(self, text: str) -> List[Chunk]:
        ...
