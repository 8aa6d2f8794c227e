"""
Name: Custom Exceptions

Responsibilities:
  - Define typed internal errors with a stable error_code
  - Generate error_id for correlation with logs
  - Keep messages human readable (never leak secrets)

Collaborators:
  - exception_handlers.py: Maps these errors to HTTP responses
  - application.use_cases: Raise InvalidInputError on bad input
  - infrastructure.services: Raise DetectionError on remote failures and
    ConfigurationError when constructed without credentials

Notes:
  - DetectionError never reaches HTTP callers during analysis; the remote
    detector turns it into DetectionUnavailable and the local rules take over
"""

from __future__ import annotations

from uuid import uuid4


class TextWardenError(Exception):
    """
    R: Base class for internal errors.

    Attributes:
        message: Human readable description
        error_id: Correlation id (UUID4 unless provided)
        original_error: Wrapped lower-level exception, if any
    """

    error_code: str = "TEXTWARDEN_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class InvalidInputError(TextWardenError):
    """Structurally invalid analysis request (empty or oversized text)."""

    error_code: str = "INVALID_INPUT"


class DetectionError(TextWardenError):
    """Remote text generation failed (network, quota, non-2xx, empty reply)."""

    error_code: str = "DETECTION_ERROR"


class ConfigurationError(TextWardenError):
    """Service wiring is inconsistent with the configured settings."""

    error_code: str = "CONFIGURATION_ERROR"
