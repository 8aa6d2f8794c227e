"""
Name: Retry Helper for Remote Generation

Responsibilities:
  - Classify transient vs permanent generation errors
  - Provide a tenacity retry decorator (sync or async callables)
  - Log retry attempts with request context

Collaborators:
  - tenacity: Retry strategies
  - config.Settings: retry_max_attempts, retry_*_delay_seconds
  - infrastructure.services.google_llm_service: Wraps the Gemini call

Constraints:
  - Retry only 429, 5xx, timeouts and connection errors
  - Never retry 400, 401, 403, 404 (bad key, bad request)

Notes:
  - Exponential backoff capped at retry_max_delay_seconds, jitter up to
    the base delay
  - Exhausted retries re-raise the last error; the caller wraps it in
    DetectionError
"""

from typing import Callable

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...config import get_settings
from ...logger import logger

TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})
PERMANENT_HTTP_CODES: frozenset[int] = frozenset({400, 401, 403, 404})

_TRANSIENT_NAME_PATTERNS = (
    "timeout",
    "connection",
    "unavailable",
    "resourceexhausted",
    "deadline",
    "serviceunavailable",
    "internalservererror",
)

_TRANSIENT_MESSAGE_PATTERNS = (
    "rate limit",
    "too many requests",
    "quota exceeded",
    "temporarily unavailable",
    "connection reset",
    "connection refused",
    "timed out",
    "deadline exceeded",
)


def get_http_status_code(exception: BaseException) -> int | None:
    """
    R: HTTP status carried by an exception, if any.

    google.api_core exceptions expose it as .code, HTTP client errors as
    .status_code or .response.status_code.
    """
    code = getattr(exception, "code", None)
    if isinstance(code, int) and code >= 100:
        return code

    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    response = getattr(exception, "response", None)
    if isinstance(getattr(response, "status_code", None), int):
        return response.status_code

    return None


def is_transient_error(exception: BaseException) -> bool:
    """
    R: True when retrying the generation call may succeed.

    Unknown errors are treated as permanent (fail fast, fall back to the
    local rules).
    """
    status_code = get_http_status_code(exception)
    if status_code in PERMANENT_HTTP_CODES:
        return False
    if status_code in TRANSIENT_HTTP_CODES:
        return True

    if isinstance(exception, (TimeoutError, ConnectionError)):
        return True

    exception_name = type(exception).__name__.lower()
    if any(pattern in exception_name for pattern in _TRANSIENT_NAME_PATTERNS):
        return True

    message = str(exception).lower()
    return any(pattern in message for pattern in _TRANSIENT_MESSAGE_PATTERNS)


def _log_retry(retry_state: RetryCallState) -> None:
    fn_name = getattr(retry_state.fn, "__name__", "unknown")
    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
    exc = retry_state.outcome.exception() if retry_state.outcome else None

    logger.warning(
        f"Retry attempt {retry_state.attempt_number} for {fn_name}",
        extra={
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(wait_time, 2),
            "error": str(exc) if exc else None,
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def create_retry_decorator(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
) -> Callable:
    """
    R: Build a retry decorator with exponential backoff + jitter.

    Args:
        max_attempts: Total attempts (default from settings)
        base_delay: Initial delay in seconds (default from settings)
        max_delay: Delay cap in seconds (default from settings)

    Returns:
        Configured tenacity retry decorator
    """
    settings = get_settings()

    _max_attempts = max_attempts or settings.retry_max_attempts
    _base_delay = base_delay if base_delay is not None else settings.retry_base_delay_seconds
    _max_delay = max_delay if max_delay is not None else settings.retry_max_delay_seconds

    return retry(
        stop=stop_after_attempt(_max_attempts),
        wait=wait_exponential_jitter(
            initial=_base_delay,
            max=_max_delay,
            jitter=_base_delay,
        ),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
