"""Text generation service implementations"""

from .fake_llm_service import FakeTextGenerationService
from .retry import create_retry_decorator, is_transient_error

__all__ = [
    "FakeTextGenerationService",
    "create_retry_decorator",
    "is_transient_error",
]
