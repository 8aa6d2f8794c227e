"""
Name: Google Gemini Text Generation Service

Responsibilities:
  - Implement TextGenerationService for Google Gemini
  - Apply low-temperature generation parameters for stable JSON output
  - Retry transient errors with exponential backoff + jitter
  - Report every generation failure as DetectionError

Collaborators:
  - domain.services.TextGenerationService: Interface implementation
  - google.generativeai: Google Gemini SDK
  - retry: Resilience helper for transient errors

Constraints:
  - One prompt per call, no chat history, no streaming
  - Empty replies count as failures (the caller falls back to local rules)
  - Never logs prompt contents (user text)
"""

from typing import Optional

import google.generativeai as genai

from ...config import Settings, get_settings
from ...exceptions import ConfigurationError, DetectionError
from ...logger import logger
from .retry import create_retry_decorator


class GoogleTextGenerationService:
    """
    R: Gemini implementation of TextGenerationService.
    """

    def __init__(self, api_key: str | None = None, settings: Optional[Settings] = None):
        """
        R: Configure the Gemini client.

        Args:
            api_key: Google API key (defaults to settings.google_api_key)
            settings: Settings instance (defaults to get_settings())

        Raises:
            ConfigurationError: If no API key is configured
        """
        self._settings = settings or get_settings()
        self.api_key = api_key or self._settings.google_api_key

        if not self.api_key:
            logger.error("GoogleTextGenerationService: GOOGLE_API_KEY not configured")
            raise ConfigurationError("GOOGLE_API_KEY not configured")

        genai.configure(api_key=self.api_key)

        self._model_id = self._settings.gemini_model
        self.model = genai.GenerativeModel(
            self._model_id,
            generation_config=genai.GenerationConfig(
                temperature=self._settings.generation_temperature,
                top_p=self._settings.generation_top_p,
                top_k=self._settings.generation_top_k,
                max_output_tokens=self._settings.generation_max_output_tokens,
            ),
        )

        logger.info(
            "GoogleTextGenerationService initialized",
            extra={"model": self._model_id},
        )

    @property
    def model_id(self) -> str:
        return self._model_id

    async def generate(self, prompt: str) -> str:
        """
        R: Send prompt to Gemini and return the stripped text reply.

        Raises:
            DetectionError: On API failure (after retries) or empty reply
        """
        retry_decorator = create_retry_decorator(
            max_attempts=self._settings.retry_max_attempts,
            base_delay=self._settings.retry_base_delay_seconds,
            max_delay=self._settings.retry_max_delay_seconds,
        )

        @retry_decorator
        async def _generate_with_retry(prompt_text: str) -> str:
            response = await self.model.generate_content_async(prompt_text)
            return response.text

        try:
            reply = await _generate_with_retry(prompt)
        except Exception as e:
            logger.error(
                f"GoogleTextGenerationService: Generation failed: {e}",
                extra={"error_type": type(e).__name__},
            )
            raise DetectionError(f"Failed to generate response: {e}", original_error=e)

        reply = (reply or "").strip()
        if not reply:
            logger.warning("GoogleTextGenerationService: Empty response")
            raise DetectionError("Empty response from model")

        logger.info(
            "GoogleTextGenerationService: Response generated",
            extra={"model": self._model_id, "response_chars": len(reply)},
        )
        return reply
