"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the extension's original behavior

Collaborators:
  - main.py: reads settings for CORS and startup logging
  - container.py: reads settings for segmenter, cache and detector wiring
  - infrastructure.services.retry: reads retry configuration

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, configuration only

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
  - Without GOOGLE_API_KEY (and FAKE_LLM off) remote detection is disabled
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        google_api_key: Google Gemini API key (empty disables remote detection)
        gemini_model: Gemini model used for issue detection
        fake_llm: Use the scripted fake generation service (tests/CI)
        generation_temperature: Sampling temperature (default: 0.2)
        generation_top_p: Nucleus sampling (default: 0.95)
        generation_top_k: Top-k sampling (default: 40)
        generation_max_output_tokens: Output token cap (default: 8192)
        prompt_version: Detection prompt template version (default: v1)
        max_chunk_size: Characters per analysis chunk (default: 1000)
        chunk_overlap: Overlap between chunks (default: 100)
        pacing_delay_ms: Delay between chunk detections (default: 500)
        cache_capacity: Maximum cached analyses (default: 50)
        cache_ttl_seconds: Cache entry lifetime (default: 30 minutes)
        max_text_chars: Maximum text length per request (default: 100_000)
        allowed_origins: Comma-separated CORS origins (default: *)
        retry_max_attempts: Attempts for transient remote errors
        retry_base_delay_seconds: Initial backoff delay
        retry_max_delay_seconds: Backoff cap
        log_level: Logger level (default: INFO)
        log_json: Emit JSON logs (default: True)
    """

    # Remote detection
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash-lite"
    fake_llm: bool = False

    # Generation parameters (low temperature for deterministic output)
    generation_temperature: float = 0.2
    generation_top_p: float = 0.95
    generation_top_k: int = 40
    generation_max_output_tokens: int = 8192
    prompt_version: str = "v1"

    # Segmentation
    max_chunk_size: int = 1000
    chunk_overlap: int = 100
    pacing_delay_ms: int = 500

    # Response cache
    cache_capacity: int = 50
    cache_ttl_seconds: float = 30 * 60

    # API limits
    max_text_chars: int = 100_000

    # CORS configuration
    allowed_origins: str = "*"

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    retry_max_delay_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("max_chunk_size")
    @classmethod
    def max_chunk_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_chunk_size must be greater than 0")
        return v

    @field_validator("chunk_overlap", "pacing_delay_ms")
    @classmethod
    def must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @field_validator("cache_capacity")
    @classmethod
    def cache_capacity_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_capacity must be greater than 0")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def cache_ttl_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be greater than 0")
        return v

    def validate_chunk_params(self) -> None:
        """
        Cross-field validation: overlap must be less than max_chunk_size.
        Called explicitly after instantiation.
        """
        if self.chunk_overlap >= self.max_chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"max_chunk_size ({self.max_chunk_size})"
            )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def remote_detection_enabled(self) -> bool:
        return bool(self.google_api_key) or self.fake_llm

    @property
    def pacing_delay_seconds(self) -> float:
        return self.pacing_delay_ms / 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    settings = Settings()
    settings.validate_chunk_params()
    return settings
