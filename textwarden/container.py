"""
Name: Dependency Injection Container

Responsibilities:
  - Wire the AnalysisContext from Settings (composition root)
  - Choose the text generation service (Gemini, fake, or none)
  - Provide FastAPI dependencies for routes

Collaborators:
  - config.Settings
  - infrastructure.text, infrastructure.detectors, infrastructure.cache
  - infrastructure.services: Gemini / fake text generation
  - application: AnalysisContext, AnalyzeTextUseCase

Constraints:
  - Manual DI (no library like dependency-injector)
  - One context per app, stored on app.state

Notes:
  - FAKE_LLM wins over GOOGLE_API_KEY; with neither, the local rules are
    the only detector
"""

import asyncio
from typing import Optional

from fastapi import Request

from .application import AnalysisContext
from .application.use_cases import AnalyzeTextUseCase
from .config import Settings, get_settings
from .domain.services import TextGenerationService
from .infrastructure.cache import InMemoryResponseCache
from .infrastructure.detectors import LocalRuleDetector, RemoteDetector
from .infrastructure.prompts import PromptLoader
from .infrastructure.services import FakeTextGenerationService
from .infrastructure.text import TextSegmenter
from .logger import logger


def build_generation_service(settings: Settings) -> Optional[TextGenerationService]:
    """R: Text generation service for the configured mode, None when disabled."""
    if settings.fake_llm:
        return FakeTextGenerationService()
    if settings.google_api_key:
        from .infrastructure.services.google_llm_service import (
            GoogleTextGenerationService,
        )

        return GoogleTextGenerationService(settings=settings)
    return None


def build_analysis_context(
    settings: Optional[Settings] = None,
    generation_service: Optional[TextGenerationService] = None,
    sleep=asyncio.sleep,
) -> AnalysisContext:
    """
    R: Build the long-lived analysis context.

    Args:
        settings: Settings (defaults to get_settings())
        generation_service: Overrides the service chosen from settings
        sleep: Awaitable used for pacing between chunks
    """
    settings = settings or get_settings()
    settings.validate_chunk_params()

    service = generation_service or build_generation_service(settings)
    remote_detector = None
    if service is not None:
        remote_detector = RemoteDetector(
            service, PromptLoader(version=settings.prompt_version)
        )

    context = AnalysisContext(
        segmenter=TextSegmenter(settings.max_chunk_size, settings.chunk_overlap),
        remote_detector=remote_detector,
        local_detector=LocalRuleDetector(),
        cache=InMemoryResponseCache(
            capacity=settings.cache_capacity, ttl_seconds=settings.cache_ttl_seconds
        ),
        pacing_delay_seconds=settings.pacing_delay_seconds,
        max_text_chars=settings.max_text_chars,
        sleep=sleep,
    )
    logger.info(
        "Analysis context built",
        extra={
            "remote_detection": "enabled" if context.remote_enabled else "disabled",
            "model": service.model_id if service is not None else None,
            "max_chunk_size": settings.max_chunk_size,
            "chunk_overlap": settings.chunk_overlap,
        },
    )
    return context


def get_analysis_context(request: Request) -> AnalysisContext:
    """R: FastAPI dependency: the app's AnalysisContext."""
    return request.app.state.analysis_context


def get_analyze_text_use_case(request: Request) -> AnalyzeTextUseCase:
    return AnalyzeTextUseCase(get_analysis_context(request))
