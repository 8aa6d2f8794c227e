"""Unit tests for the composition root."""

import pytest

from textwarden.container import build_analysis_context, build_generation_service
from textwarden.infrastructure.detectors import LocalRuleDetector, RemoteDetector
from textwarden.infrastructure.services import FakeTextGenerationService

pytestmark = pytest.mark.unit


def test_no_key_means_local_only(settings):
    assert build_generation_service(settings) is None
    context = build_analysis_context(settings)
    assert context.remote_detector is None
    assert not context.remote_enabled
    assert isinstance(context.local_detector, LocalRuleDetector)


def test_fake_llm_mode(settings):
    fake_settings = settings.model_copy(update={"fake_llm": True})
    assert isinstance(build_generation_service(fake_settings), FakeTextGenerationService)
    context = build_analysis_context(fake_settings)
    assert isinstance(context.remote_detector, RemoteDetector)


def test_context_uses_settings(settings):
    custom = settings.model_copy(
        update={"max_chunk_size": 300, "chunk_overlap": 30, "cache_capacity": 7, "pacing_delay_ms": 250}
    )
    context = build_analysis_context(custom)
    assert context.segmenter.max_chunk_size == 300
    assert context.segmenter.overlap == 30
    assert context.cache.capacity == 7
    assert context.pacing_delay_seconds == 0.25


def test_invalid_chunk_params_rejected(settings):
    bad = settings.model_copy(update={"max_chunk_size": 50, "chunk_overlap": 50})
    with pytest.raises(ValueError):
        build_analysis_context(bad)
