"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure a hermetic test environment (no .env, no API key)
  - Provide scripted generation services and analysis contexts
  - Provide a sleep recorder for pacing assertions

Collaborators:
  - pytest, pytest-asyncio
  - textwarden.container.build_analysis_context

Notes:
  - Settings are constructed explicitly; get_settings() cache is reset
    around every test
"""

import os

os.environ.pop("GOOGLE_API_KEY", None)
os.environ.setdefault("FAKE_LLM", "0")
os.environ.setdefault("LOG_JSON", "false")

import pytest  # noqa: E402

from textwarden import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from textwarden.config import Settings, get_settings  # noqa: E402
from textwarden.container import build_analysis_context  # noqa: E402
from textwarden.domain.entities import Preferences  # noqa: E402
from textwarden.infrastructure.services import FakeTextGenerationService  # noqa: E402


class SleepRecorder:
    """R: Awaitable stand-in for asyncio.sleep that records delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(google_api_key="", fake_llm=False)


@pytest.fixture
def preferences() -> Preferences:
    return Preferences()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def local_context(settings, sleep_recorder):
    """R: Context without remote detection (local rules only)."""
    return build_analysis_context(settings, sleep=sleep_recorder)


@pytest.fixture
def make_remote_context(settings, sleep_recorder):
    """R: Factory for contexts backed by a scripted generation service."""

    def _make(replies=None, **overrides):
        service = FakeTextGenerationService(replies)
        ctx_settings = settings.model_copy(update=overrides) if overrides else settings
        context = build_analysis_context(
            ctx_settings, generation_service=service, sleep=sleep_recorder
        )
        return context, service

    return _make
