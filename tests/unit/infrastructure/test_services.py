"""Unit tests for text generation services and retry classification."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from textwarden.config import Settings
from textwarden.exceptions import ConfigurationError, DetectionError
from textwarden.infrastructure.services import (
    FakeTextGenerationService,
    create_retry_decorator,
    is_transient_error,
)

pytestmark = pytest.mark.unit


class _StatusError(Exception):
    def __init__(self, code: int):
        super().__init__(f"status {code}")
        self.code = code


class TestTransientClassification:
    @pytest.mark.parametrize("code", [429, 500, 502, 503, 504])
    def test_transient_codes(self, code):
        assert is_transient_error(_StatusError(code))

    @pytest.mark.parametrize("code", [400, 401, 403, 404])
    def test_permanent_codes(self, code):
        assert not is_transient_error(_StatusError(code))

    def test_timeout_and_connection_errors(self):
        assert is_transient_error(TimeoutError("slow"))
        assert is_transient_error(ConnectionError("reset"))

    def test_message_patterns(self):
        assert is_transient_error(RuntimeError("Rate limit reached"))

    def test_unknown_errors_are_permanent(self):
        assert not is_transient_error(ValueError("bad prompt"))

    def test_response_status_code(self):
        exc = Exception("boom")
        exc.response = SimpleNamespace(status_code=503)
        assert is_transient_error(exc)


class TestRetryDecorator:
    @pytest.mark.asyncio
    async def test_retries_transient_async_errors(self):
        calls = {"n": 0}

        @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0)
        async def flaky():
            calls["n"] += 1
            if calls["n"] < 3:
                raise _StatusError(503)
            return "ok"

        assert await flaky() == "ok"
        assert calls["n"] == 3

    @pytest.mark.asyncio
    async def test_does_not_retry_permanent_errors(self):
        calls = {"n": 0}

        @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0)
        async def broken():
            calls["n"] += 1
            raise _StatusError(401)

        with pytest.raises(_StatusError):
            await broken()
        assert calls["n"] == 1


class TestFakeTextGenerationService:
    @pytest.mark.asyncio
    async def test_default_reply_is_empty_array(self):
        service = FakeTextGenerationService()
        assert await service.generate("prompt") == "[]"
        assert service.calls == 1
        assert service.model_id == "fake-llm-v1"

    @pytest.mark.asyncio
    async def test_replies_in_order_then_repeat_last(self):
        service = FakeTextGenerationService(["a", "b"])
        assert [await service.generate("p") for _ in range(3)] == ["a", "b", "b"]

    @pytest.mark.asyncio
    async def test_scripted_exception_is_raised(self):
        service = FakeTextGenerationService([DetectionError("down")])
        with pytest.raises(DetectionError):
            await service.generate("p")

    @pytest.mark.asyncio
    async def test_prompt_history_is_bounded(self):
        service = FakeTextGenerationService(history_size=3)
        for i in range(10):
            await service.generate(f"prompt-{i}")

        assert service.calls == 10
        assert list(service.prompts) == ["prompt-7", "prompt-8", "prompt-9"]


class TestGoogleTextGenerationService:
    def _settings(self, **overrides):
        return Settings(google_api_key="test-key", retry_max_attempts=1, **overrides)

    def test_requires_api_key(self):
        from textwarden.infrastructure.services.google_llm_service import (
            GoogleTextGenerationService,
        )

        with pytest.raises(ConfigurationError) as exc_info:
            GoogleTextGenerationService(settings=Settings(google_api_key=""))

        assert exc_info.value.error_code == "CONFIGURATION_ERROR"
        assert not isinstance(exc_info.value, DetectionError)

    @pytest.mark.asyncio
    async def test_generate_returns_stripped_text(self):
        from textwarden.infrastructure.services import google_llm_service as module

        model = MagicMock()
        model.generate_content_async = AsyncMock(
            return_value=SimpleNamespace(text="  [] \n")
        )
        with patch.object(module.genai, "configure"), patch.object(
            module.genai, "GenerativeModel", return_value=model
        ):
            service = module.GoogleTextGenerationService(settings=self._settings())
            assert await service.generate("prompt") == "[]"
            assert service.model_id == "gemini-2.0-flash-lite"

    @pytest.mark.asyncio
    async def test_generate_wraps_failures(self):
        from textwarden.infrastructure.services import google_llm_service as module

        model = MagicMock()
        model.generate_content_async = AsyncMock(side_effect=_StatusError(403))
        with patch.object(module.genai, "configure"), patch.object(
            module.genai, "GenerativeModel", return_value=model
        ):
            service = module.GoogleTextGenerationService(settings=self._settings())
            with pytest.raises(DetectionError) as exc_info:
                await service.generate("prompt")
            assert isinstance(exc_info.value.original_error, _StatusError)

    @pytest.mark.asyncio
    async def test_empty_reply_is_error(self):
        from textwarden.infrastructure.services import google_llm_service as module

        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text=""))
        with patch.object(module.genai, "configure"), patch.object(
            module.genai, "GenerativeModel", return_value=model
        ):
            service = module.GoogleTextGenerationService(settings=self._settings())
            with pytest.raises(DetectionError):
                await service.generate("prompt")
