"""
Name: HTTP API Tests

Responsibilities:
  - /analyze request/response shape and preference mapping
  - Dictionary and cache endpoints
  - RFC 7807 error responses
  - /healthz and /metrics
"""

import json

import pytest
from fastapi.testclient import TestClient

from textwarden.exceptions import ConfigurationError
from textwarden.main import create_app

pytestmark = pytest.mark.unit

THEIR_SENTENCE = "Their are also some grammar mistakes in this sentance."


@pytest.fixture
def client(settings, local_context):
    app = create_app(settings=settings, context=local_context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def remote_client(settings, make_remote_context):
    reply = json.dumps(
        [
            {
                "id": "issue-1",
                "type": "grammar",
                "position": {"start": 0, "end": 9},
                "text": "Their are",
                "suggestions": ["There are"],
                "explanation": "Use 'There' for existence.",
            }
        ]
    )
    context, _ = make_remote_context([reply])
    app = create_app(settings=settings, context=context)
    with TestClient(app) as test_client:
        yield test_client


class TestAnalyze:
    def test_returns_suggestions_in_wire_format(self, client):
        response = client.post("/analyze", json={"text": THEIR_SENTENCE})

        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion["type"] == "spelling"
        assert suggestion["position"] == {"start": 45, "end": 53}
        assert suggestion["text"] == "sentance"
        assert suggestion["suggestions"] == ["sentence"]
        assert suggestion["explanation"]
        assert suggestion["id"]

    def test_preferences_disable_kinds(self, client):
        response = client.post(
            "/analyze",
            json={
                "text": THEIR_SENTENCE,
                "preferences": {"language": "en-GB", "checkSpelling": False},
            },
        )
        assert response.status_code == 200
        assert response.json()["suggestions"] == []

    def test_locale_alias_accepted(self, client):
        response = client.post(
            "/analyze",
            json={"text": "teh end", "preferences": {"locale": "en-AU"}},
        )
        assert response.status_code == 200
        assert response.json()["suggestions"][0]["suggestions"] == ["the"]

    def test_inline_dictionary_replaces_context_dictionary(self, client):
        response = client.post(
            "/analyze", json={"text": THEIR_SENTENCE, "dictionary": ["sentance"]}
        )
        assert response.json()["suggestions"] == []

        words = client.get("/dictionary").json()["words"]
        assert words == ["sentance"]

    def test_remote_detection_result(self, remote_client):
        response = remote_client.post("/analyze", json={"text": THEIR_SENTENCE})

        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        assert suggestions == [
            {
                "id": "issue-1",
                "type": "grammar",
                "position": {"start": 0, "end": 9},
                "text": "Their are",
                "suggestions": ["There are"],
                "explanation": "Use 'There' for existence.",
            }
        ]

    def test_response_carries_request_id(self, client):
        response = client.post(
            "/analyze", json={"text": "fine"}, headers={"X-Request-Id": "abc-123"}
        )
        assert response.headers["X-Request-Id"] == "abc-123"


class TestErrors:
    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_is_400_problem_json(self, client, text):
        response = client.post("/analyze", json={"text": text})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "INVALID_INPUT"
        assert body["status"] == 400
        assert body["title"] == "Invalid Input"
        assert body["errors"][0]["error_id"]

    def test_oversized_text_is_400(self, client, local_context):
        local_context.max_text_chars = 5
        response = client.post("/analyze", json={"text": "too long text"})
        assert response.status_code == 400

    def test_missing_text_is_422(self, client):
        response = client.post("/analyze", json={})

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"]

    def test_rejected_text_leaves_dictionary_and_cache_untouched(self, client):
        client.post("/analyze", json={"text": THEIR_SENTENCE})
        assert client.get("/cache/stats").json()["size"] == 1

        response = client.post("/analyze", json={"text": "  ", "dictionary": ["sentance"]})

        assert response.status_code == 400
        assert client.get("/dictionary").json()["words"] == []
        assert client.get("/cache/stats").json()["size"] == 1

    def test_configuration_error_is_500_problem_json(self, settings, local_context):
        app = create_app(settings=settings, context=local_context)

        @app.get("/broken")
        def broken():
            raise ConfigurationError("GOOGLE_API_KEY not configured")

        with TestClient(app) as test_client:
            response = test_client.get("/broken")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "CONFIGURATION_ERROR"
        assert body["detail"] == "GOOGLE_API_KEY not configured"


class TestDictionaryAndCache:
    def test_put_dictionary_clears_cache(self, client):
        client.post("/analyze", json={"text": THEIR_SENTENCE})
        assert client.get("/cache/stats").json()["size"] == 1

        response = client.put("/dictionary", json={"words": ["Foo", "bar"]})
        assert response.json() == {"words": ["bar", "foo"], "cache_cleared": True}
        assert client.get("/cache/stats").json()["size"] == 0

    def test_put_same_dictionary_keeps_cache(self, client):
        client.put("/dictionary", json={"words": ["foo"]})
        client.post("/analyze", json={"text": THEIR_SENTENCE})

        response = client.put("/dictionary", json={"words": ["FOO"]})
        assert response.json()["cache_cleared"] is False
        assert client.get("/cache/stats").json()["size"] == 1

    def test_clear_cache(self, client):
        client.post("/analyze", json={"text": THEIR_SENTENCE})
        assert client.post("/cache/clear").json() == {"cleared": True}
        assert client.get("/cache/stats").json()["size"] == 0

    def test_cache_stats_shape(self, client):
        stats = client.get("/cache/stats").json()
        assert {"size", "capacity", "ttl_seconds", "hits", "misses", "hit_rate"} <= set(
            stats
        )
        assert stats["capacity"] == 50


class TestHealthAndMetrics:
    def test_healthz_local_only(self, client):
        body = client.get("/healthz").json()
        assert body["status"] == "ok"
        assert body["remote_detection"] == "disabled"

    def test_healthz_remote_enabled(self, remote_client):
        assert remote_client.get("/healthz").json()["remote_detection"] == "enabled"

    def test_metrics_exposition(self, client):
        client.post("/analyze", json={"text": THEIR_SENTENCE})
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "textwarden_requests_total" in response.text
        assert "textwarden_detections_total" in response.text
