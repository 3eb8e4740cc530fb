"""
Route tests for the HTTP API.

The provider is replaced by an httpx.MockTransport-backed client through
FastAPI dependency overrides, so no lifespan or network is involved.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from shot_coach.app import app
from shot_coach.coach import CoachService
from shot_coach.routes.deps import get_chat_client, get_coach

from conftest import chunked, completion_body, delta_frame

ATTEMPTS = [
    {"x": 2.0, "y": -1.0, "err": 2.2, "hit": True, "angle": 51.0},
    {"x": 4.0, "y": 1.0, "err": 4.1, "hit": True, "angle": 52.5},
    {"x": -1.0, "y": 3.0, "err": 3.2, "hit": False, "angle": 49.0},
    {"x": 3.0, "y": -3.0, "err": 4.2, "hit": False, "angle": 50.0},
]
METRICS = {"total": 4, "makes": 2, "acc": 50.0, "mre": 3.4, "spread": 1.0, "releaseAvg": 50.6, "releaseSd": 1.3}


@pytest.fixture
def api(make_client):
    """TestClient factory wired to a provider answered by `handler`."""
    def factory(handler) -> TestClient:
        client = make_client(handler)
        app.dependency_overrides[get_chat_client] = lambda: client
        app.dependency_overrides[get_coach] = lambda: CoachService(client)
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


def ok_provider(request):
    if request.url.path.endswith("/models"):
        return httpx.Response(200, json={"data": [{"id": "llama3.2"}, {"id": "phi3"}]})
    return httpx.Response(200, json=completion_body("Square your shoulders."))


def down_provider(request):
    raise httpx.ConnectError("refused", request=request)


def test_health(api):
    response = api(ok_provider).get("/health")

    assert response.json() == {"status": "ok"}


class TestCoachRoutes:
    def test_patterns_needs_no_provider(self, api):
        response = api(down_provider).post("/coach/patterns", json={"attempts": ATTEMPTS})

        assert response.status_code == 200
        assert response.json() == {"lr_bias": 2.0, "ud_bias": 0.0, "trend": "Declining", "fatigue": True}

    def test_patterns_rejects_negative_error(self, api):
        bad = [{"x": 0, "y": 0, "err": -1, "hit": True}]

        response = api(ok_provider).post("/coach/patterns", json={"attempts": bad})

        assert response.status_code == 422

    def test_insights_report(self, api):
        response = api(ok_provider).post(
            "/coach/insights", json={"metrics": METRICS, "attempts": ATTEMPTS, "sport": "basketball"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["fallback"] is False
        assert body["insights"] == "Square your shoulders."
        assert body["practice_plan"] == "Square your shoulders."
        assert body["pattern_analysis"] == "Square your shoulders."
        assert body["signals"]["trend"] == "Declining"

    def test_insights_fall_back_when_provider_is_down(self, api):
        response = api(down_provider).post("/coach/insights", json={"metrics": METRICS, "attempts": ATTEMPTS})

        body = response.json()
        assert response.status_code == 200
        assert body["fallback"] is True
        assert "Demo Coaching Insights for basketball" in body["insights"]
        assert body["signals"]["fatigue"] is True


class TestChatRoute:
    def test_buffered_reply(self, api):
        response = api(ok_provider).post(
            "/chat",
            json={
                "message": "How is my release?",
                "history": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
                "metrics": METRICS,
            },
        )

        assert response.json() == {"role": "assistant", "content": "Square your shoulders.", "fallback": False}

    def test_empty_choices_reply(self, api):
        response = api(lambda request: httpx.Response(200, json={"choices": []})).post(
            "/chat", json={"message": "hi"}
        )

        assert response.json()["content"] == "Sorry, I could not generate a response."

    def test_auth_failure_falls_back_to_demo(self, api):
        provider = lambda request: httpx.Response(401, json={"error": {"message": "invalid api key"}})

        response = api(provider).post("/chat", json={"message": "How do I improve?", "metrics": METRICS})

        body = response.json()
        assert body["fallback"] is True
        assert body["content"].startswith("Error: API Error 401: invalid api key")
        assert "Demo Response: To improve your basketball accuracy" in body["content"]

    def test_streamed_reply(self, api):
        def provider(request):
            assert json.loads(request.content)["stream"] is True
            body, _ = chunked(delta_frame("Soft "), delta_frame("hands."), b"data: [DONE]\n")
            return httpx.Response(200, content=body)

        response = api(provider).post("/chat", json={"message": "tip?", "stream": True})

        assert response.headers["content-type"].startswith("text/event-stream")
        frames = [line for line in response.text.split("\n") if line]
        assert frames == [
            'data: {"content": "Soft "}',
            'data: {"content": "hands."}',
            "data: [DONE]",
        ]

    def test_mid_stream_failure_sends_error_frame_then_done(self, api):
        def provider(request):
            body, _ = chunked(delta_frame("a"), fail_with=httpx.ReadError("reset"))
            return httpx.Response(200, content=body)

        response = api(provider).post("/chat", json={"message": "tip?", "stream": True})

        frames = [line for line in response.text.split("\n") if line]
        assert frames == [
            'data: {"content": "a"}',
            'data: {"error": "Stream interrupted: reset"}',
            "data: [DONE]",
        ]

    def test_unexpected_delta_shape_is_skipped(self, api):
        def provider(request):
            body, _ = chunked(
                b'data: {"choices": [{"delta": "x"}]}\n',
                delta_frame("Relax."),
                b"data: [DONE]\n",
            )
            return httpx.Response(200, content=body)

        response = api(provider).post("/chat", json={"message": "tip?", "stream": True})

        frames = [line for line in response.text.split("\n") if line]
        assert frames == ['data: {"content": "Relax."}', "data: [DONE]"]

    def test_corrupt_stream_encoding_sends_error_frame(self, api):
        def provider(request):
            body, _ = chunked(b"garbage")
            return httpx.Response(200, content=body, headers={"Content-Encoding": "gzip"})

        response = api(provider).post("/chat", json={"message": "tip?", "stream": True})

        frames = [line for line in response.text.split("\n") if line]
        assert len(frames) == 2
        assert frames[0].startswith('data: {"error": "Stream interrupted: undecodable body')
        assert frames[1] == "data: [DONE]"

    def test_corrupt_body_falls_back_to_demo(self, api):
        provider = lambda request: httpx.Response(200, content=b"garbage", headers={"Content-Encoding": "gzip"})

        response = api(provider).post("/chat", json={"message": "hello", "metrics": METRICS})

        body = response.json()
        assert response.status_code == 200
        assert body["fallback"] is True
        assert "Demo Response" in body["content"]


class TestSettingsRoutes:
    def test_read_and_update(self, api):
        http = api(ok_provider)

        assert http.get("/settings").json()["api_key_set"] is False

        updated = http.put(
            "/settings", json={"base_url": "http://localhost:8080/api/v1", "api_key": "sk-1", "model": "phi3"}
        ).json()

        assert updated["base_url"] == "http://localhost:8080/api/v1"
        assert updated["api_key_set"] is True
        assert updated["model"] == "phi3"

        cleared = http.put("/settings", json={"api_key": ""}).json()
        assert cleared["api_key_set"] is False
        assert cleared["model"] == "phi3"

    def test_connection_test_success(self, api):
        body = api(ok_provider).get("/settings/test").json()

        assert body == {"success": True, "message": "Connection successful! Found 2 models.", "model_count": 2}

    def test_connection_test_failure(self, api):
        body = api(lambda request: httpx.Response(403)).get("/settings/test").json()

        assert body["success"] is False
        assert body["message"] == "Connection failed: API Error 403: Forbidden"
