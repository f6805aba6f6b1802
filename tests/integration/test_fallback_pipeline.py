"""Integration test: REST façade → AIService → real provider classes.

SDK modules are replaced in ``sys.modules`` so no network is touched; the
provider registry, prompt building, parsing and fallback all run for real.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.ai.service import AIService
from src.api.app import create_app
from src.core.config import Settings

ANALYSIS = {
    "matchScore": 75,
    "strengths": ["React"],
    "gaps": [],
    "recommendations": [],
    "keywords": {"matched": ["React"], "missing": []},
}

# ---------------------------------------------------------------------------
# Fake SDK modules
# ---------------------------------------------------------------------------


def _client(sdk_class: MagicMock) -> MagicMock:
    """The client ``async with sdk_class(...) as client`` yields."""
    client = sdk_class.return_value
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None
    return client


def _openai_module(reply: str | Exception) -> MagicMock:
    module = MagicMock()
    client = _client(module.AsyncOpenAI)
    if isinstance(reply, Exception):
        client.chat.completions.create = AsyncMock(side_effect=reply)
    else:
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])
        client.chat.completions.create = AsyncMock(return_value=response)
    return module


def _anthropic_module(reply: str | Exception) -> MagicMock:
    module = MagicMock()
    client = _client(module.AsyncAnthropic)
    if isinstance(reply, Exception):
        client.messages.create = AsyncMock(side_effect=reply)
    else:
        message = SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)])
        client.messages.create = AsyncMock(return_value=message)
    return module


@pytest.fixture
def client() -> TestClient:
    """App with no providers; tests configure them through /api/config."""
    settings = Settings.from_env({})
    return TestClient(create_app(AIService(), settings))


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestFallbackPipeline:
    def test_generate_with_default_provider(self, client: TestClient) -> None:
        client.post("/api/config", json={"groq": {"apiKey": "k1"}, "defaultProvider": "groq"})

        with patch.dict("sys.modules", {"openai": _openai_module("hello")}):
            response = client.post("/api/generate", json={"prompt": "hi"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "text": "hello", "provider": "groq"}

    def test_analyze_resume_single_provider(self, client: TestClient) -> None:
        client.post("/api/config", json={"groq": {"apiKey": "k1"}})

        with patch.dict("sys.modules", {"openai": _openai_module(json.dumps(ANALYSIS))}):
            response = client.post(
                "/api/analyze-resume",
                json={"jobDescription": "job text", "resumeText": "resume text"},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["provider"] == "groq"
        assert body["data"] == ANALYSIS

    def test_no_providers_never_succeeds(self, client: TestClient) -> None:
        response = client.post("/api/generate", json={"prompt": "hi"})
        assert response.status_code == 503
        assert response.json() == {"error": "No AI providers configured"}

    def test_groq_outage_falls_back_to_claude(self, client: TestClient) -> None:
        client.post("/api/config", json={"groq": {"apiKey": "k1"}, "claude": {"apiKey": "k2"}})
        openai = _openai_module(RuntimeError("Groq API error: 503"))
        anthropic = _anthropic_module("from claude")

        with patch.dict("sys.modules", {"openai": openai, "anthropic": anthropic}):
            response = client.post("/api/generate", json={"prompt": "hi"})

        assert response.json() == {"success": True, "text": "from claude", "provider": "claude"}
        openai.AsyncOpenAI.return_value.chat.completions.create.assert_awaited_once()

    def test_prose_reply_falls_back_for_structured_call(self, client: TestClient) -> None:
        client.post("/api/config", json={"groq": {"apiKey": "k1"}, "claude": {"apiKey": "k2"}})
        job = {"title": "SWE", "company": "Acme", "location": "NYC", "description": "Code"}
        openai = _openai_module("Sure! The title is SWE at Acme.")
        anthropic = _anthropic_module("```json\n" + json.dumps(job) + "\n```")

        with patch.dict("sys.modules", {"openai": openai, "anthropic": anthropic}):
            response = client.post("/api/extract-job", json={"text": "SWE at Acme, NYC"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": job, "provider": "claude"}

    def test_every_provider_fails(self, client: TestClient) -> None:
        client.post("/api/config", json={"groq": {"apiKey": "k1"}, "claude": {"apiKey": "k2"}})
        openai = _openai_module(RuntimeError("rate limited"))
        anthropic = _anthropic_module(RuntimeError("invalid x-api-key"))

        with patch.dict("sys.modules", {"openai": openai, "anthropic": anthropic}):
            response = client.post("/api/generate", json={"prompt": "hi", "provider": "claude"})

        assert response.status_code == 500
        assert response.json() == {"error": "claude: invalid x-api-key\ngroq: rate limited"}
