"""Tests for the Gemini and OpenRouter providers."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest
from httpx import Request, Response
from openai import RateLimitError

from versus.config.settings import ModelConfig, OpenRouterConfig, SystemConfig
from versus.models.providers import (
    GeminiProvider,
    OpenRouterProvider,
    ProviderFactory,
    ProviderRateLimitError,
)


class FakeCompletions:
    """Simplified AsyncOpenAI chat.completions for testing."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def fake_openai_client(completions: FakeCompletions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


MESSAGES = [{"role": "user", "content": "Hello"}]


def test_gemini_provider_returns_stripped_content() -> None:
    completions = FakeCompletions(completion("  Opening statement.\n"))
    provider = GeminiProvider(SystemConfig(), client=fake_openai_client(completions))
    config = ModelConfig(name="gemini-2.5-flash-lite", provider="gemini", max_tokens=200)

    result = asyncio.run(provider.generate_response(config, MESSAGES))

    assert result == "Opening statement."
    assert completions.requests == [
        {
            "model": "gemini-2.5-flash-lite",
            "messages": MESSAGES,
            "temperature": 0.7,
            "max_tokens": 200,
        }
    ]


def test_gemini_provider_maps_rate_limit() -> None:
    request = Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")
    response = Response(429, request=request, json={"error": {"message": "Resource exhausted"}})
    rate_error = RateLimitError("Resource exhausted", response=response, body=response.json())
    provider = GeminiProvider(
        SystemConfig(), client=fake_openai_client(FakeCompletions(rate_error))
    )

    with pytest.raises(ProviderRateLimitError) as excinfo:
        asyncio.run(
            provider.generate_response(ModelConfig(name="gemini-2.5-flash-lite"), MESSAGES)
        )

    assert excinfo.value.provider == "gemini"
    assert excinfo.value.status_code == 429
    assert excinfo.value.__cause__ is rate_error


def test_gemini_provider_without_key_fails_on_use(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    provider = GeminiProvider(SystemConfig())

    with pytest.raises(RuntimeError, match="check API key"):
        asyncio.run(provider.generate_response(ModelConfig(name="m"), MESSAGES))


def openrouter_provider(handler, monkeypatch: pytest.MonkeyPatch) -> OpenRouterProvider:
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    system = SystemConfig(
        provider="openrouter",
        openrouter=OpenRouterConfig(api_key="test-key", site_url="https://versus.example"),
    )
    return OpenRouterProvider(system, transport=httpx.MockTransport(handler))


def test_openrouter_provider_posts_chat_completion(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"choices": [{"message": {"content": " Verdict. "}}]}
        )

    provider = openrouter_provider(handler, monkeypatch)
    config = ModelConfig(name="google/gemini-2.5-flash-lite", provider="openrouter")

    result = asyncio.run(provider.generate_response(config, MESSAGES))

    assert result == "Verdict."
    request = seen[0]
    assert request.url == "https://openrouter.ai/api/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["HTTP-Referer"] == "https://versus.example"
    body = json.loads(request.content)
    assert body["model"] == "google/gemini-2.5-flash-lite"
    assert body["messages"] == MESSAGES
    assert "max_tokens" not in body


def test_openrouter_provider_maps_429(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = openrouter_provider(
        lambda request: httpx.Response(429, json={"error": "slow down"}), monkeypatch
    )

    with pytest.raises(ProviderRateLimitError) as excinfo:
        asyncio.run(
            provider.generate_response(ModelConfig(name="m", provider="openrouter"), MESSAGES)
        )

    assert excinfo.value.provider == "openrouter"


def test_openrouter_provider_propagates_other_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = openrouter_provider(
        lambda request: httpx.Response(500, json={"error": "oops"}), monkeypatch
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(
            provider.generate_response(ModelConfig(name="m", provider="openrouter"), MESSAGES)
        )


def test_factory_creates_known_providers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)

    assert ProviderFactory.get_available_providers() == ["gemini", "openrouter"]
    assert isinstance(ProviderFactory.create_provider("gemini", SystemConfig()), GeminiProvider)
    assert isinstance(
        ProviderFactory.create_provider("openrouter", SystemConfig()), OpenRouterProvider
    )
    with pytest.raises(ValueError, match="Available: gemini, openrouter"):
        ProviderFactory.create_provider("ollama", SystemConfig())
