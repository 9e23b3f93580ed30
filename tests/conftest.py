"""Pytest configuration and shared fixtures.

Provides a scripted in-memory provider so the generation client, the debate
engine and the HTTP routes can be exercised without a network backend.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from versus.config.settings import DebateConfig, ModelConfig, SystemConfig
from versus.debate_engine.models import Entity
from versus.models.generation_client import GenerationClient
from versus.models.providers.base_model_provider import BaseModelProvider
from versus.models.providers.exceptions import ProviderRateLimitError
from versus.models.retry import RetryPolicy

Responder = Callable[[str], "str | Exception"]


class ScriptedProvider(BaseModelProvider):
    """Provider whose replies come from a queue or a prompt-based responder.

    Queue items that are exceptions are raised instead of returned.
    """

    def __init__(self, *replies: str | Exception, responder: Responder | None = None):
        super().__init__(SystemConfig())
        self._replies = list(replies)
        self._responder = responder
        self.prompts: list[str] = []

    @property
    def provider_name(self) -> str:
        return "gemini"

    async def generate_response(self, model_config, messages, **overrides) -> str:
        prompt = messages[-1]["content"]
        self.prompts.append(prompt)

        if self._responder is not None:
            item = self._responder(prompt)
        elif self._replies:
            item = self._replies.pop(0)
        else:
            raise AssertionError("No scripted replies left")

        if isinstance(item, Exception):
            raise item
        return item


def rate_limit_error() -> ProviderRateLimitError:
    return ProviderRateLimitError(provider="gemini", model="test-model")


def make_client(provider: BaseModelProvider, max_retries: int = 3) -> GenerationClient:
    return GenerationClient(
        provider,
        ModelConfig(name="test-model", provider="gemini"),
        RetryPolicy.no_delay(max_retries),
    )


def speaker_responder(prompt: str) -> str:
    """Reply with a line naming who was asked to speak."""
    first_line = prompt.splitlines()[0]
    return f"  {first_line}  "


# =============================================================================
# SHARED FIXTURES - Available to all test modules
# =============================================================================


@pytest.fixture
def debate_config() -> DebateConfig:
    return DebateConfig()


@pytest.fixture
def alpha_beta() -> list[Entity]:
    """Two products with a little structured detail each."""
    return [
        Entity(name="Alpha", details={"category": "laptop", "base_price": "$999"}),
        Entity(name="Beta", details={"category": "laptop", "base_price": "$1299"}),
    ]


@pytest.fixture
def speaker_provider() -> ScriptedProvider:
    return ScriptedProvider(responder=speaker_responder)


@pytest.fixture
def speaker_client(speaker_provider: ScriptedProvider) -> GenerationClient:
    return make_client(speaker_provider)


# =============================================================================
# PYTEST CONFIGURATION HOOKS
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "integration: marks tests that exercise several layers together"
    )
