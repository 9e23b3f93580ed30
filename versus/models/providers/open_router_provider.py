import os
import logging
from typing import TYPE_CHECKING, Any

import httpx

from .base_model_provider import BaseModelProvider
from .exceptions import ProviderRateLimitError

if TYPE_CHECKING:
    from versus.config.settings import SystemConfig, ModelConfig

logger = logging.getLogger(__name__)


class OpenRouterProvider(BaseModelProvider):
    """OpenRouter model provider implementation."""

    def __init__(
        self,
        system_config: "SystemConfig",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(system_config)
        self._transport = transport

        self._api_key = system_config.openrouter.api_key or os.getenv("OPENROUTER_API_KEY")
        if not self._api_key:
            logger.warning(
                "No OpenRouter API key found. Set OPENROUTER_API_KEY or configure in system settings."
            )

    @property
    def provider_name(self) -> str:
        return "openrouter"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self.system_config.openrouter.site_url:
            headers["HTTP-Referer"] = self.system_config.openrouter.site_url
        if self.system_config.openrouter.app_name:
            headers["X-Title"] = self.system_config.openrouter.app_name
        return headers

    async def generate_response(
        self, model_config: "ModelConfig", messages: list[dict[str, str]], **overrides
    ) -> str:
        """Generate a response using OpenRouter."""
        if not self._api_key:
            raise RuntimeError("OpenRouter client not initialized - check API key")

        payload: dict[str, Any] = {
            "model": model_config.name,
            "messages": messages,
            "temperature": overrides.get("temperature", model_config.temperature),
            "reasoning": {"exclude": True},
        }
        max_tokens = overrides.get("max_tokens", model_config.max_tokens)
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        config = self.system_config.openrouter
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=config.timeout
            ) as client:
                http_response = await client.post(
                    f"{config.base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                )
                http_response.raise_for_status()
                response_data = http_response.json()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 429:
                raise ProviderRateLimitError(
                    provider="openrouter",
                    model=model_config.name,
                    status_code=429,
                    detail="OpenRouter rate limited the request.",
                ) from exc
            logger.error(f"OpenRouter generation failed for {model_config.name}: {exc}")
            raise
        except Exception as e:
            logger.error(f"OpenRouter generation failed for {model_config.name}: {e}")
            raise

        content = response_data["choices"][0]["message"]["content"] or ""

        if not content.strip():
            logger.warning(
                f"OpenRouter model {model_config.name} returned empty content. "
                f"Response data: {response_data}"
            )
        else:
            logger.debug(
                f"Generated {len(content)} chars from OpenRouter model {model_config.name}"
            )

        return content.strip()
