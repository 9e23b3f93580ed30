"""Gemini provider implementation using the OpenAI SDK compatibility endpoint."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI, RateLimitError

from .base_model_provider import BaseModelProvider
from .exceptions import ProviderRateLimitError

if TYPE_CHECKING:
    from versus.config.settings import ModelConfig, SystemConfig

logger = logging.getLogger(__name__)


class GeminiProvider(BaseModelProvider):
    """Gemini model provider using OpenAI SDK compatibility."""

    def __init__(self, system_config: SystemConfig, client: Any | None = None):
        super().__init__(system_config)

        if client is not None:
            self._client = client
            return

        api_key = self._get_api_key()
        if not api_key:
            logger.warning(
                "No Gemini API key found. Set GEMINI_API_KEY or configure in"
                " system settings."
            )
            self._client = None
        else:
            # Retries are owned by the generation client's retry policy
            self._client = AsyncOpenAI(
                base_url=system_config.gemini.base_url,
                api_key=api_key,
                timeout=system_config.gemini.timeout,
                max_retries=0,
            )
            logger.info("Gemini provider initialized with key length %s", len(api_key))

    def _get_api_key(self) -> str | None:
        """Get Gemini API key from environment or config."""
        return os.getenv("GEMINI_API_KEY") or self.system_config.gemini.api_key

    @property
    def provider_name(self) -> str:
        return "gemini"

    async def generate_response(
        self, model_config: ModelConfig, messages: list[dict[str, str]], **overrides
    ) -> str:
        """Generate a response using Gemini via OpenAI SDK."""
        if not self._client:
            raise RuntimeError("Gemini client not initialized - check API key")

        params: dict[str, Any] = {
            "model": model_config.name,
            "messages": messages,
            "temperature": overrides.get("temperature", model_config.temperature),
        }
        max_tokens = overrides.get("max_tokens", model_config.max_tokens)
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        try:
            response = await self._client.chat.completions.create(**params)
        except RateLimitError as exc:
            raise ProviderRateLimitError(
                provider="gemini",
                model=model_config.name,
                status_code=429,
                detail="Gemini rate limited the request.",
            ) from exc
        except Exception as exc:
            logger.error("Gemini generation failed for %s: %s", model_config.name, exc)
            raise

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        if not content.strip():
            logger.warning("Gemini model %s returned empty content", model_config.name)
        else:
            logger.debug(
                "Generated %s chars from Gemini model %s", len(content), model_config.name
            )

        return content.strip()

    async def aclose(self) -> None:
        if self._client is not None and hasattr(self._client, "close"):
            await self._client.close()
