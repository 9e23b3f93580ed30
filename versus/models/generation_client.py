"""Resilient text-generation client shared by every debate."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

from versus.config.settings import AppConfig, ModelConfig

from .exceptions import GenerationError
from .providers.base_model_provider import BaseModelProvider
from .providers.providers import ProviderFactory
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

STRUCTURED_SYSTEM_INSTRUCTION = (
    "You are a data extraction engine. Output ONLY valid JSON matching this schema: "
    "{schema}. Do not use markdown blocks."
)

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers the model adds despite instructions."""
    return _FENCE_PATTERN.sub("", text).strip()


def parse_json_payload(text: str) -> Any | None:
    """Parse model output as JSON, returning None when it is not valid JSON."""
    try:
        return json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        logger.error("JSON parse error, raw model output: %r", text)
        return None


def combine_prompt(prompt: str, system_instruction: str | None = None) -> str:
    """Prefix the system instruction onto the prompt as a single message."""
    if system_instruction:
        return f"{system_instruction}\n\nUser Input: {prompt}"
    return prompt


class GenerationClient:
    """Turns a rate-limited provider call into a retryable primitive.

    The client holds no per-debate state, so one instance is shared by the
    analysis step and every debate session.
    """

    def __init__(
        self,
        provider: BaseModelProvider,
        model_config: ModelConfig,
        retry_policy: RetryPolicy | None = None,
    ):
        if not provider.validate_model_config(model_config):
            raise ValueError(
                f"Invalid model config for provider {provider.provider_name}: {model_config.provider}"
            )
        self.provider = provider
        self.model_config = model_config
        self.retry_policy = retry_policy or RetryPolicy()

    @classmethod
    def from_config(cls, config: AppConfig) -> GenerationClient:
        """Build a client for the provider selected in the system settings."""
        provider = ProviderFactory.create_provider(config.system.provider, config.system)
        return cls(
            provider,
            config.model_config_for_generation(),
            RetryPolicy.from_config(config.system.retry),
        )

    async def generate(self, prompt: str, system_instruction: str | None = None) -> str:
        """Generate text for a prompt, retrying on rate limits.

        Raises:
            GenerationError: The call failed for a non-retryable reason, the
                retries ran out, or the model replied with blank text.
        """
        messages = [{"role": "user", "content": combine_prompt(prompt, system_instruction)}]

        retries = 0
        while True:
            try:
                text = await self.provider.generate_response(self.model_config, messages)
            except Exception as exc:
                if self.retry_policy.should_retry(exc, retries):
                    retries += 1
                    delay = self.retry_policy.backoff(retries)
                    logger.warning(
                        "Rate limit hit on %s. Retrying in %.1fs (attempt %s of %s)",
                        self.model_config.name,
                        delay,
                        retries,
                        self.retry_policy.max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue

                attempts = retries + 1
                logger.error(
                    "Generation failed on %s after %s attempt(s): %s: %s",
                    self.model_config.name,
                    attempts,
                    type(exc).__name__,
                    exc,
                )
                raise GenerationError(
                    f"Failed to generate content from {self.provider.provider_name}",
                    attempts=attempts,
                ) from exc

            if not text or not text.strip():
                logger.error("Model %s returned an empty response", self.model_config.name)
                raise GenerationError(
                    f"Empty response from {self.provider.provider_name}",
                    attempts=retries + 1,
                )

            logger.debug("Generated %s chars from %s", len(text), self.model_config.name)
            return text

    async def generate_structured(self, prompt: str, schema_description: str) -> Any | None:
        """Generate a JSON value matching ``schema_description``.

        Unparseable output is a soft failure and yields ``None``; generation
        failures still raise :class:`GenerationError`.
        """
        system = STRUCTURED_SYSTEM_INSTRUCTION.format(schema=schema_description)
        text = await self.generate(prompt, system)
        return parse_json_payload(text)

    async def aclose(self) -> None:
        await self.provider.aclose()
