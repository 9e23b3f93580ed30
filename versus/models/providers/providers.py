from typing import TYPE_CHECKING

from .base_model_provider import BaseModelProvider
from .gemini_provider import GeminiProvider
from .open_router_provider import OpenRouterProvider

if TYPE_CHECKING:
    from versus.config.settings import SystemConfig


class ProviderFactory:
    """Factory for creating model providers."""

    _providers: dict[str, type[BaseModelProvider]] = {
        "gemini": GeminiProvider,
        "openrouter": OpenRouterProvider,
    }

    @classmethod
    def create_provider(
        cls, provider_name: str, system_config: "SystemConfig"
    ) -> BaseModelProvider:
        """Create a provider instance by name."""
        provider_class = cls._providers.get(provider_name)
        if provider_class is None:
            raise ValueError(
                f"Unknown provider: {provider_name}. "
                f"Available: {', '.join(cls.get_available_providers())}"
            )
        return provider_class(system_config)

    @classmethod
    def get_available_providers(cls) -> list[str]:
        """Get list of available provider names."""
        return sorted(cls._providers)
