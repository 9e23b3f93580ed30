"""Model providers package."""

from .providers import ProviderFactory
from .gemini_provider import GeminiProvider
from .open_router_provider import OpenRouterProvider
from .base_model_provider import BaseModelProvider
from .exceptions import ProviderRateLimitError

__all__ = [
    "ProviderFactory",
    "GeminiProvider",
    "OpenRouterProvider",
    "BaseModelProvider",
    "ProviderRateLimitError",
]
