"""Text-generation backends and the resilient generation client."""

from .exceptions import GenerationError
from .generation_client import GenerationClient, parse_json_payload, strip_code_fences
from .retry import RetryPolicy, fixed_backoff, is_rate_limited

__all__ = [
    "GenerationClient",
    "GenerationError",
    "RetryPolicy",
    "fixed_backoff",
    "is_rate_limited",
    "parse_json_payload",
    "strip_code_fences",
]
