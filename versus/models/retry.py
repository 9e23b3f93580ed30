"""Retry policy for rate-limited generation calls."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from .providers.exceptions import ProviderRateLimitError

if TYPE_CHECKING:
    from versus.config.settings import RetryConfig

BackoffFunction: TypeAlias = Callable[[int], float]
RetryablePredicate: TypeAlias = Callable[[BaseException], bool]


def fixed_backoff(delay: float) -> BackoffFunction:
    """Return a backoff function that waits the same delay before every retry."""

    def backoff(attempt: int) -> float:
        return delay

    return backoff


def is_rate_limited(error: BaseException) -> bool:
    """Only the backend's rate-limit signal is worth retrying."""
    return isinstance(error, ProviderRateLimitError)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry a generation call, how long to wait, and on what.

    ``max_retries`` counts attempts after the first one, so a policy with
    ``max_retries=3`` makes at most four calls. ``backoff`` receives the
    1-based retry number and returns the delay in seconds.
    """

    max_retries: int = 3
    backoff: BackoffFunction = field(default_factory=lambda: fixed_backoff(10.5))
    is_retryable: RetryablePredicate = is_rate_limited

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        return cls(
            max_retries=config.max_retries,
            backoff=fixed_backoff(config.backoff_seconds),
        )

    @classmethod
    def no_delay(cls, max_retries: int = 3) -> RetryPolicy:
        return cls(max_retries=max_retries, backoff=fixed_backoff(0.0))

    def should_retry(self, error: BaseException, retries_done: int) -> bool:
        return retries_done < self.max_retries and self.is_retryable(error)
