"""Exceptions raised by model providers."""


class ProviderRateLimitError(Exception):
    """Raised when a provider rejects a request because of rate limiting."""

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        status_code: int = 429,
        detail: str | None = None,
    ):
        self.provider = provider
        self.model = model
        self.status_code = status_code
        self.detail = detail or f"{provider} rate limited the request."
        super().__init__(f"{self.detail} (model={model}, status={status_code})")
