"""Exceptions raised by the generation client."""


class GenerationError(Exception):
    """A generation call failed and will not be retried any further."""

    def __init__(self, message: str, *, attempts: int = 1):
        self.attempts = attempts
        super().__init__(message)
