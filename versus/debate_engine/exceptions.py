"""Exceptions raised by the debate engine."""

from .types import DebateRound


class DebateError(Exception):
    """Base class for debate engine errors."""


class DebateNotFoundError(DebateError):
    """No debate is registered under the requested identifier."""

    def __init__(self, debate_id: str):
        self.debate_id = debate_id
        super().__init__(f"Debate not found: {debate_id}")


class DebateNotStartedError(DebateError):
    """``advance`` was called before the opening round."""


class DebateAlreadyStartedError(DebateError):
    """``start`` was called on a debate that already has an opening round."""


class DebateFinishedError(DebateError):
    """The debate reached its verdict; no further rounds exist."""


class RoundFailedError(DebateError):
    """A generation call of the round failed, so the round was not committed."""

    def __init__(self, round: DebateRound, message: str):
        self.round = round
        super().__init__(f"Round {round.value} ({round.name.lower()}) failed: {message}")


class AnalysisError(DebateError):
    """The product analysis batch could not be completed."""
