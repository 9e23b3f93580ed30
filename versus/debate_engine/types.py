"""Shared types and enums for the debate engine."""

from enum import Enum

MODERATOR = "Moderator"


class DebateRound(Enum):
    """States of the debate round machine.

    The value is the round number reported to consumers; ``FINISHED`` keeps
    the historical ``99`` so clients can treat any round >= 99 as complete.
    """

    NOT_STARTED = 0
    OPENING = 1
    PROS_CONS = 2
    CRITICISM = 3
    REBUTTAL = 4
    CONCLUSION = 5
    FINISHED = 99

    @property
    def is_finished(self) -> bool:
        return self is DebateRound.FINISHED

    def next(self) -> "DebateRound":
        """Return the state that follows this one."""
        if self is DebateRound.FINISHED:
            raise ValueError("FINISHED has no successor")
        if self is DebateRound.CONCLUSION:
            return DebateRound.FINISHED
        return DebateRound(self.value + 1)


class StatementKind(Enum):
    """What a statement contributes to the debate."""

    INTRO = "intro"
    ARGUMENT = "argument"
    REBUTTAL = "rebuttal"
    CONCLUSION = "conclusion"
