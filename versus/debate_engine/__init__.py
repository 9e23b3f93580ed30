"""Debate orchestration and flow management."""

from .analysis import ProductAnalyzer
from .core import DebateEngine, RoundPlan
from .exceptions import (
    AnalysisError,
    DebateAlreadyStartedError,
    DebateError,
    DebateFinishedError,
    DebateNotFoundError,
    DebateNotStartedError,
    RoundFailedError,
)
from .models import DebateSession, Entity, Statement, Transcript
from .prompt_builder import PromptBuilder
from .registry import DebateRegistry
from .types import MODERATOR, DebateRound, StatementKind

__all__ = [
    "AnalysisError",
    "DebateAlreadyStartedError",
    "DebateEngine",
    "DebateError",
    "DebateFinishedError",
    "DebateNotFoundError",
    "DebateNotStartedError",
    "DebateRegistry",
    "DebateRound",
    "DebateSession",
    "Entity",
    "MODERATOR",
    "ProductAnalyzer",
    "PromptBuilder",
    "RoundFailedError",
    "RoundPlan",
    "Statement",
    "StatementKind",
    "Transcript",
]
