"""Data models for the debate engine."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .types import DebateRound, StatementKind


@dataclass(frozen=True)
class Entity:
    """A competing product and whatever the analysis step learned about it."""

    name: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class Statement:
    """A single statement in the debate."""

    sender: str
    content: str
    kind: StatementKind
    round_number: int
    timestamp: datetime = field(default_factory=datetime.now)


class Transcript:
    """Append-only, immutable history of statements.

    ``append`` never mutates; it returns a new snapshot with ``version``
    bumped by one, so a round's statements are committed in a single step and
    readers holding an older snapshot never observe a partial round.
    """

    __slots__ = ("_statements", "_version")

    def __init__(self, statements: Iterable[Statement] = (), version: int = 0):
        self._statements: tuple[Statement, ...] = tuple(statements)
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    @property
    def statements(self) -> tuple[Statement, ...]:
        return self._statements

    def append(self, statements: Iterable[Statement]) -> "Transcript":
        return Transcript(self._statements + tuple(statements), self._version + 1)

    def render(self) -> str:
        """Render the history as ``sender: content`` lines for prompts."""
        return "\n".join(f"{s.sender}: {s.content}" for s in self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __getitem__(self, index: int) -> Statement:
        return self._statements[index]

    def __repr__(self) -> str:
        return f"Transcript(version={self._version}, statements={len(self._statements)})"


@dataclass
class DebateSession:
    """Full state of one debate."""

    id: str
    entities: tuple[Entity, ...]
    transcript: Transcript = field(default_factory=Transcript)
    round: DebateRound = DebateRound.NOT_STARTED

    @property
    def round_number(self) -> int:
        return self.round.value

    @property
    def entity_names(self) -> list[str]:
        return [entity.name for entity in self.entities]
