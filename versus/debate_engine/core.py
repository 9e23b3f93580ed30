"""Core debate engine for orchestrating product debates."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import asyncio
import logging
import time
import uuid

from versus.config.settings import DebateConfig
from versus.models.generation_client import GenerationClient
from .exceptions import (
    DebateAlreadyStartedError,
    DebateFinishedError,
    DebateNotStartedError,
    RoundFailedError,
)
from .models import DebateSession, Entity, Statement, Transcript
from .prompt_builder import PromptBuilder
from .types import MODERATOR, DebateRound, StatementKind

logger = logging.getLogger(__name__)

EntityPromptFactory = Callable[[Entity, Transcript], str]
ModeratorPromptFactory = Callable[[Transcript], str]


@dataclass(frozen=True)
class RoundPlan:
    """How a round is generated: one prompt per entity, or one for the moderator."""

    kind: StatementKind
    entity_prompt: EntityPromptFactory | None = None
    moderator_prompt: ModeratorPromptFactory | None = None


class DebateEngine:
    """Round state machine for a single debate session.

    Every prompt of a round is built from the transcript snapshot committed by
    the previous round, and the round's statements are committed together, in
    entity order, only once all of its generation calls have succeeded.
    Callers must not run ``start``/``advance`` concurrently on one engine.
    """

    def __init__(
        self,
        session: DebateSession,
        client: GenerationClient,
        config: DebateConfig | None = None,
    ):
        self.session = session
        self.client = client
        self.config = config or DebateConfig()
        self.prompts = PromptBuilder(self.config)
        self._plans: dict[DebateRound, RoundPlan] = {
            DebateRound.OPENING: RoundPlan(
                StatementKind.INTRO, entity_prompt=self._opening_prompt
            ),
            DebateRound.PROS_CONS: RoundPlan(
                StatementKind.ARGUMENT, entity_prompt=self._pros_cons_prompt
            ),
            DebateRound.CRITICISM: RoundPlan(
                StatementKind.ARGUMENT, entity_prompt=self.prompts.criticism
            ),
            DebateRound.REBUTTAL: RoundPlan(
                StatementKind.REBUTTAL, entity_prompt=self.prompts.rebuttal
            ),
            DebateRound.CONCLUSION: RoundPlan(
                StatementKind.CONCLUSION, moderator_prompt=self._conclusion_prompt
            ),
        }

    @classmethod
    def create(
        cls,
        entities: Sequence[Entity],
        client: GenerationClient,
        config: DebateConfig | None = None,
        debate_id: str | None = None,
    ) -> "DebateEngine":
        """Validate the entities and build an engine around a fresh session."""
        config = config or DebateConfig()
        names = [entity.name for entity in entities]

        if len(names) < config.min_entities:
            raise ValueError(
                f"A debate needs at least {config.min_entities} products, got {len(names)}"
            )
        if any(not name.strip() for name in names):
            raise ValueError("Product names must not be empty")
        if len(set(names)) != len(names):
            raise ValueError(f"Product names must be unique: {names}")
        if MODERATOR in names:
            raise ValueError(f"'{MODERATOR}' is reserved for the debate moderator")

        session = DebateSession(
            id=debate_id or str(uuid.uuid4()), entities=tuple(entities)
        )
        return cls(session, client, config)

    @property
    def round(self) -> DebateRound:
        return self.session.round

    @property
    def is_finished(self) -> bool:
        return self.session.round.is_finished

    async def start(self) -> list[Statement]:
        """Run the opening round."""
        if self.session.round is not DebateRound.NOT_STARTED:
            raise DebateAlreadyStartedError(
                f"Debate {self.session.id} already started (round {self.session.round_number})"
            )
        return await self._conduct_round(DebateRound.OPENING)

    async def advance(self) -> list[Statement]:
        """Run the round after the current one and return its statements."""
        current = self.session.round
        if current is DebateRound.NOT_STARTED:
            raise DebateNotStartedError(f"Debate {self.session.id} has not started")
        if current.is_finished:
            raise DebateFinishedError(f"Debate {self.session.id} is already finished")
        return await self._conduct_round(current.next())

    async def _conduct_round(self, debate_round: DebateRound) -> list[Statement]:
        plan = self._plans[debate_round]
        snapshot = self.session.transcript

        if plan.moderator_prompt is not None:
            speakers = [MODERATOR]
            prompts = [plan.moderator_prompt(snapshot)]
        else:
            assert plan.entity_prompt is not None
            speakers = self.session.entity_names
            prompts = [plan.entity_prompt(entity, snapshot) for entity in self.session.entities]

        start_time = time.time()
        results = await asyncio.gather(
            *(self.client.generate(prompt) for prompt in prompts),
            return_exceptions=True,
        )
        generation_time = time.time() - start_time

        for speaker, result in zip(speakers, results):
            if not isinstance(result, BaseException):
                continue
            if not isinstance(result, Exception):
                raise result
            logger.error(
                f"Debate {self.session.id}: round {debate_round.value} failed for {speaker} "
                f"after {generation_time:.2f}s: {type(result).__name__}: {result}"
            )
            raise RoundFailedError(debate_round, f"{speaker}: {result}") from result

        statements = [
            Statement(
                sender=speaker,
                content=str(text).strip(),
                kind=plan.kind,
                round_number=debate_round.value,
            )
            for speaker, text in zip(speakers, results)
        ]

        self.session.transcript = snapshot.append(statements)
        self.session.round = (
            DebateRound.FINISHED
            if debate_round is DebateRound.CONCLUSION
            else debate_round
        )

        logger.info(
            f"Debate {self.session.id}: round {debate_round.value} "
            f"({debate_round.name.lower()}) produced {len(statements)} statement(s) "
            f"in {generation_time:.2f}s"
        )
        return statements

    def _opening_prompt(self, entity: Entity, transcript: Transcript) -> str:
        competitors = [name for name in self.session.entity_names if name != entity.name]
        return self.prompts.opening(entity, competitors)

    def _pros_cons_prompt(self, entity: Entity, transcript: Transcript) -> str:
        return self.prompts.pros_cons(entity)

    def _conclusion_prompt(self, transcript: Transcript) -> str:
        return self.prompts.conclusion(self.session.entity_names, transcript)
