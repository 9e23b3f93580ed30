"""In-memory registry of active debates."""

import asyncio
import logging
import time
from collections.abc import Sequence

from versus.config.settings import DebateConfig
from versus.models.generation_client import GenerationClient
from .core import DebateEngine
from .exceptions import DebateNotFoundError
from .models import Entity, Statement

logger = logging.getLogger(__name__)


class DebateRegistry:
    """Maps debate identifiers to their engines for the life of the process.

    Debates are kept until :meth:`discard` is called or, when ``ttl_seconds``
    is set, until :meth:`evict_expired` finds them idle for longer than that.
    Rounds of one debate are serialized with a per-debate lock.
    """

    def __init__(
        self,
        client: GenerationClient,
        config: DebateConfig | None = None,
        ttl_seconds: float | None = None,
    ):
        self.client = client
        self.config = config or DebateConfig()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else self.config.session_ttl_seconds
        self._engines: dict[str, DebateEngine] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._last_used: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, debate_id: object) -> bool:
        return debate_id in self._engines

    async def create(self, entities: Sequence[Entity]) -> tuple[str, list[Statement]]:
        """Start a debate and register it once its opening round succeeded."""
        engine = DebateEngine.create(entities, self.client, self.config)
        statements = await engine.start()

        debate_id = engine.session.id
        self._engines[debate_id] = engine
        self._locks[debate_id] = asyncio.Lock()
        self._touch(debate_id)

        logger.info(
            f"Created debate {debate_id} with products: "
            f"{', '.join(engine.session.entity_names)}"
        )
        return debate_id, statements

    def get(self, debate_id: str) -> DebateEngine:
        """Return the engine for ``debate_id``."""
        engine = self._engines.get(debate_id)
        if engine is None:
            raise DebateNotFoundError(debate_id)
        return engine

    async def advance(self, debate_id: str) -> list[Statement]:
        """Run the next round of a registered debate."""
        engine = self.get(debate_id)
        async with self._locks[debate_id]:
            try:
                return await engine.advance()
            finally:
                # The debate may have been discarded while the round ran
                if debate_id in self._engines:
                    self._touch(debate_id)

    def discard(self, debate_id: str) -> None:
        """Forget a debate."""
        if debate_id not in self._engines:
            raise DebateNotFoundError(debate_id)
        del self._engines[debate_id]
        self._locks.pop(debate_id, None)
        self._last_used.pop(debate_id, None)
        logger.info(f"Discarded debate {debate_id}")

    def evict_expired(self, now: float | None = None) -> list[str]:
        """Drop debates idle for longer than the TTL and return their ids."""
        if self.ttl_seconds is None:
            return []

        for debate_id in [d for d in self._last_used if d not in self._engines]:
            del self._last_used[debate_id]

        now = time.monotonic() if now is None else now
        expired = []
        for debate_id, last_used in self._last_used.items():
            lock = self._locks.get(debate_id)
            if now - last_used > self.ttl_seconds and not (lock and lock.locked()):
                expired.append(debate_id)

        for debate_id in expired:
            self.discard(debate_id)

        if expired:
            logger.info(f"Evicted {len(expired)} expired debate(s)")
        return expired

    def _touch(self, debate_id: str) -> None:
        self._last_used[debate_id] = time.monotonic()
