"""Pre-debate product analysis."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from versus.config.settings import AnalysisConfig
from versus.models.exceptions import GenerationError
from versus.models.generation_client import GenerationClient
from .exceptions import AnalysisError
from .models import Entity

logger = logging.getLogger(__name__)

ANALYSIS_SCHEMA = "{ specs, category, base_price }"


def build_analysis_prompt(name: str, url: str | None) -> str:
    """Ask for a summary inferred from the name and URL; the page is never fetched."""
    return (
        f"Analyze this product: Name: {name}, URL: {url or 'not provided'}.\n"
        'Return JSON with: { "specs": "summary of specs", "category": "category", '
        '"base_price": "estimated price" }'
    )


class ProductAnalyzer:
    """Enriches raw product inputs with structured details before a debate."""

    def __init__(self, client: GenerationClient, config: AnalysisConfig | None = None):
        self.client = client
        self.config = config or AnalysisConfig()

    async def analyze(self, raw_entities: Sequence[dict[str, Any]]) -> list[Entity]:
        """Analyze every product concurrently, keeping input order.

        Raises:
            AnalysisError: A generation call failed, or details are required
                and at least one product's output could not be parsed.
        """
        results = await asyncio.gather(
            *(self._analyze_one(raw) for raw in raw_entities),
            return_exceptions=True,
        )

        entities: list[Entity] = []
        failures: list[str] = []
        for raw, result in zip(raw_entities, results):
            if isinstance(result, GenerationError):
                failures.append(f"{raw['name']}: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            entities.append(result)

        if failures:
            logger.error(f"Analysis failed for {len(failures)} product(s): {failures}")
            raise AnalysisError(f"Analysis failed: {'; '.join(failures)}")

        missing = [entity.name for entity in entities if entity.details is None]
        if missing and self.config.require_details:
            raise AnalysisError(f"Could not extract details for: {', '.join(missing)}")

        return entities

    async def _analyze_one(self, raw: dict[str, Any]) -> Entity:
        name = raw["name"]
        prompt = build_analysis_prompt(name, raw.get("url"))
        details = await self.client.generate_structured(prompt, ANALYSIS_SCHEMA)

        if details is not None and not isinstance(details, dict):
            logger.warning(f"Analysis for {name} returned {type(details).__name__}, expected an object")
            details = {"summary": details}
        if details is None:
            logger.warning(f"No structured details for {name}; continuing without them")

        return Entity(name=name, details=details)
