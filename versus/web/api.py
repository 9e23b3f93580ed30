"""FastAPI web application for the Versus product debate engine."""

import asyncio
import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from versus.config.settings import get_default_config
from versus.debate_engine.analysis import ProductAnalyzer
from versus.debate_engine.registry import DebateRegistry
from versus.models.generation_client import GenerationClient
from versus.web.endpoints.debates import router as debates_router
from versus.web.endpoints.system import router as system_router

logger: logging.Logger = logging.getLogger(__name__)

# Session eviction scheduler
cleanup_task: asyncio.Task[None] | None = None

config = get_default_config()
generation_client: GenerationClient = GenerationClient.from_config(config)
debate_registry: DebateRegistry = DebateRegistry(generation_client, config.debate)
product_analyzer: ProductAnalyzer = ProductAnalyzer(generation_client, config.analysis)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    global cleanup_task

    if debate_registry.ttl_seconds is not None:
        logger.info(
            f"Starting debate eviction scheduler (ttl={debate_registry.ttl_seconds}s)"
        )
        cleanup_task = asyncio.create_task(
            session_cleanup_scheduler(debate_registry.ttl_seconds)
        )

    yield

    if cleanup_task:
        cleanup_task.cancel()
        try:
            await cleanup_task
        except asyncio.CancelledError:
            pass
        logger.info("Debate eviction scheduler stopped")

    await generation_client.aclose()


async def session_cleanup_scheduler(ttl_seconds: float) -> None:
    """Background task to periodically evict idle debates."""
    interval = max(ttl_seconds / 2, 1.0)
    while True:
        try:
            await asyncio.sleep(interval)
            debate_registry.evict_expired()
        except asyncio.CancelledError:
            break
        except Exception as e:
            logger.error(f"Error in debate eviction scheduler: {e}")


def get_allowed_origins() -> list[str] | None:
    """Get CORS origins from environment or use development defaults."""
    env_origins: str | None = os.environ.get("ALLOWED_ORIGINS")
    if env_origins:
        return [origin.strip() for origin in env_origins.split(",")]
    return None


app: FastAPI = FastAPI(
    title="Versus Product Debate",
    description="Multi-round AI debates between competing products",
    version="0.1.0",
    lifespan=lifespan,
)

allowed_origins: list[str] | None = get_allowed_origins()

if allowed_origins:
    logger.info(f"Setting CORS allowed origins: {allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    logger.info("No ALLOWED_ORIGINS set, using development CORS settings")
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(system_router)
app.include_router(debates_router)
