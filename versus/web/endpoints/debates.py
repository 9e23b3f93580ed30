"""Product analysis and debate endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from versus.debate_engine.analysis import ProductAnalyzer
from versus.debate_engine.exceptions import (
    AnalysisError,
    DebateFinishedError,
    DebateNotFoundError,
    RoundFailedError,
)
from versus.debate_engine.models import Entity
from versus.debate_engine.registry import DebateRegistry
from versus.web.debate_requests import AnalyzeRequest, NextRoundRequest, StartDebateRequest
from versus.web.debate_response import (
    AnalyzedProduct,
    DebateStateResponse,
    NextRoundResponse,
    StartDebateResponse,
)
from versus.web.message_response import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_debate_registry() -> DebateRegistry:
    """Return the process-wide debate registry."""
    # Import here to avoid circular imports
    from versus.web import api
    return api.debate_registry


def get_product_analyzer() -> ProductAnalyzer:
    """Return the process-wide product analyzer."""
    from versus.web import api
    return api.product_analyzer


@router.post("/products/analyze", response_model=list[AnalyzedProduct])
async def analyze_products(
    request: AnalyzeRequest,
    analyzer: ProductAnalyzer = Depends(get_product_analyzer),
):
    """Infer specs, category and price for each product."""
    raw = [product.model_dump() for product in request.products]
    try:
        entities = await analyzer.analyze(raw)
    except AnalysisError as e:
        logger.error(f"Analysis error: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e}")

    return [
        AnalyzedProduct(name=entity.name, url=product.url, details=entity.details)
        for product, entity in zip(request.products, entities)
    ]


@router.post("/debate/start", response_model=StartDebateResponse)
async def start_debate(
    request: StartDebateRequest,
    registry: DebateRegistry = Depends(get_debate_registry),
):
    """Create a debate and run its opening round."""
    entities = [Entity(name=p.name, details=p.details) for p in request.products]
    try:
        debate_id, statements = await registry.create(entities)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RoundFailedError as e:
        logger.error(f"Failed to start debate: {e}")
        raise HTTPException(status_code=500, detail="Failed to start debate")

    return StartDebateResponse(
        debate_id=debate_id,
        messages=[MessageResponse.from_statement(s) for s in statements],
        round=registry.get(debate_id).round.value,
    )


@router.post("/debate/next", response_model=NextRoundResponse)
async def next_round(
    request: NextRoundRequest,
    registry: DebateRegistry = Depends(get_debate_registry),
):
    """Run the next round of a debate."""
    try:
        # Held before the round runs; a DELETE may land while it is in flight
        engine = registry.get(request.debate_id)
        statements = await registry.advance(request.debate_id)
    except DebateNotFoundError:
        raise HTTPException(status_code=404, detail="Debate not found")
    except DebateFinishedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RoundFailedError as e:
        logger.error(f"Failed to process round for {request.debate_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to process round")

    return NextRoundResponse(
        messages=[MessageResponse.from_statement(s) for s in statements],
        round=engine.round.value,
        finished=engine.is_finished,
    )


@router.get("/debate/{debate_id}", response_model=DebateStateResponse)
async def get_debate(
    debate_id: str,
    registry: DebateRegistry = Depends(get_debate_registry),
):
    """Get the full transcript and round of a debate."""
    try:
        engine = registry.get(debate_id)
    except DebateNotFoundError:
        raise HTTPException(status_code=404, detail="Debate not found")

    session = engine.session
    return DebateStateResponse(
        debate_id=session.id,
        products=session.entity_names,
        messages=[MessageResponse.from_statement(s) for s in session.transcript],
        round=session.round_number,
        finished=engine.is_finished,
    )


@router.delete("/debate/{debate_id}")
async def delete_debate(
    debate_id: str,
    registry: DebateRegistry = Depends(get_debate_registry),
):
    """Discard a debate."""
    try:
        registry.discard(debate_id)
    except DebateNotFoundError:
        raise HTTPException(status_code=404, detail="Debate not found")
    return {"status": "deleted", "debateId": debate_id}
