from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from versus.web.message_response import MessageResponse


class AnalyzedProduct(BaseModel):
    """Response model for one analyzed product."""

    name: str
    url: str | None = None
    details: dict[str, Any] | None = None


class StartDebateResponse(BaseModel):
    """Response model for a freshly started debate."""

    model_config = ConfigDict(populate_by_name=True)

    debate_id: str = Field(..., serialization_alias="debateId")
    messages: list[MessageResponse]
    round: int


class NextRoundResponse(BaseModel):
    """Response model for the statements of one round."""

    messages: list[MessageResponse]
    round: int
    finished: bool = False


class DebateStateResponse(BaseModel):
    """Response model for the full state of a debate."""

    model_config = ConfigDict(populate_by_name=True)

    debate_id: str = Field(..., serialization_alias="debateId")
    products: list[str]
    messages: list[MessageResponse]
    round: int
    finished: bool
