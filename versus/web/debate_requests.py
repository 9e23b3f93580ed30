from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductInput(BaseModel):
    """A product as entered by the user, before analysis."""

    name: str = Field(..., min_length=1)
    url: str | None = None


class AnalyzeRequest(BaseModel):
    """Request model for analyzing products."""

    products: list[ProductInput] = Field(..., min_length=1)


class ProductPayload(BaseModel):
    """A product ready to debate."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    details: dict[str, Any] | None = None


class StartDebateRequest(BaseModel):
    """Request model for starting a debate."""

    products: list[ProductPayload]

    @field_validator("products")
    @classmethod
    def validate_unique_names(cls, v):
        names = [product.name for product in v]
        if len(set(names)) != len(names):
            raise ValueError("Product names must be unique")
        return v


class NextRoundRequest(BaseModel):
    """Request model for advancing a debate."""

    model_config = ConfigDict(populate_by_name=True)

    debate_id: str = Field(..., alias="debateId")
