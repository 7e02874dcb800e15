"""Pydantic schemas for the AI sommelier endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class WineDescriptor(BaseModel):
    """Minimal description of a wine used to build prompts."""

    name: str = Field(..., min_length=1, max_length=255)
    grape: str | None = None
    region: str | None = None
    vintage: int | None = None
    rating: float = Field(0.0, ge=0, le=5)


class PairingRequest(BaseModel):
    grape: str = Field(..., min_length=1, max_length=255)
    region: str = Field(..., min_length=1, max_length=255)


class TextResponse(BaseModel):
    text: str


class ListResponse(BaseModel):
    items: list[str]


class WineAnalysis(BaseModel):
    """Structured analysis of a single wine."""

    tasting_notes: str
    food_pairings: list[str]
    serving_recommendations: str
    aging_potential: str
    price_range: str
    similar_wines: list[str]
    expert_insights: str


class AIRecommendation(BaseModel):
    wine_name: str
    reason: str
    confidence: float
    category: Literal["similar", "upgrade", "discovery", "value"]


class TranscriptionResponse(BaseModel):
    text: str
    available: bool = False
