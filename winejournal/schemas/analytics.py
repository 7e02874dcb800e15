"""Pydantic schemas for collection analytics, insights and cellar reports."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class RegionStat(BaseModel):
    """Tasting count and mean rating for one region."""

    region: str
    count: int
    average_rating: float


class GrapeStat(BaseModel):
    """Tasting count and mean rating for one grape."""

    grape: str
    count: int
    average_rating: float


class MonthlyStat(BaseModel):
    """Tasting count and mean rating for one calendar month (YYYY-MM)."""

    month: str
    count: int
    average_rating: float


def _empty_distribution() -> dict[str, int]:
    return {str(bucket): 0 for bucket in range(1, 6)}


class WineAnalytics(BaseModel):
    """Aggregate statistics over a set of wine records."""

    total_wines: int = 0
    average_rating: float = 0.0
    favorite_regions: list[RegionStat] = Field(default_factory=list)
    favorite_grapes: list[GrapeStat] = Field(default_factory=list)
    rating_distribution: dict[str, int] = Field(default_factory=_empty_distribution)
    monthly_trends: list[MonthlyStat] = Field(default_factory=list)


class PriceRange(BaseModel):
    min: float = 0.0
    max: float = 0.0


class TastePreferences(BaseModel):
    """Preferences derived from the wines a user has logged."""

    regions: list[str] = Field(default_factory=list)
    grapes: list[str] = Field(default_factory=list)
    average_rating: float = 0.0
    price_range: PriceRange = Field(default_factory=PriceRange)
    total_wines: int = 0
    favorite_regions: list[RegionStat] = Field(default_factory=list)
    favorite_grapes: list[GrapeStat] = Field(default_factory=list)


InsightType = Literal["pattern", "trend", "recommendation", "discovery"]


class Insight(BaseModel):
    """A heuristic observation about a user's tasting habits."""

    type: InsightType
    title: str
    description: str
    confidence: float = Field(..., ge=0, le=1)


class InsightsResponse(BaseModel):
    preferences: TastePreferences
    insights: list[Insight]


class BottleValue(BaseModel):
    """Bottle count and value for one group of cellar wines."""

    bottles: int = 0
    value: float = 0.0


class CellarAnalytics(BaseModel):
    """Inventory statistics for a single cellar."""

    total_bottles: int = 0
    total_value: float = 0.0
    average_age: float = 0.0
    by_region: dict[str, BottleValue] = Field(default_factory=dict)
    by_grape: dict[str, BottleValue] = Field(default_factory=dict)
    aging_wines: int = 0
    ready_to_drink: int = 0
    overdue: int = 0
    price_ranges: dict[str, BottleValue] = Field(default_factory=dict)


class CellarRecommendation(BaseModel):
    """Advice on whether to open or keep a cellar wine."""

    wine_id: str | None = None
    wine_name: str
    type: Literal["drink", "aging"]
    priority: Literal["high", "medium", "low"]
    message: str
    action: str


AlertPriority = Literal["high", "medium", "low"]
AlertStatus = Literal["active", "dismissed", "expired"]


class DrinkWindowAlert(BaseModel):
    """A cellar wine approaching or past its drink-by date."""

    wine_id: str | None = None
    cellar_id: str | None = None
    wine_name: str
    vintage: int | None = None
    drink_by_date: datetime
    days_until_expiry: int
    priority: AlertPriority
    status: AlertStatus
    quantity: int
    storage_location: str = ""
    estimated_value: float = 0.0
    recommendation: str


class DrinkWindowSummary(BaseModel):
    alerts: list[DrinkWindowAlert] = Field(default_factory=list)
    active_count: int = 0
    high_priority_count: int = 0
    total_value_at_risk: float = 0.0
