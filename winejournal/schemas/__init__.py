"""Pydantic schemas for Wine Journal API."""

from winejournal.schemas.analytics import (
    CellarAnalytics,
    CellarRecommendation,
    DrinkWindowAlert,
    DrinkWindowSummary,
    Insight,
    TastePreferences,
    WineAnalytics,
)
from winejournal.schemas.cellar import (
    CellarCreate,
    CellarResponse,
    CellarUpdate,
    CellarWineCreate,
    CellarWineResponse,
    CellarWineUpdate,
)
from winejournal.schemas.tasting import (
    TastingSessionCreate,
    TastingSessionResponse,
    TastingSessionUpdate,
)
from winejournal.schemas.wine import WineCreate, WineResponse, WineUpdate

__all__ = [
    "WineCreate",
    "WineUpdate",
    "WineResponse",
    "TastingSessionCreate",
    "TastingSessionUpdate",
    "TastingSessionResponse",
    "CellarCreate",
    "CellarUpdate",
    "CellarResponse",
    "CellarWineCreate",
    "CellarWineUpdate",
    "CellarWineResponse",
    "WineAnalytics",
    "TastePreferences",
    "Insight",
    "CellarAnalytics",
    "CellarRecommendation",
    "DrinkWindowAlert",
    "DrinkWindowSummary",
]
