"""API routers for Wine Journal."""

from winejournal.routers import (
    ai,
    analytics,
    auth,
    cellars,
    images,
    reference,
    tastings,
    training,
    weather,
    wines,
)

__all__ = [
    "ai",
    "analytics",
    "auth",
    "cellars",
    "images",
    "reference",
    "tastings",
    "training",
    "weather",
    "wines",
]
