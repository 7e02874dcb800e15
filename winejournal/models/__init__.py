"""MongoDB document models for Wine Journal."""

from winejournal.models.cellar import Cellar, CellarWine
from winejournal.models.tasting_session import TastingSession
from winejournal.models.token_blacklist import RevokedToken
from winejournal.models.training import ModuleResult, TrainingProgress
from winejournal.models.user import User, UserPreferences
from winejournal.models.wine import (
    Appearance,
    AromaFlavour,
    Conclusions,
    Nose,
    Palate,
    PrimaryAromas,
    SecondaryAromas,
    TastingNotes,
    TertiaryAromas,
    Wine,
)

__all__ = [
    # Main documents
    "User",
    "Wine",
    "TastingSession",
    "Cellar",
    "CellarWine",
    "TrainingProgress",
    "RevokedToken",
    # Embedded subdocuments
    "UserPreferences",
    "TastingNotes",
    "Appearance",
    "Nose",
    "AromaFlavour",
    "PrimaryAromas",
    "SecondaryAromas",
    "TertiaryAromas",
    "Palate",
    "Conclusions",
    "ModuleResult",
]
