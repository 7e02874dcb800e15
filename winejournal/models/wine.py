"""Wine document model with embedded structured tasting notes."""

from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field


class Appearance(BaseModel):
    """Embedded subdocument: what the wine looks like in the glass."""

    clarity: str = ""
    intensity: str = ""
    colour: str = ""


class Nose(BaseModel):
    """Embedded subdocument: condition and intensity on the nose."""

    condition: str = ""
    intensity: str = ""


class PrimaryAromas(BaseModel):
    """Aromas from the grape itself."""

    floral: str = ""
    green_fruit: str = ""
    citrus_fruit: str = ""
    stone_fruit: str = ""
    tropical_fruit: str = ""
    red_fruit: str = ""
    black_fruit: str = ""
    herbaceous: str = ""
    herbal: str = ""
    spice: str = ""
    fruit_ripeness: str = ""
    other: str = ""


class SecondaryAromas(BaseModel):
    """Aromas from winemaking."""

    yeast: str = ""
    malolactic: str = ""
    oak: str = ""


class TertiaryAromas(BaseModel):
    """Aromas from maturation."""

    red_wine: str = ""
    white_wine: str = ""
    oxidised: str = ""


class AromaFlavour(BaseModel):
    """Embedded subdocument grouping the three aroma families."""

    primary: PrimaryAromas = Field(default_factory=PrimaryAromas)
    secondary: SecondaryAromas = Field(default_factory=SecondaryAromas)
    tertiary: TertiaryAromas = Field(default_factory=TertiaryAromas)


class Palate(BaseModel):
    """Embedded subdocument: structure on the palate."""

    sweetness: str = ""
    acidity: str = ""
    tannin: str = ""
    alcohol: str = ""
    body: str = ""
    flavour_intensity: str = ""
    finish: str = ""


class Conclusions(BaseModel):
    """Embedded subdocument: quality assessment."""

    quality: str = ""
    readiness: Optional[str] = None
    ageing: Optional[str] = None


class TastingNotes(BaseModel):
    """Structured tasting note attached to a wine record."""

    appearance: Appearance = Field(default_factory=Appearance)
    nose: Nose = Field(default_factory=Nose)
    aroma_flavour: AromaFlavour = Field(default_factory=AromaFlavour)
    palate: Palate = Field(default_factory=Palate)
    conclusions: Conclusions = Field(default_factory=Conclusions)
    notes: Optional[str] = None
    voice_notes: Optional[str] = None


class Wine(Document):
    """A wine logged in a user's tasting journal."""

    owner_id: Indexed(PydanticObjectId)

    name: Indexed(str)
    grape: Optional[str] = None
    region: Optional[str] = None
    vintage: Optional[int] = None
    rating: float = 0.0  # 0-5 stars
    price: Optional[float] = None
    winery: Optional[str] = None
    barcode: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    in_cellar: bool = False

    tasting: TastingNotes = Field(default_factory=TastingNotes)

    # When the wine was tasted; drives the monthly analytics series
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "wines"
        indexes = [
            "owner_id",
            "name",
            [("owner_id", 1), ("timestamp", -1)],
        ]

    def __repr__(self) -> str:
        return f"<Wine(id={self.id}, name={self.name}, vintage={self.vintage})>"
