"""Static reference data for building tasting notes and filters."""

from fastapi import APIRouter

from winejournal import constants

router = APIRouter()


@router.get("/tasting-options")
async def tasting_options() -> dict:
    return constants.tasting_options()


@router.get("/regions")
async def regions() -> list[str]:
    return constants.POPULAR_REGIONS


@router.get("/grapes")
async def grapes() -> list[str]:
    return constants.POPULAR_GRAPES


@router.get("/south-africa")
async def south_africa_regions() -> list[dict]:
    return constants.SOUTH_AFRICA_REGIONS


@router.get("/rating-labels")
async def rating_labels() -> dict[str, str]:
    return {str(stars): label for stars, label in constants.RATING_LABELS.items()}


@router.get("/price-ranges")
async def price_ranges() -> list[dict]:
    return [
        {"label": label, "min": low, "max": high}
        for label, low, high in constants.PRICE_RANGES
    ]


@router.get("/weather-pairings")
async def weather_pairings() -> dict:
    return constants.WEATHER_WINE_PAIRINGS
