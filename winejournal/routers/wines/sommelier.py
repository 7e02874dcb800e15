"""AI sommelier endpoints for a single logged wine."""

from winejournal.schemas.ai import ListResponse, TextResponse, WineAnalysis
from winejournal.services.ai import sommelier_service
from winejournal.services.auth import RequireAuth

from ._common import get_owned_wine


async def wine_tasting_notes(wine_id: str, current_user: RequireAuth) -> TextResponse:
    wine = await get_owned_wine(wine_id, current_user)
    return TextResponse(text=await sommelier_service.generate_tasting_notes(wine))


async def wine_description(wine_id: str, current_user: RequireAuth) -> TextResponse:
    wine = await get_owned_wine(wine_id, current_user)
    return TextResponse(text=await sommelier_service.generate_description(wine))


async def wine_food_pairings(wine_id: str, current_user: RequireAuth) -> ListResponse:
    wine = await get_owned_wine(wine_id, current_user)
    return ListResponse(items=await sommelier_service.generate_food_pairings(wine))


async def wine_improvements(wine_id: str, current_user: RequireAuth) -> ListResponse:
    wine = await get_owned_wine(wine_id, current_user)
    return ListResponse(items=await sommelier_service.suggest_improvements(wine))


async def wine_analysis(wine_id: str, current_user: RequireAuth) -> WineAnalysis:
    wine = await get_owned_wine(wine_id, current_user)
    return await sommelier_service.analyze_wine(wine)
