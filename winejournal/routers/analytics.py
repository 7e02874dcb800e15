"""Collection analytics and taste insights."""

from fastapi import APIRouter, Query

from winejournal.models import Wine
from winejournal.schemas.analytics import InsightsResponse, WineAnalytics
from winejournal.services.analytics import (
    TimeRange,
    calculate_analytics,
    filter_wines_by_time_range,
)
from winejournal.services.auth import RequireAuth
from winejournal.services.insights import derive_preferences, generate_insights

router = APIRouter()


@router.get("", response_model=WineAnalytics)
async def get_analytics(
    current_user: RequireAuth,
    time_range: TimeRange = Query("all", alias="range"),
) -> WineAnalytics:
    """Summary statistics over the wines tasted in the selected range."""
    wines = await Wine.find(Wine.owner_id == current_user.id).to_list()
    return calculate_analytics(filter_wines_by_time_range(wines, time_range))


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(current_user: RequireAuth) -> InsightsResponse:
    wines = await Wine.find(Wine.owner_id == current_user.id).to_list()
    preferences = derive_preferences(wines)
    return InsightsResponse(
        preferences=preferences,
        insights=generate_insights(wines, preferences),
    )
