"""Wine journal CRUD endpoints."""

import logging
import re
from datetime import datetime, timezone

from fastapi import Query
from beanie.operators import RegEx

from winejournal.models import Wine
from winejournal.schemas.wine import WineCreate, WineResponse, WineUpdate
from winejournal.services.auth import RequireAuth
from winejournal.services.telemetry import posthog_service

from ._common import get_owned_wine, image_storage

logger = logging.getLogger(__name__)


async def list_wines(
    current_user: RequireAuth,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    q: str | None = Query(None, max_length=100, description="Case-insensitive name search"),
    grape: str | None = None,
    region: str | None = None,
    min_rating: float | None = Query(None, ge=0, le=5),
    in_cellar: bool | None = None,
) -> list[WineResponse]:
    """List the current user's wines, most recently tasted first."""
    query = Wine.find(Wine.owner_id == current_user.id)
    if q:
        query = query.find(RegEx(Wine.name, re.escape(q), "i"))
    if grape:
        query = query.find(Wine.grape == grape)
    if region:
        query = query.find(Wine.region == region)
    if min_rating is not None:
        query = query.find(Wine.rating >= min_rating)
    if in_cellar is not None:
        query = query.find(Wine.in_cellar == in_cellar)

    wines = await query.sort(-Wine.timestamp).skip(skip).limit(limit).to_list()
    return [WineResponse.model_validate(wine) for wine in wines]


async def create_wine(
    current_user: RequireAuth,
    wine_in: WineCreate,
) -> WineResponse:
    """Log a wine in the current user's journal."""
    data = wine_in.model_dump(exclude={"timestamp"})
    wine = Wine(owner_id=current_user.id, **data)
    if wine_in.timestamp is not None:
        wine.timestamp = wine_in.timestamp
    await wine.insert()

    logger.info("Wine logged (id=%s, user=%s)", wine.id, current_user.id)
    posthog_service.capture(
        distinct_id=str(current_user.id),
        event="wine_logged",
        properties={"has_tasting_notes": bool(wine_in.tasting.notes), "rating": wine.rating},
    )
    return WineResponse.model_validate(wine)


async def get_wine(
    wine_id: str,
    current_user: RequireAuth,
) -> WineResponse:
    wine = await get_owned_wine(wine_id, current_user)
    return WineResponse.model_validate(wine)


async def update_wine(
    wine_id: str,
    current_user: RequireAuth,
    wine_update: WineUpdate,
) -> WineResponse:
    """Update wine metadata or tasting notes. Only supplied fields change."""
    wine = await get_owned_wine(wine_id, current_user)

    update_data = wine_update.model_dump(exclude_unset=True)
    # These fields cannot be cleared, so an explicit null leaves them unchanged
    for field in ("name", "rating", "in_cellar", "timestamp", "tasting"):
        if update_data.get(field, ...) is None:
            del update_data[field]
    if "tasting" in update_data:
        update_data["tasting"] = wine_update.tasting
    for field, value in update_data.items():
        setattr(wine, field, value)

    wine.updated_at = datetime.now(timezone.utc)
    await wine.save()
    return WineResponse.model_validate(wine)


async def delete_wine(
    wine_id: str,
    current_user: RequireAuth,
) -> None:
    """Delete a wine and its photo."""
    wine = await get_owned_wine(wine_id, current_user)

    filename = image_storage.filename_from_url(wine.image_url)
    if filename:
        await image_storage.delete_image(filename)

    await wine.delete()
    logger.info("Wine deleted (id=%s, user=%s)", wine_id, current_user.id)
