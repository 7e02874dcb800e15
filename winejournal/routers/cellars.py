"""Cellar and cellar inventory endpoints."""

import logging
from datetime import datetime, timezone

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from winejournal.config import settings
from winejournal.models import Cellar, CellarWine, User
from winejournal.schemas.analytics import (
    CellarAnalytics,
    CellarRecommendation,
    DrinkWindowSummary,
)
from winejournal.schemas.cellar import (
    CellarCreate,
    CellarResponse,
    CellarUpdate,
    CellarWineCreate,
    CellarWineResponse,
    CellarWineUpdate,
)
from winejournal.services.auth import RequireAuth
from winejournal.services.cellar_analytics import (
    calculate_cellar_analytics,
    generate_recommendations,
)
from winejournal.services.drink_window import build_alerts, summarize_alerts

logger = logging.getLogger(__name__)

router = APIRouter()


def _object_id(value: str) -> PydanticObjectId | None:
    try:
        return PydanticObjectId(value)
    except (InvalidId, ValidationError, TypeError):
        return None


async def _get_owned_cellar(cellar_id: str, current_user: User) -> Cellar:
    oid = _object_id(cellar_id)
    cellar = None
    if oid is not None:
        cellar = await Cellar.find_one(Cellar.id == oid, Cellar.owner_id == current_user.id)
    if not cellar:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cellar with ID {cellar_id} not found",
        )
    return cellar


async def _get_cellar_wine(cellar: Cellar, wine_id: str) -> CellarWine:
    oid = _object_id(wine_id)
    wine = None
    if oid is not None:
        wine = await CellarWine.find_one(CellarWine.id == oid, CellarWine.cellar_id == cellar.id)
    if not wine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cellar wine with ID {wine_id} not found",
        )
    return wine


def _cellar_response(cellar: Cellar, bottle_count: int = 0) -> CellarResponse:
    response = CellarResponse.model_validate(cellar)
    response.bottle_count = bottle_count
    return response


async def _bottle_count(cellar: Cellar, exclude: PydanticObjectId | None = None) -> int:
    wines = await CellarWine.find(CellarWine.cellar_id == cellar.id).to_list()
    return sum(
        wine.quantity for wine in wines
        if not wine.is_opened and wine.id != exclude
    )


def _capacity_exceeded(stored: int, cellar: Cellar) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Cellar capacity exceeded ({stored}/{cellar.capacity} bottles stored)",
    )


# ============================================================================
# Drink-window alerts (across all of the user's cellars)
# ============================================================================


@router.get("/alerts", response_model=DrinkWindowSummary)
async def get_drink_window_alerts(current_user: RequireAuth) -> DrinkWindowSummary:
    """Unopened wines approaching their drink-by date, soonest first."""
    wines = await CellarWine.find(CellarWine.owner_id == current_user.id).to_list()
    return summarize_alerts(build_alerts(wines, settings.notifications))


@router.post("/alerts/{wine_id}/dismiss", response_model=CellarWineResponse)
async def dismiss_drink_window_alert(wine_id: str, current_user: RequireAuth) -> CellarWineResponse:
    oid = _object_id(wine_id)
    wine = None
    if oid is not None:
        wine = await CellarWine.find_one(CellarWine.id == oid, CellarWine.owner_id == current_user.id)
    if not wine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cellar wine with ID {wine_id} not found",
        )
    wine.drink_alert_dismissed = True
    wine.updated_at = datetime.now(timezone.utc)
    await wine.save()
    return CellarWineResponse.model_validate(wine)


# ============================================================================
# Cellars
# ============================================================================


@router.get("", response_model=list[CellarResponse])
async def list_cellars(current_user: RequireAuth) -> list[CellarResponse]:
    cellars = await Cellar.find(Cellar.owner_id == current_user.id).sort(Cellar.name).to_list()
    wines = await CellarWine.find(CellarWine.owner_id == current_user.id).to_list()

    counts: dict[PydanticObjectId, int] = {}
    for wine in wines:
        if not wine.is_opened:
            counts[wine.cellar_id] = counts.get(wine.cellar_id, 0) + wine.quantity

    return [_cellar_response(cellar, counts.get(cellar.id, 0)) for cellar in cellars]


@router.post("", response_model=CellarResponse, status_code=status.HTTP_201_CREATED)
async def create_cellar(cellar_in: CellarCreate, current_user: RequireAuth) -> CellarResponse:
    cellar = Cellar(owner_id=current_user.id, **cellar_in.model_dump())
    await cellar.insert()
    logger.info("Cellar created (id=%s, user=%s)", cellar.id, current_user.id)
    return _cellar_response(cellar)


@router.get("/{cellar_id}", response_model=CellarResponse)
async def get_cellar(cellar_id: str, current_user: RequireAuth) -> CellarResponse:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    return _cellar_response(cellar, await _bottle_count(cellar))


@router.put("/{cellar_id}", response_model=CellarResponse)
async def update_cellar(
    cellar_id: str,
    cellar_update: CellarUpdate,
    current_user: RequireAuth,
) -> CellarResponse:
    cellar = await _get_owned_cellar(cellar_id, current_user)

    update_data = cellar_update.model_dump(exclude_unset=True)
    for field in ("name", "location", "capacity"):
        if update_data.get(field, ...) is None:
            del update_data[field]
    for field, value in update_data.items():
        setattr(cellar, field, value)

    cellar.updated_at = datetime.now(timezone.utc)
    await cellar.save()
    return _cellar_response(cellar, await _bottle_count(cellar))


@router.delete("/{cellar_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cellar(cellar_id: str, current_user: RequireAuth) -> None:
    """Delete a cellar together with its inventory."""
    cellar = await _get_owned_cellar(cellar_id, current_user)
    await CellarWine.find(CellarWine.cellar_id == cellar.id).delete()
    await cellar.delete()
    logger.info("Cellar deleted (id=%s, user=%s)", cellar_id, current_user.id)


# ============================================================================
# Cellar inventory
# ============================================================================


@router.get("/{cellar_id}/wines", response_model=list[CellarWineResponse])
async def list_cellar_wines(
    cellar_id: str,
    current_user: RequireAuth,
    include_opened: bool = False,
) -> list[CellarWineResponse]:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    query = CellarWine.find(CellarWine.cellar_id == cellar.id)
    if not include_opened:
        query = query.find(CellarWine.is_opened == False)  # noqa: E712
    wines = await query.sort(CellarWine.name).to_list()
    return [CellarWineResponse.model_validate(wine) for wine in wines]


@router.post(
    "/{cellar_id}/wines",
    response_model=CellarWineResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_cellar_wine(
    cellar_id: str,
    wine_in: CellarWineCreate,
    current_user: RequireAuth,
) -> CellarWineResponse:
    cellar = await _get_owned_cellar(cellar_id, current_user)

    if cellar.capacity:
        stored = await _bottle_count(cellar)
        if stored + wine_in.quantity > cellar.capacity:
            raise _capacity_exceeded(stored, cellar)

    data = wine_in.model_dump(exclude_none=True)
    wine = CellarWine(cellar_id=cellar.id, owner_id=current_user.id, **data)
    await wine.insert()
    return CellarWineResponse.model_validate(wine)


@router.put("/{cellar_id}/wines/{wine_id}", response_model=CellarWineResponse)
async def update_cellar_wine(
    cellar_id: str,
    wine_id: str,
    wine_update: CellarWineUpdate,
    current_user: RequireAuth,
) -> CellarWineResponse:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    wine = await _get_cellar_wine(cellar, wine_id)

    update_data = wine_update.model_dump(exclude_unset=True)
    for field in (
        "name", "quantity", "purchase_date", "purchase_price",
        "storage_location", "aging_potential", "is_sustainable", "is_opened",
    ):
        if update_data.get(field, ...) is None:
            del update_data[field]

    held_before = 0 if wine.is_opened else wine.quantity
    for field, value in update_data.items():
        setattr(wine, field, value)
    held_after = 0 if wine.is_opened else wine.quantity

    # Reductions are always allowed, even in an over-full cellar
    if cellar.capacity and held_after > held_before:
        stored = await _bottle_count(cellar, exclude=wine.id)
        if stored + held_after > cellar.capacity:
            raise _capacity_exceeded(stored + held_before, cellar)

    if "drink_by_date" in update_data:
        # A new drink-by date re-arms the alert
        wine.drink_alert_dismissed = False
    if update_data.get("is_opened") and wine.opened_date is None:
        wine.opened_date = datetime.now(timezone.utc)

    wine.updated_at = datetime.now(timezone.utc)
    await wine.save()
    return CellarWineResponse.model_validate(wine)


@router.post("/{cellar_id}/wines/{wine_id}/open", response_model=CellarWineResponse)
async def open_bottle(
    cellar_id: str,
    wine_id: str,
    current_user: RequireAuth,
) -> CellarWineResponse:
    """Take one bottle out of the cellar. The last bottle marks the wine opened."""
    cellar = await _get_owned_cellar(cellar_id, current_user)
    wine = await _get_cellar_wine(cellar, wine_id)

    if wine.is_opened or wine.quantity <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No unopened bottles left",
        )

    wine.quantity -= 1
    now = datetime.now(timezone.utc)
    if wine.quantity == 0:
        wine.is_opened = True
        wine.opened_date = now
    wine.updated_at = now
    await wine.save()
    return CellarWineResponse.model_validate(wine)


@router.delete("/{cellar_id}/wines/{wine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_cellar_wine(cellar_id: str, wine_id: str, current_user: RequireAuth) -> None:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    wine = await _get_cellar_wine(cellar, wine_id)
    await wine.delete()


# ============================================================================
# Cellar analytics
# ============================================================================


@router.get("/{cellar_id}/analytics", response_model=CellarAnalytics)
async def get_cellar_analytics(cellar_id: str, current_user: RequireAuth) -> CellarAnalytics:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    wines = await CellarWine.find(
        CellarWine.cellar_id == cellar.id,
        CellarWine.is_opened == False,  # noqa: E712
    ).to_list()
    return calculate_cellar_analytics(wines)


@router.get("/{cellar_id}/recommendations", response_model=list[CellarRecommendation])
async def get_cellar_recommendations(
    cellar_id: str,
    current_user: RequireAuth,
) -> list[CellarRecommendation]:
    cellar = await _get_owned_cellar(cellar_id, current_user)
    wines = await CellarWine.find(
        CellarWine.cellar_id == cellar.id,
        CellarWine.is_opened == False,  # noqa: E712
    ).sort(CellarWine.name).to_list()
    return generate_recommendations(wines)
