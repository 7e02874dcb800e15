"""Tasting session endpoints."""

import logging
from datetime import datetime, timezone

from beanie import PydanticObjectId
from beanie.operators import In
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from winejournal.models import TastingSession, User, Wine
from winejournal.schemas.ai import TextResponse
from winejournal.schemas.tasting import (
    SessionWine,
    TastingSessionCreate,
    TastingSessionResponse,
    TastingSessionUpdate,
)
from winejournal.services.ai import sommelier_service
from winejournal.services.auth import RequireAuth

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_owned_session(session_id: str, current_user: User) -> TastingSession:
    try:
        session = await TastingSession.find_one(
            TastingSession.id == PydanticObjectId(session_id),
            TastingSession.owner_id == current_user.id,
        )
    except (InvalidId, ValidationError):
        session = None
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tasting session with ID {session_id} not found",
        )
    return session


async def _resolve_wine_ids(wine_ids: list[str], current_user: User) -> list[PydanticObjectId]:
    """Check that every id names one of the user's wines; keeps order, drops duplicates."""
    try:
        ids = list(dict.fromkeys(PydanticObjectId(wine_id) for wine_id in wine_ids))
    except (InvalidId, ValidationError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid wine ID in wine_ids",
        )
    if not ids:
        return []

    found = await Wine.find(Wine.owner_id == current_user.id, In(Wine.id, ids)).to_list()
    missing = set(ids) - {wine.id for wine in found}
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown wine IDs: {', '.join(sorted(str(m) for m in missing))}",
        )
    return ids


async def _session_wines(session: TastingSession) -> list[Wine]:
    if not session.wine_ids:
        return []
    wines = await Wine.find(
        Wine.owner_id == session.owner_id,
        In(Wine.id, session.wine_ids),
    ).to_list()
    by_id = {wine.id: wine for wine in wines}
    return [by_id[wine_id] for wine_id in session.wine_ids if wine_id in by_id]


async def _to_response(session: TastingSession) -> TastingSessionResponse:
    response = TastingSessionResponse.model_validate(session)
    response.wines = [SessionWine.model_validate(wine) for wine in await _session_wines(session)]
    return response


@router.get("", response_model=list[TastingSessionResponse])
async def list_sessions(
    current_user: RequireAuth,
    upcoming: bool | None = None,
) -> list[TastingSessionResponse]:
    """List tasting sessions, newest first. ``upcoming`` filters by date."""
    query = TastingSession.find(TastingSession.owner_id == current_user.id)
    now = datetime.now(timezone.utc)
    if upcoming is True:
        query = query.find(TastingSession.date >= now)
    elif upcoming is False:
        query = query.find(TastingSession.date < now)
    sessions = await query.sort(-TastingSession.date).to_list()
    return [await _to_response(session) for session in sessions]


@router.post("", response_model=TastingSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_in: TastingSessionCreate,
    current_user: RequireAuth,
) -> TastingSessionResponse:
    wine_ids = await _resolve_wine_ids(session_in.wine_ids, current_user)
    session = TastingSession(
        owner_id=current_user.id,
        **session_in.model_dump(exclude={"wine_ids"}),
        wine_ids=wine_ids,
    )
    await session.insert()
    logger.info("Tasting session created (id=%s, wines=%d)", session.id, len(wine_ids))
    return await _to_response(session)


@router.get("/{session_id}", response_model=TastingSessionResponse)
async def get_session(session_id: str, current_user: RequireAuth) -> TastingSessionResponse:
    return await _to_response(await _get_owned_session(session_id, current_user))


@router.put("/{session_id}", response_model=TastingSessionResponse)
async def update_session(
    session_id: str,
    session_update: TastingSessionUpdate,
    current_user: RequireAuth,
) -> TastingSessionResponse:
    session = await _get_owned_session(session_id, current_user)

    update_data = session_update.model_dump(exclude_unset=True)
    for field in ("name", "date", "participants", "notes"):
        if update_data.get(field, ...) is None:
            del update_data[field]
    if "wine_ids" in update_data:
        update_data["wine_ids"] = await _resolve_wine_ids(update_data["wine_ids"] or [], current_user)
    for field, value in update_data.items():
        setattr(session, field, value)

    session.updated_at = datetime.now(timezone.utc)
    await session.save()
    return await _to_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, current_user: RequireAuth) -> None:
    session = await _get_owned_session(session_id, current_user)
    await session.delete()


@router.get("/{session_id}/insights", response_model=TextResponse)
async def session_insights(session_id: str, current_user: RequireAuth) -> TextResponse:
    """AI commentary on a tasting session."""
    session = await _get_owned_session(session_id, current_user)
    wines = await _session_wines(session)
    return TextResponse(text=await sommelier_service.generate_session_insights(session, wines))
