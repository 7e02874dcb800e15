"""Shared helpers and service instances for wine endpoints."""

import logging

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status
from pydantic import ValidationError

from winejournal.models import User, Wine
from winejournal.services.image_storage import ImageStorageService

logger = logging.getLogger(__name__)

image_storage = ImageStorageService()


async def get_owned_wine(wine_id: str, current_user: User) -> Wine:
    """Load one of the current user's wines.

    Raises:
        HTTPException: 404 when the id is malformed or the wine belongs to
            someone else.
    """
    try:
        wine = await Wine.find_one(
            Wine.id == PydanticObjectId(wine_id),
            Wine.owner_id == current_user.id,
        )
    except (InvalidId, ValidationError) as e:
        logger.debug("Invalid wine ID format: %s - %s", wine_id, e)
        wine = None

    if not wine:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wine with ID {wine_id} not found",
        )
    return wine
