"""Wine photo upload endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import File, HTTPException, UploadFile

from winejournal.schemas.wine import WineResponse
from winejournal.services.auth import RequireAuth
from winejournal.services.image_storage import ImageStorageError

from ._common import get_owned_wine, image_storage

logger = logging.getLogger(__name__)


async def upload_wine_image(
    wine_id: str,
    current_user: RequireAuth,
    image: UploadFile = File(...),
) -> WineResponse:
    """Attach a photo to a wine, replacing any previous one."""
    wine = await get_owned_wine(wine_id, current_user)

    try:
        filename = await image_storage.save_image(image)
    except ImageStorageError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    previous = image_storage.filename_from_url(wine.image_url)
    if previous:
        await image_storage.delete_image(previous)

    wine.image_url = image_storage.get_image_url(filename)
    wine.updated_at = datetime.now(timezone.utc)
    await wine.save()
    return WineResponse.model_validate(wine)


async def delete_wine_image(
    wine_id: str,
    current_user: RequireAuth,
) -> WineResponse:
    wine = await get_owned_wine(wine_id, current_user)

    filename = image_storage.filename_from_url(wine.image_url)
    if filename:
        await image_storage.delete_image(filename)
    wine.image_url = None
    wine.updated_at = datetime.now(timezone.utc)
    await wine.save()
    return WineResponse.model_validate(wine)
