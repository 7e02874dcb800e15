"""Serves stored wine photos."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

from winejournal.routers.wines._common import image_storage

router = APIRouter()


@router.get("/{filename}")
async def get_image(filename: str) -> FileResponse:
    file_path = image_storage.get_image_path(filename)
    if file_path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return FileResponse(file_path, headers={"Cache-Control": "private, max-age=86400"})
