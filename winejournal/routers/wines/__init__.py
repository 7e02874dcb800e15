"""Wine journal router package."""

from fastapi import APIRouter

from .crud import create_wine, delete_wine, get_wine, list_wines, update_wine
from .photos import delete_wine_image, upload_wine_image
from .sommelier import (
    wine_analysis,
    wine_description,
    wine_food_pairings,
    wine_improvements,
    wine_tasting_notes,
)

router = APIRouter()

# CRUD endpoints
router.add_api_route("", list_wines, methods=["GET"])
router.add_api_route("", create_wine, methods=["POST"], status_code=201)
router.add_api_route("/{wine_id}", get_wine, methods=["GET"])
router.add_api_route("/{wine_id}", update_wine, methods=["PUT"])
router.add_api_route("/{wine_id}", delete_wine, methods=["DELETE"], status_code=204)

# Photo endpoints
router.add_api_route("/{wine_id}/image", upload_wine_image, methods=["POST"])
router.add_api_route("/{wine_id}/image", delete_wine_image, methods=["DELETE"])

# AI sommelier endpoints
router.add_api_route("/{wine_id}/ai/tasting-notes", wine_tasting_notes, methods=["GET"])
router.add_api_route("/{wine_id}/ai/description", wine_description, methods=["GET"])
router.add_api_route("/{wine_id}/ai/food-pairings", wine_food_pairings, methods=["GET"])
router.add_api_route("/{wine_id}/ai/improvements", wine_improvements, methods=["GET"])
router.add_api_route("/{wine_id}/ai/analysis", wine_analysis, methods=["GET"])

__all__ = ["router"]
