"""AI sommelier endpoints that are not tied to a single wine."""

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from winejournal.models import Wine
from winejournal.schemas.ai import (
    AIRecommendation,
    ListResponse,
    PairingRequest,
    TextResponse,
    TranscriptionResponse,
    WineDescriptor,
)
from winejournal.services.ai import TRANSCRIPTION_PLACEHOLDER, sommelier_service
from winejournal.services.auth import RequireAuth

router = APIRouter()

MAX_AUDIO_BYTES = 10 * 1024 * 1024


@router.get("/status")
async def ai_status(current_user: RequireAuth) -> dict:
    return {"available": sommelier_service.is_available()}


@router.post("/food-pairings", response_model=ListResponse)
async def food_pairings(request: PairingRequest, current_user: RequireAuth) -> ListResponse:
    return ListResponse(items=await sommelier_service.suggest_food_pairings(request.grape, request.region))


@router.post("/tasting-notes", response_model=TextResponse)
async def tasting_notes(wine: WineDescriptor, current_user: RequireAuth) -> TextResponse:
    """Tasting notes for a wine that has not been logged yet."""
    return TextResponse(text=await sommelier_service.generate_tasting_notes(wine))


@router.get("/recommendations", response_model=list[AIRecommendation])
async def recommendations(current_user: RequireAuth) -> list[AIRecommendation]:
    """Personalized recommendations from the user's journal and stated preferences."""
    wines = await Wine.find(Wine.owner_id == current_user.id).sort(-Wine.timestamp).limit(50).to_list()
    preferences = current_user.preferences
    return await sommelier_service.get_personalized_recommendations(
        wines,
        regions=preferences.favorite_regions,
        grapes=preferences.favorite_grapes,
    )


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe(
    current_user: RequireAuth,
    audio: UploadFile = File(...),
) -> TranscriptionResponse:
    content = await audio.read(MAX_AUDIO_BYTES + 1)
    if len(content) > MAX_AUDIO_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Audio file exceeds maximum allowed size of 10.0 MB",
        )
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty audio file")

    text = await sommelier_service.transcribe_voice_note(content)
    return TranscriptionResponse(text=text, available=text != TRANSCRIPTION_PLACEHOLDER)
