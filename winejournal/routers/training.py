"""Training centre endpoints."""

from fastapi import APIRouter, HTTPException, status

from winejournal.schemas.training import (
    QuizQuestion,
    QuizResult,
    QuizSubmission,
    Simulation,
    TrainingModule,
    TrainingProgressResponse,
)
from winejournal.services import training
from winejournal.services.auth import RequireAuth
from winejournal.services.telemetry import posthog_service

router = APIRouter()


def _get_module(module_id: str) -> dict:
    module = training.get_module(module_id)
    if module is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Training module with ID {module_id} not found",
        )
    return module


@router.get("/modules", response_model=list[TrainingModule])
async def list_modules(current_user: RequireAuth) -> list[TrainingModule]:
    progress = await training.get_progress(current_user.id)
    return training.list_modules(progress)


@router.get("/modules/{module_id}/questions", response_model=list[QuizQuestion])
async def quiz_questions(module_id: str, current_user: RequireAuth) -> list[QuizQuestion]:
    """Questions for a quiz module, without their answers."""
    module = _get_module(module_id)
    if module["type"] != "quiz":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module is not a quiz")
    return training.public_questions(module)


@router.get("/modules/{module_id}/simulation", response_model=Simulation)
async def module_simulation(module_id: str, current_user: RequireAuth) -> Simulation:
    _get_module(module_id)
    simulation = training.get_simulation(module_id)
    if simulation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No simulation for training module {module_id}",
        )
    return simulation


@router.post("/modules/{module_id}/submit", response_model=QuizResult)
async def submit_quiz(
    module_id: str,
    submission: QuizSubmission,
    current_user: RequireAuth,
) -> QuizResult:
    module = _get_module(module_id)
    if module["type"] != "quiz":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module is not a quiz")

    result = training.grade_quiz(module, submission.answers)
    await training.record_completion(current_user.id, module, result.score, result.total_questions)
    posthog_service.capture(
        distinct_id=str(current_user.id),
        event="training_quiz_completed",
        properties={"module_id": module_id, "score": result.score},
    )
    return result


@router.post("/modules/{module_id}/complete", response_model=TrainingModule)
async def complete_module(module_id: str, current_user: RequireAuth) -> TrainingModule:
    """Mark a simulation or microlearning module as done."""
    module = _get_module(module_id)
    if module["type"] == "quiz":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Quiz modules are completed by submitting answers",
        )
    progress = await training.record_completion(current_user.id, module)
    return next(m for m in training.list_modules(progress) if m.id == module_id)


@router.get("/progress", response_model=TrainingProgressResponse)
async def get_progress(current_user: RequireAuth) -> TrainingProgressResponse:
    return training.calculate_progress(await training.get_progress(current_user.id))
