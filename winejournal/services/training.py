"""Training centre: module catalog, quiz grading and progress."""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from beanie import PydanticObjectId

from winejournal.constants import CERTIFICATIONS, QUIZ_QUESTIONS, SIMULATIONS, TRAINING_MODULES
from winejournal.models import ModuleResult, TrainingProgress
from winejournal.schemas.training import (
    QuestionResult,
    QuizQuestion,
    QuizResult,
    Simulation,
    TrainingModule,
    TrainingProgressResponse,
)

logger = logging.getLogger(__name__)


def get_module(module_id: str) -> dict | None:
    for module in TRAINING_MODULES:
        if module["id"] == module_id:
            return module
    return None


def questions_for(module: Mapping) -> list[dict]:
    """Quiz questions of the module's region; Global modules draw on every region."""
    if module["region"] == "Global":
        return list(QUIZ_QUESTIONS)
    return [q for q in QUIZ_QUESTIONS if q["region"] == module["region"]]


def public_questions(module: Mapping) -> list[QuizQuestion]:
    return [QuizQuestion.model_validate(q) for q in questions_for(module)]


def get_simulation(module_id: str) -> Simulation | None:
    data = SIMULATIONS.get(module_id)
    return Simulation.model_validate(data) if data else None


def list_modules(progress: TrainingProgress | None) -> list[TrainingModule]:
    """The catalog annotated with the user's completion state."""
    modules = []
    for data in TRAINING_MODULES:
        module = TrainingModule.model_validate(data)
        result = progress.result_for(module.id) if progress else None
        if result is not None:
            module.completed = True
            module.score = result.score
            module.total_questions = result.total_questions
        modules.append(module)
    return modules


def grade_quiz(
    module: Mapping,
    answers: Mapping[str, int],
    now: datetime | None = None,
) -> QuizResult:
    """Score submitted answers against the module's questions.

    Unanswered questions count as wrong. The score is a percentage.
    """
    questions = questions_for(module)
    results = []
    for question in questions:
        selected = answers.get(question["id"])
        results.append(QuestionResult(
            question_id=question["id"],
            selected=selected,
            correct_answer=question["correct_answer"],
            is_correct=selected == question["correct_answer"],
            explanation=question["explanation"],
        ))

    correct = sum(1 for r in results if r.is_correct)
    total = len(results)
    return QuizResult(
        module_id=module["id"],
        correct=correct,
        total_questions=total,
        score=round(correct / total * 100, 1) if total else 0.0,
        results=results,
        completed_at=now or datetime.now(timezone.utc),
    )


async def get_progress(owner_id: PydanticObjectId) -> TrainingProgress | None:
    return await TrainingProgress.find_one(TrainingProgress.owner_id == owner_id)


async def record_completion(
    owner_id: PydanticObjectId,
    module: Mapping,
    score: float | None = None,
    total_questions: int = 0,
) -> TrainingProgress:
    """Store the latest result for a module.

    Retaking a module replaces its result; its duration counts towards time
    spent only the first time it is completed.
    """
    progress = await get_progress(owner_id)
    if progress is None:
        progress = TrainingProgress(owner_id=owner_id)

    result = ModuleResult(module_id=module["id"], score=score, total_questions=total_questions)
    previous = progress.result_for(module["id"])
    if previous is None:
        progress.results.append(result)
        progress.total_time_spent += module["duration"]
    else:
        progress.results[progress.results.index(previous)] = result

    progress.updated_at = datetime.now(timezone.utc)
    await progress.save()
    logger.info("Training module %s completed (user=%s, score=%s)", module["id"], owner_id, score)
    return progress


def earned_certifications(completed: set[str]) -> list[str]:
    regions: dict[str, list[str]] = {}
    for module in TRAINING_MODULES:
        regions.setdefault(module["region"], []).append(module["id"])
    return [
        CERTIFICATIONS[region]
        for region, module_ids in regions.items()
        if region in CERTIFICATIONS and all(m in completed for m in module_ids)
    ]


def calculate_progress(progress: TrainingProgress | None) -> TrainingProgressResponse:
    results = progress.results if progress else []
    known = {m["id"] for m in TRAINING_MODULES}
    completed = {r.module_id for r in results if r.module_id in known}
    scores = [r.score for r in results if r.module_id in known and r.score is not None]
    return TrainingProgressResponse(
        total_modules=len(TRAINING_MODULES),
        completed_modules=len(completed),
        average_score=round(sum(scores) / len(scores), 1) if scores else 0.0,
        total_time_spent=progress.total_time_spent if progress else 0,
        certifications=earned_certifications(completed),
    )
