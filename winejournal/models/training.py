"""Training progress document model."""

from datetime import datetime, timezone

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field


class ModuleResult(BaseModel):
    """Embedded subdocument: the latest result for one training module."""

    module_id: str
    score: float | None = None  # percentage 0-100; None for unscored modules
    total_questions: int = 0
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TrainingProgress(Document):
    """Per-user training centre progress."""

    owner_id: Indexed(PydanticObjectId, unique=True)
    results: list[ModuleResult] = Field(default_factory=list)
    total_time_spent: int = 0  # minutes

    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "training_progress"

    def result_for(self, module_id: str) -> ModuleResult | None:
        for result in self.results:
            if result.module_id == module_id:
                return result
        return None
