"""Pydantic schemas for the training centre."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class TrainingModule(BaseModel):
    id: str
    title: str
    description: str
    type: Literal["quiz", "simulation", "microlearning"]
    difficulty: Literal["beginner", "intermediate", "advanced"]
    duration: int  # minutes
    region: str
    completed: bool = False
    score: float | None = None
    total_questions: int | None = None


class QuizQuestion(BaseModel):
    """A quiz question without its answer."""

    id: str
    question: str
    options: list[str]
    region: str
    category: Literal["wine-knowledge", "pairing", "service", "upselling"]


class Simulation(BaseModel):
    id: str
    title: str
    scenario: str
    guest_profile: str
    wine_options: list[str]
    correct_response: str
    tips: list[str]


class QuizSubmission(BaseModel):
    """Answers keyed by question id; values are option indexes."""

    answers: dict[str, int] = Field(default_factory=dict)


class QuestionResult(BaseModel):
    question_id: str
    selected: int | None
    correct_answer: int
    is_correct: bool
    explanation: str


class QuizResult(BaseModel):
    module_id: str
    correct: int
    total_questions: int
    score: float
    results: list[QuestionResult]
    completed_at: datetime


class TrainingProgressResponse(BaseModel):
    total_modules: int
    completed_modules: int
    average_score: float
    total_time_spent: int
    certifications: list[str]
