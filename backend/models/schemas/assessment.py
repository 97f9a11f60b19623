"""Questionnaire contracts: questions, responses, and the trait scores they produce."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, field_validator


class Question(BaseModel):
    """A single weighted questionnaire item.

    ``weights`` maps a trait name to a signed weight. Trait names are open
    ended; only the canonical eight end up in the fixed trait vector.
    """
    id: str
    module_id: str = ""
    type: Literal["likert", "multiple-choice"] = "likert"
    text: str = ""
    options: list[str] = []  # multiple-choice only
    weights: dict[str, float] = {}

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: str) -> str:
        # Older catalogs spell multiple-choice as "mcq"
        if isinstance(value, str) and value.lower() in ("mcq", "multiple_choice"):
            return "multiple-choice"
        return value


class AssessmentModule(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    order: int = 0
    questions: list[Question] = []


class Assessment(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    modules: list[AssessmentModule] = []

    def questions(self) -> list[Question]:
        """All questions, in module order."""
        ordered = sorted(self.modules, key=lambda m: m.order)
        return [q for module in ordered for q in module.questions]


class Response(BaseModel):
    """A user's answer: 1-5 for Likert, the selected option text for multiple-choice."""
    question_id: str
    value: int | float | str | None = None
    timestamp: datetime | None = None


class TraitScores(BaseModel):
    """Fixed 8-slot trait vector plus the open-ended named summary."""
    trait_vector: list[float] = []
    trait_summary: dict[str, float] = {}


class AssessmentAttempt(BaseModel):
    id: str
    user_id: str
    assessment_id: str
    responses: list[Response] = []
    current_module_index: int = 0
    trait_vector: list[float] = []
    trait_summary: dict[str, float] = {}
    created_at: datetime
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
