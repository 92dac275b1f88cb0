"""Weekly quiz — generated, answered question by question, then frozen."""

from datetime import datetime
from enum import Enum
from typing import List
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from manul_manor.clock import ensure_aware


class QuizStatus(str, Enum):
    GENERATED = "generated"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuizQuestion(BaseModel):
    prompt: str
    options: List[str]
    correct_index: int = Field(ge=0)
    explanation: str = ""

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct_index]


def new_quiz_id() -> str:
    return f"quiz_{uuid4().hex[:12]}"


class Quiz(BaseModel):
    id: str = Field(default_factory=new_quiz_id)
    title: str
    created_at: datetime
    questions: List[QuizQuestion]
    is_completed: bool = False
    score: int = 0
    answered: List[int] = []                # Question indices already submitted

    @field_validator("created_at")
    @classmethod
    def _aware_created_at(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def max_score(self) -> int:
        return len(self.questions)

    @property
    def status(self) -> QuizStatus:
        if self.is_completed:
            return QuizStatus.COMPLETED
        if self.answered:
            return QuizStatus.IN_PROGRESS
        return QuizStatus.GENERATED
