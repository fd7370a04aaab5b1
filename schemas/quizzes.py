from datetime import datetime

from pydantic import BaseModel, ConfigDict


class QuizOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str
    description: str | None = None
    duration_minutes: int | None = None
    difficulty: str
    total_marks: int | None = None
    is_active: bool
    created_at: datetime | None = None


class QuestionOut(BaseModel):
    """Question as shown to a participant: the correct option is never included."""

    model_config = ConfigDict(from_attributes=True)
    id: str
    quiz_id: int
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    marks: int
