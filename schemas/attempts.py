from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SubmissionRequest(BaseModel):
    answers: dict[str, str | None] = Field(default_factory=dict)  # question id -> A/B/C/D
    elapsed_seconds: int | None = Field(default=None, ge=0)
    # checked by the engine so a blank name is reported as invalid input, not a 422
    username: str | None = None


class AnswerReview(BaseModel):
    question_id: str
    question_text: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_option: str | None = None
    selected_option: str | None = None
    is_correct: bool
    marks_obtained: int


class AttemptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    participant_id: int
    participant_name: str
    quiz_id: int
    quiz_title: str
    quiz_total_marks: int | None = None
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    elapsed_seconds: int | None = None
    completed_at: datetime | None
    # usually excluded in list views
    answer_reviews: list[AnswerReview] | None = None
