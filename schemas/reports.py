from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    participant: str
    total_attempts: int
    total_score: int
    average_score: float
    last_activity: datetime | None = None


class PerformanceRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    quiz_id: int
    quiz_title: str
    total_attempts: int
    average_score: float
    highest_score: int
    lowest_score: int


class QuizHistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    quiz_id: int
    quiz_title: str
    total_questions: int
    attempt_count: int
    best_score: int
    average_score: float
    latest_score: int
    first_attempt: datetime | None = None
    last_attempt: datetime | None = None


class DashboardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_quizzes: int
    total_participants: int
    total_questions: int
    total_results: int
    average_score: float
    highest_score: int


class ParticipantStatsOut(BaseModel):
    id: int
    username: str
    display_name: str | None = None
    created_at: datetime | None = None
    total_attempts: int
    average_score: float
    best_score: int
