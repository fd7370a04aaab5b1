from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LeaderboardEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    participant_id: int
    participant_name: str
    quiz_id: int | None = None
    quiz_title: str | None = None
    score: float
    total_questions: int | None = None
    percentage: float
    completed_at: datetime | None = None
    elapsed_seconds: int | None = None
    total_attempts: int
    rank: int


class LeaderboardStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_participants: int
    total_attempts: int
    average_score: float
    highest_score: int
    most_active_participant: str | None = None
    most_active_participant_attempts: int
