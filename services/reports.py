# Report rows are reshaped aggregation rollups; no numbers are computed here.
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from services import aggregation, catalog


@dataclass(frozen=True)
class ActivityRow:
    participant: str
    total_attempts: int
    total_score: int
    average_score: float
    last_activity: datetime | None


@dataclass(frozen=True)
class PerformanceRow:
    quiz_id: int
    quiz_title: str
    total_attempts: int
    average_score: float
    highest_score: int
    lowest_score: int


@dataclass(frozen=True)
class QuizHistorySummary:
    quiz_id: int
    quiz_title: str
    total_questions: int
    attempt_count: int
    best_score: int
    average_score: float
    latest_score: int
    first_attempt: datetime | None
    last_attempt: datetime | None


def _activity(rollup: list[aggregation.ParticipantRollup]) -> list[ActivityRow]:
    return [
        ActivityRow(
            participant=r.participant_name,
            total_attempts=r.attempts,
            total_score=r.total_score,
            average_score=r.average_score,
            last_activity=r.last_activity,
        )
        for r in rollup
    ]


def activity_report(db: Session) -> list[ActivityRow]:
    return _activity(aggregation.participant_rollup(db))


def recent_activity_report(db: Session, days: int) -> list[ActivityRow]:
    since = datetime.now(UTC) - timedelta(days=days)
    return _activity(aggregation.participant_rollup(db, since=since))


def performance_report(db: Session) -> list[PerformanceRow]:
    return [
        PerformanceRow(
            quiz_id=r.quiz_id,
            quiz_title=r.quiz_title,
            total_attempts=r.attempts,
            average_score=r.average_score,
            highest_score=r.max_score,
            lowest_score=r.min_score,
        )
        for r in aggregation.quiz_rollup(db)
    ]


def history_summary(db: Session, username: str | None) -> list[QuizHistorySummary]:
    participant = catalog.resolve_participant(db, username)
    return [
        QuizHistorySummary(
            quiz_id=r.quiz_id,
            quiz_title=r.quiz_title,
            total_questions=r.total_questions,
            attempt_count=r.attempts,
            best_score=r.best_score,
            average_score=r.average_score,
            latest_score=r.latest_score,
            first_attempt=r.first_attempt,
            last_attempt=r.last_attempt,
        )
        for r in aggregation.history_rollup(db, participant.id)
    ]


def dashboard(db: Session) -> aggregation.DashboardCounts:
    return aggregation.dashboard_counts(db)
