"""Grouped statistics over quiz_results.

Every function here runs a GROUP BY over the whole quiz_results table when it
is called; nothing is cached or maintained incrementally, so cost grows with
the number of attempts. Callers only see the typed rollups below, which keeps
the door open for an indexed implementation behind the same functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case, distinct, func, select
from sqlalchemy.orm import Session

from models import Participant, Question, Quiz, QuizResult
from services import store


@dataclass(frozen=True)
class GlobalStats:
    average_score: float
    highest_score: int
    total_participants: int
    total_attempts: int


@dataclass(frozen=True)
class ParticipantRollup:
    participant_id: int
    participant_name: str
    attempts: int
    total_score: int
    average_score: float
    average_percentage: float
    last_activity: datetime | None


@dataclass(frozen=True)
class ParticipantScores:
    attempts: int
    average_score: float
    best_score: int


@dataclass(frozen=True)
class QuizRollup:
    quiz_id: int
    quiz_title: str
    attempts: int
    average_score: float
    max_score: int
    min_score: int


@dataclass(frozen=True)
class QuizHistoryRollup:
    quiz_id: int
    quiz_title: str
    total_questions: int
    attempts: int
    best_score: int
    average_score: float
    latest_score: int
    first_attempt: datetime | None
    last_attempt: datetime | None


@dataclass(frozen=True)
class DashboardCounts:
    total_quizzes: int
    total_participants: int
    total_questions: int
    total_results: int
    average_score: float
    highest_score: int


# score as a percentage of the effective possible marks, 0.0 when unknown
_PERCENTAGE = case(
    (QuizResult.quiz_total_marks > 0, QuizResult.score * 100.0 / QuizResult.quiz_total_marks),
    (QuizResult.total_questions > 0, QuizResult.score * 100.0 / QuizResult.total_questions),
    else_=0.0,
)


def _f(v) -> float:
    return float(v) if v is not None else 0.0


def _i(v) -> int:
    return int(v) if v is not None else 0


def global_stats(db: Session) -> GlobalStats:
    row = db.execute(
        select(
            func.avg(QuizResult.score),
            func.max(QuizResult.score),
            func.count(distinct(QuizResult.participant_id)),
            func.count(QuizResult.id),
        )
    ).one()
    return GlobalStats(
        average_score=_f(row[0]),
        highest_score=_i(row[1]),
        total_participants=_i(row[2]),
        total_attempts=_i(row[3]),
    )


def participant_average(db: Session, participant_id: int) -> float:
    stmt = select(func.avg(QuizResult.score)).where(QuizResult.participant_id == participant_id)
    return _f(db.scalar(stmt))


def participant_best(db: Session, participant_id: int) -> int:
    stmt = select(func.max(QuizResult.score)).where(QuizResult.participant_id == participant_id)
    return _i(db.scalar(stmt))


def scores_by_participant(db: Session) -> dict[int, ParticipantScores]:
    """Attempts, average and best score for every participant with results, in one query."""
    stmt = select(
        QuizResult.participant_id,
        func.count(QuizResult.id),
        func.avg(QuizResult.score),
        func.max(QuizResult.score),
    ).group_by(QuizResult.participant_id)
    return {
        pid: ParticipantScores(attempts=_i(n), average_score=_f(avg), best_score=_i(best))
        for pid, n, avg, best in db.execute(stmt)
    }


def _participant_query(since: datetime | None = None):
    attempts = func.count(QuizResult.id).label("attempts")
    average = func.avg(QuizResult.score).label("average_score")
    stmt = select(
        QuizResult.participant_id,
        QuizResult.participant_name,
        attempts,
        func.sum(QuizResult.score).label("total_score"),
        average,
        func.avg(_PERCENTAGE).label("average_percentage"),
        func.max(QuizResult.completed_at).label("last_activity"),
    ).group_by(QuizResult.participant_id, QuizResult.participant_name)
    if since is not None:
        stmt = stmt.where(QuizResult.completed_at >= since)
    return stmt, attempts, average


def _participant_rows(db: Session, stmt) -> list[ParticipantRollup]:
    return [
        ParticipantRollup(
            participant_id=r.participant_id,
            participant_name=r.participant_name,
            attempts=_i(r.attempts),
            total_score=_i(r.total_score),
            average_score=_f(r.average_score),
            average_percentage=_f(r.average_percentage),
            last_activity=r.last_activity,
        )
        for r in db.execute(stmt)
    ]


def participant_rollup(db: Session, since: datetime | None = None) -> list[ParticipantRollup]:
    """Per participant: attempts, total, average, last activity; most attempts first."""
    stmt, attempts, _ = _participant_query(since)
    stmt = stmt.order_by(attempts.desc(), QuizResult.participant_id)
    return _participant_rows(db, stmt)


def top_by_average(db: Session, limit: int | None) -> list[ParticipantRollup]:
    stmt, attempts, average = _participant_query()
    stmt = stmt.order_by(average.desc(), attempts.desc(), QuizResult.participant_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return _participant_rows(db, stmt)


def quiz_rollup(db: Session) -> list[QuizRollup]:
    attempts = func.count(QuizResult.id).label("attempts")
    stmt = (
        select(
            QuizResult.quiz_id,
            QuizResult.quiz_title,
            attempts,
            func.avg(QuizResult.score).label("average_score"),
            func.max(QuizResult.score).label("max_score"),
            func.min(QuizResult.score).label("min_score"),
        )
        .group_by(QuizResult.quiz_id, QuizResult.quiz_title)
        .order_by(attempts.desc(), QuizResult.quiz_id)
    )
    return [
        QuizRollup(
            quiz_id=r.quiz_id,
            quiz_title=r.quiz_title,
            attempts=_i(r.attempts),
            average_score=_f(r.average_score),
            max_score=_i(r.max_score),
            min_score=_i(r.min_score),
        )
        for r in db.execute(stmt)
    ]


def history_rollup(db: Session, participant_id: int) -> list[QuizHistoryRollup]:
    """Per quiz history of one participant, most recently attempted quiz first.

    latest_score, total_questions and the title come from the participant's
    most recent attempt of that quiz.
    """
    last = func.max(QuizResult.completed_at).label("last_attempt")
    stmt = (
        select(
            QuizResult.quiz_id,
            func.count(QuizResult.id).label("attempts"),
            func.max(QuizResult.score).label("best_score"),
            func.avg(QuizResult.score).label("average_score"),
            func.min(QuizResult.completed_at).label("first_attempt"),
            last,
        )
        .where(QuizResult.participant_id == participant_id)
        .group_by(QuizResult.quiz_id)
        .order_by(last.desc(), QuizResult.quiz_id)
    )
    rows = db.execute(stmt).all()

    latest: dict[int, QuizResult] = {}
    for result in store.by_participant(db, participant_id):  # newest first
        latest.setdefault(result.quiz_id, result)

    out: list[QuizHistoryRollup] = []
    for r in rows:
        newest = latest[r.quiz_id]
        out.append(
            QuizHistoryRollup(
                quiz_id=r.quiz_id,
                quiz_title=newest.quiz_title,
                total_questions=newest.total_questions,
                attempts=_i(r.attempts),
                best_score=_i(r.best_score),
                average_score=_f(r.average_score),
                latest_score=newest.score,
                first_attempt=r.first_attempt,
                last_attempt=r.last_attempt,
            )
        )
    return out


def dashboard_counts(db: Session) -> DashboardCounts:
    stats = global_stats(db)
    return DashboardCounts(
        total_quizzes=_i(db.scalar(select(func.count(Quiz.id)))),
        total_participants=_i(db.scalar(select(func.count(Participant.id)))),
        total_questions=_i(db.scalar(select(func.count(Question.id)))),
        total_results=stats.total_attempts,
        average_score=stats.average_score,
        highest_score=stats.highest_score,
    )
