"""Leaderboards, top performers and personal standings.

Ranks are always the 1-based position in the returned order. Equal scores get
distinct, consecutive ranks (80, 80, 60 -> 1, 2, 3); which of the tied entries
comes first is decided by the tie-break policy, submission order by default.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Sequence

from sqlalchemy.orm import Session

import config
from models import QuizResult
from services import aggregation, catalog, store
from services.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardEntry:
    participant_id: int
    participant_name: str
    quiz_id: int | None
    quiz_title: str | None
    score: float
    total_questions: int | None
    percentage: float
    completed_at: datetime | None
    elapsed_seconds: int | None
    total_attempts: int
    rank: int = 0


@dataclass(frozen=True)
class GlobalScope:
    pass


@dataclass(frozen=True)
class QuizScope:
    quiz_id: int


@dataclass(frozen=True)
class TimeWindowScope:
    since_days: int


Scope = GlobalScope | QuizScope | TimeWindowScope

# ORDER BY clauses applied after score desc, so the cap sees the final order.
TieBreak = tuple

TIE_BREAKS: dict[str, TieBreak] = {
    "submission": (QuizResult.id.asc(),),
    "earliest": (QuizResult.completed_at.asc(), QuizResult.id.asc()),
}


def tie_break_for(name: str | None) -> TieBreak:
    key = (name or config.LEADERBOARD_TIE_BREAK).lower()
    if key not in TIE_BREAKS:
        raise InvalidInput(f"Unknown tie-break policy: {name}")
    return TIE_BREAKS[key]


def percentage(score: float, total_marks: int | None, total_questions: int | None) -> float:
    """score / effective possible marks * 100, or 0.0 when nothing is known."""
    if total_marks is not None and total_marks > 0:
        possible = total_marks
    elif total_questions is not None and total_questions > 0:
        possible = total_questions
    else:
        return 0.0
    value = score / possible * 100
    return value if math.isfinite(value) else 0.0


def assign_ranks(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    for i, entry in enumerate(entries):
        entry.rank = i + 1
    return entries


def _to_entry(result: QuizResult, attempts: int) -> LeaderboardEntry:
    return LeaderboardEntry(
        participant_id=result.participant_id,
        participant_name=result.participant_name,
        quiz_id=result.quiz_id,
        quiz_title=result.quiz_title,
        score=result.score,
        total_questions=result.total_questions,
        percentage=percentage(result.score, result.quiz_total_marks, result.total_questions),
        completed_at=result.completed_at,
        elapsed_seconds=result.elapsed_seconds,
        total_attempts=attempts,
    )


def _fetch(db: Session, scope: Scope, limit: int | None, order) -> list[QuizResult]:
    if isinstance(scope, GlobalScope):
        return store.top_by_score(db, limit, order)
    if isinstance(scope, QuizScope):
        return store.top_by_quiz(db, scope.quiz_id, limit, order)
    if isinstance(scope, TimeWindowScope):
        since = datetime.now(UTC) - timedelta(days=scope.since_days)
        return store.top_since(db, since, limit, order)
    raise InvalidInput(f"Unknown leaderboard scope: {scope!r}")


def leaderboard(
    db: Session,
    scope: Scope,
    limit: int | None,
    tie_break: TieBreak | None = None,
) -> list[LeaderboardEntry]:
    order = (QuizResult.score.desc(), *tie_break) if tie_break else store.BY_SCORE
    results = _fetch(db, scope, limit, order)
    counts = store.counts_by_participant(db, (r.participant_id for r in results))
    entries = [_to_entry(r, counts.get(r.participant_id, 0)) for r in results]
    return assign_ranks(entries)


def top_performers(db: Session, limit: int | None) -> list[LeaderboardEntry]:
    entries = [
        LeaderboardEntry(
            participant_id=r.participant_id,
            participant_name=r.participant_name,
            quiz_id=None,
            quiz_title=None,
            score=r.average_score,
            total_questions=None,
            percentage=r.average_percentage,
            completed_at=None,
            elapsed_seconds=None,
            total_attempts=r.attempts,
        )
        for r in aggregation.top_by_average(db, limit)
    ]
    return assign_ranks(entries)


@dataclass(frozen=True)
class LeaderboardStats:
    total_participants: int
    total_attempts: int
    average_score: float
    highest_score: int
    most_active_participant: str | None
    most_active_participant_attempts: int


def leaderboard_stats(db: Session) -> LeaderboardStats:
    stats = aggregation.global_stats(db)
    rollup = aggregation.participant_rollup(db)
    top = rollup[0] if rollup else None
    return LeaderboardStats(
        total_participants=stats.total_participants,
        total_attempts=stats.total_attempts,
        average_score=stats.average_score,
        highest_score=stats.highest_score,
        most_active_participant=top.participant_name if top else None,
        most_active_participant_attempts=top.attempts if top else 0,
    )


def personal_best(
    entries: Sequence[LeaderboardEntry], participant_id: int
) -> LeaderboardEntry | None:
    """Best-ranked entry of one participant, carrying their mean score.

    Entries without a rank yet are ranked by their position in `entries`.
    Returns None when the participant has no entry.
    """
    mine = [
        (e.rank if e.rank > 0 else i + 1, e)
        for i, e in enumerate(entries)
        if e.participant_id == participant_id
    ]
    if not mine:
        return None
    rank, best = min(mine, key=lambda pair: pair[0])
    mean = sum(e.score for _, e in mine) / len(mine)
    return replace(best, rank=rank, score=mean, total_attempts=len(mine))


def personal_ranking(db: Session, username: str | None) -> LeaderboardEntry:
    participant = catalog.resolve_participant(db, username)
    board = leaderboard(db, GlobalScope(), config.PERSONAL_SCAN_LIMIT, tie_break_for(None))
    entry = personal_best(board, participant.id)
    if entry is None:
        logger.info("no ranked attempts for participant %s", participant.id)
        raise NotFound(f"No ranking for participant: {participant.username}")
    return entry


def participant_rankings(db: Session, username: str | None) -> list[LeaderboardEntry]:
    """Every global-leaderboard entry of one participant with its positional rank."""
    participant = catalog.resolve_participant(db, username)
    board = leaderboard(db, GlobalScope(), config.PERSONAL_SCAN_LIMIT, tie_break_for(None))
    return [e for e in board if e.participant_id == participant.id]
