"""Durable storage of scored attempts (quiz_results) and their answer records.

Score-ordered queries break ties by id, i.e. submission order, unless the caller
passes its own ORDER BY clauses. The ordering is applied before LIMIT.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from models import AnswerRecord, Participant, QuizResult
from services.errors import NotFound

logger = logging.getLogger(__name__)

BY_SCORE = (QuizResult.score.desc(), QuizResult.id.asc())


def _capped(stmt, limit: int | None):
    return stmt.limit(limit) if limit is not None else stmt


def save_attempt(db: Session, result: QuizResult) -> QuizResult:
    """Persist a fully scored result and its answers in one commit."""
    db.add(result)
    db.commit()
    db.refresh(result)
    return result


def get_attempt(db: Session, result_id: int) -> QuizResult:
    result = db.get(QuizResult, result_id)
    if result is None:
        raise NotFound(f"Quiz result not found: {result_id}")
    return result


def answers_for(db: Session, result_id: int) -> list[AnswerRecord]:
    stmt = select(AnswerRecord).where(AnswerRecord.result_id == result_id).order_by(AnswerRecord.id)
    return list(db.scalars(stmt))


def top_by_score(db: Session, limit: int | None, order=BY_SCORE) -> list[QuizResult]:
    return list(db.scalars(_capped(select(QuizResult).order_by(*order), limit)))


def top_by_quiz(
    db: Session, quiz_id: int, limit: int | None, order=BY_SCORE
) -> list[QuizResult]:
    stmt = select(QuizResult).where(QuizResult.quiz_id == quiz_id).order_by(*order)
    return list(db.scalars(_capped(stmt, limit)))


def top_since(
    db: Session, since: datetime, limit: int | None, order=BY_SCORE
) -> list[QuizResult]:
    stmt = select(QuizResult).where(QuizResult.completed_at >= since).order_by(*order)
    return list(db.scalars(_capped(stmt, limit)))


def by_participant(db: Session, participant_id: int) -> list[QuizResult]:
    stmt = (
        select(QuizResult)
        .where(QuizResult.participant_id == participant_id)
        .order_by(QuizResult.completed_at.desc(), QuizResult.id.desc())
    )
    return list(db.scalars(stmt))


def all_results(db: Session) -> list[QuizResult]:
    stmt = select(QuizResult).order_by(QuizResult.completed_at.desc(), QuizResult.id.desc())
    return list(db.scalars(stmt))


def count_by_participant(db: Session, participant_id: int) -> int:
    stmt = select(func.count(QuizResult.id)).where(QuizResult.participant_id == participant_id)
    return int(db.scalar(stmt) or 0)


def counts_by_participant(db: Session, participant_ids: Iterable[int]) -> dict[int, int]:
    ids = set(participant_ids)
    if not ids:
        return {}
    stmt = (
        select(QuizResult.participant_id, func.count(QuizResult.id))
        .where(QuizResult.participant_id.in_(ids))
        .group_by(QuizResult.participant_id)
    )
    return {pid: int(n) for pid, n in db.execute(stmt)}


def _delete_results(db: Session, result_ids: list[int]) -> None:
    if not result_ids:
        return
    sync = {"synchronize_session": "fetch"}
    db.execute(
        delete(AnswerRecord).where(AnswerRecord.result_id.in_(result_ids)), execution_options=sync
    )
    db.execute(delete(QuizResult).where(QuizResult.id.in_(result_ids)), execution_options=sync)


def delete_attempt(db: Session, result_id: int) -> None:
    get_attempt(db, result_id)
    _delete_results(db, [result_id])
    db.commit()
    logger.info("deleted quiz result %s", result_id)


def delete_participant(db: Session, participant_id: int) -> int:
    """Remove a participant together with every result and answer referencing them."""
    participant = db.get(Participant, participant_id)
    if participant is None:
        raise NotFound(f"Participant not found: {participant_id}")
    ids = list(db.scalars(select(QuizResult.id).where(QuizResult.participant_id == participant_id)))
    _delete_results(db, ids)
    db.delete(participant)
    db.commit()
    logger.info("deleted participant %s and %d results", participant_id, len(ids))
    return len(ids)
