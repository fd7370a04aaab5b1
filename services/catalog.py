# Read-only access to quizzes, questions and participants.
# Authoring (and keeping Quiz.total_marks current) happens elsewhere.
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import Participant, Question, Quiz
from services.errors import InvalidInput, NotFound


def get_quiz(db: Session, quiz_id: int) -> Quiz:
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFound(f"Quiz not found: {quiz_id}")
    return quiz


def list_quizzes(db: Session, active_only: bool = True) -> list[Quiz]:
    stmt = select(Quiz).order_by(Quiz.id)
    if active_only:
        stmt = stmt.where(Quiz.is_active.is_(True))
    return list(db.scalars(stmt))


def quiz_questions(db: Session, quiz_id: int) -> list[Question]:
    get_quiz(db, quiz_id)
    stmt = (
        select(Question)
        .where(Question.quiz_id == quiz_id)
        .order_by(Question.position, Question.id)
    )
    return list(db.scalars(stmt))


def resolve_participant(db: Session, username: str | None) -> Participant:
    if username is None or not username.strip():
        raise InvalidInput("Username is required")
    participant = db.scalar(select(Participant).where(Participant.username == username.strip()))
    if participant is None:
        raise NotFound(f"Participant not found: {username}")
    return participant


def get_participant(db: Session, participant_id: int) -> Participant:
    participant = db.get(Participant, participant_id)
    if participant is None:
        raise NotFound(f"Participant not found: {participant_id}")
    return participant


def list_participants(db: Session) -> list[Participant]:
    return list(db.scalars(select(Participant).order_by(Participant.id)))
