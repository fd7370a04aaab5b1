from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import AnswerRecord, Question, QuizResult
from services import catalog, store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerOutcome:
    question_id: str
    selected_option: str | None
    is_correct: bool
    marks_obtained: int


@dataclass
class Grade:
    score: int = 0
    correct: int = 0
    wrong: int = 0
    outcomes: list[AnswerOutcome] = field(default_factory=list)


def grade(questions: Sequence[Question], answers: Mapping[str, str | None]) -> Grade:
    """Score one submission. This is the only place scores are computed.

    Matching is case-sensitive against the correct option. A missing or empty
    answer is a skip and counts as wrong; answers for ids that are not in
    `questions` are ignored.
    """
    g = Grade()
    for q in questions:
        selected = answers.get(q.id) or None
        if selected is not None and selected == q.correct_option:
            marks = q.marks or 0
            g.score += marks
            g.correct += 1
            g.outcomes.append(AnswerOutcome(q.id, selected, True, marks))
        else:
            g.wrong += 1
            g.outcomes.append(AnswerOutcome(q.id, selected, False, 0))
    return g


def submit_attempt(
    db: Session,
    quiz_id: int,
    answers: Mapping[str, str | None],
    elapsed_seconds: int | None,
    username: str | None,
) -> QuizResult:
    # Resolve everything first so a bad quiz/participant writes nothing
    participant = catalog.resolve_participant(db, username)
    quiz = catalog.get_quiz(db, quiz_id)
    questions = catalog.quiz_questions(db, quiz_id)

    g = grade(questions, answers or {})

    # Built fully in memory and committed once: readers never see a
    # half-scored result.
    result = QuizResult(
        participant_id=participant.id,
        quiz_id=quiz.id,
        participant_name=participant.name,
        quiz_title=quiz.title,
        quiz_total_marks=quiz.total_marks,
        score=g.score,
        total_questions=len(questions),
        correct_answers=g.correct,
        wrong_answers=g.wrong,
        elapsed_seconds=elapsed_seconds,
    )
    result.answers = [
        AnswerRecord(
            question_id=o.question_id,
            selected_option=o.selected_option,
            is_correct=o.is_correct,
            marks_obtained=o.marks_obtained,
        )
        for o in g.outcomes
    ]
    result = store.save_attempt(db, result)
    logger.info(
        "scored result %s: participant=%s quiz=%s score=%s/%s",
        result.id,
        participant.id,
        quiz.id,
        g.score,
        quiz.total_marks,
    )
    return result


def answer_reviews(db: Session, result: QuizResult) -> list[dict[str, Any]]:
    """Per-question review of a stored result, in answer-record order."""
    records = store.answers_for(db, result.id)
    ids = [r.question_id for r in records]
    questions = {q.id: q for q in db.scalars(select(Question).where(Question.id.in_(ids)))}
    reviews: list[dict[str, Any]] = []
    for r in records:
        q = questions.get(r.question_id)
        reviews.append(
            {
                "question_id": r.question_id,
                "question_text": q.question_text if q else None,
                "option_a": q.option_a if q else None,
                "option_b": q.option_b if q else None,
                "option_c": q.option_c if q else None,
                "option_d": q.option_d if q else None,
                "correct_option": q.correct_option if q else None,
                "selected_option": r.selected_option,
                "is_correct": bool(r.is_correct),
                "marks_obtained": r.marks_obtained or 0,
            }
        )
    return reviews


def participant_history(db: Session, username: str | None) -> list[QuizResult]:
    participant = catalog.resolve_participant(db, username)
    return store.by_participant(db, participant.id)
