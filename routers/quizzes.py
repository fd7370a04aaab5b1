from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from db import SessionLocal
from routers.attempts import attempt_out
from schemas.attempts import AttemptOut, SubmissionRequest
from schemas.quizzes import QuestionOut, QuizOut
from services import catalog, scoring
from services.errors import InvalidInput, NotFound

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("", response_model=list[QuizOut])
def list_quizzes(include_inactive: bool = Query(default=False)):
    with SessionLocal() as db:
        quizzes = catalog.list_quizzes(db, active_only=not include_inactive)
        return [QuizOut.model_validate(q) for q in quizzes]


@router.get("/{quiz_id}", response_model=QuizOut)
def get_quiz(quiz_id: int):
    with SessionLocal() as db:
        try:
            return QuizOut.model_validate(catalog.get_quiz(db, quiz_id))
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))


@router.get("/{quiz_id}/questions", response_model=list[QuestionOut])
def get_quiz_questions(quiz_id: int):
    with SessionLocal() as db:
        try:
            questions = catalog.quiz_questions(db, quiz_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        # QuestionOut has no correct_option field, so it never leaves the server
        return [QuestionOut.model_validate(q) for q in questions]


@router.post("/{quiz_id}/submit", response_model=AttemptOut)
def submit_quiz(quiz_id: int, req: SubmissionRequest):
    with SessionLocal() as db:
        try:
            result = scoring.submit_attempt(
                db, quiz_id, req.answers, req.elapsed_seconds, req.username
            )
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        return attempt_out(db, result)
