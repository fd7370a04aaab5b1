# routers/attempts.py

from fastapi import APIRouter, HTTPException

from db import SessionLocal
from models import QuizResult
from schemas.attempts import AnswerReview, AttemptOut
from schemas.reports import QuizHistoryOut
from services import reports, scoring, store
from services.errors import InvalidInput, NotFound

router = APIRouter(tags=["attempts"])


def attempt_out(db, result: QuizResult, with_reviews: bool = True) -> AttemptOut:
    out = AttemptOut.model_validate(result)
    if with_reviews:
        out.answer_reviews = [AnswerReview(**r) for r in scoring.answer_reviews(db, result)]
    return out


@router.get("/results/{result_id}", response_model=AttemptOut)
def get_result(result_id: int):
    with SessionLocal() as db:
        try:
            result = store.get_attempt(db, result_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        return attempt_out(db, result)


@router.get("/history/{username}", response_model=list[AttemptOut])
def participant_history(username: str):
    with SessionLocal() as db:
        try:
            results = scoring.participant_history(db, username)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
        return [attempt_out(db, r) for r in results]


@router.get("/history/{username}/summary", response_model=list[QuizHistoryOut])
def participant_history_summary(username: str):
    with SessionLocal() as db:
        try:
            rows = reports.history_summary(db, username)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
    return [QuizHistoryOut.model_validate(r) for r in rows]
