from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

import config
from db import SessionLocal
from schemas.leaderboard import LeaderboardEntryOut, LeaderboardStatsOut
from services import ranking
from services.errors import InvalidInput, NotFound

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

_LIMIT_MAX = config.MAX_LEADERBOARD_LIMIT


def _board(scope: ranking.Scope, limit: int, tie_break: str | None):
    with SessionLocal() as db:
        try:
            entries = ranking.leaderboard(db, scope, limit, ranking.tie_break_for(tie_break))
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
    return [LeaderboardEntryOut.model_validate(e) for e in entries]


@router.get("/global", response_model=list[LeaderboardEntryOut])
def global_leaderboard(
    limit: int = Query(default=50, ge=1, le=_LIMIT_MAX),
    tie_break: str | None = None,
):
    return _board(ranking.GlobalScope(), limit, tie_break)


@router.get("/quiz/{quiz_id}", response_model=list[LeaderboardEntryOut])
def quiz_leaderboard(
    quiz_id: int,
    limit: int = Query(default=20, ge=1, le=_LIMIT_MAX),
    tie_break: str | None = None,
):
    return _board(ranking.QuizScope(quiz_id), limit, tie_break)


@router.get("/recent", response_model=list[LeaderboardEntryOut])
def recent_leaderboard(
    days: int = Query(default=7, ge=1, le=3650),
    limit: int = Query(default=20, ge=1, le=_LIMIT_MAX),
    tie_break: str | None = None,
):
    return _board(ranking.TimeWindowScope(days), limit, tie_break)


@router.get("/weekly", response_model=list[LeaderboardEntryOut])
def weekly_leaderboard(limit: int = Query(default=20, ge=1, le=_LIMIT_MAX)):
    return _board(ranking.TimeWindowScope(7), limit, None)


@router.get("/monthly", response_model=list[LeaderboardEntryOut])
def monthly_leaderboard(limit: int = Query(default=20, ge=1, le=_LIMIT_MAX)):
    return _board(ranking.TimeWindowScope(30), limit, None)


@router.get("/top-performers", response_model=list[LeaderboardEntryOut])
def top_performers(limit: int = Query(default=10, ge=1, le=_LIMIT_MAX)):
    with SessionLocal() as db:
        entries = ranking.top_performers(db, limit)
    return [LeaderboardEntryOut.model_validate(e) for e in entries]


@router.get("/stats", response_model=LeaderboardStatsOut)
def leaderboard_stats():
    with SessionLocal() as db:
        return LeaderboardStatsOut.model_validate(ranking.leaderboard_stats(db))


@router.get("/my-ranking/{username}", response_model=list[LeaderboardEntryOut])
def my_ranking(username: str):
    with SessionLocal() as db:
        try:
            entries = ranking.participant_rankings(db, username)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
    return [LeaderboardEntryOut.model_validate(e) for e in entries]


@router.get("/my-personal-ranking/{username}", response_model=LeaderboardEntryOut)
def my_personal_ranking(username: str):
    with SessionLocal() as db:
        try:
            entry = ranking.personal_ranking(db, username)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidInput as e:
            raise HTTPException(status_code=400, detail=str(e))
    return LeaderboardEntryOut.model_validate(entry)
