from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from db import SessionLocal
from deps.auth import require_admin
from routers.attempts import attempt_out
from schemas.attempts import AttemptOut
from schemas.reports import ActivityRowOut, DashboardOut, ParticipantStatsOut, PerformanceRowOut
from services import aggregation, catalog, reports, store
from services.errors import NotFound

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/reports/user-activity", response_model=list[ActivityRowOut])
def user_activity_report():
    with SessionLocal() as db:
        rows = reports.activity_report(db)
    return [ActivityRowOut.model_validate(r) for r in rows]


@router.get("/reports/quiz-performance", response_model=list[PerformanceRowOut])
def quiz_performance_report():
    with SessionLocal() as db:
        rows = reports.performance_report(db)
    return [PerformanceRowOut.model_validate(r) for r in rows]


@router.get("/reports/recent-activity", response_model=list[ActivityRowOut])
def recent_activity_report(days: int = Query(default=7, ge=1, le=3650)):
    with SessionLocal() as db:
        rows = reports.recent_activity_report(db, days)
    return [ActivityRowOut.model_validate(r) for r in rows]


@router.get("/dashboard-stats", response_model=DashboardOut)
def dashboard_stats():
    with SessionLocal() as db:
        return DashboardOut.model_validate(reports.dashboard(db))


@router.get("/participants", response_model=list[ParticipantStatsOut])
def participants_with_stats():
    none = aggregation.ParticipantScores(attempts=0, average_score=0.0, best_score=0)
    out = []
    with SessionLocal() as db:
        scores = aggregation.scores_by_participant(db)
        for p in catalog.list_participants(db):
            s = scores.get(p.id, none)
            out.append(
                ParticipantStatsOut(
                    id=p.id,
                    username=p.username,
                    display_name=p.display_name,
                    created_at=p.created_at,
                    total_attempts=s.attempts,
                    average_score=s.average_score,
                    best_score=s.best_score,
                )
            )
    return out


@router.get("/results", response_model=list[AttemptOut])
def all_results():
    with SessionLocal() as db:
        return [attempt_out(db, r, with_reviews=False) for r in store.all_results(db)]


@router.get("/participants/{participant_id}/results", response_model=list[AttemptOut])
def participant_results(participant_id: int):
    with SessionLocal() as db:
        try:
            catalog.get_participant(db, participant_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        return [
            attempt_out(db, r, with_reviews=False)
            for r in store.by_participant(db, participant_id)
        ]


@router.delete("/results/{result_id}")
def delete_result(result_id: int):
    with SessionLocal() as db:
        try:
            store.delete_attempt(db, result_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


@router.delete("/participants/{participant_id}")
def delete_participant(participant_id: int):
    with SessionLocal() as db:
        try:
            removed = store.delete_participant(db, participant_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True, "results_removed": removed}
