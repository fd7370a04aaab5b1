import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config

# Routers
from routers.admin import router as admin_router
from routers.attempts import router as attempts_router
from routers.health import router as health_router
from routers.leaderboard import router as leaderboard_router
from routers.quizzes import router as quizzes_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("quizrank")

app = FastAPI(title="QuizRank – Scoring & Leaderboard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(quizzes_router)  # /quizzes/...
app.include_router(attempts_router)  # /results/..., /history/...
app.include_router(leaderboard_router)  # /leaderboard/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...

logger.info("tie-break policy: %s", config.LEADERBOARD_TIE_BREAK)
