from __future__ import annotations

import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "submission" keeps equal scores in submission order; "earliest" puts the
# earlier completion first. Ranks stay sequential either way.
LEADERBOARD_TIE_BREAK = os.getenv("LEADERBOARD_TIE_BREAK", "submission")

MAX_LEADERBOARD_LIMIT = int(os.getenv("MAX_LEADERBOARD_LIMIT", "1000"))

_scan = os.getenv("PERSONAL_SCAN_LIMIT", "")
# None scans every attempt
PERSONAL_SCAN_LIMIT: int | None = int(_scan) if _scan.strip() else None

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]


def admin_token() -> str:
    # read per request so a rotated token is picked up without a restart
    return os.getenv("ADMIN_TOKEN", "")
