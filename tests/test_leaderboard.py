from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def _seed_board(seed):
    a = seed.participant("ann", "Ann")
    b = seed.participant("ben", "Ben")
    c = seed.participant("cat", "Cat")
    quiz = seed.quiz("Science", total_marks=100)
    seed.result(a, quiz, 80)
    seed.result(b, quiz, 80)
    seed.result(c, quiz, 60)
    return quiz


def test_global_leaderboard_sequential_ranks(seed):
    _seed_board(seed)
    r = client.get("/leaderboard/global")
    assert r.status_code == 200
    rows = r.json()
    assert [row["rank"] for row in rows] == [1, 2, 3]
    assert [row["participant_name"] for row in rows] == ["Ann", "Ben", "Cat"]
    assert rows[0]["percentage"] == 80.0


def test_leaderboard_limit_and_bounds(seed):
    _seed_board(seed)
    r = client.get("/leaderboard/global", params={"limit": 2})
    assert len(r.json()) == 2
    assert client.get("/leaderboard/global", params={"limit": 0}).status_code == 422


def test_unknown_tie_break_is_400(seed):
    _seed_board(seed)
    r = client.get("/leaderboard/global", params={"tie_break": "random"})
    assert r.status_code == 400


def test_quiz_leaderboard(seed):
    quiz = _seed_board(seed)
    other = seed.quiz("Art", total_marks=10)
    r = client.get(f"/leaderboard/quiz/{quiz.id}")
    assert r.status_code == 200
    assert len(r.json()) == 3
    assert client.get(f"/leaderboard/quiz/{other.id}").json() == []


def test_time_windows(seed):
    a = seed.participant("ann")
    quiz = seed.quiz("Q", total_marks=10)
    now = datetime.now(UTC)
    seed.result(a, quiz, 9, completed_at=now - timedelta(days=20))
    seed.result(a, quiz, 4, completed_at=now - timedelta(days=2))

    assert [row["score"] for row in client.get("/leaderboard/weekly").json()] == [4]
    assert [row["score"] for row in client.get("/leaderboard/monthly").json()] == [9, 4]
    recent = client.get("/leaderboard/recent", params={"days": 1}).json()
    assert recent == []


def test_top_performers(seed):
    _seed_board(seed)
    r = client.get("/leaderboard/top-performers")
    assert r.status_code == 200
    rows = r.json()
    assert rows[0]["quiz_id"] is None
    assert [row["rank"] for row in rows] == [1, 2, 3]


def test_stats_empty():
    r = client.get("/leaderboard/stats")
    assert r.status_code == 200
    body = r.json()
    assert body["total_participants"] == 0
    assert body["total_attempts"] == 0
    assert body["average_score"] == 0.0
    assert body["highest_score"] == 0
    assert body["most_active_participant"] is None


def test_stats_populated(seed):
    _seed_board(seed)
    body = client.get("/leaderboard/stats").json()
    assert body["total_participants"] == 3
    assert body["total_attempts"] == 3
    assert body["highest_score"] == 80
    assert body["most_active_participant_attempts"] == 1


def test_personal_ranking(seed):
    a = seed.participant("ann")
    b = seed.participant("ben")
    seed.participant("idle")
    quiz = seed.quiz("Q", total_marks=100)
    seed.result(b, quiz, 90)
    seed.result(a, quiz, 70)
    seed.result(a, quiz, 50)

    r = client.get("/leaderboard/my-personal-ranking/ann")
    assert r.status_code == 200
    body = r.json()
    assert body["rank"] == 2
    assert body["score"] == 60
    assert body["total_attempts"] == 2

    rows = client.get("/leaderboard/my-ranking/ann").json()
    assert [row["rank"] for row in rows] == [2, 3]

    assert client.get("/leaderboard/my-personal-ranking/idle").status_code == 404
    assert client.get("/leaderboard/my-personal-ranking/ghost").status_code == 404
    assert client.get("/leaderboard/my-ranking/ghost").status_code == 404


def test_blank_username_ranking_is_400():
    assert client.get("/leaderboard/my-ranking/%20").status_code == 400
    assert client.get("/leaderboard/my-personal-ranking/%20").status_code == 400


def test_earliest_tie_break_over_http(seed):
    a = seed.participant("ann")
    b = seed.participant("ben")
    quiz = seed.quiz("Q", total_marks=100)
    now = datetime.now(UTC)
    seed.result(a, quiz, 80, completed_at=now)
    seed.result(b, quiz, 80, completed_at=now - timedelta(hours=3))

    rows = client.get("/leaderboard/global", params={"limit": 1, "tie_break": "earliest"}).json()
    assert [(row["participant_id"], row["rank"]) for row in rows] == [(b.id, 1)]
