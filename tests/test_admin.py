from fastapi.testclient import TestClient

from main import app
from services import scoring

client = TestClient(app)

ADMIN = {"x-admin-token": "secret"}


def test_admin_requires_token(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.get("/admin/reports/user-activity")
    assert r.status_code == 401
    r = client.get("/admin/reports/user-activity", headers={"x-admin-token": "wrong"})
    assert r.status_code == 401


def test_admin_token_not_configured(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "")
    r = client.get("/admin/dashboard-stats", headers=ADMIN)
    assert r.status_code == 500


def test_reports(monkeypatch, seed):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    a = seed.participant("ann", "Ann")
    b = seed.participant("ben", "Ben")
    quiz = seed.quiz("Q", total_marks=10)
    seed.result(a, quiz, 4)
    seed.result(a, quiz, 8)
    seed.result(b, quiz, 10)

    activity = client.get("/admin/reports/user-activity", headers=ADMIN).json()
    assert [row["participant"] for row in activity] == ["Ann", "Ben"]
    assert activity[0]["total_score"] == 12

    perf = client.get("/admin/reports/quiz-performance", headers=ADMIN).json()
    assert perf[0]["total_attempts"] == 3
    assert perf[0]["highest_score"] == 10 and perf[0]["lowest_score"] == 4

    recent = client.get("/admin/reports/recent-activity", params={"days": 7}, headers=ADMIN)
    assert recent.status_code == 200 and len(recent.json()) == 2

    dash = client.get("/admin/dashboard-stats", headers=ADMIN).json()
    assert dash["total_results"] == 3 and dash["total_participants"] == 2


def test_participants_with_stats(monkeypatch, seed):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    a = seed.participant("ann")
    seed.participant("idle")
    quiz = seed.quiz("Q", total_marks=10)
    seed.result(a, quiz, 4)
    seed.result(a, quiz, 8)

    rows = {row["username"]: row for row in client.get("/admin/participants", headers=ADMIN).json()}
    assert rows["ann"]["total_attempts"] == 2
    assert rows["ann"]["average_score"] == 6.0 and rows["ann"]["best_score"] == 8
    assert rows["idle"]["total_attempts"] == 0 and rows["idle"]["best_score"] == 0


def test_delete_result_and_participant(monkeypatch, db, seed):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    ann = seed.participant("ann")
    seed.participant("ben")
    quiz = seed.quiz("Q", [("z1", "A", 1)])
    first = scoring.submit_attempt(db, quiz.id, {"z1": "A"}, 3, "ann")
    scoring.submit_attempt(db, quiz.id, {"z1": "B"}, 3, "ann")
    scoring.submit_attempt(db, quiz.id, {"z1": "A"}, 3, "ben")
    first_id, ann_id = first.id, ann.id

    assert client.delete(f"/admin/results/{first_id}", headers=ADMIN).json() == {"ok": True}
    assert client.get(f"/results/{first_id}").status_code == 404
    assert client.delete(f"/admin/results/{first_id}", headers=ADMIN).status_code == 404

    r = client.get(f"/admin/participants/{ann_id}/results", headers=ADMIN)
    assert len(r.json()) == 1

    r = client.delete(f"/admin/participants/{ann_id}", headers=ADMIN)
    assert r.status_code == 200 and r.json()["results_removed"] == 1
    assert len(client.get("/admin/results", headers=ADMIN).json()) == 1
    assert client.get(f"/admin/participants/{ann_id}/results", headers=ADMIN).status_code == 404
