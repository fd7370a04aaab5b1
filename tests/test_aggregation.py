from datetime import UTC, datetime, timedelta

import pytest

from services import aggregation


def test_empty_population_returns_defaults(db):
    stats = aggregation.global_stats(db)
    assert stats.average_score == 0.0
    assert stats.highest_score == 0
    assert stats.total_participants == 0
    assert stats.total_attempts == 0
    assert aggregation.participant_rollup(db) == []
    assert aggregation.quiz_rollup(db) == []
    assert aggregation.top_by_average(db, 10) == []
    assert aggregation.participant_average(db, 1) == 0.0
    assert aggregation.participant_best(db, 1) == 0


def test_global_and_participant_stats(db, seed):
    a = seed.participant("a")
    b = seed.participant("b")
    quiz = seed.quiz("Q", total_marks=100)
    seed.result(a, quiz, 40)
    seed.result(a, quiz, 80)
    seed.result(b, quiz, 90)

    stats = aggregation.global_stats(db)
    assert stats.average_score == pytest.approx(70.0)
    assert stats.highest_score == 90
    assert stats.total_participants == 2
    assert stats.total_attempts == 3
    assert aggregation.participant_average(db, a.id) == pytest.approx(60.0)
    assert aggregation.participant_best(db, a.id) == 80


def test_scores_by_participant_in_one_pass(db, seed):
    assert aggregation.scores_by_participant(db) == {}
    a = seed.participant("a")
    b = seed.participant("b")
    seed.participant("idle")
    quiz = seed.quiz("Q", total_marks=100)
    seed.result(a, quiz, 40)
    seed.result(a, quiz, 80)
    seed.result(b, quiz, 90)

    scores = aggregation.scores_by_participant(db)
    assert set(scores) == {a.id, b.id}
    assert scores[a.id].attempts == 2
    assert scores[a.id].average_score == pytest.approx(60.0)
    assert scores[a.id].best_score == 80
    assert scores[b.id] == aggregation.ParticipantScores(attempts=1, average_score=90.0, best_score=90)


def test_participant_rollup_orders_by_attempts(db, seed):
    a = seed.participant("a", "Ann")
    b = seed.participant("b", "Ben")
    quiz = seed.quiz("Q", total_marks=50)
    seed.result(b, quiz, 10)
    seed.result(a, quiz, 20)
    seed.result(a, quiz, 30)
    last = seed.result(a, quiz, 40)

    rows = aggregation.participant_rollup(db)
    assert [r.participant_name for r in rows] == ["Ann", "Ben"]
    ann = rows[0]
    assert ann.attempts == 3
    assert ann.total_score == 90
    assert ann.average_score == pytest.approx(30.0)
    assert ann.average_percentage == pytest.approx(60.0)
    assert ann.last_activity == last.completed_at


def test_participant_rollup_since(db, seed):
    a = seed.participant("a")
    b = seed.participant("b")
    quiz = seed.quiz("Q", total_marks=10)
    now = datetime.now(UTC)
    seed.result(a, quiz, 5, completed_at=now - timedelta(days=40))
    seed.result(b, quiz, 7, completed_at=now - timedelta(days=2))

    rows = aggregation.participant_rollup(db, since=now - timedelta(days=7))
    assert [(r.participant_id, r.attempts) for r in rows] == [(b.id, 1)]


def test_top_by_average(db, seed):
    a = seed.participant("a")
    b = seed.participant("b")
    c = seed.participant("c")
    quiz = seed.quiz("Q", total_marks=100)
    seed.result(a, quiz, 50)
    seed.result(a, quiz, 70)
    seed.result(b, quiz, 95)
    seed.result(c, quiz, 10)

    rows = aggregation.top_by_average(db, 2)
    assert [r.participant_id for r in rows] == [b.id, a.id]
    assert rows[1].average_score == pytest.approx(60.0)


def test_quiz_rollup(db, seed):
    a = seed.participant("a")
    easy = seed.quiz("Easy", total_marks=10)
    hard = seed.quiz("Hard", total_marks=10)
    seed.result(a, easy, 9)
    seed.result(a, easy, 5)
    seed.result(a, easy, 7)
    seed.result(a, hard, 2)

    rows = aggregation.quiz_rollup(db)
    assert [r.quiz_title for r in rows] == ["Easy", "Hard"]
    assert rows[0].attempts == 3
    assert rows[0].average_score == pytest.approx(7.0)
    assert (rows[0].max_score, rows[0].min_score) == (9, 5)


def test_history_rollup_reports_latest_per_quiz(db, seed):
    a = seed.participant("a")
    b = seed.participant("b")
    q1 = seed.quiz("First", total_marks=10)
    q2 = seed.quiz("Second", total_marks=10)
    now = datetime.now(UTC)
    seed.result(a, q1, 9, total_questions=5, completed_at=now - timedelta(days=5))
    seed.result(a, q1, 3, total_questions=5, completed_at=now - timedelta(days=4))
    seed.result(a, q2, 6, total_questions=8, completed_at=now - timedelta(days=3))
    seed.result(b, q1, 10, completed_at=now)

    rows = aggregation.history_rollup(db, a.id)
    assert [r.quiz_title for r in rows] == ["Second", "First"]
    first = rows[1]
    assert first.attempts == 2
    assert first.best_score == 9
    assert first.average_score == pytest.approx(6.0)
    assert first.latest_score == 3
    assert first.total_questions == 5
    assert first.first_attempt < first.last_attempt
    assert rows[0].latest_score == 6


def test_dashboard_counts(db, seed):
    a = seed.participant("a")
    seed.participant("b")
    quiz = seed.quiz("Q", [("x1", "A", 1), ("x2", "B", 1)])
    seed.result(a, quiz, 2)

    counts = aggregation.dashboard_counts(db)
    assert counts.total_quizzes == 1
    assert counts.total_participants == 2
    assert counts.total_questions == 2
    assert counts.total_results == 1
    assert counts.highest_score == 2
