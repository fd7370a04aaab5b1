import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

# Must run before db.py is imported anywhere
_DB_PATH = Path(tempfile.mkdtemp(prefix="quizrank-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ.setdefault("ADMIN_TOKEN", "secret")

import pytest  # noqa: E402

import models  # noqa: E402
from db import Base, SessionLocal, engine  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


class Seeder:
    """Creates catalog rows and ready-made results the way quiz authoring would."""

    def __init__(self, db):
        self.db = db

    def participant(self, username, display_name=None):
        p = models.Participant(username=username, display_name=display_name)
        self.db.add(p)
        self.db.commit()
        return p

    def quiz(self, title="Arithmetic", questions=(), total_marks=None, is_active=True):
        """questions: iterable of (id, correct_option, marks).

        total_marks defaults to the sum of question marks.
        """
        questions = list(questions)
        if total_marks is None:
            total_marks = sum(m for _, _, m in questions)
        quiz = models.Quiz(title=title, total_marks=total_marks, is_active=is_active)
        self.db.add(quiz)
        self.db.flush()
        for pos, (qid, correct, marks) in enumerate(questions):
            self.db.add(
                models.Question(
                    id=qid,
                    quiz_id=quiz.id,
                    position=pos,
                    question_text=f"Question {qid}",
                    option_a="alpha",
                    option_b="beta",
                    option_c="gamma",
                    option_d="delta",
                    correct_option=correct,
                    marks=marks,
                )
            )
        self.db.commit()
        return quiz

    def result(
        self,
        participant,
        quiz,
        score,
        total_questions=10,
        total_marks="quiz",
        completed_at=None,
        elapsed_seconds=60,
    ):
        r = models.QuizResult(
            participant_id=participant.id,
            quiz_id=quiz.id,
            participant_name=participant.name,
            quiz_title=quiz.title,
            quiz_total_marks=quiz.total_marks if total_marks == "quiz" else total_marks,
            score=score,
            total_questions=total_questions,
            correct_answers=0,
            wrong_answers=total_questions,
            elapsed_seconds=elapsed_seconds,
            completed_at=completed_at or datetime.now(UTC),
        )
        self.db.add(r)
        self.db.commit()
        return r


@pytest.fixture
def seed(db):
    return Seeder(db)
