import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from crisp.core.db import Base, get_db
from crisp.main import app
from crisp.models import (
    Assessment,
    MultipleChoiceQuestion,
    ScaleQuestion,
    TeamMemberSelectionQuestion,
    User,
)
from crisp.schemas.answer import MultipleChoiceAnswerIn, ScaleAnswerIn, TeamMemberSelectionAnswerIn


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(db):
    people = SimpleNamespace(
        marker=User(name="Marker", role="Teaching assistant"),
        other_marker=User(name="Other Marker", role="Teaching assistant"),
        faculty=User(name="Prof", role="Faculty member"),
        alice=User(name="Alice", role="Student"),
        bob=User(name="Bob", role="Student"),
        carol=User(name="Carol", role="Student"),
    )
    db.add_all(vars(people).values())
    db.commit()
    return people


@pytest.fixture
def assessment(db):
    now = datetime.now(timezone.utc)
    a = Assessment(
        title="Sprint 1 peer review",
        granularity="team",
        max_marks=None,
        questions_total_marks=110,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
        are_submissions_editable=True,
    )
    a.questions = [
        TeamMemberSelectionQuestion(position=1, text="Who are you marking?", is_scored=False),
        MultipleChoiceQuestion(
            position=2,
            text="Did the team demo?",
            is_scored=True,
            options=[{"text": "Yes", "points": 10}, {"text": "No", "points": 0}],
        ),
        ScaleQuestion(
            position=3,
            text="Code quality",
            is_scored=True,
            scale_max=5,
            labels=[
                {"value": 1, "label": "Poor", "points": 0},
                {"value": 5, "label": "Great", "points": 100},
            ],
        ),
    ]
    db.add(a)
    db.commit()
    return a


@pytest.fixture
def make_answers(assessment):
    """Answer payloads for the `assessment` fixture."""
    selection, choice, scale = assessment.questions

    def _make(student_ids, demo="Yes", quality=3):
        return [
            TeamMemberSelectionAnswerIn(
                type="Team Member Selection Answer",
                question_id=selection.id,
                selected_user_ids=student_ids,
            ),
            MultipleChoiceAnswerIn(type="Multiple Choice Answer", question_id=choice.id, value=demo),
            ScaleAnswerIn(type="Scale Answer", question_id=scale.id, value=quality),
        ]

    return _make
