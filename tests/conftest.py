"""
Shared fixtures: in-memory SQLite store, a recording notifier stub and a
TestClient wired to both through dependency overrides.
"""

import os

# Settings are read at import time, so the environment has to be ready first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("MAIL_FROM", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from quizmaster.core.config import settings
from quizmaster.core.database import Base, get_db
from quizmaster.models.quiz_db.email_log_db import EmailLog
from quizmaster.services.email import get_notifier


class StubNotifier:
    """Records every message; ``result`` decides what ``send`` reports."""

    def __init__(self, result: bool = True):
        self.result = result
        self.sent = []

    async def send(self, to_email: str, subject: str, body: str) -> bool:
        self.sent.append((to_email, subject, body))
        return self.result


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def notifier():
    return StubNotifier()


@pytest.fixture
def client(session_factory, notifier):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_mode(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_REQUIRED", True)


@pytest.fixture
def math_quiz():
    return {
        "title": "Math",
        "email": "a@b.com",
        "questions": [
            {
                "questionText": "2+2?",
                "options": [{"text": "3"}, {"text": "4"}],
                "correctOptionId": 2,
            }
        ],
    }


@pytest.fixture
def failing_notifier():
    return StubNotifier(result=False)


@pytest.fixture
def count_email_logs(db_session):
    """Number of email log rows for a quiz, optionally of one type."""

    def count(quiz_id, log_type=None):
        query = db_session.query(EmailLog).filter(EmailLog.quiz_id == quiz_id)
        if log_type is not None:
            query = query.filter(EmailLog.type == log_type)
        return query.count()

    return count
