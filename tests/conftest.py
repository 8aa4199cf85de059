"""Shared fixtures: in-memory SQLite database, recording mail sender, API client.

The environment is filled in before the app is imported, since settings are
read at import time.
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

os.environ.setdefault("API_BASE_URL", "http://api.test")
os.environ.setdefault("WEB_BASE_URL", "http://web.test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SMTP_HOST", "smtp.test")
os.environ.setdefault("SMTP_USER", "team@planner.test")
os.environ.setdefault("SMTP_PASSWORD", "secret")
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.gettempdir(), "planner-tests", "api.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import Trip, Participant
from services.mail_service import get_mail_sender


class RecordingMailSender:
    """Stands in for MailSender; remembers messages, fails for chosen recipients."""

    def __init__(self):
        self.sent = []
        self.fail_for = set()

    def send(self, message):
        if message.to in self.fail_for:
            raise ConnectionRefusedError(f"SMTP refused {message.to}")
        self.sent.append(message)

    def recipients(self):
        return sorted(message.to for message in self.sent)


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
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def mail():
    return RecordingMailSender()


@pytest.fixture
def client(session_factory, mail):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_sender] = lambda: mail

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def tomorrow():
    return (datetime.now(timezone.utc) + timedelta(days=1)).replace(hour=10, minute=0, second=0, microsecond=0)


@pytest.fixture
def make_trip(session_factory, tomorrow):
    """Insert a trip with its owner (and optional invitees) straight into the database."""

    def _make_trip(destination="Florianópolis", starts_at=None, days=2, invitees=()):
        starts_at = starts_at or tomorrow
        with session_factory() as db:
            trip = Trip(destination=destination, starts_at=starts_at, ends_at=starts_at + timedelta(days=days))
            trip.participants.append(
                Participant(name="Olivia Owner", email="owner@example.com", is_owner=True, is_confirmed=True)
            )
            for email in invitees:
                trip.participants.append(Participant(email=email))
            db.add(trip)
            db.commit()
            return trip

    return _make_trip


@pytest.fixture
def count_rows(session_factory):
    def _count(model, **filters):
        with session_factory() as db:
            return db.query(model).filter_by(**filters).count()

    return _count


