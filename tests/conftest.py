from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import mood_analyzer.models  # noqa: F401  registers tables
from mood_analyzer.db.session import Base
from mood_analyzer.services.trend_analysis import HistoricalEntry
from mood_analyzer.utils.emotion_mapping import resolve_emotion

NOW = datetime(2025, 3, 15, 12, 0, 0)


@pytest.fixture()
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


@pytest.fixture()
def db(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    from fastapi.testclient import TestClient

    from main import app
    from mood_analyzer.db.session import get_db

    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_entry(mood_id: str, days_ago: float, now: datetime = NOW) -> HistoricalEntry:
    emotion = resolve_emotion(mood_id)
    return HistoricalEntry(
        timestamp=now - timedelta(days=days_ago),
        mood_id=mood_id,
        mood_value=emotion.value,
        mood_name=emotion.name,
    )


def make_history(*moods_and_ages, now: datetime = NOW):
    """(mood_id, days_ago) pairs -> entries sorted newest first."""
    entries = [make_entry(mood_id, age, now) for mood_id, age in moods_and_ages]
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)
