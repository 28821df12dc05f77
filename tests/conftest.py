"""Pytest configuration and shared fixtures for habitengine tests.

Provides an isolated SQLite database per test, a session factory matching the
one repositories receive in production, and factories for habits and logs.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional

import pytest
from sqlmodel import Session, SQLModel

from habitengine.config import BaseConfig
from habitengine.infra.database import create_db_engine, create_session_factory
from habitengine.infra.repositories import SQLModelHabitRepository
from habitengine.models import FrequencyKind, Habit, HabitKind, HabitLog, LogStatus, Weekday

USER_ID = 1


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(monkeypatch, tmp_path):
    """Create an isolated temporary SQLite database for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    monkeypatch.setenv("HABITENGINE_DATA_DIR", str(tmp_path))

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False, dir=tmp_path) as f:
        db_path = Path(f.name)

    config = BaseConfig()
    config.DATABASE_URL = f"sqlite:///{db_path}"
    engine = create_db_engine(config)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory with the same commit/rollback semantics as production."""
    return create_session_factory(db_engine)


@pytest.fixture
def repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating and persisting test habits.

    Each call gets a strictly later ``created_at`` so ordering is deterministic.
    """

    base = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _create_habit(
        name: str = "Test Habit",
        *,
        user_id: int = USER_ID,
        kind: HabitKind = HabitKind.DO,
        frequency: FrequencyKind = FrequencyKind.DAILY,
        weekdays: Iterable[Weekday] = (),
        daily_target: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        is_archived: bool = False,
    ) -> Habit:
        counter["n"] += 1
        habit = Habit(
            user_id=user_id,
            name=name,
            kind=kind,
            frequency=frequency,
            scheduled_weekdays=frozenset(weekdays),
            daily_target=daily_target,
            start_date=start_date,
            end_date=end_date,
            is_archived=is_archived,
            created_at=base + timedelta(minutes=counter["n"]),
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory for creating and persisting habit logs."""

    def _create_log(
        habit: Habit,
        log_date: date,
        status: LogStatus = LogStatus.COMPLETED,
        value: Optional[float] = None,
    ) -> HabitLog:
        log = HabitLog(habit_id=habit.id, log_date=log_date, status=status, value=value)
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        return log

    return _create_log

