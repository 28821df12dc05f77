"""Unit tests for the SQLModel habit store."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from habitengine.infra.repositories import SQLModelHabitRepository
from habitengine.models import FrequencyKind, Habit, HabitLog, LogStatus, Weekday


class TestHabitQueries:
    """Reading habits back out of the store."""

    def test_get_habit_round_trips_weekday_set(self, repo, habit_factory):
        created = habit_factory(
            "Gym",
            frequency=FrequencyKind.CUSTOM,
            weekdays=[Weekday.FRIDAY, Weekday.MONDAY],
            daily_target=3,
        )

        fetched = repo.get_habit(created.id)

        assert fetched is not None
        assert fetched.scheduled_weekdays == frozenset({Weekday.MONDAY, Weekday.FRIDAY})
        assert fetched.frequency is FrequencyKind.CUSTOM
        assert fetched.daily_target == 3

    def test_weekday_set_is_stored_as_delimited_indexes(self, habit_factory, db_session):
        habit = habit_factory("Swim", frequency=FrequencyKind.WEEKLY, weekdays=[Weekday.SUNDAY, Weekday.TUESDAY])

        raw = db_session.connection().exec_driver_sql(
            "SELECT scheduled_weekdays FROM habit WHERE id = ?", (habit.id,)
        ).scalar_one()

        assert raw == "1,6"

    def test_get_missing_habit_returns_none(self, repo):
        assert repo.get_habit(999) is None

    def test_list_active_excludes_archived_and_orders_newest_first(self, repo, habit_factory):
        first = habit_factory("Read")
        habit_factory("Old", is_archived=True)
        third = habit_factory("Run")
        habit_factory("Other user", user_id=2)

        active = repo.list_active_habits(1)
        everything = repo.list_all_habits(1)

        assert [h.id for h in active] == [third.id, first.id]
        assert len(everything) == 3
        assert everything[0].id == third.id

    def test_create_update_archive(self, repo):
        habit = repo.create_habit(Habit(user_id=1, name="Journal"))
        assert habit.id is not None

        habit.description = "Three lines before bed"
        updated = repo.update_habit(habit)
        assert updated.description == "Three lines before bed"

        repo.archive_habit(habit.id, True)
        assert repo.get_habit(habit.id).is_archived
        assert repo.list_active_habits(1) == []

        repo.archive_habit(habit.id, False)
        assert not repo.get_habit(habit.id).is_archived

    def test_delete_habit_removes_logs(self, repo, habit_factory, log_factory, db_session):
        habit = habit_factory("Floss")
        log_factory(habit, date(2024, 6, 1))

        repo.delete_habit(habit.id)

        assert repo.get_habit(habit.id) is None
        assert db_session.exec(select(HabitLog).where(HabitLog.habit_id == habit.id)).all() == []


class TestHabitLogs:
    """Log lookups and replace-by-date upserts."""

    def test_get_log_missing_returns_none(self, repo, habit_factory):
        habit = habit_factory()
        assert repo.get_log(habit.id, date(2024, 6, 1)) is None

    def test_list_logs_filters_range_and_sorts_ascending(self, repo, habit_factory, log_factory):
        habit = habit_factory()
        for day in (5, 1, 3, 7, 2):
            log_factory(habit, date(2024, 1, day))

        windowed = repo.list_logs(habit.id, date(2024, 1, 2), date(2024, 1, 5))
        everything = repo.list_logs(habit.id)

        assert [log.log_date.day for log in windowed] == [2, 3, 5]
        assert [log.log_date.day for log in everything] == [1, 2, 3, 5, 7]

    def test_upsert_creates_new_log(self, repo, habit_factory):
        habit = habit_factory()

        saved = repo.upsert_log(
            HabitLog(habit_id=habit.id, log_date=date(2024, 6, 1), status=LogStatus.PARTIAL, value=2)
        )

        assert saved.id is not None
        assert repo.get_log(habit.id, date(2024, 6, 1)).value == 2

    def test_upsert_replaces_existing_log_for_same_day(self, repo, habit_factory, log_factory):
        habit = habit_factory()
        original = log_factory(habit, date(2024, 6, 1), LogStatus.PARTIAL, value=1)

        saved = repo.upsert_log(
            HabitLog(habit_id=habit.id, log_date=date(2024, 6, 1), status=LogStatus.COMPLETED, value=4)
        )

        assert saved.id == original.id
        logs = repo.list_logs(habit.id)
        assert len(logs) == 1
        assert logs[0].status is LogStatus.COMPLETED
        assert logs[0].value == 4

    def test_upsert_replaces_row_inserted_by_concurrent_writer(self, repo, habit_factory, log_factory, monkeypatch):
        """An insert that loses the race on the unique day updates the winning row."""
        habit = habit_factory()
        winner = log_factory(habit, date(2024, 6, 1), LogStatus.PARTIAL, value=2)

        real_find = SQLModelHabitRepository._find_log
        calls = {"n": 0}

        def stale_first_lookup(session, habit_id, day):
            calls["n"] += 1
            if calls["n"] == 1:
                return None
            return real_find(session, habit_id, day)

        monkeypatch.setattr(SQLModelHabitRepository, "_find_log", staticmethod(stale_first_lookup))

        saved = repo.upsert_log(
            HabitLog(habit_id=habit.id, log_date=date(2024, 6, 1), status=LogStatus.COMPLETED, value=5)
        )

        assert calls["n"] == 2
        assert saved.id == winner.id
        assert saved.status is LogStatus.COMPLETED
        logs = repo.list_logs(habit.id)
        assert len(logs) == 1
        assert logs[0].value == 5

    def test_unique_constraint_rejects_duplicate_day(self, habit_factory, log_factory, db_session):
        habit = habit_factory()
        log_factory(habit, date(2024, 6, 1))

        db_session.add(HabitLog(habit_id=habit.id, log_date=date(2024, 6, 1), status=LogStatus.MISSED))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
