"""SQLModel implementation of the habit store."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from ...models.habit import Habit, HabitLog


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all_habits(self, user_id: int, *, include_archived: bool = True) -> list[Habit]:
        """List a user's habits, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(col(Habit.created_at).desc(), col(Habit.id).desc())
            )

            if not include_archived:
                statement = statement.where(Habit.is_archived == False)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active_habits(self, user_id: int) -> list[Habit]:
        """List only non-archived habits."""
        return self.list_all_habits(user_id, include_archived=False)

    def create_habit(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update_habit(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def archive_habit(self, habit_id: int, archived: bool) -> None:
        """Set the archived flag on a habit."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                habit.is_archived = archived
                session.add(habit)
                session.commit()

    def delete_habit(self, habit_id: int) -> None:
        """Delete a habit and all of its logs."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                for log in session.exec(select(HabitLog).where(HabitLog.habit_id == habit_id)).all():
                    session.delete(log)
                session.delete(habit)
                session.commit()

    # Habit log operations
    def list_logs(
        self, habit_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[HabitLog]:
        """List logs for a habit in ascending date order."""
        with self.session_factory() as session:
            statement = select(HabitLog).where(HabitLog.habit_id == habit_id)
            if start is not None:
                statement = statement.where(HabitLog.log_date >= start)
            if end is not None:
                statement = statement.where(HabitLog.log_date <= end)
            statement = statement.order_by(col(HabitLog.log_date))
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_log(self, habit_id: int, day: date) -> Optional[HabitLog]:
        """Get the log for a habit on a specific day."""
        with self.session_factory() as session:
            obj = self._find_log(session, habit_id, day)
            if obj:
                session.expunge(obj)
            return obj

    def upsert_log(self, log: HabitLog) -> HabitLog:
        """Insert a log or replace status/value of the one already stored for that day."""
        with self.session_factory() as session:
            existing = self._find_log(session, log.habit_id, log.log_date)
            if existing is None:
                session.add(log)
                try:
                    session.commit()
                except IntegrityError:
                    # Another writer inserted the same day first; replace its row.
                    session.rollback()
                    existing = self._find_log(session, log.habit_id, log.log_date)
                    if existing is None:
                        raise
                else:
                    session.refresh(log)
                    session.expunge(log)
                    return log

            existing.status = log.status
            existing.value = log.value
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing

    @staticmethod
    def _find_log(session: Session, habit_id: int, day: date) -> Optional[HabitLog]:
        statement = (
            select(HabitLog)
            .where(HabitLog.habit_id == habit_id)
            .where(HabitLog.log_date == day)
        )
        return session.exec(statement).first()
