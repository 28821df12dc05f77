"""Habit store protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Storage contract the engine reads habits and logs through."""

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, archived or not."""
        ...

    def list_active_habits(self, user_id: int) -> list[Habit]:
        """List a user's non-archived habits, newest first."""
        ...

    def list_all_habits(self, user_id: int) -> list[Habit]:
        """List all of a user's habits, newest first."""
        ...

    def create_habit(self, habit: Habit) -> Habit:
        """Persist a new habit."""
        ...

    def update_habit(self, habit: Habit) -> Habit:
        """Persist changes to an existing habit."""
        ...

    def archive_habit(self, habit_id: int, archived: bool) -> None:
        """Set or clear the archived flag."""
        ...

    def delete_habit(self, habit_id: int) -> None:
        """Delete a habit and its logs."""
        ...

    # Habit log operations
    def list_logs(
        self, habit_id: int, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[HabitLog]:
        """List logs for a habit, optionally within an inclusive date range."""
        ...

    def get_log(self, habit_id: int, day: date) -> Optional[HabitLog]:
        """Get the log for a habit on one day."""
        ...

    def upsert_log(self, log: HabitLog) -> HabitLog:
        """Insert a log or replace the existing one for the same habit and day."""
        ...
