"""Exceptions raised by habit engine operations."""

from __future__ import annotations


class HabitEngineError(Exception):
    """Base class for engine errors."""


class HabitValidationError(HabitEngineError, ValueError):
    """A habit configuration is invalid (raised at create/update time)."""


class HabitNotFoundError(HabitEngineError, LookupError):
    """A referenced habit does not exist."""

    def __init__(self, habit_id: int):
        super().__init__(f"Habit {habit_id} was not found")
        self.habit_id = habit_id
