"""Recurrence rules: decide whether a habit is due on a given date."""

from __future__ import annotations

from datetime import date

from ..models.habit import FrequencyKind, Habit
from .calendar import iter_dates, weekday_of
from .errors import HabitValidationError


def validate_habit(habit: Habit) -> None:
    """Raise ``HabitValidationError`` when the habit configuration is unusable."""

    if not habit.name or not habit.name.strip():
        raise HabitValidationError("Habit name cannot be empty")
    if habit.frequency != FrequencyKind.DAILY and not habit.scheduled_weekdays:
        raise HabitValidationError(
            f"{FrequencyKind(habit.frequency).value} habits need at least one scheduled weekday"
        )
    if habit.daily_target is not None and habit.daily_target <= 0:
        raise HabitValidationError("Daily target must be a positive integer")
    if habit.start_date and habit.end_date and habit.end_date < habit.start_date:
        raise HabitValidationError("End date cannot be before start date")


def is_due_on(habit: Habit, day: date) -> bool:
    """Return True when ``habit`` is scheduled on ``day``."""

    if habit.is_archived:
        return False
    if habit.start_date is not None and day < habit.start_date:
        return False
    if habit.end_date is not None and day > habit.end_date:
        return False
    if habit.frequency == FrequencyKind.DAILY:
        return True
    return weekday_of(day) in habit.scheduled_weekdays


def due_dates(habit: Habit, start: date, end: date) -> list[date]:
    """List every due date between ``start`` and ``end`` inclusive."""

    return [day for day in iter_dates(start, end) if is_due_on(habit, day)]


__all__ = ["due_dates", "is_due_on", "validate_habit"]
