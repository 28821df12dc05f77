"""Service layer for habit tracking operations."""

from .habits import (
    DueTodayItem,
    adjust_progress,
    completion_rate,
    create_habit,
    due_today,
    get_habit_with_logs,
    mark_missed,
    mark_not_completed,
    mark_skipped,
    record_progress,
    set_archived,
    update_habit,
)

__all__ = [
    "DueTodayItem",
    "adjust_progress",
    "completion_rate",
    "create_habit",
    "due_today",
    "get_habit_with_logs",
    "mark_missed",
    "mark_not_completed",
    "mark_skipped",
    "record_progress",
    "set_archived",
    "update_habit",
]
