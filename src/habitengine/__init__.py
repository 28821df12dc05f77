"""Habit recurrence and progress-tracking engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .domain.completion import Completion, classify
from .domain.recurrence import is_due_on
from .domain.streaks import HabitWithLogs, current_streak, longest_streak
from .services.habits import completion_rate, due_today, record_progress

__all__ = [
    "BaseConfig",
    "Completion",
    "DevConfig",
    "HabitWithLogs",
    "TestConfig",
    "classify",
    "completion_rate",
    "current_streak",
    "due_today",
    "is_due_on",
    "longest_streak",
    "record_progress",
]
