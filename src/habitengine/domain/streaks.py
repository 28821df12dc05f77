"""Streak and completion-rate helpers computed from habit logs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..models.habit import Habit, HabitLog, LogStatus
from .calendar import add_days, subtract_days
from .completion import Completion, classify


def current_streak(logs: Iterable[HabitLog]) -> int:
    """Return the length of the most recent unbroken run of completed days.

    The scan anchors on the newest COMPLETED log, so a not-yet-completed log
    for today does not reset a run that ended yesterday.
    """

    ordered = sorted(logs, key=lambda log: log.log_date, reverse=True)
    streak = 0
    expected: Optional[date] = None
    for log in ordered:
        if expected is None:
            if log.status == LogStatus.COMPLETED:
                streak = 1
                expected = subtract_days(log.log_date, 1)
            continue
        if log.log_date == expected and log.status == LogStatus.COMPLETED:
            streak += 1
            expected = subtract_days(expected, 1)
        elif log.log_date < expected:
            return streak
    return streak


def longest_streak(logs: Iterable[HabitLog]) -> int:
    """Return the longest run of consecutive completed days in the history."""

    ordered = sorted(logs, key=lambda log: log.log_date)
    longest = 0
    run = 0
    last_day: Optional[date] = None
    for log in ordered:
        if log.status != LogStatus.COMPLETED:
            run = 0
            last_day = None
            continue
        if last_day is not None and log.log_date == add_days(last_day, 1):
            run += 1
        else:
            run = 1
        last_day = log.log_date
        longest = max(longest, run)
    return longest


def completion_rate_from_logs(logs: Iterable[HabitLog]) -> float:
    """Percentage of logs marked COMPLETED; 0.0 when there are none."""

    items = list(logs)
    if not items:
        return 0.0
    completed = sum(1 for log in items if log.status == LogStatus.COMPLETED)
    return completed / len(items) * 100.0


@dataclass(frozen=True)
class HabitWithLogs:
    """A habit together with its (full or windowed) log history."""

    habit: Habit
    logs: list[HabitLog] = field(default_factory=list)

    def log_for(self, day: date) -> Optional[HabitLog]:
        for log in self.logs:
            if log.log_date == day:
                return log
        return None

    def progress_for(self, day: date) -> Completion:
        return classify(self.habit, self.log_for(day))

    def current_streak(self) -> int:
        return current_streak(self.logs)

    def longest_streak(self) -> int:
        return longest_streak(self.logs)

    def completion_rate(self) -> float:
        return completion_rate_from_logs(self.logs)


__all__ = [
    "HabitWithLogs",
    "completion_rate_from_logs",
    "current_streak",
    "longest_streak",
]
