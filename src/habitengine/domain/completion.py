"""Classify a day's log against a habit's target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models.habit import Habit, HabitLog, LogStatus, QuantifiedTarget


@dataclass(frozen=True)
class Completion:
    """Outcome of classifying one day of a habit.

    ``status`` is None when nothing was logged for the day.
    """

    status: Optional[LogStatus]
    completed: bool
    progress: float

    @property
    def is_logged(self) -> bool:
        return self.status is not None


NOT_LOGGED = Completion(status=None, completed=False, progress=0.0)


def derive_status(
    habit: Habit, value: Optional[float], fallback: LogStatus = LogStatus.NOT_COMPLETED
) -> LogStatus:
    """Return the status a log with ``value`` should carry for ``habit``.

    Quantified habits complete once the target is reached and are PARTIAL
    with any positive progress below it. Binary habits complete with any
    positive value. Otherwise ``fallback`` is kept (e.g. SKIPPED); for
    quantified habits a COMPLETED or PARTIAL fallback becomes NOT_COMPLETED.
    """

    target = habit.target
    if isinstance(target, QuantifiedTarget):
        if value is not None and value >= target.amount:
            return LogStatus.COMPLETED
        if value is not None and value > 0:
            return LogStatus.PARTIAL
        return _non_completed(fallback)
    if value is not None and value > 0:
        return LogStatus.COMPLETED
    return fallback


def classify(habit: Habit, log: Optional[HabitLog]) -> Completion:
    """Classify ``log`` (the habit's log for one day, or None)."""

    if log is None:
        return NOT_LOGGED

    target = habit.target
    if not isinstance(target, QuantifiedTarget):
        completed = log.status == LogStatus.COMPLETED
        return Completion(status=log.status, completed=completed, progress=1.0 if completed else 0.0)

    if log.value is None:
        return Completion(status=_non_completed(log.status), completed=False, progress=0.0)

    progress = min(max(log.value / target.amount, 0.0), 1.0)
    status = derive_status(habit, log.value, fallback=log.status)
    return Completion(status=status, completed=status == LogStatus.COMPLETED, progress=progress)


def _non_completed(status: LogStatus) -> LogStatus:
    # A stored COMPLETED/PARTIAL label cannot override the numeric value.
    if status in (LogStatus.COMPLETED, LogStatus.PARTIAL):
        return LogStatus.NOT_COMPLETED
    return status


__all__ = ["Completion", "NOT_LOGGED", "classify", "derive_status"]
