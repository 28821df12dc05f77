"""Habit operations: logging progress, today's agenda, and statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..domain.completion import Completion, classify, derive_status
from ..domain.errors import HabitNotFoundError, HabitValidationError
from ..domain.recurrence import is_due_on, validate_habit
from ..domain.repositories.habit import HabitRepository
from ..domain.streaks import HabitWithLogs, completion_rate_from_logs
from ..logging_config import get_logger
from ..models.habit import Habit, HabitLog, LogStatus

logger = get_logger("services.habits")


@dataclass(frozen=True)
class DueTodayItem:
    """A habit due on the queried day with that day's log and classification."""

    habit: Habit
    log: Optional[HabitLog]
    completion: Completion

    @property
    def status(self) -> Optional[LogStatus]:
        return self.completion.status

    @property
    def progress(self) -> float:
        return self.completion.progress


def _require_habit(repo: HabitRepository, habit_id: int) -> Habit:
    habit = repo.get_habit(habit_id)
    if habit is None:
        logger.warning("Habit not found", extra={"habit_id": habit_id})
        raise HabitNotFoundError(habit_id)
    return habit


def _validated(habit: Habit) -> Habit:
    try:
        validate_habit(habit)
    except HabitValidationError as exc:
        logger.warning("Rejected habit configuration: %s", exc, extra={"habit_name": habit.name})
        raise
    return habit


# ---------------------------------------------------------------------------
# Habit lifecycle
# ---------------------------------------------------------------------------


def create_habit(repo: HabitRepository, habit: Habit) -> Habit:
    """Validate and persist a new habit."""

    created = repo.create_habit(_validated(habit))
    logger.info("Habit created", extra={"habit_id": created.id, "user_id": created.user_id})
    return created


def update_habit(repo: HabitRepository, habit: Habit) -> Habit:
    """Validate and persist changes to an existing habit."""

    if habit.id is None:
        raise HabitValidationError("Cannot update a habit that was never saved")
    existing = _require_habit(repo, habit.id)
    # Ownership, archive state and creation time are not editable here.
    habit.user_id = existing.user_id
    habit.is_archived = existing.is_archived
    habit.created_at = existing.created_at
    updated = repo.update_habit(_validated(habit))
    logger.info("Habit updated", extra={"habit_id": updated.id})
    return updated


def set_archived(repo: HabitRepository, habit_id: int, archived: bool) -> None:
    """Archive or unarchive a habit; history is kept either way."""

    _require_habit(repo, habit_id)
    repo.archive_habit(habit_id, archived)
    logger.info("Habit archive flag changed", extra={"habit_id": habit_id, "archived": archived})


def get_habit_with_logs(
    repo: HabitRepository,
    habit_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> HabitWithLogs:
    """Return the habit with its logs, optionally windowed to ``start``..``end``."""

    habit = _require_habit(repo, habit_id)
    return HabitWithLogs(habit=habit, logs=repo.list_logs(habit_id, start, end))


# ---------------------------------------------------------------------------
# Logging progress
# ---------------------------------------------------------------------------


def record_progress(
    repo: HabitRepository,
    habit_id: int,
    day: date,
    value: Optional[float],
    status: Optional[LogStatus] = None,
) -> HabitLog:
    """Write the habit's log for ``day``, replacing any existing one.

    The stored status comes from ``derive_status`` so it always matches what
    ``classify`` reports for the same value. ``status`` is kept only when the
    value does not complete the habit (e.g. an explicit SKIPPED).
    """

    habit = _require_habit(repo, habit_id)
    final_status = derive_status(habit, value, fallback=status or LogStatus.NOT_COMPLETED)
    saved = repo.upsert_log(HabitLog(habit_id=habit_id, log_date=day, status=final_status, value=value))
    logger.info(
        "Habit progress recorded",
        extra={"habit_id": habit_id, "date": day.isoformat(), "value": value, "status": final_status.value},
    )
    return saved


def adjust_progress(repo: HabitRepository, habit_id: int, day: date, delta: float) -> HabitLog:
    """Add ``delta`` to the day's logged value (never below zero)."""

    existing = repo.get_log(habit_id, day)
    current = existing.value if existing is not None and existing.value is not None else 0.0
    return record_progress(repo, habit_id, day, max(current + delta, 0.0))


def mark_skipped(repo: HabitRepository, habit_id: int, day: date) -> HabitLog:
    """Record an explicit skip for ``day``."""

    return record_progress(repo, habit_id, day, 0.0, status=LogStatus.SKIPPED)


def mark_not_completed(repo: HabitRepository, habit_id: int, day: date) -> Optional[HabitLog]:
    """Undo a day's progress. Returns None when there was nothing logged."""

    existing = repo.get_log(habit_id, day)
    if existing is None:
        logger.debug("Nothing to undo", extra={"habit_id": habit_id, "date": day.isoformat()})
        return None
    return record_progress(repo, habit_id, day, 0.0)


def mark_missed(repo: HabitRepository, user_id: int, day: date) -> list[HabitLog]:
    """Mark every habit due on ``day`` without a COMPLETED or SKIPPED log as MISSED."""

    written: list[HabitLog] = []
    for habit in repo.list_active_habits(user_id):
        if habit.id is None or not is_due_on(habit, day):
            continue
        existing = repo.get_log(habit.id, day)
        if existing is not None and existing.status in (LogStatus.COMPLETED, LogStatus.SKIPPED):
            continue
        written.append(
            repo.upsert_log(HabitLog(habit_id=habit.id, log_date=day, status=LogStatus.MISSED, value=0.0))
        )
    logger.info(
        "Missed habits marked",
        extra={"user_id": user_id, "date": day.isoformat(), "count": len(written)},
    )
    return written


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def due_today(repo: HabitRepository, user_id: int, today: date) -> list[DueTodayItem]:
    """Return the user's habits due on ``today``, newest habits first."""

    items: list[DueTodayItem] = []
    for habit in repo.list_active_habits(user_id):
        if habit.id is None or not is_due_on(habit, today):
            continue
        log = repo.get_log(habit.id, today)
        items.append(DueTodayItem(habit=habit, log=log, completion=classify(habit, log)))
    items.sort(key=lambda item: (item.habit.created_at, item.habit.id or 0), reverse=True)
    logger.debug("Due habits resolved", extra={"user_id": user_id, "date": today.isoformat(), "count": len(items)})
    return items


def completion_rate(repo: HabitRepository, habit_id: int, start: date, end: date) -> float:
    """Percentage of logs in ``start``..``end`` marked COMPLETED (0.0 with no logs)."""

    return completion_rate_from_logs(repo.list_logs(habit_id, start, end))


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
