"""Habit and habit log data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Union

from sqlalchemy import Column, String, UniqueConstraint
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


class HabitKind(str, Enum):
    """Whether success means doing the behaviour or avoiding it."""

    DO = "do"
    AVOID = "avoid"


class FrequencyKind(str, Enum):
    """Recurrence rule families."""

    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class LogStatus(str, Enum):
    """Stored outcome of a habit on one day."""

    COMPLETED = "completed"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    MISSED = "missed"
    NOT_COMPLETED = "not_completed"


class Weekday(int, Enum):
    """Day of week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class WeekdaySet(TypeDecorator):
    """Persist a set of weekdays as a comma-delimited string of indexes.

    ``{Weekday.MONDAY, Weekday.FRIDAY}`` is stored as ``"0,4"``; empty sets are
    stored as an empty string.
    """

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return ""
        return ",".join(str(int(day)) for day in sorted(Weekday(d) for d in value))

    def process_result_value(self, value, dialect):
        if not value:
            return frozenset()
        return frozenset(Weekday(int(part)) for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class BinaryTarget:
    """Completion is a yes/no flag taken from the log status."""


@dataclass(frozen=True)
class QuantifiedTarget:
    """Completion requires a logged value of at least ``amount``."""

    amount: int


Target = Union[BinaryTarget, QuantifiedTarget]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A user-defined recurring behaviour with a schedule and optional target."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    kind: HabitKind = Field(default=HabitKind.DO, nullable=False)
    frequency: FrequencyKind = Field(default=FrequencyKind.DAILY, nullable=False, index=True)
    scheduled_weekdays: frozenset[Weekday] = Field(
        default_factory=frozenset,
        sa_column=Column(WeekdaySet(), nullable=False, default=""),
    )
    daily_target: Optional[int] = Field(default=None)
    start_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    is_archived: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False, index=True)

    @property
    def target(self) -> Target:
        """Return the completion target as a tagged variant."""

        if self.daily_target is not None and self.daily_target > 0:
            return QuantifiedTarget(self.daily_target)
        return BinaryTarget()

    @property
    def is_quantified(self) -> bool:
        return isinstance(self.target, QuantifiedTarget)


class HabitLog(SQLModel, table=True):
    """One observation of a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (UniqueConstraint("habit_id", "log_date", name="uq_habit_log_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True, ondelete="CASCADE")
    log_date: date = Field(nullable=False, index=True)
    status: LogStatus = Field(nullable=False)
    value: Optional[float] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
