"""SQLModel table exports."""

from .habit import (
    BinaryTarget,
    FrequencyKind,
    Habit,
    HabitKind,
    HabitLog,
    LogStatus,
    QuantifiedTarget,
    Target,
    Weekday,
)

__all__ = [
    "BinaryTarget",
    "FrequencyKind",
    "Habit",
    "HabitKind",
    "HabitLog",
    "LogStatus",
    "QuantifiedTarget",
    "Target",
    "Weekday",
]
