"""Calendar arithmetic helpers."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

from ..models.habit import Weekday


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def subtract_days(day: date, days: int) -> date:
    return day - timedelta(days=days)


def weekday_of(day: date) -> Weekday:
    """Return the weekday of ``day`` (Monday is ``Weekday.MONDAY``)."""

    return Weekday(day.weekday())


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor = add_days(cursor, 1)


__all__ = ["add_days", "iter_dates", "subtract_days", "weekday_of"]
