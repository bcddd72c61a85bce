"""UTC calendar windows used by listings and dashboards."""
from __future__ import annotations

from datetime import datetime, time, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _start_of_day(moment: datetime) -> datetime:
    moment = moment.astimezone(timezone.utc) if moment.tzinfo else moment.replace(tzinfo=timezone.utc)
    return datetime.combine(moment.date(), time.min, tzinfo=timezone.utc)


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return the inclusive bounds of ``now``'s UTC day."""

    start = _start_of_day(now)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return Monday 00:00 to Sunday 23:59:59.999999 around ``now``."""

    start = _start_of_day(now)
    start -= timedelta(days=start.weekday())
    return start, start + timedelta(days=7) - timedelta(microseconds=1)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    following = datetime(year + 1, 1, 1, tzinfo=timezone.utc) if month == 12 else datetime(
        year, month + 1, 1, tzinfo=timezone.utc
    )
    return start, following - timedelta(microseconds=1)
