"""Weekly windows covering an account's history."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

from tweetharvest.models import TimeWindow

EPOCH = datetime(2011, 1, 1)
WEEK = timedelta(days=7)


def end_of_day(instant: datetime) -> datetime:
    """Midnight following *instant*, i.e. the exclusive end of its day."""
    midnight = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=1)


def _naive_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def plan_windows(now: datetime | None = None) -> Iterator[TimeWindow]:
    """Yield contiguous weekly windows from ``EPOCH`` to the end of *now*'s day.

    The final window is clipped so the windows jointly cover exactly
    ``[EPOCH, end_of_day(now))``. Aware datetimes are converted to naive UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    end = end_of_day(_naive_utc(now))
    start = EPOCH
    while start < end:
        yield TimeWindow(start=start, end=min(start + WEEK, end))
        start += WEEK
