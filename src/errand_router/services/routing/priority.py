"""Urgency scoring for candidate stops."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .models import Priority, StopTimeWindow

PRIORITY_WEIGHTS: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}

DEFAULT_DUE_HORIZON_DAYS = 7.0
SECONDS_PER_DAY = 24 * 60 * 60


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def score(
    stop: StopTimeWindow,
    now: datetime,
    default_horizon_days: float = DEFAULT_DUE_HORIZON_DAYS,
) -> float:
    """Return ``weight * (1 + 1 / days_until_due)`` for a stop.

    ``days_until_due`` is clamped to at least one day, so overdue stops and
    stops due today share the maximum multiplier of 2. Stops without a due
    date are assumed due ``default_horizon_days`` from ``now``.
    """

    now = as_utc(now)
    if stop.due_date is not None:
        due = as_utc(stop.due_date)
    else:
        due = now + timedelta(days=default_horizon_days)
    days_until_due = max(1.0, (due - now).total_seconds() / SECONDS_PER_DAY)
    return PRIORITY_WEIGHTS[Priority(stop.priority)] * (1 + 1 / days_until_due)
