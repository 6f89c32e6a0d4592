"""Urgency-based selection of the stops to route."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from .models import RoutePreferences, StopTimeWindow
from .priority import DEFAULT_DUE_HORIZON_DAYS, score


def select_stops(
    stops: Sequence[StopTimeWindow],
    preferences: RoutePreferences,
    now: datetime | None = None,
    default_horizon_days: float = DEFAULT_DUE_HORIZON_DAYS,
) -> list[StopTimeWindow]:
    """Order stops by descending urgency and keep at most ``max_stops``.

    Every stop is scored once against the same ``now``. ``sorted`` is stable,
    so stops with equal scores keep their input order. Stops beyond the limit
    are dropped without notice. A ``max_stops`` of 0 or None means no limit.
    """

    now = now or datetime.now(timezone.utc)
    scores = [score(stop, now, default_horizon_days) for stop in stops]
    order = sorted(range(len(stops)), key=lambda index: scores[index], reverse=True)
    ranked = [stops[index] for index in order]
    if preferences.max_stops:
        return ranked[: preferences.max_stops]
    return ranked
