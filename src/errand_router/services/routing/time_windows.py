"""Arrival time window checks for stops."""

from __future__ import annotations

from datetime import datetime

from .models import StopTimeWindow
from .priority import as_utc


def is_within_window(stop: StopTimeWindow, estimated_arrival: datetime) -> bool:
    """Return True when ``estimated_arrival`` satisfies the stop's window.

    Each bound is checked only when set; a stop with no bounds always passes.
    """

    if stop.earliest_arrival is None and stop.latest_arrival is None:
        return True
    arrival = as_utc(estimated_arrival)
    if stop.earliest_arrival is not None and arrival < as_utc(stop.earliest_arrival):
        return False
    if stop.latest_arrival is not None and arrival > as_utc(stop.latest_arrival):
        return False
    return True
