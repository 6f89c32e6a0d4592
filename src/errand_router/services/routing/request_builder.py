"""Translate selected stops and preferences into a directions request."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from .errors import EmptyStopSetError
from .models import (
    DirectionsRequest,
    DrivingOptions,
    LatLng,
    RoutePreferences,
    StopTimeWindow,
    Waypoint,
)
from .priority import as_utc

BEST_GUESS_TRAFFIC_MODEL = "best_guess"


def build_waypoints(stops: Sequence[StopTimeWindow]) -> list[Waypoint]:
    return [Waypoint(location=stop.location, stopover=True) for stop in stops]


def build_request(
    origin: LatLng,
    selected_stops: Sequence[StopTimeWindow],
    preferences: RoutePreferences,
    now: datetime | None = None,
) -> DirectionsRequest:
    """Build the provider request for an urgency-ordered list of stops.

    The stop order is only a hint, the provider is always asked to reorder
    the intermediate waypoints itself. For a closed loop every stop is an
    intermediate waypoint and the route ends back at ``origin``; otherwise
    the last stop becomes the destination and is left out of the waypoints.
    """

    if not selected_stops:
        raise EmptyStopSetError()

    waypoints = build_waypoints(selected_stops)
    if preferences.return_to_start:
        destination = origin
    else:
        destination = waypoints[-1].location
        waypoints = waypoints[:-1]

    driving_options = None
    if preferences.consider_traffic:
        driving_options = DrivingOptions(
            departure_time=as_utc(now) if now else datetime.now(timezone.utc),
            traffic_model=BEST_GUESS_TRAFFIC_MODEL,
        )

    return DirectionsRequest(
        origin=origin,
        destination=destination,
        waypoints=waypoints,
        travel_mode=preferences.transport_mode,
        optimize_waypoints=True,
        avoid_highways=preferences.avoid_highways,
        avoid_tolls=preferences.avoid_tolls,
        driving_options=driving_options,
    )
