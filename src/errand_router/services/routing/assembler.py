"""Normalize a directions provider response into an OptimizedRoute."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from .errors import NoRouteFoundError
from .models import LatLng, OptimizedRoute, Priority, RouteSegment, StopTimeWindow
from .request_builder import build_waypoints

DEFAULT_DISTANCE_TEXT = "0 km"
DEFAULT_DURATION_TEXT = "0 mins"


def _location(raw: Mapping[str, Any] | None) -> LatLng:
    raw = raw or {}
    return LatLng(lat=float(raw.get("lat", 0.0)), lng=float(raw.get("lng", 0.0)))


def _text(measure: Mapping[str, Any] | None, default: str) -> str:
    if not measure:
        return default
    return measure.get("text") or default


def _value(measure: Mapping[str, Any] | None) -> int:
    if not measure:
        return 0
    return int(measure.get("value") or 0)


def leg_to_segment(leg: Mapping[str, Any], priority: Priority) -> RouteSegment:
    return RouteSegment(
        start_location=_location(leg.get("start_location")),
        end_location=_location(leg.get("end_location")),
        distance_text=_text(leg.get("distance"), DEFAULT_DISTANCE_TEXT),
        duration_text=_text(leg.get("duration"), DEFAULT_DURATION_TEXT),
        priority=priority,
    )


def assemble(response: Mapping[str, Any], selected_stops: Sequence[StopTimeWindow]) -> OptimizedRoute:
    """Build the route from ``routes[0]`` of a provider response.

    Leg ``i`` takes the priority of ``selected_stops[i]`` and falls back to
    medium when there is no stop at that index (the closing leg of a loop, or
    a destination stop that was excluded from the waypoints). Totals are the
    exact sum of per-leg values, a leg without a value counts as zero.
    """

    routes = response.get("routes") or []
    if not routes:
        raise NoRouteFoundError()

    route = routes[0]
    segments: list[RouteSegment] = []
    total_distance = 0
    total_duration = 0

    legs = route.get("legs") or []
    for index, leg in enumerate(legs):
        stop = selected_stops[index] if index < len(selected_stops) else None
        priority = Priority(stop.priority) if stop is not None else Priority.MEDIUM
        segments.append(leg_to_segment(leg, priority))
        total_distance += _value(leg.get("distance"))
        total_duration += _value(leg.get("duration"))

    waypoint_order = route.get("waypoint_order")

    return OptimizedRoute(
        waypoints=build_waypoints(selected_stops),
        total_distance_meters=total_distance,
        total_duration_seconds=total_duration,
        segments=segments,
        # Only multi-stop routes advertise alternatives; none are explored.
        alternative_routes=[] if len(legs) > 1 else None,
        waypoint_order=list(waypoint_order) if waypoint_order is not None else None,
    )
