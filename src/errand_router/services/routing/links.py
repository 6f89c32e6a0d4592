"""Shareable Google Maps links for optimized routes."""

from __future__ import annotations

from urllib.parse import urlencode

from .models import LatLng, OptimizedRoute, RoutePreferences

MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def _visit_order(points: list[str], waypoint_order: list[int] | None) -> list[str]:
    """Apply the provider's ``waypoint_order`` when it is a permutation of ``points``."""

    if not waypoint_order or sorted(waypoint_order) != list(range(len(points))):
        return points
    return [points[index] for index in waypoint_order]


def build_maps_url(origin: LatLng, route: OptimizedRoute, preferences: RoutePreferences) -> str:
    """Return a ``maps/dir/?api=1`` link that opens the route in Google Maps.

    Intermediate stops follow the order the provider chose. In an open route
    the last selected stop stays the destination.
    """

    points = [waypoint.location.as_param() for waypoint in route.waypoints]
    if preferences.return_to_start or not points:
        destination = origin.as_param()
    else:
        destination = points.pop()
    points = _visit_order(points, route.waypoint_order)

    params = {
        "api": "1",
        "origin": origin.as_param(),
        "destination": destination,
        "travelmode": preferences.transport_mode.value.lower(),
    }
    if points:
        params["waypoints"] = "|".join(points)
    return f"{MAPS_DIRECTIONS_URL}?{urlencode(params)}"
