"""Route optimization orchestration service."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Sequence

from ...config import settings
from ...schemas.routing import OptimizeRouteRequest, OptimizeRouteResponse
from ..outputs.route_formatter import optimized_route_to_csv, optimized_route_to_json
from .assembler import assemble
from .directions_client import DirectionsProvider, GoogleDirectionsClient
from .errors import EmptyStopSetError, ProviderRequestError, RoutingError
from .links import build_maps_url
from .models import LatLng, OptimizedRoute, RoutePreferences, StopTimeWindow
from .request_builder import build_request
from .selector import select_stops

logger = logging.getLogger(__name__)


async def optimize_route(
    origin: LatLng,
    candidate_stops: Sequence[StopTimeWindow],
    preferences: RoutePreferences,
    provider: DirectionsProvider | None = None,
    now: datetime | None = None,
) -> OptimizedRoute:
    """Rank the candidate stops, request one route and normalize the result.

    Raises ``EmptyStopSetError`` before any network call when nothing is left
    to route, ``NoRouteFoundError`` when the provider finds no route and
    ``ProviderRequestError`` when the provider call fails. Nothing is retried.
    """

    now = now or datetime.now(timezone.utc)
    selected = select_stops(
        candidate_stops,
        preferences,
        now=now,
        default_horizon_days=settings.default_due_horizon_days,
    )
    if not selected:
        raise EmptyStopSetError()

    dropped = len(candidate_stops) - len(selected)
    if dropped:
        logger.info(f"Routing {len(selected)} of {len(candidate_stops)} stops; {dropped} lower-urgency stops left out")
    else:
        logger.info(f"Routing {len(selected)} stops")

    request = build_request(origin, selected, preferences, now=now)

    try:
        directions = provider or GoogleDirectionsClient()
        response = await directions.route(request)
    except RoutingError:
        raise
    except Exception as exc:
        logger.error(f"Directions provider failed: {exc}")
        raise ProviderRequestError(f"Directions provider failed: {exc}") from exc

    route = assemble(response, selected)
    logger.info(
        f"Route ready: {len(route.segments)} legs, "
        f"{route.total_distance_meters} m, {route.total_duration_seconds} s"
    )
    return route


def resolve_payload(payload: OptimizeRouteRequest) -> tuple[LatLng, list[StopTimeWindow], RoutePreferences]:
    """Convert an API payload to domain inputs.

    When the caller does not cap the number of stops, the provider's
    waypoint limit from settings is applied instead.
    """

    origin = payload.origin.to_domain()
    stops = [stop.to_domain() for stop in payload.stops]
    preferences = payload.preferences.to_domain()
    if preferences.max_stops is None and len(stops) > settings.max_waypoints:
        logger.warning(
            f"Only the first {settings.max_waypoints} stops by urgency will be routed; "
            f"{len(stops)} were requested"
        )
        preferences = replace(preferences, max_stops=settings.max_waypoints)
    return origin, stops, preferences


async def optimize_route_request(
    payload: OptimizeRouteRequest,
    provider: DirectionsProvider | None = None,
) -> OptimizeRouteResponse:
    origin, stops, preferences = resolve_payload(payload)
    route = await optimize_route(origin, stops, preferences, provider=provider)

    routed = len(route.waypoints)
    return OptimizeRouteResponse.from_domain(
        route,
        maps_url=build_maps_url(origin, route, preferences),
        metadata={
            "requested_stops": len(stops),
            "routed_stops": routed,
            "excluded_stops": len(stops) - routed,
            "transport_mode": preferences.transport_mode.value,
            "return_to_start": preferences.return_to_start,
        },
    )


async def export_route_request(
    payload: OptimizeRouteRequest,
    export_format: str = "csv",
    provider: DirectionsProvider | None = None,
) -> str | dict:
    """Optimize ``payload`` and serialize the route as CSV text or a JSON document."""

    if export_format not in ("csv", "json"):
        raise ValueError(f"Unsupported export format '{export_format}'. Use 'csv' or 'json'.")
    origin, stops, preferences = resolve_payload(payload)
    route = await optimize_route(origin, stops, preferences, provider=provider)
    if export_format == "csv":
        return optimized_route_to_csv(route)
    document = optimized_route_to_json(route)
    document["maps_url"] = build_maps_url(origin, route, preferences)
    return document
