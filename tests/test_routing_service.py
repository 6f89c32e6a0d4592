import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from errand_router.schemas.routing import OptimizeRouteRequest
from errand_router.services.routing import service as routing_service
from errand_router.services.routing.errors import (
    EmptyStopSetError,
    NoRouteFoundError,
    ProviderRequestError,
)
from errand_router.services.routing.models import (
    LatLng,
    Priority,
    RoutePreferences,
    StopTimeWindow,
)

ORIGIN = LatLng(39.9789, -82.8677)
NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class DummyDirections:
    """Answers every request with one leg per hop, 1 km and 5 minutes each."""

    def __init__(self, routes=True, error: Exception | None = None):
        self.requests = []
        self.routes = routes
        self.error = error

    async def route(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if not self.routes:
            return {"routes": []}
        points = [request.origin, *[wp.location for wp in request.waypoints], request.destination]
        legs = [
            {
                "start_location": {"lat": start.lat, "lng": start.lng},
                "end_location": {"lat": end.lat, "lng": end.lng},
                "distance": {"text": "1.0 km", "value": 1000},
                "duration": {"text": "5 mins", "value": 300},
            }
            for start, end in zip(points, points[1:])
        ]
        return {"routes": [{"legs": legs, "waypoint_order": list(range(len(request.waypoints)))}]}


def _stop(lat: float, lng: float, priority: Priority = Priority.MEDIUM, due_in_days: float | None = None):
    due_date = NOW + timedelta(days=due_in_days) if due_in_days is not None else None
    return StopTimeWindow(location=LatLng(lat, lng), priority=priority, due_date=due_date)


def test_single_stop_round_trip_scenario():
    provider = DummyDirections()
    stop = _stop(40.0, -83.0, Priority.HIGH, due_in_days=1)

    route = asyncio.run(
        routing_service.optimize_route(
            ORIGIN, [stop], RoutePreferences(return_to_start=True), provider=provider, now=NOW
        )
    )

    assert len(route.waypoints) == 1
    assert route.waypoints[0].location == stop.location
    assert route.waypoints[0].stopover is True
    assert len(route.segments) == 2
    assert route.total_distance_meters > 0
    assert route.segments[0].priority is Priority.HIGH
    assert route.segments[1].priority is Priority.MEDIUM


def test_empty_stops_fail_before_calling_provider():
    provider = DummyDirections()

    with pytest.raises(EmptyStopSetError):
        asyncio.run(routing_service.optimize_route(ORIGIN, [], RoutePreferences(), provider=provider))

    assert provider.requests == []


def test_max_stops_limits_routed_stops_to_most_urgent():
    provider = DummyDirections()
    stops = [
        _stop(40.0, -83.0, Priority.LOW),
        _stop(40.1, -83.1, Priority.HIGH, due_in_days=1),
        _stop(40.2, -83.2, Priority.MEDIUM),
    ]

    route = asyncio.run(
        routing_service.optimize_route(
            ORIGIN, stops, RoutePreferences(max_stops=2), provider=provider, now=NOW
        )
    )

    request = provider.requests[0]
    assert request.destination == stops[2].location
    assert [wp.location for wp in request.waypoints] == [stops[1].location]
    assert [wp.location for wp in route.waypoints] == [stops[1].location, stops[2].location]
    assert route.total_distance_meters == 2000
    assert route.total_duration_seconds == 600


def test_routing_to_origin_itself_does_not_crash():
    provider = DummyDirections()
    stops = [_stop(ORIGIN.lat, ORIGIN.lng), _stop(ORIGIN.lat, ORIGIN.lng)]

    route = asyncio.run(
        routing_service.optimize_route(ORIGIN, stops, RoutePreferences(), provider=provider, now=NOW)
    )

    assert provider.requests[0].destination == ORIGIN
    assert len(route.segments) == 2


def test_no_routes_raises_no_route_found():
    provider = DummyDirections(routes=False)

    with pytest.raises(NoRouteFoundError):
        asyncio.run(
            routing_service.optimize_route(ORIGIN, [_stop(40.0, -83.0)], RoutePreferences(), provider=provider)
        )


def test_provider_errors_are_not_retried():
    error = ProviderRequestError("Too many requests. Please try again later.", status="OVER_QUERY_LIMIT")
    provider = DummyDirections(error=error)

    with pytest.raises(ProviderRequestError) as excinfo:
        asyncio.run(
            routing_service.optimize_route(ORIGIN, [_stop(40.0, -83.0)], RoutePreferences(), provider=provider)
        )

    assert excinfo.value is error
    assert len(provider.requests) == 1


def test_unexpected_provider_errors_are_wrapped():
    provider = DummyDirections(error=httpx.ConnectError("connection refused"))

    with pytest.raises(ProviderRequestError) as excinfo:
        asyncio.run(
            routing_service.optimize_route(ORIGIN, [_stop(40.0, -83.0)], RoutePreferences(), provider=provider)
        )

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_concurrent_calls_are_independent():
    provider = DummyDirections()

    async def run_both():
        return await asyncio.gather(
            routing_service.optimize_route(
                ORIGIN, [_stop(40.0, -83.0)], RoutePreferences(return_to_start=True), provider=provider
            ),
            routing_service.optimize_route(
                ORIGIN,
                [_stop(41.0, -84.0), _stop(41.1, -84.1), _stop(41.2, -84.2)],
                RoutePreferences(),
                provider=provider,
            ),
        )

    first, second = asyncio.run(run_both())

    assert len(first.segments) == 2
    assert len(second.segments) == 3
    assert first.waypoints[0].location == LatLng(40.0, -83.0)
    assert len(provider.requests) == 2


def test_request_payload_is_capped_at_provider_waypoint_limit(monkeypatch):
    monkeypatch.setattr(routing_service.settings, "max_waypoints", 3)
    provider = DummyDirections()
    payload = OptimizeRouteRequest.model_validate(
        {
            "origin": {"lat": ORIGIN.lat, "lng": ORIGIN.lng},
            "stops": [{"location": {"lat": 40 + i / 10, "lng": -83.0}} for i in range(5)],
            "preferences": {"return_to_start": True},
        }
    )

    response = asyncio.run(routing_service.optimize_route_request(payload, provider=provider))

    assert len(provider.requests[0].waypoints) == 3
    assert response.metadata["requested_stops"] == 5
    assert response.metadata["routed_stops"] == 3
    assert response.metadata["excluded_stops"] == 2
    assert response.maps_url.startswith("https://www.google.com/maps/dir/?api=1")


def test_default_provider_is_google_client(monkeypatch):
    created = []

    def fake_client():
        created.append(True)
        return DummyDirections()

    monkeypatch.setattr(routing_service, "GoogleDirectionsClient", fake_client)

    route = asyncio.run(routing_service.optimize_route(ORIGIN, [_stop(40.0, -83.0)], RoutePreferences()))

    assert created == [True]
    assert len(route.segments) == 1


def test_missing_api_key_raises_provider_error(monkeypatch):
    monkeypatch.setattr(routing_service.settings, "google_maps_api_key", None)

    with pytest.raises(ProviderRequestError) as excinfo:
        asyncio.run(routing_service.optimize_route(ORIGIN, [_stop(40.0, -83.0)], RoutePreferences()))

    assert isinstance(excinfo.value.__cause__, ValueError)
