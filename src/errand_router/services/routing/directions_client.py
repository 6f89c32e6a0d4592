"""HTTP client for the Google Directions web service."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ...config import settings
from .errors import ProviderRequestError
from .models import DirectionsRequest, LatLng, TransportMode

logger = logging.getLogger(__name__)

# Statuses that mean the request was understood but no route exists.
NO_ROUTE_STATUSES = {"ZERO_RESULTS", "NOT_FOUND"}

STATUS_MESSAGES = {
    "OVER_QUERY_LIMIT": "Too many requests. Please try again later.",
    "OVER_DAILY_LIMIT": "Directions quota exhausted for today. Please try again later.",
    "REQUEST_DENIED": "Directions request was denied. Please check your API key.",
    "INVALID_REQUEST": "Invalid directions request. Please check your locations.",
    "MAX_WAYPOINTS_EXCEEDED": "Too many stops for a single route. Reduce the number of stops.",
    "MAX_ROUTE_LENGTH_EXCEEDED": "The requested route is too long to be computed.",
    "UNKNOWN_ERROR": "Unknown error occurred. Please try again.",
}


class DirectionsProvider(Protocol):
    """Anything able to answer a DirectionsRequest with a Directions-shaped payload."""

    async def route(self, request: DirectionsRequest) -> dict:
        ...


def build_query_params(request: DirectionsRequest, *, api_key: str, units: str) -> dict[str, str]:
    """Encode a request as Directions API query parameters."""

    params: dict[str, str] = {
        "origin": request.origin.as_param(),
        "destination": request.destination.as_param(),
        "mode": request.travel_mode.value.lower(),
        "units": units,
        "key": api_key,
    }
    if request.waypoints:
        # Google reads "via:" for pass-through points; stopovers are bare coordinates.
        points = [
            waypoint.location.as_param() if waypoint.stopover else f"via:{waypoint.location.as_param()}"
            for waypoint in request.waypoints
        ]
        prefix = ["optimize:true"] if request.optimize_waypoints else []
        params["waypoints"] = "|".join([*prefix, *points])

    avoid = []
    if request.avoid_highways:
        avoid.append("highways")
    if request.avoid_tolls:
        avoid.append("tolls")
    if avoid:
        params["avoid"] = "|".join(avoid)

    if request.driving_options is not None:
        params["departure_time"] = str(int(request.driving_options.departure_time.timestamp()))
        params["traffic_model"] = request.driving_options.traffic_model
    return params


class GoogleDirectionsClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        units: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise ValueError("Google Maps API key is not configured. Set ERRAND_GOOGLE_MAPS_API_KEY.")
        self.base_url = (base_url or settings.directions_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self.units = units or settings.directions_units
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        """Create a client scoped to a single call; nothing is shared between routes."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self._transport,
        )

    async def route(self, request: DirectionsRequest) -> dict:
        """Fetch a route for ``request``.

        Returns the decoded payload when the provider status is ``OK``. A
        no-route status is returned as an empty ``routes`` list so callers can
        decide how to report it; every other failure raises
        ``ProviderRequestError``. No retries are attempted.
        """

        params = build_query_params(request, api_key=self.api_key, units=self.units)
        url = f"{self.base_url}/directions/json"

        async with self._get_client() as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                logger.error(f"Directions request failed with HTTP {exc.response.status_code}")
                raise ProviderRequestError(
                    f"Directions service returned HTTP {exc.response.status_code}."
                ) from exc
            except httpx.TimeoutException as exc:
                logger.warning(f"Directions request timed out after {self.timeout}s: {exc}")
                raise ProviderRequestError("Directions service timed out. Please try again.") from exc
            except httpx.HTTPError as exc:
                logger.error(f"Failed to reach directions service at {self.base_url}: {exc}")
                raise ProviderRequestError(f"Failed to reach directions service: {exc}") from exc
            except ValueError as exc:
                logger.error(f"Directions service returned a non-JSON body: {exc}")
                raise ProviderRequestError("Directions service returned an unreadable response.") from exc

        status = data.get("status", "OK")
        if status == "OK":
            return data
        if status in NO_ROUTE_STATUSES:
            logger.info(f"Directions service found no route (status={status})")
            return {**data, "routes": []}

        message = STATUS_MESSAGES.get(status, f"Directions request failed: {status}")
        detail = data.get("error_message")
        if detail:
            logger.error(f"Directions request rejected with status={status}: {detail}")
        else:
            logger.error(f"Directions request rejected with status={status}")
        raise ProviderRequestError(message, status=status)


async def check_health(client: DirectionsProvider | None = None) -> bool:
    """Check the provider by routing between two nearby points.

    A missing API key, a transport failure or a rejected request all count
    as unhealthy.
    """
    try:
        provider = client or GoogleDirectionsClient()
    except ValueError:
        return False

    probe = DirectionsRequest(
        origin=LatLng(40.7580, -73.9855),
        destination=LatLng(40.7484, -73.9857),
        waypoints=[],
        travel_mode=TransportMode.DRIVING,
        optimize_waypoints=False,
    )
    try:
        await provider.route(probe)
    except ProviderRequestError as exc:
        logger.warning(f"Directions health check failed: {exc}")
        return False
    return True
