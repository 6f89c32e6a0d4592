"""Errors raised by the route optimization pipeline."""

from __future__ import annotations

from typing import Optional


class RoutingError(Exception):
    """Base class for route optimization failures."""


class EmptyStopSetError(RoutingError):
    """No stops were left to route after selection."""

    def __init__(self, message: str = "No stops to route. Add tasks or trips with locations first.") -> None:
        super().__init__(message)


class NoRouteFoundError(RoutingError):
    """The provider answered a well-formed request with zero routes."""

    def __init__(self, message: str = "No route could be found between the origin and destination.") -> None:
        super().__init__(message)


class ProviderRequestError(RoutingError):
    """The directions provider call itself failed."""

    def __init__(self, message: str, status: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
