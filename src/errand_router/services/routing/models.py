"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class TransportMode(str, Enum):
    DRIVING = "DRIVING"
    WALKING = "WALKING"
    BICYCLING = "BICYCLING"
    TRANSIT = "TRANSIT"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class LatLng:
    lat: float
    lng: float

    def as_param(self) -> str:
        """Render as the ``lat,lng`` pair used in provider query strings."""
        return f"{self.lat},{self.lng}"


@dataclass(frozen=True, slots=True)
class RoutePreferences:
    """User routing preferences, fixed for one optimization call."""

    avoid_highways: bool = False
    avoid_tolls: bool = False
    transport_mode: TransportMode = TransportMode.DRIVING
    return_to_start: bool = False
    consider_traffic: bool = False
    max_stops: Optional[int] = None


@dataclass(slots=True)
class StopTimeWindow:
    """A candidate destination built from a task or shopping trip."""

    location: LatLng
    priority: Priority = Priority.MEDIUM
    earliest_arrival: Optional[datetime] = None
    latest_arrival: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    label: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Waypoint:
    location: LatLng
    stopover: bool = True


@dataclass(frozen=True, slots=True)
class DrivingOptions:
    departure_time: datetime
    traffic_model: str = "best_guess"


@dataclass(slots=True)
class DirectionsRequest:
    """Provider-neutral request for a multi-stop route."""

    origin: LatLng
    destination: LatLng
    waypoints: List[Waypoint]
    travel_mode: TransportMode
    optimize_waypoints: bool = True
    avoid_highways: bool = False
    avoid_tolls: bool = False
    driving_options: Optional[DrivingOptions] = None


@dataclass(frozen=True, slots=True)
class RouteSegment:
    start_location: LatLng
    end_location: LatLng
    distance_text: str
    duration_text: str
    priority: Priority


@dataclass(slots=True)
class OptimizedRoute:
    waypoints: List[Waypoint]
    total_distance_meters: int
    total_duration_seconds: int
    segments: List[RouteSegment]
    alternative_routes: Optional[List["OptimizedRoute"]] = None
    waypoint_order: Optional[List[int]] = field(default=None)
