"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..services.routing.models import (
    LatLng,
    OptimizedRoute,
    Priority,
    RoutePreferences,
    StopTimeWindow,
    TransportMode,
)


class LatLngModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> LatLng:
        return LatLng(lat=self.lat, lng=self.lng)

    @classmethod
    def from_domain(cls, location: LatLng) -> "LatLngModel":
        return cls(lat=location.lat, lng=location.lng)


class StopModel(BaseModel):
    location: LatLngModel
    priority: Priority = Priority.MEDIUM
    earliest_arrival: Optional[datetime] = None
    latest_arrival: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0, description="Expected time spent at the stop.")
    due_date: Optional[datetime] = None
    label: Optional[str] = Field(default=None, description="Task title or store name, for display only.")

    def to_domain(self) -> StopTimeWindow:
        return StopTimeWindow(
            location=self.location.to_domain(),
            priority=self.priority,
            earliest_arrival=self.earliest_arrival,
            latest_arrival=self.latest_arrival,
            duration_minutes=self.duration_minutes,
            due_date=self.due_date,
            label=self.label,
        )


class RoutePreferencesModel(BaseModel):
    avoid_highways: bool = False
    avoid_tolls: bool = False
    transport_mode: TransportMode = TransportMode.DRIVING
    return_to_start: bool = False
    consider_traffic: bool = False
    max_stops: Optional[int] = Field(
        default=None,
        ge=1,
        description="Keep only this many stops, highest urgency first.",
    )

    def to_domain(self) -> RoutePreferences:
        return RoutePreferences(
            avoid_highways=self.avoid_highways,
            avoid_tolls=self.avoid_tolls,
            transport_mode=self.transport_mode,
            return_to_start=self.return_to_start,
            consider_traffic=self.consider_traffic,
            max_stops=self.max_stops,
        )


class OptimizeRouteRequest(BaseModel):
    origin: LatLngModel
    stops: List[StopModel]
    preferences: RoutePreferencesModel = Field(default_factory=RoutePreferencesModel)


class WaypointModel(BaseModel):
    location: LatLngModel
    stopover: bool


class RouteSegmentModel(BaseModel):
    start_location: LatLngModel
    end_location: LatLngModel
    distance_text: str
    duration_text: str
    priority: Priority


class OptimizedRouteModel(BaseModel):
    waypoints: List[WaypointModel]
    total_distance_meters: int
    total_duration_seconds: int
    segments: List[RouteSegmentModel]
    alternative_routes: Optional[List["OptimizedRouteModel"]] = None
    waypoint_order: Optional[List[int]] = None

    @classmethod
    def domain_fields(cls, route: OptimizedRoute) -> dict:
        alternatives = None
        if route.alternative_routes is not None:
            alternatives = [OptimizedRouteModel.from_domain(alt) for alt in route.alternative_routes]
        return {
            "waypoints": [
                WaypointModel(location=LatLngModel.from_domain(wp.location), stopover=wp.stopover)
                for wp in route.waypoints
            ],
            "total_distance_meters": route.total_distance_meters,
            "total_duration_seconds": route.total_duration_seconds,
            "segments": [
                RouteSegmentModel(
                    start_location=LatLngModel.from_domain(segment.start_location),
                    end_location=LatLngModel.from_domain(segment.end_location),
                    distance_text=segment.distance_text,
                    duration_text=segment.duration_text,
                    priority=segment.priority,
                )
                for segment in route.segments
            ],
            "alternative_routes": alternatives,
            "waypoint_order": route.waypoint_order,
        }

    @classmethod
    def from_domain(cls, route: OptimizedRoute) -> "OptimizedRouteModel":
        return cls(**cls.domain_fields(route))


class OptimizeRouteResponse(OptimizedRouteModel):
    maps_url: str
    metadata: dict

    @classmethod
    def from_domain(cls, route: OptimizedRoute, *, maps_url: str = "", metadata: dict | None = None) -> "OptimizeRouteResponse":
        return cls(**cls.domain_fields(route), maps_url=maps_url, metadata=metadata or {})
