"""Serializers for optimized route outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import OptimizedRoute


def optimized_route_to_json(route: OptimizedRoute) -> dict:
    return {
        "total_distance_meters": route.total_distance_meters,
        "total_duration_seconds": route.total_duration_seconds,
        "waypoint_order": route.waypoint_order,
        "waypoints": [asdict(waypoint) for waypoint in route.waypoints],
        "segments": [
            {
                "sequence": index + 1,
                "start_location": asdict(segment.start_location),
                "end_location": asdict(segment.end_location),
                "distance_text": segment.distance_text,
                "duration_text": segment.duration_text,
                "priority": segment.priority.value,
            }
            for index, segment in enumerate(route.segments)
        ],
    }


def optimized_route_to_csv(route: OptimizedRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "start_lat",
        "start_lng",
        "end_lat",
        "end_lng",
        "distance",
        "duration",
        "priority",
        "total_distance_meters",
        "total_duration_seconds",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for index, segment in enumerate(route.segments, start=1):
        writer.writerow(
            {
                "sequence": index,
                "start_lat": segment.start_location.lat,
                "start_lng": segment.start_location.lng,
                "end_lat": segment.end_location.lat,
                "end_lng": segment.end_location.lng,
                "distance": segment.distance_text,
                "duration": segment.duration_text,
                "priority": segment.priority.value,
                "total_distance_meters": route.total_distance_meters,
                "total_duration_seconds": route.total_duration_seconds,
            }
        )
    return buffer.getvalue()
