#!/usr/bin/env python3
"""Script to verify the Google Directions configuration end to end."""

import asyncio
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from errand_router.config import settings
from errand_router.services.routing.directions_client import check_health
from errand_router.services.routing.errors import RoutingError
from errand_router.services.routing.models import LatLng, Priority, RoutePreferences, StopTimeWindow
from errand_router.services.routing.service import optimize_route


def main():
    print("=" * 60)
    print("Directions Provider Check")
    print("=" * 60)
    print()

    print("1. Checking configuration...")
    if not settings.google_maps_api_key:
        print("   [ERROR] Google Maps API key is not configured")
        print("   Please set ERRAND_GOOGLE_MAPS_API_KEY in your .env file")
        return 1
    print(f"   [OK] Directions base URL: {settings.directions_base_url}")
    print(f"   [OK] Units: {settings.directions_units}")
    print()

    print("2. Testing provider health check...")
    if not asyncio.run(check_health()):
        print("   [ERROR] Directions provider rejected the probe request")
        return 1
    print("   [OK] Directions provider is reachable")
    print()

    print("3. Optimizing a sample two-stop loop...")
    origin = LatLng(39.9789, -82.8677)
    stops = [
        StopTimeWindow(location=LatLng(40.0, -83.0), priority=Priority.HIGH),
        StopTimeWindow(location=LatLng(39.96, -83.0), priority=Priority.LOW),
    ]
    try:
        route = asyncio.run(optimize_route(origin, stops, RoutePreferences(return_to_start=True)))
    except RoutingError as e:
        print(f"   [ERROR] {e}")
        return 1
    print(f"   [OK] {len(route.segments)} legs, {route.total_distance_meters} m, {route.total_duration_seconds} s")
    for index, segment in enumerate(route.segments, start=1):
        print(f"   [OK] Leg {index}: {segment.distance_text}, {segment.duration_text} ({segment.priority.value})")
    print()

    print("=" * 60)
    print("[SUCCESS] Directions provider is configured and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
