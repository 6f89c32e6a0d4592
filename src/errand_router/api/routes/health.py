"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/directions", status_code=status.HTTP_200_OK)
async def health_directions() -> dict:
    """Check that the directions provider accepts requests."""
    from ...services.routing.directions_client import check_health

    healthy = await check_health()
    return {"service": "directions", "healthy": healthy}
