"""Routing endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from ...schemas.routing import OptimizeRouteRequest, OptimizeRouteResponse
from ...services.routing import service as routing_service
from ...services.routing.errors import EmptyStopSetError, NoRouteFoundError, ProviderRequestError

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, (EmptyStopSetError, ValueError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NoRouteFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ProviderRequestError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    logger.exception(f"Error optimizing route: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to optimize route: {exc}",
    )


@router.post("/optimize", response_model=OptimizeRouteResponse, status_code=status.HTTP_200_OK)
async def optimize(payload: OptimizeRouteRequest) -> OptimizeRouteResponse:
    try:
        return await routing_service.optimize_route_request(payload)
    except Exception as exc:
        raise _to_http_error(exc) from exc


@router.post("/export", status_code=status.HTTP_200_OK)
async def export(
    payload: OptimizeRouteRequest,
    export_format: Literal["csv", "json"] = Query(default="csv", alias="format"),
):
    """Optimize the payload and return the segment table as CSV or JSON."""
    try:
        result = await routing_service.export_route_request(payload, export_format)
    except Exception as exc:
        raise _to_http_error(exc) from exc
    if export_format == "csv":
        return PlainTextResponse(
            result,
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="route.csv"'},
        )
    return result
