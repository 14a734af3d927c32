"""Health module endpoints: stats, advisories, facility search, symptom check."""

import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from mockdata import health

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _error(status: int, message: str, details: object = None) -> JSONResponse:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status, content=body)


@router.get("/stats")
async def get_health_stats():
    return JSONResponse(content=health.generate_stats())


@router.get("/advisories")
async def get_advisories():
    return JSONResponse(content=health.generate_advisories())


@router.get("/facilities")
async def search_facilities(
    location: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
):
    """Healthcare facilities near a known city or explicit lat/lng."""
    try:
        facilities = health.generate_facilities(location, lat, lng)
    except ValueError as exc:
        logger.error("Error in /api/health/facilities: %s", exc)
        return _error(500, "Failed to search for healthcare facilities", str(exc))
    return JSONResponse(content=facilities)


@router.post("/symptom-check")
async def symptom_check(payload: Any = Body(None)):
    symptoms = payload.get("symptoms") if isinstance(payload, dict) else None
    if not isinstance(symptoms, list):
        return _error(400, "Symptoms must be an array")
    return JSONResponse(content=health.generate_symptom_check(symptoms))
