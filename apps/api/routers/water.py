"""Water module endpoints: quality readings, stats, guides and leak reports."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_leak_store
from mockdata import water
from mockdata.common import new_id, now_iso
from schemas.water import LeakReport, LeakReportCreate, LeakStatus
from storage.leaks import LeakReportStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/water", tags=["water"])


def _error(status: int, message: str, details: object = None) -> JSONResponse:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status, content=body)


@router.get("/quality")
async def get_quality():
    """Current water quality metrics (a single reading)."""
    return JSONResponse(content=[water.generate_quality_reading()])


@router.get("/quality/trends")
async def get_quality_trends():
    return JSONResponse(content=water.generate_quality_trends())


@router.get("/stats")
async def get_stats():
    return JSONResponse(content=water.generate_stats())


@router.get("/purification-guides")
async def get_purification_guides():
    return JSONResponse(content=water.purification_guides())


@router.get("/leaks")
async def list_leaks(store: LeakReportStore = Depends(get_leak_store)):
    """All leak reports in file order."""
    return JSONResponse(content=[r.to_json() for r in store.list_reports()])


@router.post("/leaks")
async def create_leak(
    body: LeakReportCreate | None = None,
    store: LeakReportStore = Depends(get_leak_store),
):
    """Record a new leak report. Status always starts as pending."""
    body = body or LeakReportCreate()
    timestamp = now_iso()
    report = LeakReport(
        id=new_id(),
        location=body.location,
        description=body.description,
        status=LeakStatus.pending,
        created_at=timestamp,
        updated_at=timestamp,
    )

    logger.info("Attempting to save complaint %s", report.id)
    if not store.append_report(report):
        logger.error("Failed to save complaint %s", report.id)
        return _error(500, "Failed to save complaint")

    return JSONResponse(status_code=201, content=report.to_json())
