"""Farmer module endpoints, served from the realtime snapshot."""

from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from dependencies import get_broadcaster, get_storage
from mockdata.common import new_id
from mockdata.farmer import DEFAULT_SOIL_TYPE
from realtime.broadcaster import RealtimeBroadcaster
from storage.local import LocalStorage

router = APIRouter(prefix="/farmer", tags=["farmer"])


@router.get("/market-prices")
async def get_market_prices(broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    return JSONResponse(content=broadcaster.snapshot["marketPrices"])


@router.get("/weather-alerts")
async def get_weather_alerts(broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    return JSONResponse(content=broadcaster.snapshot["weatherAlerts"])


@router.get("/crop-recommendations")
async def get_crop_recommendations(
    soilType: str = DEFAULT_SOIL_TYPE,
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
):
    """Fresh recommendations for a soil type; also replaces the snapshot copy."""
    return JSONResponse(content=broadcaster.recommend_crops(soilType or DEFAULT_SOIL_TYPE))


@router.get("/market-trends")
async def get_market_trends(broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    return JSONResponse(content=broadcaster.snapshot["marketTrends"])


@router.get("/stats")
async def get_farmer_stats(broadcaster: RealtimeBroadcaster = Depends(get_broadcaster)):
    return JSONResponse(content=broadcaster.snapshot["farmerStats"])


@router.post("/soil-analysis")
async def submit_soil_sample(
    sample: UploadFile | None = File(None),
    storage: LocalStorage = Depends(get_storage),
):
    """Accept a soil sample upload for (offline) analysis."""
    if sample is not None:
        ext = Path(sample.filename or "").suffix.lower()
        storage.save_upload("sample", ext, await sample.read())

    return JSONResponse(status_code=201, content={"id": new_id(), "status": "submitted"})
