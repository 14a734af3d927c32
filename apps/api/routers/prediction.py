"""Health-risk prediction endpoints backed by the external prediction service."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from dependencies import get_prediction_manager
from prediction.manager import (
    PredictionBootstrapError,
    PredictionError,
    PredictionNotReadyError,
    PredictionProcessManager,
)
from schemas.prediction import PredictionServerInfo, PredictionStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prediction"])


def _error(status: int, message: str, details: object = None, **extra) -> JSONResponse:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    body.update(extra)
    return JSONResponse(status_code=status, content=body)


@router.get("/health/prediction-status")
async def prediction_status(manager: PredictionProcessManager = Depends(get_prediction_manager)):
    status = await manager.check_status()
    return JSONResponse(content=PredictionStatus(status=status).model_dump())


@router.post("/health/predict")
async def predict(
    payload: Any = Body(None),
    manager: PredictionProcessManager = Depends(get_prediction_manager),
):
    """Forward the request body to the prediction service unchanged."""
    try:
        result = await manager.predict(payload if payload is not None else {})
    except PredictionNotReadyError as exc:
        return _error(503, exc.message)
    except PredictionError as exc:
        logger.error("Error in prediction endpoint: %s", exc.message)
        return _error(500, "Failed to get prediction results", exc.message)
    return JSONResponse(content=result)


@router.get("/start-prediction-server")
async def start_prediction_server(manager: PredictionProcessManager = Depends(get_prediction_manager)):
    """Bootstrap the prediction service if it is not already answering."""
    try:
        message = await manager.ensure_started()
    except PredictionBootstrapError as exc:
        return _error(500, exc.message, exc.details, step=exc.step, state=manager.state.value)
    return JSONResponse(content={"message": message, "state": manager.state.value})


@router.get("/prediction-server/state")
async def prediction_server_state(manager: PredictionProcessManager = Depends(get_prediction_manager)):
    """Last known supervisor state. Does not probe."""
    return JSONResponse(content=PredictionServerInfo(**manager.describe()).model_dump())
