"""
GramSeva AI — FastAPI backend.

Endpoints:
  GET  /api/water/quality | /quality/trends | /stats | /purification-guides
  GET  /api/water/leaks                 List leak reports (flat-file log)
  POST /api/water/leaks                 Submit a leak report
  GET  /api/farmer/*                    Market prices, alerts, trends, stats
  POST /api/farmer/soil-analysis        Upload a soil sample
  GET  /api/health/stats | /advisories | /facilities
  POST /api/health/symptom-check
  GET  /api/health/prediction-status    Is the prediction service answering?
  POST /api/health/predict              Proxy to the prediction service
  GET  /api/start-prediction-server     Install + launch the prediction service
  GET  /api/prediction-server/state     Supervisor state
  WS   /ws                              Realtime farmer feed
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from dependencies import broadcaster, leak_store

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


# ── Lifespan: leak log + realtime timer ───────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    leak_store.ensure_file()
    broadcaster.start()
    logger.info("WebSocket server is ready for real-time updates")
    yield
    await broadcaster.stop()


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error shape: always {"error": ..., "details"?: ...} ───────────────────────
def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Error in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Routers ───────────────────────────────────────────────────────────────────
from routers import water, farmer, health, prediction, realtime

app.include_router(water.router, prefix="/api")
app.include_router(farmer.router, prefix="/api")
app.include_router(health.router, prefix="/api")
app.include_router(prediction.router, prefix="/api")
app.include_router(realtime.router)


@app.get("/health")
async def service_health():
    return {"status": "ok", "version": settings.version}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "health": "/health",
        "websocket": "/ws",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
