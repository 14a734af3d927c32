"""Realtime farmer feed over WebSocket.

A RealtimeBroadcaster owns the current snapshot and a timer task that
regenerates it every ``interval`` seconds, fanning each category out to every
connected client as ``{"type": <category>, "data": ...}``. Delivery is best
effort in timer order; clients that fail a send are dropped.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable

from fastapi import WebSocket

from mockdata import farmer

logger = logging.getLogger(__name__)

MARKET_PRICE_COUNT = 5
WEATHER_ALERT_COUNT = 3
CROP_RECOMMENDATION_COUNT = 3


class ConnectionManager:
    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info("New WebSocket connection (%d active)", len(self.active_connections))

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info("Client disconnected (%d active)", len(self.active_connections))

    async def broadcast(self, msg_type: str, data: Any):
        message = json.dumps({"type": msg_type, "data": data})
        dead = []
        for connection in list(self.active_connections):
            try:
                await connection.send_text(message)
            except Exception:
                dead.append(connection)
        for d in dead:
            self.disconnect(d)

    async def send_personal(self, websocket: WebSocket, msg_type: str, data: Any):
        await websocket.send_json({"type": msg_type, "data": data})


def empty_snapshot() -> dict[str, Any]:
    return {
        "marketPrices": [],
        "weatherAlerts": [],
        "cropRecommendations": [],
        "marketTrends": [],
        "farmerStats": {
            "farmersRegistered": 0,
            "marketUpdates": "Daily",
            "cropVarieties": 0,
            "totalArea": 0,
            "activeMarkets": 0,
        },
    }


# Categories regenerated on every tick, in broadcast order
_GENERATORS: dict[str, Callable[[], Any]] = {
    "marketPrices": lambda: [farmer.generate_crop_price() for _ in range(MARKET_PRICE_COUNT)],
    "weatherAlerts": lambda: [farmer.generate_weather_alert() for _ in range(WEATHER_ALERT_COUNT)],
    "marketTrends": farmer.generate_market_trends,
    "farmerStats": farmer.generate_farmer_stats,
}


class RealtimeBroadcaster:
    def __init__(self, interval: float = 30.0, manager: ConnectionManager | None = None):
        self.interval = interval
        self.manager = manager or ConnectionManager()
        self.snapshot = empty_snapshot()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self) -> list[str]:
        """Regenerate every timed category in place. Returns the categories touched."""
        for category, generate in _GENERATORS.items():
            self.snapshot[category] = generate()
        return list(_GENERATORS)

    def recommend_crops(self, soil_type: str) -> list[dict]:
        recommendations = [
            farmer.generate_crop_recommendation(soil_type) for _ in range(CROP_RECOMMENDATION_COUNT)
        ]
        self.snapshot["cropRecommendations"] = recommendations
        return recommendations

    async def tick(self) -> None:
        for category in self.refresh():
            await self.manager.broadcast(category, self.snapshot[category])

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.tick()
            except Exception:
                logger.exception("Realtime update failed")

    def start(self) -> None:
        if self.running:
            return
        self.refresh()
        self._task = asyncio.create_task(self._run())
        logger.info("Realtime broadcaster started (every %ss)", self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Realtime broadcaster stopped")

    async def subscribe(self, websocket: WebSocket) -> None:
        """Accept a client and send it the full current snapshot."""
        await self.manager.connect(websocket)
        await self.manager.send_personal(websocket, "initial", self.snapshot)

    def unsubscribe(self, websocket: WebSocket) -> None:
        self.manager.disconnect(websocket)
