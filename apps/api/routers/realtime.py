"""WebSocket feed of periodically regenerated farmer data."""

import json

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from dependencies import get_broadcaster
from realtime.broadcaster import RealtimeBroadcaster

router = APIRouter()


@router.websocket("/ws")
async def realtime_stream(
    websocket: WebSocket,
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
):
    """Sends the full snapshot on connect, then every timed update."""
    await broadcaster.subscribe(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            try:
                msg = json.loads(data)
            except ValueError:
                continue
            if isinstance(msg, dict) and msg.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.unsubscribe(websocket)
