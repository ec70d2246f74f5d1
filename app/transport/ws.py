# app/transport/ws.py
from __future__ import annotations

import ipaddress
import logging
import uuid
from typing import Any, Dict, List
from urllib.parse import urlparse

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.domain.common.types import TimerKind
from app.settings import get_settings
from app.transport.dispatcher import dispatch_disconnect, dispatch_message, dispatch_timer
from app.transport.protocols import OutHello

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_private_ip(host: str) -> bool:
    """Return True if host is a private IP (192.168.x.x, 10.x.x.x, 172.16-31.x.x)."""
    try:
        ip = ipaddress.ip_address(host)
        return ip.is_private
    except ValueError:
        return False


async def _check_origin_or_close(websocket: WebSocket) -> bool:
    settings = getattr(websocket.app.state, "settings", None) or get_settings()
    allowed = {o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()}

    origin = websocket.headers.get("origin")
    if origin is None or origin in allowed:
        return True
    if settings.WS_ALLOW_LAN_ORIGINS:
        o = urlparse(origin)
        if _is_private_ip(o.hostname or "") and o.port == 5173:
            return True
    logger.info("rejected websocket from origin %s", origin)
    await websocket.close(code=1008)
    return False


async def _fan_out(wsman, session_id: str, events: List[Dict[str, Any]]) -> None:
    for e in events:
        await wsman.broadcast(session_id, e)


async def on_timer_fired(app, session_id: str, kind: TimerKind) -> None:
    """Scheduler callback: run the transition and push its events to the session."""
    events = await dispatch_timer(app=app, session_id=session_id, kind=kind)
    await _fan_out(app.state.wsman, session_id, events)


@router.websocket("/ws")
async def ws_session(websocket: WebSocket):
    if not await _check_origin_or_close(websocket):
        return

    await websocket.accept()

    pid = uuid.uuid4().hex[:10]
    wsman = websocket.app.state.wsman
    await websocket.send_json(OutHello(pid=pid).model_dump())
    logger.debug("connection %s opened", pid)

    try:
        while True:
            raw = await websocket.receive_json()

            session_id, to_sender, to_room = await dispatch_message(
                app=websocket.app,
                pid=pid,
                raw=raw,
            )

            # joining also subscribes the connection to the session group
            if session_id and isinstance(raw, dict) and raw.get("type") == "joinGame" and to_room:
                await wsman.add(session_id, pid, websocket)

            # unicast
            for e in to_sender:
                await websocket.send_json(e)

            # broadcast to the whole session, sender included
            if session_id:
                await _fan_out(wsman, session_id, to_room)

    except WebSocketDisconnect:
        logger.debug("connection %s closed", pid)

    finally:
        await wsman.remove_everywhere(pid)
        for session_id, events in await dispatch_disconnect(app=websocket.app, pid=pid):
            await _fan_out(wsman, session_id, events)
