"""WS /ws: one JSON request per frame; replies and broadcasts come back as JSON frames."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket
from pydantic import ValidationError

from core.dependencies import get_hub
from roster.hub import RosterHub
from roster.messages import parse_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

SESSION_COOKIE = "session_id"


def _session_id(websocket: WebSocket, session_id: Optional[str]) -> str:
    """Query parameter first, then cookie, else a fresh ID."""
    if session_id and session_id.strip():
        return session_id.strip()
    cookie = websocket.cookies.get(SESSION_COOKIE)
    if cookie and cookie.strip():
        return cookie.strip()
    return uuid.uuid4().hex


@router.websocket("/ws")
async def roster_socket(
    websocket: WebSocket,
    session_id: Optional[str] = None,
    hub: RosterHub = Depends(get_hub),
) -> None:
    """Open a session-scoped channel to the roster hub."""
    await websocket.accept()
    sid = _session_id(websocket, session_id)
    connections = websocket.app.state.connections
    # The SessionOpened greeting is the first frame queued on the connection.
    connection_id = connections.connect(sid, websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            try:
                request = parse_request(raw)
            except ValidationError as e:
                logger.warning(
                    "Ignoring malformed frame from session=%s: %d error(s)", sid, e.error_count()
                )
                continue
            await hub.dispatch(sid, request)
    finally:
        connections.disconnect(sid, connection_id)
