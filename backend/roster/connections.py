"""
Live WebSocket connections grouped by session.

A session (stable across reconnects and browser tabs) may hold several
connections at once; each connection gets its own connection ID. Every
connection owns an outbox queue drained by one writer task, so frames reach the
socket in the order they were enqueued while a slow socket only delays itself.
A connection that fails on send is forgotten; the failure is not reported to the
caller.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Dict

from fastapi import WebSocket

from roster.messages import SessionOpened

logger = logging.getLogger(__name__)


@dataclass
class _Outbox:
    websocket: WebSocket
    queue: "asyncio.Queue[str]"
    writer: "asyncio.Task[None]"


class ConnectionManager:
    def __init__(self) -> None:
        self._sessions: Dict[str, Dict[str, _Outbox]] = {}

    def connect(self, session_id: str, websocket: WebSocket) -> str:
        """Register an accepted websocket and queue its SessionOpened frame.

        Must be called from a running event loop. Returns the connection ID.
        """
        connection_id = uuid.uuid4().hex
        queue: asyncio.Queue[str] = asyncio.Queue()
        queue.put_nowait(
            SessionOpened(session_id=session_id, connection_id=connection_id).model_dump_json()
        )
        writer = asyncio.get_running_loop().create_task(
            self._write(session_id, connection_id, websocket, queue)
        )
        self._sessions.setdefault(session_id, {})[connection_id] = _Outbox(websocket, queue, writer)
        logger.debug("Connection opened: session=%s connection=%s", session_id, connection_id)
        return connection_id

    def disconnect(self, session_id: str, connection_id: str) -> None:
        outbox = self._forget(session_id, connection_id)
        if outbox is not None:
            outbox.writer.cancel()
            logger.debug("Connection closed: session=%s connection=%s", session_id, connection_id)

    def connection_count(self) -> int:
        return sum(len(c) for c in self._sessions.values())

    def enqueue(self, session_id: str, payload: str) -> None:
        """Queue a frame for every open connection of a session. Never blocks."""
        for outbox in self._sessions.get(session_id, {}).values():
            outbox.queue.put_nowait(payload)

    async def drain(self) -> None:
        """Wait until every frame queued so far has been written or dropped."""
        queues = [o.queue for conns in self._sessions.values() for o in conns.values()]
        await asyncio.gather(*(q.join() for q in queues))

    def _forget(self, session_id: str, connection_id: str) -> _Outbox | None:
        connections = self._sessions.get(session_id)
        if connections is None:
            return None
        outbox = connections.pop(connection_id, None)
        if not connections:
            del self._sessions[session_id]
        return outbox

    async def _write(
        self,
        session_id: str,
        connection_id: str,
        websocket: WebSocket,
        queue: "asyncio.Queue[str]",
    ) -> None:
        try:
            while True:
                payload = await queue.get()
                try:
                    await websocket.send_text(payload)
                except Exception:
                    # Closed underneath us; the receive loop will also notice.
                    logger.debug("Send failed, dropping connection=%s", connection_id)
                    self._forget(session_id, connection_id)
                    return
                finally:
                    queue.task_done()
        finally:
            # Frames left behind are dropped so drain() never waits on a dead socket.
            while not queue.empty():
                queue.get_nowait()
                queue.task_done()
