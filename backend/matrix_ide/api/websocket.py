"""WebSocket connection manager for streaming execution events."""
import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages active WebSocket connections per session."""

    def __init__(self):
        self._connections: dict[str, list[WebSocket]] = {}

    async def connect(self, session_id: str, websocket: WebSocket):
        await websocket.accept()
        self._connections.setdefault(session_id, []).append(websocket)
        logger.debug("WebSocket connected to session %s", session_id)

    def disconnect(self, session_id: str, websocket: WebSocket):
        if session_id in self._connections:
            self._connections[session_id] = [
                ws for ws in self._connections[session_id] if ws is not websocket
            ]
            if not self._connections[session_id]:
                del self._connections[session_id]

    def connection_count(self, session_id: str) -> int:
        return len(self._connections.get(session_id, []))

    async def send_to_session(self, session_id: str, data: dict[str, Any]):
        if session_id not in self._connections:
            return
        message = json.dumps(data, default=str)
        dead: list[WebSocket] = []
        for ws in list(self._connections[session_id]):
            try:
                await ws.send_text(message)
            except Exception:
                dead.append(ws)
        for ws in dead:
            logger.debug("Dropping dead WebSocket in session %s", session_id)
            self.disconnect(session_id, ws)

    def make_event_stream(
        self, session_id: str, execution_id: str, loop: asyncio.AbstractEventLoop,
    ) -> "EventStream":
        return EventStream(self, session_id, execution_id, loop)


class EventStream:
    """Forwards engine events to a session in the order they were emitted.

    ``callback`` is sync and may be called from any thread; ``pump`` sends
    queued events until ``close`` is called.
    """

    def __init__(
        self, manager: ConnectionManager, session_id: str, execution_id: str,
        loop: asyncio.AbstractEventLoop,
    ):
        self._manager = manager
        self._session_id = session_id
        self._execution_id = execution_id
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue()

    def callback(self, event: dict[str, Any]):
        payload = {**event, "execution_id": self._execution_id}
        self._loop.call_soon_threadsafe(self._queue.put_nowait, payload)

    def close(self):
        self._loop.call_soon_threadsafe(self._queue.put_nowait, None)

    async def pump(self):
        while True:
            payload = await self._queue.get()
            if payload is None:
                break
            await self._manager.send_to_session(self._session_id, payload)


manager = ConnectionManager()
