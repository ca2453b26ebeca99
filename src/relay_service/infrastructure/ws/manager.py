"""In-process WebSocket connection manager."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from relay_service.infrastructure.ws.protocol import WsOutbound

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT = 5.0


class ConnectionManager:
    """Tracks open WebSocket transports by server-assigned session id.

    Knows nothing about users; the registry maps users onto these sessions.
    Every send is bounded by ``send_timeout``; a socket that errors or stalls
    past it is dropped.
    """

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._send_timeout = send_timeout

    async def connect(self, ws: WebSocket, session_id: str) -> None:
        await ws.accept()
        self._connections[session_id] = ws
        logger.debug("WS connected: %s (total=%d)", session_id, len(self._connections))

    def disconnect(self, session_id: str) -> None:
        if self._connections.pop(session_id, None) is not None:
            logger.debug("WS disconnected: %s", session_id)

    def is_connected(self, session_id: str) -> bool:
        return session_id in self._connections

    def session_ids(self) -> list[str]:
        return list(self._connections)

    async def send_to_session(self, session_id: str, event_type: str, data: Any) -> bool:
        """Send one event to one session. Returns False if it could not be sent."""
        ws = self._connections.get(session_id)
        if ws is None:
            return False
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        if not await self._send(session_id, ws, raw):
            self.disconnect(session_id)
            return False
        return True

    async def broadcast(self, event_type: str, data: Any) -> int:
        """Send one event to every open session. Returns the number reached."""
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        dead: list[str] = []
        sent = 0
        for session_id, ws in list(self._connections.items()):
            if await self._send(session_id, ws, raw):
                sent += 1
            else:
                dead.append(session_id)
        for session_id in dead:
            self.disconnect(session_id)
        return sent

    async def _send(self, session_id: str, ws: WebSocket, raw: str) -> bool:
        try:
            await asyncio.wait_for(ws.send_text(raw), self._send_timeout)
        except asyncio.TimeoutError:
            logger.info("WS send to %s stalled past %.1fs, dropping", session_id, self._send_timeout)
            return False
        except Exception:
            logger.debug("WS send to %s failed, dropping", session_id, exc_info=True)
            return False
        return True
