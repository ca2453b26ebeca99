from __future__ import annotations

import asyncio
import logging
from typing import Any

from relay_service.application.ports.transport import SessionSender
from relay_service.domain.entities.online_user import OnlineUser
from relay_service.infrastructure.ws.registry import ConnectionRegistry

logger = logging.getLogger(__name__)

ONLINE_USERS_EVENT = "online-users"


def snapshot_payload(snapshot: list[OnlineUser]) -> list[dict[str, Any]]:
    return [{"userId": u.user_id, "sessionId": u.session_id} for u in snapshot]


class PresenceService:
    """Owns every registry mutation and the full-state broadcast that follows it.

    Mutate, snapshot and broadcast run under one lock, so subscribers see
    snapshots in mutation order and never an older one after a newer one.
    """

    def __init__(self, registry: ConnectionRegistry, sender: SessionSender) -> None:
        self._registry = registry
        self._sender = sender
        self._lock = asyncio.Lock()

    async def announce(self, user_id: str, session_id: str) -> list[OnlineUser]:
        async with self._lock:
            displaced = self._registry.register(user_id, session_id)
            if displaced is not None:
                logger.info(
                    "User %s moved from session %s to %s", user_id, displaced, session_id,
                )
            logger.info("User %s online on %s", user_id, session_id)
            return await self._broadcast_locked()

    async def logout(self, user_id: str, session_id: str | None = None) -> list[OnlineUser]:
        """Remove ``user_id``, plus whatever ``session_id`` itself had announced."""
        async with self._lock:
            if self._registry.unregister_by_user(user_id):
                logger.info("User %s logged out", user_id)
            if session_id is not None:
                self._registry.unregister_by_session(session_id)
            return await self._broadcast_locked()

    async def drop_session(self, session_id: str) -> list[OnlineUser]:
        async with self._lock:
            if self._registry.unregister_by_session(session_id):
                logger.info("Session %s went offline", session_id)
            return await self._broadcast_locked()

    async def broadcast_presence(self) -> list[OnlineUser]:
        """Push the current snapshot to every connected session."""
        async with self._lock:
            return await self._broadcast_locked()

    def online_users(self) -> list[OnlineUser]:
        return self._registry.snapshot()

    async def _broadcast_locked(self) -> list[OnlineUser]:
        snapshot = self._registry.snapshot()
        reached = await self._sender.broadcast(ONLINE_USERS_EVENT, snapshot_payload(snapshot))
        logger.debug("Presence broadcast: %d online, %d sessions reached", len(snapshot), reached)
        return snapshot
