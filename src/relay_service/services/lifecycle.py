"""Per-connection state machine: anonymous → identified → disconnected."""
from __future__ import annotations

import logging

from relay_service.domain.value_objects.enums import SessionState
from relay_service.services.presence_service import PresenceService

logger = logging.getLogger(__name__)


class SessionLifecycle:
    def __init__(self, session_id: str, presence: PresenceService) -> None:
        self.session_id = session_id
        self._presence = presence
        self.state = SessionState.ANONYMOUS
        self.user_id: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.DISCONNECTED

    async def announce(self, user_id: str) -> None:
        if self.is_closed:
            logger.debug("Ignoring announce on closed session %s", self.session_id)
            return
        await self._presence.announce(user_id, self.session_id)
        self.user_id = user_id
        self.state = SessionState.IDENTIFIED

    async def logout(self, user_id: str) -> None:
        """Take ``user_id`` offline and end this session."""
        if self.is_closed:
            return
        self.state = SessionState.DISCONNECTED
        await self._presence.logout(user_id, self.session_id)

    async def disconnect(self) -> None:
        """Transport went away. No-op once the session is already closed."""
        if self.is_closed:
            return
        self.state = SessionState.DISCONNECTED
        await self._presence.drop_session(self.session_id)
