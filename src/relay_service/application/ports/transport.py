from __future__ import annotations

from typing import Any, Protocol


class SessionSender(Protocol):
    """Outbound side of the live transport, addressed by session id."""

    async def send_to_session(self, session_id: str, event_type: str, data: Any) -> bool: ...

    async def broadcast(self, event_type: str, data: Any) -> int: ...
