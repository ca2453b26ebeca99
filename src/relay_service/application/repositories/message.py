from __future__ import annotations

from typing import Protocol

from relay_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_between(self, user_id: str, peer_id: str) -> list[Message]:
        """Both directions of the pair, oldest update first."""
        ...


class MessageWriter(Protocol):
    async def append(self, message: Message) -> Message: ...
