from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    sender_id: str
    recipient_id: str
    body: str | None
    attachment: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def participants(self) -> frozenset[str]:
        return frozenset((self.sender_id, self.recipient_id))
