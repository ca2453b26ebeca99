from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class RelayMessage:
    """A message in flight between two sessions; never stored as-is."""

    sender_id: str
    recipient_id: str
    body: str | None = None
    attachment: str | None = None
    created_at: datetime | None = None

    def payload_for(self, viewer_id: str) -> dict[str, Any]:
        """Wire shape of the message as seen by ``viewer_id``."""
        return {
            "to": self.recipient_id,
            "from": self.sender_id,
            "message": self.body,
            "image": self.attachment,
            "fromSelf": self.sender_id == viewer_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
