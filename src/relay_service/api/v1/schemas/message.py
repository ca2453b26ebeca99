from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from relay_service.domain.entities.message import Message


class AddMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str | None = Field(None, alias="from")
    to: str | None = None
    message: str | None = None
    image: str | None = None


class MessageResponse(BaseModel):
    id: UUID
    sender_id: str
    recipient_id: str
    body: str | None
    attachment: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HistoryItem(BaseModel):
    """One history row from the point of view of the requesting user."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    from_self: bool = Field(alias="fromSelf")
    message: str | None
    image: str | None
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_message(cls, msg: Message, viewer_id: str) -> HistoryItem:
        return cls(
            id=msg.id,
            from_self=msg.sender_id == viewer_id,
            message=msg.body,
            image=msg.attachment,
            created_at=msg.created_at,
        )
