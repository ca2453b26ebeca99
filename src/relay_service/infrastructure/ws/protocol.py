"""WebSocket message envelope models."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WsInbound(BaseModel):
    """Client → Server."""

    type: str  # add-user | sent-message | logout | ping
    data: Any = None


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str  # online-users | receive-message | error | pong
    data: Any = None


class SentMessageData(BaseModel):
    """Body of a ``sent-message`` event."""

    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(min_length=1)
    from_: str | None = Field(None, alias="from")
    message: str | None = None
    image: str | None = None
    from_self: bool = Field(True, alias="fromSelf")
    created_at: datetime | None = Field(None, alias="createdAt")


class AnnounceData(BaseModel):
    """Body of ``add-user`` / ``logout``: a bare id string or ``{"userId": ...}``."""

    user_id: str = Field(alias="userId", min_length=1)

    @classmethod
    def parse(cls, data: Any) -> AnnounceData:
        if isinstance(data, str):
            data = {"userId": data}
        return cls.model_validate(data)

    @field_validator("user_id")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("userId must not be blank")
        return value
