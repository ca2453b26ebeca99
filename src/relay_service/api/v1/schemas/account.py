from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class RegisterAccountRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    avatar: str | None = None


class AccountResponse(BaseModel):
    id: UUID
    username: str
    email: str
    avatar: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ContactResponse(BaseModel):
    id: UUID
    username: str
    avatar: str

    model_config = {"from_attributes": True}
