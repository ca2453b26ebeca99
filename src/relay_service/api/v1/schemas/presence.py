from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OnlineUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    user_id: str = Field(alias="userId")
    session_id: str = Field(alias="sessionId")
