from __future__ import annotations

from fastapi import APIRouter, Query

from relay_service.api.deps import UoWDep
from relay_service.api.v1.schemas.message import (
    AddMessageRequest,
    HistoryItem,
    MessageResponse,
)
from relay_service.services import message_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("", response_model=list[HistoryItem], response_model_by_alias=True)
async def get_messages(
    uow: UoWDep,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
) -> list[HistoryItem]:
    messages = await message_service.get_conversation(from_, to, uow)
    return [HistoryItem.from_message(m, from_) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def add_message(body: AddMessageRequest, uow: UoWDep) -> MessageResponse:
    msg = await message_service.add_message(
        body.from_, body.to, body.message, body.image, uow,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)
