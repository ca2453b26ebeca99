from __future__ import annotations

from fastapi import APIRouter

from relay_service.api.deps import RelayDep
from relay_service.api.v1.schemas.presence import OnlineUserResponse

router = APIRouter(prefix="/api/v1/presence", tags=["presence"])


@router.get("", response_model=list[OnlineUserResponse], response_model_by_alias=True)
async def online_users(relay: RelayDep) -> list[OnlineUserResponse]:
    return [
        OnlineUserResponse.model_validate(u, from_attributes=True)
        for u in relay.presence.online_users()
    ]
