from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from relay_service.api.deps import UoWDep
from relay_service.api.v1.schemas.account import (
    AccountResponse,
    ContactResponse,
    RegisterAccountRequest,
)
from relay_service.services import account_service

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
async def register_account(body: RegisterAccountRequest, uow: UoWDep) -> AccountResponse:
    account = await account_service.register_account(
        body.username, body.email, body.avatar, uow,
    )
    return AccountResponse.model_validate(account, from_attributes=True)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: UUID, uow: UoWDep) -> AccountResponse:
    account = await account_service.get_account(account_id, uow)
    return AccountResponse.model_validate(account, from_attributes=True)


@router.get("/{account_id}/contacts", response_model=list[ContactResponse])
async def list_contacts(account_id: UUID, uow: UoWDep) -> list[ContactResponse]:
    contacts = await account_service.list_contacts(account_id, uow)
    return [ContactResponse.model_validate(a, from_attributes=True) for a in contacts]
