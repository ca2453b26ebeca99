from __future__ import annotations

from typing import Protocol
from uuid import UUID

from relay_service.domain.entities.account import Account


class AccountReader(Protocol):
    async def get_by_id(self, account_id: UUID) -> Account | None: ...

    async def get_by_username(self, username: str) -> Account | None: ...

    async def list_except(self, account_id: UUID) -> list[Account]: ...


class AccountWriter(Protocol):
    async def create(self, account: Account) -> Account: ...
