from __future__ import annotations

from typing import Protocol

from relay_service.application.repositories.account import AccountReader, AccountWriter
from relay_service.application.repositories.message import MessageReader, MessageWriter


class UnitOfWork(Protocol):
    accounts: AccountReader
    accounts_w: AccountWriter
    messages: MessageReader
    messages_w: MessageWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
