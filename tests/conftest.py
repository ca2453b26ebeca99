"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import pytest

from relay_service.domain.entities.account import Account
from relay_service.domain.entities.message import Message
from relay_service.infrastructure.ws.manager import ConnectionManager
from relay_service.infrastructure.ws.registry import ConnectionRegistry
from relay_service.services.presence_service import PresenceService
from relay_service.services.routing_service import MessageRouter

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@dataclass
class FixedClock:
    """Advances one second per call so ordering is deterministic."""

    current: datetime = T0

    def now(self) -> datetime:
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


def make_message(
    *,
    sender_id: str = "u1",
    recipient_id: str = "u2",
    body: str | None = "hello",
    attachment: str | None = None,
    at: datetime = T0,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        sender_id=sender_id,
        recipient_id=recipient_id,
        body=body,
        attachment=attachment,
        created_at=at,
        updated_at=at,
    )


def make_account(username: str = "alice") -> Account:
    return Account(
        id=uuid.uuid4(),
        username=username,
        email=f"{username}@example.com",
        avatar=f"https://avatars.example.com/{username}.png",
        created_at=T0,
    )


class FakeWebSocket:
    """Stands in for a Starlette WebSocket on the send side."""

    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.broken = broken
        self.sent: list[dict[str, Any]] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_text(self, raw: str) -> None:
        if self.broken:
            raise RuntimeError("socket is closed")
        self.sent.append(json.loads(raw))

    def of_type(self, event_type: str) -> list[Any]:
        return [e["data"] for e in self.sent if e["type"] == event_type]


class StalledWebSocket(FakeWebSocket):
    """A peer that stopped reading: sends never complete."""

    async def send_text(self, raw: str) -> None:
        await asyncio.Event().wait()


class LaggingWebSocket(FakeWebSocket):
    """Its first send takes several loop turns longer than later ones."""

    def __init__(self, lag: int = 5) -> None:
        super().__init__()
        self._lag = lag

    async def send_text(self, raw: str) -> None:
        lag, self._lag = self._lag, 0
        for _ in range(lag + 1):
            await asyncio.sleep(0)
        await super().send_text(raw)


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def manager() -> ConnectionManager:
    return ConnectionManager()


@pytest.fixture
def presence(registry, manager) -> PresenceService:
    return PresenceService(registry, manager)


@pytest.fixture
def router(registry, manager) -> MessageRouter:
    return MessageRouter(registry, manager)


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def list_between(self, user_id: str, peer_id: str) -> list[Message]:
        pair = frozenset((user_id, peer_id))
        found = [m for m in self._messages if m.participants == pair]
        return sorted(found, key=lambda m: (m.updated_at, m.created_at, m.id))


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    fail_with: Exception | None = None

    async def append(self, message: Message) -> Message:
        if self.fail_with is not None:
            raise self.fail_with
        self._reader._messages.append(message)
        return message


@dataclass
class FakeAccountReader:
    _store: dict[UUID, Account] = field(default_factory=dict)

    async def get_by_id(self, account_id: UUID) -> Account | None:
        return self._store.get(account_id)

    async def get_by_username(self, username: str) -> Account | None:
        for account in self._store.values():
            if account.username == username:
                return account
        return None

    async def list_except(self, account_id: UUID) -> list[Account]:
        others = [a for a in self._store.values() if a.id != account_id]
        return sorted(others, key=lambda a: a.username)


@dataclass
class FakeAccountWriter:
    _reader: FakeAccountReader
    fail_with: Exception | None = None

    async def create(self, account: Account) -> Account:
        if self.fail_with is not None:
            raise self.fail_with
        self._reader._store[account.id] = account
        return account


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    accounts: FakeAccountReader = field(default_factory=FakeAccountReader)
    accounts_w: FakeAccountWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    _committed: bool = False
    _rolled_back: bool = False

    def __post_init__(self) -> None:
        if self.accounts_w is None:
            self.accounts_w = FakeAccountWriter(self.accounts)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        self._rolled_back = True
