from __future__ import annotations

import uuid

import pytest

from relay_service.application.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from relay_service.services import account_service
from tests.conftest import FakeUoW, make_account


@pytest.mark.asyncio
async def test_register_account():
    uow = FakeUoW()

    account = await account_service.register_account(
        "alice", "alice@example.com", "https://a.example.com/alice.png", uow,
    )

    assert account.username == "alice"
    assert uow.accounts._store[account.id] == account
    assert uow._committed is True


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["username", "email", "avatar"])
async def test_register_account_requires_fields(missing):
    fields = {"username": "bob", "email": "bob@example.com", "avatar": "x.png"}
    fields[missing] = ""

    with pytest.raises(ValidationError) as exc_info:
        await account_service.register_account(**fields, uow=FakeUoW())

    assert exc_info.value.detail == f"{missing} is required"


@pytest.mark.asyncio
async def test_register_account_username_taken():
    uow = FakeUoW()
    existing = make_account("alice")
    uow.accounts._store[existing.id] = existing

    with pytest.raises(ConflictError):
        await account_service.register_account("alice", "other@example.com", "x.png", uow)


@pytest.mark.asyncio
async def test_list_contacts_excludes_self():
    uow = FakeUoW()
    alice, bob, carol = make_account("alice"), make_account("bob"), make_account("carol")
    for a in (alice, bob, carol):
        uow.accounts._store[a.id] = a

    contacts = await account_service.list_contacts(bob.id, uow)

    assert [c.username for c in contacts] == ["alice", "carol"]


@pytest.mark.asyncio
async def test_get_account_missing():
    with pytest.raises(NotFoundError):
        await account_service.get_account(uuid.uuid4(), FakeUoW())


@pytest.mark.asyncio
async def test_register_account_store_failure_is_generic():
    uow = FakeUoW()
    uow.accounts_w.fail_with = OSError("connection reset")

    with pytest.raises(PersistenceError) as exc_info:
        await account_service.register_account("alice", "a@example.com", "a.png", uow)

    assert exc_info.value.detail == "Failed to create account"
    assert uow._rolled_back is True
    assert uow._committed is False


@pytest.mark.asyncio
async def test_register_account_lost_username_race():
    uow = FakeUoW()
    uow.accounts_w.fail_with = ConflictError("username taken")

    with pytest.raises(ConflictError):
        await account_service.register_account("alice", "a@example.com", "a.png", uow)

    assert uow._rolled_back is True
