from __future__ import annotations

import logging
import uuid

from relay_service.application.exceptions import (
    AppError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from relay_service.application.ports.clock import Clock, system_clock
from relay_service.application.uow import UnitOfWork
from relay_service.domain.entities.account import Account

logger = logging.getLogger(__name__)


async def register_account(
    username: str | None,
    email: str | None,
    avatar: str | None,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Account:
    for field, value in (("username", username), ("email", email), ("avatar", avatar)):
        if not value:
            raise ValidationError(f"{field} is required")

    if await uow.accounts.get_by_username(username) is not None:
        raise ConflictError("username taken")

    account = Account(
        id=uuid.uuid4(),
        username=username,
        email=email,
        avatar=avatar,
        created_at=clock.now(),
    )
    try:
        account = await uow.accounts_w.create(account)
        await uow.commit()
    except AppError:
        # A concurrent registration won the unique username.
        await uow.rollback()
        raise
    except Exception as exc:
        logger.exception("Creating account %s failed", username)
        await uow.rollback()
        raise PersistenceError("Failed to create account") from exc
    return account


async def get_account(account_id: uuid.UUID, uow: UnitOfWork) -> Account:
    account = await uow.accounts.get_by_id(account_id)
    if account is None:
        raise NotFoundError("Account not found")
    return account


async def list_contacts(account_id: uuid.UUID, uow: UnitOfWork) -> list[Account]:
    """Everyone the account can chat with, i.e. every other account."""
    await get_account(account_id, uow)
    return await uow.accounts.list_except(account_id)
