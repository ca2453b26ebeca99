from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from relay_service.application.exceptions import ConflictError
from relay_service.domain.entities.account import Account
from relay_service.infrastructure.db.mappers import account as mapper
from relay_service.infrastructure.db.models.account import AccountModel


class AccountReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: UUID) -> Account | None:
        model = await self._session.get(AccountModel, account_id)
        return mapper.model_to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_except(self, account_id: UUID) -> list[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id != account_id)
            .order_by(AccountModel.username.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class AccountWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, account: Account) -> Account:
        model = mapper.entity_to_model(account)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError("username taken") from exc
        return mapper.model_to_entity(model)
