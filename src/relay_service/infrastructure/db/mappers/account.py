from __future__ import annotations

from relay_service.domain.entities.account import Account
from relay_service.infrastructure.db.models.account import AccountModel


def model_to_entity(model: AccountModel) -> Account:
    return Account(
        id=model.id,
        username=model.username,
        email=model.email,
        avatar=model.avatar,
        created_at=model.created_at,
    )


def entity_to_model(entity: Account) -> AccountModel:
    return AccountModel(
        id=entity.id,
        username=entity.username,
        email=entity.email,
        avatar=entity.avatar,
        created_at=entity.created_at,
    )
