"""FastAPI dependency injection helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, AsyncIterator

from fastapi import Depends
from starlette.requests import HTTPConnection

from relay_service.config import settings
from relay_service.infrastructure.db.session import AsyncSessionLocal
from relay_service.infrastructure.db.uow import SqlAlchemyUoW
from relay_service.infrastructure.ws.manager import ConnectionManager
from relay_service.infrastructure.ws.registry import ConnectionRegistry
from relay_service.services.presence_service import PresenceService
from relay_service.services.routing_service import MessageRouter


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


@dataclass(frozen=True, slots=True)
class Relay:
    """The live half of the service: one instance per application."""

    manager: ConnectionManager
    registry: ConnectionRegistry
    presence: PresenceService
    router: MessageRouter


def build_relay() -> Relay:
    manager = ConnectionManager(send_timeout=settings.WS_SEND_TIMEOUT_SECONDS)
    registry = ConnectionRegistry()
    return Relay(
        manager=manager,
        registry=registry,
        presence=PresenceService(registry, manager),
        router=MessageRouter(registry, manager),
    )


def get_relay(conn: HTTPConnection) -> Relay:
    return conn.app.state.relay


RelayDep = Annotated[Relay, Depends(get_relay)]
