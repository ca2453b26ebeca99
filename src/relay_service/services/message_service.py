from __future__ import annotations

import logging
import uuid

from relay_service.application.exceptions import AppError, PersistenceError, ValidationError
from relay_service.application.ports.clock import Clock, system_clock
from relay_service.application.uow import UnitOfWork
from relay_service.domain.entities.message import Message

logger = logging.getLogger(__name__)


async def add_message(
    sender_id: str | None,
    recipient_id: str | None,
    body: str | None,
    attachment: str | None,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Message:
    """Append one message to the history of the (sender, recipient) pair.

    Independent of live delivery: it is stored whether or not the recipient
    is online. Failures are not retried.
    """
    if not sender_id:
        raise ValidationError("from is required")
    if not recipient_id:
        raise ValidationError("to is required")
    if sender_id == recipient_id:
        raise ValidationError("from and to must be different users")

    now = clock.now()
    msg = Message(
        id=uuid.uuid4(),
        sender_id=sender_id,
        recipient_id=recipient_id,
        body=body,
        attachment=attachment,
        created_at=now,
        updated_at=now,
    )
    try:
        msg = await uow.messages_w.append(msg)
        await uow.commit()
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Storing message %s -> %s failed", sender_id, recipient_id)
        await uow.rollback()
        raise PersistenceError("Failed to add message to the database") from exc
    return msg


async def get_conversation(
    user_id: str | None,
    peer_id: str | None,
    uow: UnitOfWork,
) -> list[Message]:
    """History between two users, oldest first."""
    if not user_id:
        raise ValidationError("from is required")
    if not peer_id:
        raise ValidationError("to is required")
    return await uow.messages.list_between(user_id, peer_id)
