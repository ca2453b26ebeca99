from __future__ import annotations

from relay_service.domain.entities.message import Message
from relay_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        recipient_id=model.recipient_id,
        body=model.body,
        attachment=model.attachment,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender_id=entity.sender_id,
        recipient_id=entity.recipient_id,
        body=entity.body,
        attachment=entity.attachment,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
