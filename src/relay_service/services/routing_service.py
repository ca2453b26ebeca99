from __future__ import annotations

import logging

from relay_service.application.dto.message import RelayMessage
from relay_service.application.ports.transport import SessionSender
from relay_service.domain.value_objects.enums import RouteOutcome
from relay_service.infrastructure.ws.registry import ConnectionRegistry

logger = logging.getLogger(__name__)

RECEIVE_MESSAGE_EVENT = "receive-message"


class MessageRouter:
    """Point-to-point live delivery.

    At most once, best effort, no acknowledgement. The router never writes
    history; senders persist through the Message Store themselves.
    """

    def __init__(self, registry: ConnectionRegistry, sender: SessionSender) -> None:
        self._registry = registry
        self._sender = sender

    async def route(self, message: RelayMessage) -> RouteOutcome:
        session_id = self._registry.find(message.recipient_id)
        if session_id is None:
            logger.debug("Recipient %s offline, history only", message.recipient_id)
            return RouteOutcome.OFFLINE

        payload = message.payload_for(message.recipient_id)
        delivered = await self._sender.send_to_session(session_id, RECEIVE_MESSAGE_EVENT, payload)
        if not delivered:
            logger.debug(
                "Live delivery to %s on %s failed", message.recipient_id, session_id,
            )
            return RouteOutcome.FAILED
        return RouteOutcome.DELIVERED
