from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from relay_service.api.deps import Relay, RelayDep
from relay_service.application.dto.message import RelayMessage
from relay_service.config import settings
from relay_service.infrastructure.ws.protocol import (
    AnnounceData,
    SentMessageData,
    WsInbound,
    WsOutbound,
)
from relay_service.services.lifecycle import SessionLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def ws_relay(websocket: WebSocket, relay: RelayDep) -> None:
    session_id = uuid.uuid4().hex
    await relay.manager.connect(websocket, session_id)
    lifecycle = SessionLifecycle(session_id, relay.presence)

    heartbeat_task = asyncio.create_task(
        _heartbeat(websocket), name=f"ws-heartbeat-{session_id}",
    )
    try:
        await _read_loop(websocket, lifecycle, relay)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for session %s", session_id)
    finally:
        heartbeat_task.cancel()
        relay.manager.disconnect(session_id)
        await lifecycle.disconnect()


async def _heartbeat(ws: WebSocket) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await ws.send_text(WsOutbound(type="pong", data={}).model_dump_json())
    except asyncio.CancelledError:
        pass
    except Exception:
        pass


async def _send_error(ws: WebSocket, code: str, **extra: Any) -> None:
    await ws.send_text(
        WsOutbound(type="error", data={"code": code, **extra}).model_dump_json()
    )


async def _read_loop(ws: WebSocket, lifecycle: SessionLifecycle, relay: Relay) -> None:
    while not lifecycle.is_closed:
        frame = await ws.receive()
        if frame["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(frame.get("code", 1000), frame.get("reason"))
        raw = frame.get("text")
        if raw is None:
            # binary frames are not part of the protocol
            await _send_error(ws, "invalid_payload")
            continue
        try:
            msg = WsInbound.model_validate_json(raw)
        except PydanticValidationError:
            await _send_error(ws, "invalid_payload")
            continue

        if msg.type == "ping":
            await ws.send_text(WsOutbound(type="pong", data={}).model_dump_json())

        elif msg.type == "add-user":
            await _handle_announce(ws, lifecycle, msg.data)

        elif msg.type == "sent-message":
            await _handle_send(ws, lifecycle, relay, msg.data)

        elif msg.type == "logout":
            await _handle_logout(ws, lifecycle, msg.data)

        else:
            await _send_error(ws, "unknown_type", type=msg.type)


async def _handle_announce(ws: WebSocket, lifecycle: SessionLifecycle, data: Any) -> None:
    try:
        announce = AnnounceData.parse(data)
    except PydanticValidationError as exc:
        await _send_error(ws, "invalid_data", detail=str(exc))
        return
    await lifecycle.announce(announce.user_id)


async def _handle_logout(ws: WebSocket, lifecycle: SessionLifecycle, data: Any) -> None:
    try:
        user_id = AnnounceData.parse(data).user_id
    except PydanticValidationError:
        if lifecycle.user_id is None:
            await _send_error(ws, "not_identified")
            return
        user_id = lifecycle.user_id

    await lifecycle.logout(user_id)
    await ws.close(code=1000)


async def _handle_send(
    ws: WebSocket,
    lifecycle: SessionLifecycle,
    relay: Relay,
    data: Any,
) -> None:
    try:
        sent = SentMessageData.model_validate(data)
    except PydanticValidationError as exc:
        await _send_error(ws, "invalid_data", detail=str(exc))
        return

    sender_id = sent.from_ or lifecycle.user_id
    if sender_id is None:
        await _send_error(ws, "not_identified")
        return

    outcome = await relay.router.route(
        RelayMessage(
            sender_id=sender_id,
            recipient_id=sent.to,
            body=sent.message,
            attachment=sent.image,
            created_at=sent.created_at,
        )
    )
    logger.debug("Message %s -> %s: %s", sender_id, sent.to, outcome)
