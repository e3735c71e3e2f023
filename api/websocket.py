"""WebSocket endpoint feeding the shared table."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from api.coordinator import Participant, TableCoordinator, get_coordinator
from api.logging_utils import get_logger
from api.schemas import SocketMessage

router = APIRouter()
logger = get_logger(__name__)


async def _pump_outbox(websocket: WebSocket, participant: Participant) -> None:
    """Forward queued messages to one client until the socket goes away."""
    while True:
        message = await participant.outbox.get()
        try:
            await websocket.send_json(message)
        except Exception as exc:  # Connection may be closed
            logger.debug("Send to %s failed: %r", participant.connection_id, exc)
            return


def _handle_frame(
    coordinator: TableCoordinator,
    participant: Participant,
    text: str,
) -> None:
    """Route one inbound text frame."""
    try:
        message = SocketMessage.model_validate_json(text)
    except ValidationError as exc:
        logger.warning(
            "Dropping malformed frame from %s: %d errors",
            participant.connection_id,
            exc.error_count(),
        )
        return

    if message.event != "gameAction":
        logger.warning(
            "Dropping unexpected %s frame from %s",
            message.event,
            participant.connection_id,
        )
        return

    coordinator.handle_action(message.data)


@router.websocket("/ws")
async def table_websocket(
    websocket: WebSocket,
    coordinator: Annotated[TableCoordinator, Depends(get_coordinator)],
) -> None:
    """
    WebSocket endpoint for the shared table.

    Messages from client:
    - {"event": "gameAction", "data": {"type": "JOIN", "playerId": "...", "playerName": "..."}}
    - {"event": "gameAction", "data": {"type": "START"|"HIT"|"STAND"|"RESET", "playerId": "..."}}

    Messages to client:
    - {"event": "connected", "data": {"connectionId": "..."}}
    - {"event": "gameStateUpdate", "data": {...full game state...}}
    """
    await websocket.accept()
    participant = coordinator.connect()

    # Start outbound writer
    sender = asyncio.create_task(_pump_outbox(websocket, participant))

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            text = message.get("text")
            if text is None:
                logger.warning("Dropping binary frame from %s", participant.connection_id)
                continue
            _handle_frame(coordinator, participant, text)
    except WebSocketDisconnect:
        pass
    finally:
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        coordinator.disconnect(participant.connection_id)
