"""Participant registry and state fan-out for the shared table."""

import asyncio
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from api.logging_utils import get_logger
from api.schemas import GameActionRequest, dump_state
from config import config
from core.game import BlackjackTable, GameAction, GameEvent, GameState

logger = get_logger(__name__)


def parse_action(payload: Any) -> GameAction | None:
    """Turn a raw ``gameAction`` payload into an action, or None if it is unusable."""
    if not isinstance(payload, dict):
        return None
    try:
        request = GameActionRequest.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Malformed gameAction payload: %s", exc.errors())
        return None
    return request.to_action()


class Participant:
    """A connected client and its outbound message queue."""

    def __init__(self, connection_id: str, queue_size: int) -> None:
        self.connection_id = connection_id
        self.outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)

    def deliver(self, message: dict[str, Any]) -> bool:
        """Queue a message without waiting; False if the queue is full."""
        try:
            self.outbox.put_nowait(message)
        except asyncio.QueueFull:
            return False
        return True


class TableCoordinator:
    """
    Route actions from every participant into one table and fan the result out.

    ``handle_action`` and ``disconnect`` never await: the reducer runs and
    each participant's queue is filled before control returns to the event
    loop, so an action and its broadcast cannot interleave with another
    action.
    """

    def __init__(
        self,
        table: BlackjackTable | None = None,
        queue_size: int | None = None,
    ) -> None:
        self.table = table or BlackjackTable(
            min_players=config.table.min_players,
            initial_cards=config.table.initial_cards,
            history_size=config.table.history_size,
        )
        self._queue_size = queue_size or config.table.outbound_queue_size
        self._participants: dict[str, Participant] = {}
        self.table.subscribe(self._log_event)

    def connect(self, connection_id: str | None = None) -> Participant:
        """Register a new participant and greet it with its connection id."""
        participant = Participant(connection_id or uuid4().hex, self._queue_size)
        self._participants[participant.connection_id] = participant
        logger.info("Client connected: %s", participant.connection_id)

        participant.deliver({
            "event": "connected",
            "data": {"connectionId": participant.connection_id},
        })
        return participant

    def disconnect(self, connection_id: str) -> None:
        """Forget a participant, unseat its players and rebroadcast."""
        self._participants.pop(connection_id, None)
        removed = self.table.remove_player(connection_id)
        logger.info("Client disconnected: %s (%d seats removed)", connection_id, removed)
        self.broadcast_state()

    def handle_action(self, payload: Any) -> GameState:
        """Apply one ``gameAction`` payload and broadcast the outcome."""
        state = self.table.dispatch(parse_action(payload))
        self.broadcast_state()
        return state

    def broadcast_state(self) -> int:
        """
        Send the full table to every participant.

        Returns:
            Number of participants the snapshot was queued for
        """
        message = {"event": "gameStateUpdate", "data": dump_state(self.table.state)}
        delivered = 0
        for participant in list(self._participants.values()):
            if participant.deliver(message):
                delivered += 1
            else:
                logger.warning(
                    "Outbound queue full for %s, dropping state update",
                    participant.connection_id,
                )
        return delivered

    @property
    def active_connections(self) -> int:
        """Return number of active connections."""
        return len(self._participants)

    @property
    def history(self) -> list[GameEvent]:
        """Return the events of the current game."""
        return self.table.events.history

    def _log_event(self, event: GameEvent) -> None:
        logger.debug("%s", event)


# Global table coordinator
coordinator = TableCoordinator()


def get_coordinator() -> TableCoordinator:
    """Dependency returning the process-wide coordinator."""
    return coordinator
