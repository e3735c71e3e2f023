"""Pydantic schemas for the wire format."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.cards import Card
from core.game import GameAction, GameEvent, GameState, Player


class WireModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardResponse(WireModel):
    """Card representation."""

    suit: str
    rank: str
    code: str

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(suit=card.suit.value, rank=card.rank.value, code=card.code)


class PlayerResponse(WireModel):
    """Seat representation."""

    id: str
    name: str
    hand: list[CardResponse]
    score: int
    is_house: bool
    is_standing: bool

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(
            id=player.id,
            name=player.name,
            hand=[CardResponse.from_card(c) for c in player.hand],
            score=player.score,
            is_house=player.is_house,
            is_standing=player.is_standing,
        )


class GameStateResponse(WireModel):
    """Full table snapshot, as broadcast in ``gameStateUpdate``."""

    players: list[PlayerResponse]
    deck: list[CardResponse]
    current_turn: str
    game_started: bool
    game_ended: bool
    winner: PlayerResponse | None = None

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        return cls(
            players=[PlayerResponse.from_player(p) for p in state.players],
            deck=[CardResponse.from_card(c) for c in state.deck],
            current_turn=state.current_turn,
            game_started=state.game_started,
            game_ended=state.game_ended,
            winner=PlayerResponse.from_player(state.winner) if state.winner else None,
        )


def dump_state(state: GameState) -> dict[str, Any]:
    """Serialize a table snapshot to a JSON-ready dict with camelCase keys."""
    return GameStateResponse.from_state(state).model_dump(mode="json", by_alias=True)


class GameActionRequest(WireModel):
    """Payload of a ``gameAction`` message."""

    type: str
    player_id: str | None = None
    player_name: str | None = None

    def to_action(self) -> GameAction | None:
        """Convert to a reducer action; None for unknown action types."""
        return GameAction.from_payload(self.model_dump(by_alias=True))


class GameEventResponse(BaseModel):
    """One entry of the game history."""

    type: str
    data: dict[str, Any]
    timestamp: datetime

    @classmethod
    def from_event(cls, event: GameEvent) -> "GameEventResponse":
        return cls(type=event.event_type.name, data=event.data, timestamp=event.timestamp)


class SocketMessage(BaseModel):
    """Envelope for every WebSocket frame."""

    event: Literal["connected", "gameAction", "gameStateUpdate"]
    data: Any = None
