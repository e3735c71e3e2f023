"""Game engine and state management."""

from core.game.actions import ActionType, GameAction
from core.game.events import GameEvent, EventType
from core.game.state import GamePhase, GameState, Player
from core.game.resolver import resolve_winner
from core.game.engine import BlackjackTable

__all__ = [
    "ActionType",
    "GameAction",
    "GameEvent",
    "EventType",
    "GamePhase",
    "GameState",
    "Player",
    "resolve_winner",
    "BlackjackTable",
]
