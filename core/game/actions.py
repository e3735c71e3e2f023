"""Player actions understood by the table."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class ActionType(Enum):
    """Inbound action kinds, valued by their wire tag."""

    JOIN = "JOIN"
    START = "START"
    HIT = "HIT"
    STAND = "STAND"
    RESET = "RESET"


@dataclass(frozen=True)
class GameAction:
    """A single inbound action; ids and names are optional on the wire."""

    type: ActionType
    player_id: str | None = None
    player_name: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GameAction | None":
        """
        Build an action from a ``gameAction`` payload.

        Returns None for unknown action tags. Non-string ids and names are
        dropped so the reducer's preconditions reject them.
        """
        try:
            action_type = ActionType(payload.get("type"))
        except ValueError:
            return None

        player_id = payload.get("playerId")
        player_name = payload.get("playerName")
        return cls(
            type=action_type,
            player_id=player_id if isinstance(player_id, str) else None,
            player_name=player_name if isinstance(player_name, str) else None,
        )
