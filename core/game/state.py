"""Table state: phases, players and the shared game aggregate."""

from dataclasses import dataclass, field
from enum import Enum, auto

from core.cards import Card
from core.hand import hand_value, is_bust


class GamePhase(Enum):
    """
    Game state machine phases.

    Flow: LOBBY → IN_PROGRESS → ENDED, and RESET back to LOBBY from anywhere.
    """

    # Waiting for players to join
    LOBBY = auto()

    # Cards dealt, players taking turns
    IN_PROGRESS = auto()

    # Everyone is standing, winner decided
    ENDED = auto()


@dataclass
class Player:
    """A seat at the table."""

    id: str
    name: str
    hand: list[Card] = field(default_factory=list)
    score: int = 0
    is_house: bool = False
    is_standing: bool = False

    def take(self, card: Card) -> None:
        """Add a card to the hand and rescore."""
        self.hand.append(card)
        self.score = hand_value(self.hand)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return is_bust(self.hand)


@dataclass
class GameState:
    """The single shared table; replaced wholesale on reset."""

    players: list[Player] = field(default_factory=list)
    deck: list[Card] = field(default_factory=list)
    current_turn: str = ""
    game_started: bool = False
    game_ended: bool = False
    winner: Player | None = None

    def find_player(self, player_id: str | None) -> Player | None:
        """Return the first player with this id, if any."""
        if not player_id:
            return None
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def house(self) -> Player | None:
        """Return the house player, if anyone has joined."""
        return next((p for p in self.players if p.is_house), None)
