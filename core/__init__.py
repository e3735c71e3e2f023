"""Core blackjack table engine - 100% transport-agnostic."""

from core.cards import Card, Rank, Suit, build_deck, draw, shuffle
from core.hand import hand_value

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "draw",
    "shuffle",
    "hand_value",
]
