"""Card and deck primitives - immutable cards, deck as a plain list."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Sequence


class Suit(Enum):
    """Card suits, valued by their wire name."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def letter(self) -> str:
        """Upper-cased first letter, used in card codes."""
        return self.value[0].upper()


class Rank(Enum):
    """Card ranks, valued by their display token."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def code(self) -> str:
        """Short display token, e.g. '10H' or 'AS'."""
        return f"{self.rank.value}{self.suit.letter}"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Create a card from a code like 'AS', '10h' or 'K♥'."""
        code = code.strip().upper()
        if len(code) < 2:
            raise ValueError(f"Invalid card code: {code}")

        rank_str = code[:-1]
        suit_str = code[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {suit.letter: suit for suit in Suit}
        suit_map.update({"♣": Suit.CLUBS, "♦": Suit.DIAMONDS, "♥": Suit.HEARTS, "♠": Suit.SPADES})

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def ordered_deck() -> list[Card]:
    """Return all 52 cards, suit by suit, in rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(cards: Sequence[Card], rng: Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of ``cards``.

    ``Random.shuffle`` is an in-place Fisher-Yates pass, so the input is
    copied first and left untouched.
    """
    shuffled = list(cards)
    (rng or Random()).shuffle(shuffled)
    return shuffled


def build_deck(rng: Random | None = None) -> list[Card]:
    """Build a fresh 52-card deck and shuffle it."""
    return shuffle(ordered_deck(), rng)


def draw(cards: Sequence[Card]) -> tuple[Card | None, list[Card]]:
    """
    Take the top card (the last element) off a deck.

    Returns:
        The drawn card, or None when the deck is empty, and the remaining cards
    """
    if not cards:
        return None, []
    return cards[-1], list(cards[:-1])
