"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from api.coordinator import TableCoordinator
from core.cards import Card, Rank, Suit
from core.game import BlackjackTable, GameAction, ActionType, Player
from core.hand import hand_value


def cards(*codes: str) -> list[Card]:
    """Build cards from codes, e.g. cards("AS", "KH")."""
    return [Card.from_code(code) for code in codes]


def stacked_deck(*codes: str) -> list[Card]:
    """A deck that deals the given codes in order (the top of a deck is its end)."""
    return list(reversed(cards(*codes)))


def make_player(
    player_id: str,
    *codes: str,
    is_house: bool = False,
    is_standing: bool = True,
) -> Player:
    """A seated player holding the given cards."""
    hand = cards(*codes)
    return Player(
        id=player_id,
        name=player_id.title(),
        hand=hand,
        score=hand_value(hand),
        is_house=is_house,
        is_standing=is_standing,
    )


def join(player_id: str, name: str) -> GameAction:
    return GameAction(ActionType.JOIN, player_id=player_id, player_name=name)


def start() -> GameAction:
    return GameAction(ActionType.START)


def hit(player_id: str) -> GameAction:
    return GameAction(ActionType.HIT, player_id=player_id)


def stand(player_id: str) -> GameAction:
    return GameAction(ActionType.STAND, player_id=player_id)


def reset() -> GameAction:
    return GameAction(ActionType.RESET)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def table(rng):
    """An empty table with a randomly shuffled deck on START."""
    return BlackjackTable(rng=rng)


@pytest.fixture
def stacked_table():
    """
    Factory for a table whose START deals a known sequence of cards.

    Cards are dealt two per player in roster order, then handed out by HIT.
    """
    def _make(*codes: str, **kwargs) -> BlackjackTable:
        return BlackjackTable(deck_builder=lambda: stacked_deck(*codes), **kwargs)

    return _make


@pytest.fixture
def three_seat_table(stacked_table):
    """House, Alice and Bob seated; START deals H: 10S 8D, A: 9C 7H, B: KD 5S."""
    t = stacked_table("10S", "8D", "9C", "7H", "KD", "5S", "4H", "QC", "2D")
    t.dispatch(join("house", "House"))
    t.dispatch(join("alice", "Alice"))
    t.dispatch(join("bob", "Bob"))
    return t


@pytest.fixture
def coordinator(rng):
    """A coordinator over a fresh table."""
    return TableCoordinator(table=BlackjackTable(rng=rng), queue_size=8)


# Hypothesis strategies for property-based testing
try:
    from hypothesis import strategies as st

    @st.composite
    def card_strategy(draw):
        """Generate a random card."""
        rank = draw(st.sampled_from(list(Rank)))
        suit = draw(st.sampled_from(list(Suit)))
        return Card(rank, suit)

    @st.composite
    def hand_strategy(draw, min_cards=0, max_cards=8):
        """Generate a random list of cards."""
        return draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))

except ImportError:
    pass  # hypothesis not installed
