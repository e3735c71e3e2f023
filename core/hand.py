"""Hand evaluation for blackjack."""

from typing import Iterable

from core.cards import Card

BLACKJACK = 21


def hand_value(cards: Iterable[Card]) -> int:
    """
    Calculate the best hand value.

    Aces start at 11 and are demoted to 1, one at a time, while the hand
    is over 21. Returns the highest value that doesn't bust, or the lowest
    bust value.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_bust(cards: Iterable[Card]) -> bool:
    """Check if the cards total more than 21."""
    return hand_value(cards) > BLACKJACK
