"""Tests for hand scoring."""

from hypothesis import given

from core.hand import hand_value, is_bust
from conftest import cards, hand_strategy


class TestHandValue:
    """Tests for hand_value."""

    def test_empty_hand(self):
        """Test that an empty hand is worth nothing."""
        assert hand_value([]) == 0

    def test_blackjack(self):
        """Test ace and king."""
        assert hand_value(cards("AS", "KH")) == 21

    def test_face_cards_count_ten(self):
        """Test that J, Q and K are worth 10."""
        assert hand_value(cards("JS", "QH")) == 20
        assert hand_value(cards("KD", "2C")) == 12

    def test_one_ace_demoted(self):
        """Test A-A-9: one ace drops to 1."""
        assert hand_value(cards("AS", "AH", "9C")) == 21

    def test_two_aces_demoted(self):
        """Test A-A-A-8: 41 → 31 → 21."""
        assert hand_value(cards("AS", "AH", "AC", "8D")) == 21

    def test_bust_without_ace(self):
        """Test that a hand without aces is never reduced."""
        assert hand_value(cards("10S", "9H", "5C")) == 24

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = cards("AS")
        assert hand_value(hand) == 11

        hand += cards("5H")
        assert hand_value(hand) == 16

        hand += cards("8C")
        assert hand_value(hand) == 14

    def test_all_aces_demoted_still_bust(self):
        """Test that demotion stops when there are no aces left."""
        assert hand_value(cards("AS", "KH", "QC", "5D")) == 26

    def test_is_bust(self):
        """Test bust detection."""
        assert is_bust(cards("10S", "6H", "KC"))
        assert not is_bust(cards("AS", "AH", "9C"))

    def test_recompute_is_stable(self):
        """Test that scoring the same hand twice gives the same value."""
        hand = cards("AS", "AH", "AC", "8D")
        assert hand_value(hand) == hand_value(hand)

    @given(hand_strategy())
    def test_value_never_busts_with_soft_ace(self, hand):
        """Test that a bust total never still counts an ace as 11."""
        value = hand_value(hand)
        hard_total = sum(1 if c.is_ace else c.value for c in hand)
        assert value >= hard_total
        assert (value - hard_total) % 10 == 0
        if value > 21:
            assert value == hard_total
        assert hand_value(hand) == value
