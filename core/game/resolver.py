"""Winner resolution once every player is standing."""

from typing import Sequence

from core.hand import BLACKJACK
from core.game.state import Player


def resolve_winner(players: Sequence[Player]) -> Player | None:
    """
    Decide the winner of a finished game.

    House busts: the highest-scoring non-bust player wins, the earliest
    joiner keeping ties. House stands: the first non-bust player in roster
    order who beats the house wins, otherwise the house does.

    Returns:
        The winning player, or None when there is no house or nobody survives
        a house bust
    """
    house = next((p for p in players if p.is_house), None)
    if house is None:
        return None

    contenders = [p for p in players if not p.is_house and p.score <= BLACKJACK]

    if house.score > BLACKJACK:
        best: Player | None = None
        for player in contenders:
            if best is None or player.score > best.score:
                best = player
        return best

    # First qualifier in roster order, not the highest scorer
    return next((p for p in contenders if p.score > house.score), house)
