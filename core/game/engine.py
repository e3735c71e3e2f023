"""Table engine: the reducer behind every player action."""

from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, build_deck, draw
from core.game.actions import ActionType, GameAction
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.resolver import resolve_winner
from core.game.state import GamePhase, GameState, Player

DeckBuilder = Callable[[], list[Card]]


class BlackjackTable:
    """
    Shared blackjack table driven by a phase state machine.

    The table owns exactly one GameState. Actions mutate it in place, reset
    replaces it. Invalid actions never raise: they emit ACTION_IGNORED and
    leave the state untouched. Communication happens through events and
    return values only.
    """

    # State machine states
    STATES = [p.name.lower() for p in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_round", "source": "lobby", "dest": "in_progress"},
        {"trigger": "end_round", "source": "in_progress", "dest": "ended"},
        {"trigger": "reset_table", "source": "*", "dest": "lobby"},
    ]

    def __init__(
        self,
        min_players: int = 2,
        initial_cards: int = 2,
        rng: Random | None = None,
        deck_builder: DeckBuilder | None = None,
        history_size: int | None = None,
    ) -> None:
        """
        Initialize an empty table.

        Args:
            min_players: Players needed before START is accepted
            initial_cards: Cards dealt to each player on START
            rng: Random number generator used to shuffle new decks
            deck_builder: Overrides deck construction, e.g. a stacked deck
            history_size: Number of recent events kept in the move log
        """
        self.min_players = min_players
        self.initial_cards = initial_cards
        self._rng = rng or Random()
        self._deck_builder = deck_builder or (lambda: build_deck(self._rng))

        self.state = GameState()
        self.events = EventEmitter(max_history=history_size)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="lobby",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get current game phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def dispatch(self, action: GameAction | None) -> GameState:
        """
        Apply one action and return the resulting state.

        Args:
            action: Parsed action, or None for a payload with an unknown type

        Returns:
            The table's current GameState (a new object after RESET)
        """
        if action is None:
            self._ignore(None, "unknown action type")
            return self.state

        handlers: dict[ActionType, Callable[[GameAction], bool]] = {
            ActionType.JOIN: lambda a: self.join(a.player_id, a.player_name),
            ActionType.START: lambda a: self.start(),
            ActionType.HIT: lambda a: self.hit(a.player_id),
            ActionType.STAND: lambda a: self.stand(a.player_id),
            ActionType.RESET: lambda a: self.reset(),
        }
        handlers[action.type](action)
        return self.state

    def join(self, player_id: str | None, player_name: str | None) -> bool:
        """
        Seat a new player; the first one becomes the house.

        Duplicate ids are accepted and produce a second seat.
        """
        if not player_id or not player_name:
            return self._ignore(ActionType.JOIN, "player id and name are required")

        player = Player(
            id=player_id,
            name=player_name,
            is_house=not self.state.players,
        )
        self.state.players.append(player)
        self.events.emit_new(
            EventType.PLAYER_JOINED,
            player_id=player.id,
            name=player.name,
            is_house=player.is_house,
        )
        return True

    def start(self) -> bool:
        """Shuffle a fresh deck, deal the opening hands and hand out the first turn."""
        if self.phase != GamePhase.LOBBY:
            return self._ignore(ActionType.START, "game already started")

        if len(self.state.players) < self.min_players:
            return self._ignore(
                ActionType.START,
                f"need at least {self.min_players} players",
                players=len(self.state.players),
            )

        self.state.deck = self._deck_builder()
        self.events.emit_new(EventType.DECK_SHUFFLED, cards=len(self.state.deck))

        for player in self.state.players:
            for _ in range(self.initial_cards):
                self._deal_card_to(player)

        self.state.game_started = True
        self.begin_round()  # Trigger state transition
        self.events.emit_new(EventType.GAME_STARTED, players=len(self.state.players))

        first = next((p for p in self.state.players if not p.is_house), None)
        self._set_turn(first.id if first else "")
        return True

    def hit(self, player_id: str | None) -> bool:
        """Current player takes another card; a bust ends their turn."""
        player = self._acting_player(ActionType.HIT, player_id)
        if player is None:
            return False

        if player.is_standing:
            return self._ignore(ActionType.HIT, "player is standing", player_id=player.id)

        card = self._deal_card_to(player)
        if card is not None:
            self.events.emit_new(EventType.PLAYER_HIT, player_id=player.id, score=player.score)

        if player.is_busted:
            player.is_standing = True
            self.events.emit_new(EventType.PLAYER_BUSTS, player_id=player.id, score=player.score)
            self._advance_turn(player)
            self._finish_if_settled()

        return True

    def stand(self, player_id: str | None) -> bool:
        """Current player keeps their hand and passes the turn on."""
        player = self._acting_player(ActionType.STAND, player_id)
        if player is None:
            return False

        player.is_standing = True
        self.events.emit_new(EventType.PLAYER_STAND, player_id=player.id, score=player.score)
        self._advance_turn(player)
        self._finish_if_settled()
        return True

    def reset(self) -> bool:
        """Throw the table away and start over with an empty lobby."""
        self.state = GameState()
        self.events.clear_history()
        self.reset_table()
        self.events.emit_new(EventType.GAME_RESET)
        return True

    def remove_player(self, player_id: str) -> int:
        """
        Drop every seat with this id, e.g. when its connection goes away.

        The turn pointer is left alone, so it may keep naming a player who
        is no longer seated until the next RESET.

        Returns:
            Number of seats removed
        """
        remaining = [p for p in self.state.players if p.id != player_id]
        removed = len(self.state.players) - len(remaining)
        self.state.players = remaining

        if removed:
            self.events.emit_new(EventType.PLAYER_LEFT, player_id=player_id, seats=removed)
        return removed

    def _acting_player(self, action_type: ActionType, player_id: str | None) -> Player | None:
        """Look up the player whose turn it is, or record why the action is ignored."""
        if self.phase != GamePhase.IN_PROGRESS:
            self._ignore(action_type, "game is not in progress")
            return None

        if not player_id or player_id != self.state.current_turn:
            self._ignore(action_type, "not this player's turn", player_id=player_id)
            return None

        player = self.state.find_player(player_id)
        if player is None:
            self._ignore(action_type, "player is not seated", player_id=player_id)
        return player

    def _deal_card_to(self, player: Player) -> Card | None:
        """Deal the top card of the deck to a player."""
        card, self.state.deck = draw(self.state.deck)
        if card is None:
            self.events.emit_new(EventType.DECK_EMPTY, player_id=player.id)
            return None

        player.take(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            player_id=player.id,
            card=card.code,
            score=player.score,
        )
        return card

    def _advance_turn(self, player: Player) -> None:
        """Pass the turn to the next seat after ``player`` that still has to act."""
        players = self.state.players
        index = next(i for i, p in enumerate(players) if p is player)
        rotation = players[index + 1:] + players[:index]

        upcoming = next(
            (
                p for p in rotation
                if not p.is_house and not p.is_standing and p.id != player.id
            ),
            None,
        )
        self._set_turn(upcoming.id if upcoming else "")

    def _finish_if_settled(self) -> None:
        """End the game once no seat other than the house has to act."""
        if any(not p.is_standing for p in self.state.players if not p.is_house):
            return

        # The house stands on its dealt hand
        house = self.state.house
        if house is not None and not house.is_standing:
            house.is_standing = True
            self.events.emit_new(EventType.PLAYER_STAND, player_id=house.id, score=house.score)

        self.state.game_ended = True
        self.state.winner = resolve_winner(self.state.players)
        self.end_round()  # Trigger state transition
        self.events.emit_new(
            EventType.GAME_ENDED,
            winner_id=self.state.winner.id if self.state.winner else None,
        )

    def _set_turn(self, player_id: str) -> None:
        """Move the turn pointer and announce the change."""
        if player_id == self.state.current_turn:
            return
        self.state.current_turn = player_id
        self.events.emit_new(EventType.TURN_CHANGED, player_id=player_id)

    def _ignore(self, action_type: ActionType | None, reason: str, **data) -> bool:
        """Record an action that was not applied."""
        self.events.emit_new(
            EventType.ACTION_IGNORED,
            action=action_type.value if action_type else None,
            reason=reason,
            **data,
        )
        return False
