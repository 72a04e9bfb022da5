"""Blackjack round engine with state machine."""

import logging
from dataclasses import replace

from transitions import Machine

from core.cards import Card
from core.codec import decode, encode
from core.dealer import DEALER_STANDS_ON, simulate_turn
from core.deck import INITIAL_HAND_SIZE, Deck, check_conservation, split_initial_hands
from core.errors import InvalidGameStateError, InvalidInitialCardsError
from core.game.state import GameStatus, GameTurn
from core.hand import Hand
from core.models import Game
from core.scoring import Outcome, determine_winner

logger = logging.getLogger(__name__)


class BlackjackGame:
    """
    One player-versus-dealer round driven by a state machine.

    A round is rebuilt from its persisted record for each request, mutated by
    a single action and written back with :meth:`apply_to`. Terminal states
    have no outgoing transitions, so a finished round can never change again.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameStatus]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "player_busts", "source": "in_progress", "dest": "finished_dealer_won"},
        {"trigger": "player_wins", "source": "in_progress", "dest": "finished_player_won"},
        {"trigger": "dealer_wins", "source": "in_progress", "dest": "finished_dealer_won"},
        {"trigger": "push", "source": "in_progress", "dest": "finished_draw"},
    ]

    OUTCOME_TRIGGERS: dict[Outcome, str] = {
        Outcome.PLAYER_WINS: "player_wins",
        Outcome.DEALER_WINS: "dealer_wins",
        Outcome.DRAW: "push",
    }

    def __init__(
        self,
        deck: Deck,
        player_hand: Hand,
        dealer_hand: Hand,
        status: GameStatus = GameStatus.IN_PROGRESS,
        dealer_stands_on: int = DEALER_STANDS_ON,
    ) -> None:
        """
        Initialize a round.

        Args:
            deck: Undrawn cards, owned by this round
            player_hand: Player's cards
            dealer_hand: Dealer's cards
            status: Current status (IN_PROGRESS for a fresh deal)
            dealer_stands_on: Total at which the dealer stops drawing
        """
        self.deck = deck
        self.player_hand = player_hand
        self.dealer_hand = dealer_hand
        self.dealer_stands_on = dealer_stands_on

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=status.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def deal(cls, deck: Deck, dealer_stands_on: int = DEALER_STANDS_ON) -> "BlackjackGame":
        """Start a round by dealing the opening hands from ``deck``."""
        player_cards, dealer_cards, remaining = split_initial_hands(deck)

        if len(player_cards) != INITIAL_HAND_SIZE:
            raise InvalidInitialCardsError("Player must have exactly 2 cards")
        if len(dealer_cards) != INITIAL_HAND_SIZE:
            raise InvalidInitialCardsError("Dealer must have exactly 2 cards")

        return cls(
            remaining,
            Hand(list(player_cards)),
            Hand(list(dealer_cards)),
            dealer_stands_on=dealer_stands_on,
        )

    @classmethod
    def from_record(cls, game: Game, dealer_stands_on: int = DEALER_STANDS_ON) -> "BlackjackGame":
        """
        Restore a round from its persisted record.

        Raises:
            DecodeError: if a blob is malformed or the cards do not add up
                to exactly one deck
        """
        deck = Deck(decode(game.deck_blob))
        player_hand = Hand(decode(game.player_hand_blob))
        dealer_hand = Hand(decode(game.dealer_hand_blob))
        check_conservation(deck, player_hand, dealer_hand)

        return cls(
            deck,
            player_hand,
            dealer_hand,
            status=game.status,
            dealer_stands_on=dealer_stands_on,
        )

    @property
    def status(self) -> GameStatus:
        """Get current status as enum."""
        return GameStatus[self._machine_state.upper()]  # type: ignore

    @property
    def turn(self) -> GameTurn:
        return GameTurn.for_status(self.status)

    @property
    def player_score(self) -> int:
        return self.player_hand.value

    @property
    def dealer_score(self) -> int:
        return self.dealer_hand.value

    def hit(self) -> Card:
        """
        Player draws one card.

        A bust ends the round for the dealer. Reaching exactly 21 ends the
        round at once against the dealer's current total; the dealer does
        not draw.

        Returns:
            The card drawn
        """
        self._require_player_turn("hit")

        card = self.deck.draw()
        self.player_hand.add_card(card)

        if self.player_hand.is_busted:
            self.player_busts()  # type: ignore[attr-defined]
        elif self.player_hand.is_twenty_one:
            self._resolve()

        logger.debug("Player drew %s, score %d, status %s", card, self.player_score, self.status.name)
        return card

    def stand(self) -> GameStatus:
        """Player stands; the dealer plays out and the round is resolved."""
        self._require_player_turn("stand")

        self.dealer_hand, _, self.deck = simulate_turn(
            self.dealer_hand, self.deck, stand_on=self.dealer_stands_on
        )
        self._resolve()
        return self.status

    def _resolve(self) -> None:
        outcome = determine_winner(self.player_score, self.dealer_score)
        self.trigger(self.OUTCOME_TRIGGERS[outcome])  # type: ignore[attr-defined]

    def _require_player_turn(self, action: str) -> None:
        if self.status != GameStatus.IN_PROGRESS:
            raise InvalidGameStateError(
                f"Cannot {action}: game is already finished ({self.status.name})"
            )

    def to_record(self, player_id: str) -> Game:
        """Build the record for a newly dealt round."""
        return Game(
            player_id=player_id,
            deck_blob=encode(self.deck),
            player_hand_blob=encode(self.player_hand),
            dealer_hand_blob=encode(self.dealer_hand),
            player_score=self.player_score,
            dealer_score=self.dealer_score,
            status=self.status,
            turn=self.turn,
        )

    def apply_to(self, game: Game) -> Game:
        """Return a copy of ``game`` carrying this round's cards, scores and status."""
        return replace(
            game,
            deck_blob=encode(self.deck),
            player_hand_blob=encode(self.player_hand),
            dealer_hand_blob=encode(self.dealer_hand),
            player_score=self.player_score,
            dealer_score=self.dealer_score,
            status=self.status,
            turn=self.turn,
        )
