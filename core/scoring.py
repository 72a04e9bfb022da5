"""Hand scoring and winner adjudication."""

from enum import Enum, auto
from typing import Iterable

from core.cards import Card

BLACKJACK = 21


class Outcome(Enum):
    """Result of comparing two finished hands."""

    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    DRAW = auto()


def score(cards: Iterable[Card]) -> int:
    """
    Sum the point values of a hand.

    Aces always count 11; a hand is never re-valued to avoid a bust.
    """
    return sum(card.points for card in cards)


def is_bust(total: int) -> bool:
    return total > BLACKJACK


def determine_winner(player_score: int, dealer_score: int) -> Outcome:
    """
    Adjudicate two final totals.

    A player bust loses even if the dealer also busts.
    """
    if is_bust(player_score):
        return Outcome.DEALER_WINS
    if is_bust(dealer_score):
        return Outcome.PLAYER_WINS
    if player_score > dealer_score:
        return Outcome.PLAYER_WINS
    if dealer_score > player_score:
        return Outcome.DEALER_WINS
    return Outcome.DRAW
