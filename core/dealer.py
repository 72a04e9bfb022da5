"""Dealer autoplay under the fixed house policy."""

import logging
from typing import Iterable

from core.cards import Card
from core.deck import Deck
from core.hand import Hand

logger = logging.getLogger(__name__)

DEALER_STANDS_ON = 17


def simulate_turn(
    existing_hand: Iterable[Card],
    deck: Deck,
    stand_on: int = DEALER_STANDS_ON,
) -> tuple[Hand, int, Deck]:
    """
    Play out the dealer's hand.

    Cards move from the front of ``deck`` into the hand while the total is
    below ``stand_on`` and the deck is not empty. ``deck`` is consumed: its
    cursor ends past every card the dealer took.

    Args:
        existing_hand: The dealer's cards before drawing
        deck: Draw pile, owned by this call until it returns
        stand_on: Total at which the dealer stops drawing

    Returns:
        (final_hand, final_score, remaining_deck)
    """
    hand = Hand(list(existing_hand))
    while hand.value < stand_on and len(deck) > 0:
        hand.add_card(deck.draw())

    logger.debug("Dealer turn simulated. Cards: %s, Score: %d", hand.cards, hand.value)
    return hand, hand.value, deck
