"""Deck lifecycle: generation, drawing and the initial deal."""

import logging
from collections import Counter
from random import Random
from typing import Iterable, Iterator

from core.cards import Card, full_deck
from core.errors import DecodeError, InsufficientCardsError

logger = logging.getLogger(__name__)

INITIAL_HAND_SIZE = 2


class Deck:
    """
    The undrawn cards of one game, consumed from the front.

    The cards are held in a tuple that is never shared; drawing only
    advances a cursor, so handing a deck to an operation transfers it.
    """

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: tuple[Card, ...] = tuple(cards)
        self._position = 0

    def draw(self) -> Card:
        """Draw the front card of the deck."""
        if self._position >= len(self._cards):
            raise InsufficientCardsError("No cards left in deck")
        card = self._cards[self._position]
        self._position += 1
        return card

    def deal(self, count: int) -> tuple[Card, ...]:
        """Draw ``count`` cards at once; nothing is drawn if fewer remain."""
        if count > len(self):
            raise InsufficientCardsError(
                f"Cannot deal {count} cards from a deck of {len(self)}"
            )
        return tuple(self.draw() for _ in range(count))

    @property
    def cards(self) -> tuple[Card, ...]:
        """Return the undrawn cards in draw order."""
        return self._cards[self._position:]

    @property
    def cards_remaining(self) -> int:
        return len(self._cards) - self._position

    def __len__(self) -> int:
        return self.cards_remaining

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Deck(cards_remaining={self.cards_remaining})"


def generate_shuffled_deck(rng: Random | None = None) -> Deck:
    """
    Build all 52 distinct cards in a uniformly random order.

    Args:
        rng: Random number generator, seed it for reproducible deals

    Returns:
        A full shuffled deck
    """
    rng = rng or Random()
    cards = full_deck()
    rng.shuffle(cards)
    return Deck(cards)


def split_initial_hands(
    deck: Deck,
) -> tuple[tuple[Card, ...], tuple[Card, ...], Deck]:
    """
    Deal the opening hands without consuming ``deck``.

    The first two cards go to the player, the next two to the dealer.

    Returns:
        (player_hand, dealer_hand, remaining_deck)
    """
    needed = INITIAL_HAND_SIZE * 2
    if len(deck) < needed:
        raise InsufficientCardsError("Not enough cards in the deck to start a game")

    remaining = Deck(deck.cards)
    player_hand = remaining.deal(INITIAL_HAND_SIZE)
    dealer_hand = remaining.deal(INITIAL_HAND_SIZE)
    logger.debug("Initial deal: player %s, dealer %s", player_hand, dealer_hand)
    return player_hand, dealer_hand, remaining


def check_conservation(*piles: Iterable[Card]) -> None:
    """Raise DecodeError unless the piles together form exactly one full deck."""
    counts = Counter(card for pile in piles for card in pile)
    duplicates = sorted((c for c, n in counts.items() if n > 1), key=repr)
    missing = set(full_deck()) - counts.keys()
    if duplicates or missing:
        raise DecodeError(
            f"Cards do not form a full deck: {len(duplicates)} duplicated, "
            f"{len(missing)} missing"
        )
