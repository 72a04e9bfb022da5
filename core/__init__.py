"""Core blackjack turn engine - 100% transport-agnostic."""

from core.cards import Card, Rank, Suit
from core.deck import Deck
from core.hand import Hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Hand",
]
