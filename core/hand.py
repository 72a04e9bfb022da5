"""Hand of cards held by the player or the dealer."""

from dataclasses import dataclass, field
from typing import Iterator

from core.cards import Card
from core.scoring import BLACKJACK, is_bust, score


@dataclass
class Hand:
    """An append-only hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Return the hand total (Ace = 11)."""
        return score(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return is_bust(self.value)

    @property
    def is_twenty_one(self) -> bool:
        return self.value == BLACKJACK

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = "(BUST)" if self.is_busted else f"({self.value})"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
