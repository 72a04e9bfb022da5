"""Card model - immutable card representations."""

from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    """Card suits. The values are persisted in card blobs and must not change."""

    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3
    SPADES = 4

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


class Rank(Enum):
    """Card ranks, valued 2 (TWO) to 14 (ACE)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """Short rank symbol: '2'..'10', 'J', 'Q', 'K', 'A'."""
        if self.value <= 10:
            return str(self.value)
        return self.name[0]

    @property
    def points(self) -> int:
        """Return the point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        return min(self.value, 10)

    def __str__(self) -> str:
        return self.symbol


# Accepted spellings for Card.from_string
_RANK_CODES = {rank.symbol: rank for rank in Rank} | {"T": Rank.TEN}
_SUIT_CODES = {suit.name[0]: suit for suit in Suit} | {
    symbol: suit for suit, symbol in _SUIT_SYMBOLS.items()
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def points(self) -> int:
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        return self.rank == Rank.ACE

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Ace of Hearts'."""
        return f"{self.rank.name.title()} of {self.suit.name.title()}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """
        Parse a card code such as 'AS', 'TD', '10h' or 'K♥'.

        Raises:
            ValueError: if the rank or suit is not recognised
        """
        code = s.strip().upper()
        if len(code) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        rank = _RANK_CODES.get(code[:-1])
        suit = _SUIT_CODES.get(code[-1])
        if rank is None:
            raise ValueError(f"Invalid rank: {code[:-1]}")
        if suit is None:
            raise ValueError(f"Invalid suit: {code[-1]}")
        return cls(rank, suit)


def full_deck() -> list[Card]:
    """Return all 52 cards in suit-then-rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]
