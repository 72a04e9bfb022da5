"""Conversion between card sequences and their persisted JSON blob."""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from core.cards import Card, Rank, Suit
from core.errors import DecodeError


class CardData(BaseModel):
    """Serialized card data."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    rank: Rank
    suit: Suit


_CARD_LIST = TypeAdapter(list[CardData])


def encode(cards: Iterable[Card]) -> str:
    """Serialize cards, in order, to a JSON array of rank/suit records."""
    records = [CardData(rank=card.rank, suit=card.suit) for card in cards]
    return _CARD_LIST.dump_json(records).decode()


def decode(blob: str) -> list[Card]:
    """
    Restore the cards of a blob produced by :func:`encode`.

    Raises:
        DecodeError: if the blob is not valid JSON, holds a rank or suit that
            is not one of the integer codes, or lists the same card twice
    """
    if not isinstance(blob, str):
        raise DecodeError(f"Card blob must be a string, got {type(blob).__name__}")
    try:
        records = _CARD_LIST.validate_json(blob)
    except ValidationError as exc:
        raise DecodeError(f"Malformed card blob: {exc.error_count()} error(s)") from exc

    cards = [Card(record.rank, record.suit) for record in records]
    if len(set(cards)) != len(cards):
        raise DecodeError("Card blob lists the same card more than once")
    return cards
