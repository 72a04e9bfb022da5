"""Pytest fixtures for blackjack engine tests."""

from random import Random

import pytest
import pytest_asyncio

from api.storage import InMemoryGameStore, InMemoryPlayerStore
from core.cards import Card, full_deck
from core.codec import encode
from core.game.service import GameService
from core.game.state import GameStatus, GameTurn
from core.hand import Hand
from core.models import Game, Player
from core.scoring import score
from core.statistics.reconciler import StatsReconciler


def parse_cards(*codes: str) -> list[Card]:
    """Build cards from strings like 'TS', 'AH', '9C'."""
    return [Card.from_string(code) for code in codes]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def cards():
    """Card builder: cards('TS', '7H') -> [Card, Card]."""
    return parse_cards


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (10-7)."""
    return Hand(parse_cards("TS", "7H"))


@pytest.fixture
def bust_hand():
    """A busted hand (K-Q-2)."""
    return Hand(parse_cards("KS", "QH", "2C"))


@pytest.fixture
def game_store():
    """Empty in-memory game store."""
    return InMemoryGameStore()


@pytest.fixture
def player_store():
    """Empty in-memory player store."""
    return InMemoryPlayerStore()


@pytest_asyncio.fixture
async def alice(player_store):
    """A registered player named Alice."""
    return await player_store.save(Player(name="Alice"))


@pytest.fixture
def reconciler(player_store, game_store):
    """Stats reconciler over the in-memory stores."""
    return StatsReconciler(player_store, game_store)


@pytest.fixture
def service(game_store, player_store, rng):
    """Game service over the in-memory stores with a seeded deck."""
    return GameService(game_store, player_store, rng=rng)


@pytest.fixture
def make_game(game_store):
    """
    Factory that stores a game with the given hands.

    The deck starts with ``deck_front`` and holds every other card after
    it, so the stored record always accounts for all 52 cards.
    """

    async def _make(
        player_id: str,
        player_cards: list[Card],
        dealer_cards: list[Card],
        deck_front: list[Card] | None = None,
        status: GameStatus = GameStatus.IN_PROGRESS,
    ) -> Game:
        deck_front = deck_front or []
        used = set(player_cards) | set(dealer_cards) | set(deck_front)
        deck = deck_front + [c for c in full_deck() if c not in used]
        game = Game(
            player_id=player_id,
            deck_blob=encode(deck),
            player_hand_blob=encode(player_cards),
            dealer_hand_blob=encode(dealer_cards),
            player_score=score(player_cards),
            dealer_score=score(dealer_cards),
            status=status,
            turn=GameTurn.for_status(status),
        )
        return await game_store.save(game)

    return _make
