"""Aggregates persisted by the game and player stores."""

from dataclasses import dataclass, field
from datetime import datetime

from core.cards import Card
from core.game.state import GameStatus, GameTurn


@dataclass
class Game:
    """
    Persisted game record.

    Hands and the deck are kept as codec blobs; ``version`` is bumped by
    every successful save and must match the stored record for the save to
    be accepted.
    """

    player_id: str
    deck_blob: str
    player_hand_blob: str
    dealer_hand_blob: str
    player_score: int = 0
    dealer_score: int = 0
    status: GameStatus = GameStatus.IN_PROGRESS
    turn: GameTurn = GameTurn.PLAYER_TURN
    created_at: datetime = field(default_factory=datetime.now)
    id: int | None = None
    version: int = 0
    stats_applied: bool = False

    @property
    def is_player_turn(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS and self.turn == GameTurn.PLAYER_TURN


@dataclass
class Player:
    """Registered player and aggregate results."""

    name: str
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    id: str | None = None
    version: int = 0

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played


@dataclass(frozen=True)
class GameView:
    """Read model of a game returned to callers."""

    id: int
    player_id: str
    created_at: datetime
    status: GameStatus
    turn: GameTurn
    player_score: int
    dealer_score: int
    player_cards: tuple[Card, ...]
    dealer_cards: tuple[Card, ...]
