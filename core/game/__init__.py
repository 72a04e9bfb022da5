"""Game state machine and lifecycle."""

from core.game.state import GameStatus, GameTurn

__all__ = [
    "GameStatus",
    "GameTurn",
]
