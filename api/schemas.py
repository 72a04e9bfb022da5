"""Pydantic schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.cards import Card
from core.game.state import GameStatus, GameTurn
from core.models import GameView, Player
from core.statistics.ranking import PlayerRanking


# Game schemas
class GameRequest(BaseModel):
    """Request to start a game."""

    player_name: str = Field(..., min_length=1, description="Registered player name")


class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    points: int
    label: str

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(
            rank=card.rank.name,
            suit=card.suit.name,
            points=card.points,
            label=card.label,
        )


class GameResponse(BaseModel):
    """Game state."""

    id: int
    player_id: str
    created_at: datetime
    status: GameStatus
    turn: GameTurn
    player_score: int
    dealer_score: int
    player_cards: list[CardResponse]
    dealer_cards: list[CardResponse]

    @classmethod
    def from_view(cls, view: GameView) -> "GameResponse":
        return cls(
            id=view.id,
            player_id=view.player_id,
            created_at=view.created_at,
            status=view.status,
            turn=view.turn,
            player_score=view.player_score,
            dealer_score=view.dealer_score,
            player_cards=[CardResponse.from_card(c) for c in view.player_cards],
            dealer_cards=[CardResponse.from_card(c) for c in view.dealer_cards],
        )


# Player schemas
class PlayerRequest(BaseModel):
    """Request to register a player."""

    name: str = Field(..., min_length=1, description="Unique player name")


class PlayerNameUpdateRequest(BaseModel):
    """Request to rename a player."""

    name: str = Field(..., min_length=1, description="New unique player name")


class PlayerResponse(BaseModel):
    """Player representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    games_played: int
    games_won: int
    total_score: int
    created_at: datetime

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls.model_validate(player)


class PlayerRankingResponse(BaseModel):
    """One ranking row."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    games_played: int
    games_won: int
    win_rate: float
    total_score: int

    @classmethod
    def from_ranking(cls, ranking: PlayerRanking) -> "PlayerRankingResponse":
        return cls.model_validate(ranking)


class ErrorResponse(BaseModel):
    """Error body returned for domain errors."""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
