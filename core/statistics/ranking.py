"""Player ranking by win rate and total score."""

from dataclasses import dataclass
from typing import Iterable

from core.models import Player


@dataclass(frozen=True)
class PlayerRanking:
    """One ranked player."""

    name: str
    games_played: int
    games_won: int
    win_rate: float
    total_score: int


def rank_players(players: Iterable[Player]) -> list[PlayerRanking]:
    """
    Order players by win rate, then by total score, both descending.

    Players with no games have a win rate of 0.
    """
    ranking = [
        PlayerRanking(
            name=p.name,
            games_played=p.games_played,
            games_won=p.games_won,
            win_rate=p.win_rate,
            total_score=p.total_score,
        )
        for p in players
    ]
    ranking.sort(key=lambda r: (r.win_rate, r.total_score), reverse=True)
    return ranking
