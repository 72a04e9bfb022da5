"""Player statistics: post-round crediting and ranking."""

from core.statistics.reconciler import StatsReconciler
from core.statistics.ranking import PlayerRanking, rank_players

__all__ = [
    "StatsReconciler",
    "PlayerRanking",
    "rank_players",
]
