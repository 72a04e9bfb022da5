"""Post-round player statistics."""

import logging
from dataclasses import replace

from core.errors import ConcurrentModificationError, PlayerNotFoundError
from core.game.state import GameStatus
from core.models import Game, Player
from core.storage import GameStore, PlayerStore

logger = logging.getLogger(__name__)

# Player saves retried after losing a version race to another game's credit
MAX_CREDIT_ATTEMPTS = 5


class StatsReconciler:
    """
    Credit a player's counters once per finished game.

    Crediting is guarded by the game's ``stats_applied`` flag. The flag is
    claimed with a conditional save of the game before the player is touched,
    so a repeated or concurrent call for the same game credits nothing. Once
    the claim is won, a player save that loses to a concurrent write (another
    of the player's games finishing) is retried against a freshly loaded
    player.
    """

    def __init__(self, players: PlayerStore, games: GameStore) -> None:
        """
        Initialize the reconciler.

        Args:
            players: Store holding the players to credit
            games: Store used to claim the game's stats_applied flag
        """
        self._players = players
        self._games = games

    async def update_if_finished(self, game: Game) -> Game:
        """
        Apply a finished game's result to its player.

        Args:
            game: The game as last saved

        Returns:
            The game, re-saved with ``stats_applied`` set if it was credited
        """
        if game.status == GameStatus.IN_PROGRESS:
            logger.debug("Game %s is still in progress, no player stats updated", game.id)
            return game
        if game.stats_applied:
            logger.debug("Stats for game %s were already applied", game.id)
            return game

        player = await self._load_player(game)
        claimed = await self._games.save(replace(game, stats_applied=True))

        for attempt in range(1, MAX_CREDIT_ATTEMPTS + 1):
            try:
                await self._players.save(self._credit(player, game))
                break
            except ConcurrentModificationError:
                if attempt == MAX_CREDIT_ATTEMPTS:
                    logger.error(
                        "Gave up crediting player %s for game %s after %d attempts",
                        game.player_id,
                        game.id,
                        attempt,
                    )
                    raise
                logger.warning(
                    "Player %s changed while crediting game %s, retrying",
                    game.player_id,
                    game.id,
                )
                player = await self._load_player(game)

        logger.info(
            "Updated stats for player %s after game %s (%s)",
            player.name,
            game.id,
            game.status.name,
        )
        return claimed

    async def _load_player(self, game: Game) -> Player:
        player = await self._players.find_by_id(game.player_id)
        if player is None:
            logger.error("Game %s references missing player %s", game.id, game.player_id)
            raise PlayerNotFoundError.for_missing_id(game.player_id)
        return player

    @staticmethod
    def _credit(player: Player, game: Game) -> Player:
        return replace(
            player,
            games_played=player.games_played + 1,
            games_won=player.games_won + int(game.status == GameStatus.FINISHED_PLAYER_WON),
            total_score=player.total_score + game.player_score,
        )
