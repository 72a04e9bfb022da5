"""Player registration and administration."""

import logging

from core.errors import InvalidPlayerNameError, PlayerAlreadyExistsError, PlayerNotFoundError
from core.models import Player
from core.statistics.ranking import PlayerRanking, rank_players
from core.storage import PlayerStore

logger = logging.getLogger(__name__)


class PlayerService:
    """Register, look up, rename and delete players."""

    def __init__(self, players: PlayerStore) -> None:
        self._players = players

    async def register(self, name: str | None) -> Player:
        """Create a player with zeroed statistics."""
        name = self._validate_name(name)
        if await self._players.find_by_name(name) is not None:
            logger.warning("Player name already taken: %s", name)
            raise PlayerAlreadyExistsError("Player with that name already exists.")

        player = await self._players.save(Player(name=name))
        logger.info("Player registered: %s (%s)", player.name, player.id)
        return player

    async def get_by_name(self, name: str) -> Player:
        logger.debug("Finding player by name: %s", name)
        player = await self._players.find_by_name(name)
        if player is None:
            raise PlayerNotFoundError.for_missing_name(name)
        return player

    async def get_by_id(self, player_id: str) -> Player:
        logger.debug("Finding player by ID: %s", player_id)
        player = await self._players.find_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError.for_missing_id(player_id)
        return player

    async def list_players(self) -> list[Player]:
        return await self._players.find_all()

    async def ranking(self) -> list[PlayerRanking]:
        """Rank every player by win rate, then total score."""
        logger.info("Retrieving player ranking by win rate and total score")
        return rank_players(await self._players.find_all())

    async def rename(self, player_id: str, new_name: str | None) -> Player:
        """Change a player's name, keeping names unique."""
        new_name = self._validate_name(new_name)
        player = await self.get_by_id(player_id)
        if player.name == new_name:
            return player

        if await self._players.find_by_name(new_name) is not None:
            logger.warning("Player name already taken: %s", new_name)
            raise PlayerAlreadyExistsError("Player with that name already exists.")

        old_name = player.name
        player.name = new_name
        saved = await self._players.save(player)
        logger.info("Player %s renamed from %s to %s", player_id, old_name, new_name)
        return saved

    async def delete(self, player_id: str | None) -> None:
        """Delete a player. Their games are kept."""
        if player_id is None or not player_id.strip():
            logger.warning("Attempted to delete player with null or empty ID")
            raise PlayerNotFoundError("Player ID must not be null or empty.")

        player = await self.get_by_id(player_id)
        await self._players.delete(player)
        logger.warning("Player deleted with ID: %s", player_id)

    @staticmethod
    def _validate_name(name: str | None) -> str:
        if name is None or not name.strip():
            raise InvalidPlayerNameError("Player name cannot be null or empty")
        return name.strip()
