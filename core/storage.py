"""Storage interfaces consumed by the core."""

from abc import ABC, abstractmethod

from core.models import Game, Player


class GameStore(ABC):
    """Abstract game store."""

    @abstractmethod
    async def find_by_id(self, game_id: int) -> Game | None:
        """Get a game by id."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Game]:
        """Get every stored game."""
        ...

    @abstractmethod
    async def save(self, game: Game) -> Game:
        """
        Insert or conditionally update a game.

        A game without an id is inserted and assigned one. Otherwise the
        stored version must equal ``game.version``, else
        ConcurrentModificationError is raised.

        Returns:
            The stored game with its new version
        """
        ...

    @abstractmethod
    async def delete(self, game: Game) -> None:
        """Delete a game."""
        ...


class PlayerStore(ABC):
    """Abstract player store."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Player | None:
        """Get a player by unique name."""
        ...

    @abstractmethod
    async def find_by_id(self, player_id: str) -> Player | None:
        """Get a player by id."""
        ...

    @abstractmethod
    async def find_all(self) -> list[Player]:
        """Get every registered player."""
        ...

    @abstractmethod
    async def save(self, player: Player) -> Player:
        """Insert or conditionally update a player, as for GameStore.save."""
        ...

    @abstractmethod
    async def delete(self, player: Player) -> None:
        """Delete a player."""
        ...
