"""Game and player stores with Redis backend and in-memory implementation."""

import asyncio
import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from redis.exceptions import WatchError

from config import config
from core.errors import ConcurrentModificationError, PlayerAlreadyExistsError
from core.game.state import GameStatus, GameTurn
from core.models import Game, Player
from core.storage import GameStore, PlayerStore

logger = logging.getLogger(__name__)


def serialize_game(game: Game) -> dict[str, Any]:
    """Serialize a game to its persisted record."""
    return {
        "id": game.id,
        "player_id": game.player_id,
        "created_at": game.created_at.isoformat(),
        "status": game.status.value,
        "turn": game.turn.value,
        "player_score": game.player_score,
        "dealer_score": game.dealer_score,
        "deck_blob": game.deck_blob,
        "player_hand_blob": game.player_hand_blob,
        "dealer_hand_blob": game.dealer_hand_blob,
        "version": game.version,
        "stats_applied": game.stats_applied,
    }


def deserialize_game(data: dict[str, Any]) -> Game:
    """Restore a game from its persisted record."""
    return Game(
        id=data["id"],
        player_id=data["player_id"],
        created_at=datetime.fromisoformat(data["created_at"]),
        status=GameStatus(data["status"]),
        turn=GameTurn(data["turn"]),
        player_score=data["player_score"],
        dealer_score=data["dealer_score"],
        deck_blob=data["deck_blob"],
        player_hand_blob=data["player_hand_blob"],
        dealer_hand_blob=data["dealer_hand_blob"],
        version=data["version"],
        stats_applied=data.get("stats_applied", False),
    )


def serialize_player(player: Player) -> dict[str, Any]:
    """Serialize a player to its persisted record."""
    return {
        "id": player.id,
        "name": player.name,
        "games_played": player.games_played,
        "games_won": player.games_won,
        "total_score": player.total_score,
        "created_at": player.created_at.isoformat(),
        "version": player.version,
    }


def deserialize_player(data: dict[str, Any]) -> Player:
    """Restore a player from its persisted record."""
    return Player(
        id=data["id"],
        name=data["name"],
        games_played=data.get("games_played", 0),
        games_won=data.get("games_won", 0),
        total_score=data.get("total_score", 0),
        created_at=datetime.fromisoformat(data["created_at"]),
        version=data["version"],
    )


def _check_version(kind: str, key: Any, current: dict[str, Any] | None, expected: int) -> None:
    """Raise unless the stored record still has the expected version."""
    if current is None:
        logger.warning("%s %s was deleted before it could be saved", kind, key)
        raise ConcurrentModificationError(f"{kind} '{key}' no longer exists")
    if current["version"] != expected:
        logger.warning(
            "%s %s version conflict: expected %s, found %s",
            kind,
            key,
            expected,
            current["version"],
        )
        raise ConcurrentModificationError(
            f"{kind} '{key}' was modified concurrently "
            f"(expected version {expected}, found {current['version']})"
        )


class InMemoryGameStore(GameStore):
    """In-memory game store for local development and tests."""

    def __init__(self) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def find_by_id(self, game_id: int) -> Game | None:
        data = self._records.get(game_id)
        return deserialize_game(data) if data is not None else None

    async def find_all(self) -> list[Game]:
        return [deserialize_game(data) for _, data in sorted(self._records.items())]

    async def save(self, game: Game) -> Game:
        async with self._lock:
            if game.id is None:
                saved = replace(game, id=self._next_id, version=1)
                self._next_id += 1
            else:
                _check_version("Game", game.id, self._records.get(game.id), game.version)
                saved = replace(game, version=game.version + 1)

            self._records[saved.id] = serialize_game(saved)  # type: ignore[index]
            return deserialize_game(self._records[saved.id])  # type: ignore[index]

    async def delete(self, game: Game) -> None:
        self._records.pop(game.id, None)  # type: ignore[arg-type]


class InMemoryPlayerStore(PlayerStore):
    """In-memory player store for local development and tests."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def find_by_name(self, name: str) -> Player | None:
        for data in self._records.values():
            if data["name"] == name:
                return deserialize_player(data)
        return None

    async def find_by_id(self, player_id: str) -> Player | None:
        data = self._records.get(player_id)
        return deserialize_player(data) if data is not None else None

    async def find_all(self) -> list[Player]:
        return [deserialize_player(data) for data in self._records.values()]

    async def save(self, player: Player) -> Player:
        async with self._lock:
            owner = next(
                (pid for pid, data in self._records.items() if data["name"] == player.name),
                None,
            )
            if owner is not None and owner != player.id:
                raise PlayerAlreadyExistsError("Player with that name already exists.")

            if player.id is None:
                saved = replace(player, id=str(uuid4()), version=1)
            else:
                _check_version("Player", player.id, self._records.get(player.id), player.version)
                saved = replace(player, version=player.version + 1)

            self._records[saved.id] = serialize_player(saved)  # type: ignore[index]
            return deserialize_player(self._records[saved.id])  # type: ignore[index]

    async def delete(self, player: Player) -> None:
        self._records.pop(player.id, None)  # type: ignore[arg-type]


class RedisGameStore(GameStore):
    """Redis-backed game store using WATCH/MULTI for conditional saves."""

    def __init__(self, redis_client: "redis.Redis", prefix: str = "blackjack:") -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, game_id: int) -> str:
        """Get Redis key for a game."""
        return f"{self._prefix}game:{game_id}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}games"

    @property
    def _sequence_key(self) -> str:
        return f"{self._prefix}game:seq"

    async def find_by_id(self, game_id: int) -> Game | None:
        data = await self._redis.get(self._key(game_id))
        if data is None:
            return None
        return deserialize_game(json.loads(data))

    async def find_all(self) -> list[Game]:
        game_ids = sorted(int(i) for i in await self._redis.smembers(self._index_key))
        if not game_ids:
            return []
        values = await self._redis.mget([self._key(i) for i in game_ids])
        return [deserialize_game(json.loads(v)) for v in values if v is not None]

    async def save(self, game: Game) -> Game:
        if game.id is None:
            game_id = await self._redis.incr(self._sequence_key)
            saved = replace(game, id=game_id, version=1)
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.set(self._key(game_id), json.dumps(serialize_game(saved)))
                pipe.sadd(self._index_key, game_id)
                await pipe.execute()
            return saved

        key = self._key(game.id)
        saved = replace(game, version=game.version + 1)
        async with self._redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key)
                raw = await pipe.get(key)
                _check_version("Game", game.id, json.loads(raw) if raw else None, game.version)
                pipe.multi()
                pipe.set(key, json.dumps(serialize_game(saved)))
                await pipe.execute()
            except WatchError as exc:
                raise ConcurrentModificationError(
                    f"Game '{game.id}' was modified concurrently"
                ) from exc
        return saved

    async def delete(self, game: Game) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(game.id))  # type: ignore[arg-type]
            pipe.srem(self._index_key, game.id)
            await pipe.execute()


class RedisPlayerStore(PlayerStore):
    """Redis-backed player store with a name → id index."""

    def __init__(self, redis_client: "redis.Redis", prefix: str = "blackjack:") -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, player_id: str) -> str:
        """Get Redis key for a player."""
        return f"{self._prefix}player:{player_id}"

    @property
    def _names_key(self) -> str:
        return f"{self._prefix}player:names"

    async def find_by_name(self, name: str) -> Player | None:
        player_id = await self._redis.hget(self._names_key, name)
        if player_id is None:
            return None
        return await self.find_by_id(player_id)

    async def find_by_id(self, player_id: str) -> Player | None:
        data = await self._redis.get(self._key(player_id))
        if data is None:
            return None
        return deserialize_player(json.loads(data))

    async def find_all(self) -> list[Player]:
        player_ids = await self._redis.hvals(self._names_key)
        if not player_ids:
            return []
        values = await self._redis.mget([self._key(i) for i in player_ids])
        return [deserialize_player(json.loads(v)) for v in values if v is not None]

    async def save(self, player: Player) -> Player:
        if player.id is None:
            saved = replace(player, id=str(uuid4()), version=1)
            if not await self._redis.hsetnx(self._names_key, saved.name, saved.id):
                raise PlayerAlreadyExistsError("Player with that name already exists.")
            await self._redis.set(self._key(saved.id), json.dumps(serialize_player(saved)))  # type: ignore[arg-type]
            return saved

        key = self._key(player.id)
        saved = replace(player, version=player.version + 1)
        async with self._redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key, self._names_key)
                raw = await pipe.get(key)
                current = json.loads(raw) if raw else None
                _check_version("Player", player.id, current, player.version)

                owner = await pipe.hget(self._names_key, player.name)
                if owner is not None and owner != player.id:
                    raise PlayerAlreadyExistsError("Player with that name already exists.")

                pipe.multi()
                pipe.set(key, json.dumps(serialize_player(saved)))
                if current["name"] != player.name:  # type: ignore[index]
                    pipe.hdel(self._names_key, current["name"])  # type: ignore[index]
                    pipe.hset(self._names_key, player.name, player.id)
                await pipe.execute()
            except WatchError as exc:
                raise ConcurrentModificationError(
                    f"Player '{player.id}' was modified concurrently"
                ) from exc
        return saved

    async def delete(self, player: Player) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(player.id))  # type: ignore[arg-type]
            pipe.hdel(self._names_key, player.name)
            await pipe.execute()


# Global store instances
_game_store: GameStore | None = None
_player_store: PlayerStore | None = None


async def get_stores() -> tuple[GameStore, PlayerStore]:
    """Get or create the configured game and player stores."""
    global _game_store, _player_store

    if _game_store is not None and _player_store is not None:
        return _game_store, _player_store

    if config.storage.backend == "redis":
        redis_client = redis.from_url(config.redis.url, decode_responses=True)
        await redis_client.ping()
        _game_store = RedisGameStore(redis_client, config.redis.key_prefix)
        _player_store = RedisPlayerStore(redis_client, config.redis.key_prefix)
    else:
        _game_store = InMemoryGameStore()
        _player_store = InMemoryPlayerStore()

    logger.info("Using %s storage backend", config.storage.backend)
    return _game_store, _player_store


def reset_stores() -> None:
    """Drop the store instances so the next request builds fresh ones."""
    global _game_store, _player_store
    _game_store = None
    _player_store = None
