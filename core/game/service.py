"""Game lifecycle: create, hit, stand, read and delete persisted games."""

import logging
from random import Random

from core.codec import decode
from core.dealer import DEALER_STANDS_ON
from core.deck import generate_shuffled_deck
from core.errors import GameNotFoundError, InvalidGameStateError, PlayerNotFoundError
from core.game.engine import BlackjackGame
from core.models import Game, GameView
from core.statistics.reconciler import StatsReconciler
from core.storage import GameStore, PlayerStore

logger = logging.getLogger(__name__)


class GameService:
    """
    Store-backed game lifecycle.

    Every public operation is one read-modify-write of one game record.
    Domain errors are raised unchanged and store errors propagate.
    """

    def __init__(
        self,
        games: GameStore,
        players: PlayerStore,
        stats: StatsReconciler | None = None,
        rng: Random | None = None,
        dealer_stands_on: int = DEALER_STANDS_ON,
    ) -> None:
        """
        Initialize the service.

        Args:
            games: Game store
            players: Player store
            stats: Stats reconciler (built from the stores if not provided)
            rng: Random number generator for reproducible deals
            dealer_stands_on: Total at which the dealer stops drawing
        """
        self._games = games
        self._players = players
        self._stats = stats or StatsReconciler(players, games)
        self._rng = rng
        self._dealer_stands_on = dealer_stands_on

    async def create_game(self, player_name: str | None) -> GameView:
        """Deal a new game for a registered player."""
        if player_name is None or not player_name.strip():
            logger.warning("Attempt to create game with null or empty player name.")
            raise PlayerNotFoundError.for_invalid_input()

        logger.info("Creating game for player: %s", player_name)
        player = await self._players.find_by_name(player_name)
        if player is None:
            logger.warning("Player %s not found", player_name)
            raise PlayerNotFoundError.for_missing_name(player_name)

        deck = generate_shuffled_deck(self._rng)
        round_ = BlackjackGame.deal(deck, dealer_stands_on=self._dealer_stands_on)
        logger.info(
            "Initial scores -> Player: %d, Dealer: %d",
            round_.player_score,
            round_.dealer_score,
        )

        saved = await self._games.save(round_.to_record(player.id))
        logger.info("Game created with ID: %s", saved.id)
        return self._view(saved, round_)

    async def hit(self, game_id: int | None) -> GameView:
        """Draw one card for the player."""
        game = await self._load(game_id)
        self._require_player_turn(game, "hit")

        round_ = self._restore(game)
        card = round_.hit()
        logger.info("Player hit in game %s: drew %s, new score %d", game_id, card, round_.player_score)
        if round_.status.is_terminal:
            logger.info("Game %s ends with status: %s", game_id, round_.status.name)

        saved = await self._games.save(round_.apply_to(game))
        saved = await self._stats.update_if_finished(saved)
        return self._view(saved, round_)

    async def stand(self, game_id: int | None) -> GameView:
        """End the player's turn; the dealer plays and the game is resolved."""
        game = await self._load(game_id)
        self._require_player_turn(game, "stand")

        round_ = self._restore(game)
        status = round_.stand()
        logger.info(
            "Game %s resolved. Player score: %d, Dealer score: %d, Final status: %s",
            game_id,
            round_.player_score,
            round_.dealer_score,
            status.name,
        )

        saved = await self._games.save(round_.apply_to(game))
        saved = await self._stats.update_if_finished(saved)
        return self._view(saved, round_)

    async def get_game(self, game_id: int | None) -> GameView:
        """Fetch one game."""
        game = await self._load(game_id)
        return self._read_view(game)

    async def list_games(self) -> list[GameView]:
        """Fetch every stored game."""
        games = await self._games.find_all()
        logger.info("Retrieved %d games", len(games))
        return [self._read_view(game) for game in games]

    async def delete_game(self, game_id: int | None) -> None:
        """Delete one game."""
        game = await self._load(game_id)
        await self._games.delete(game)
        logger.info("Game deleted: %s", game_id)

    async def _load(self, game_id: int | None) -> Game:
        if game_id is None:
            logger.warning("Attempt to load game with null ID")
            raise GameNotFoundError("Game ID must not be null.")
        game = await self._games.find_by_id(game_id)
        if game is None:
            logger.warning("Game with ID %s not found", game_id)
            raise GameNotFoundError.for_id(game_id)
        return game

    def _restore(self, game: Game) -> BlackjackGame:
        return BlackjackGame.from_record(game, dealer_stands_on=self._dealer_stands_on)

    @staticmethod
    def _require_player_turn(game: Game, action: str) -> None:
        if not game.is_player_turn:
            logger.warning(
                "Invalid game state for %s. Game ID: %s, Turn: %s, Status: %s",
                action,
                game.id,
                game.turn.name,
                game.status.name,
            )
            raise InvalidGameStateError("Game is already finished or not in player's turn.")

    @staticmethod
    def _view(game: Game, round_: BlackjackGame) -> GameView:
        return GameView(
            id=game.id,  # type: ignore[arg-type]
            player_id=game.player_id,
            created_at=game.created_at,
            status=game.status,
            turn=game.turn,
            player_score=game.player_score,
            dealer_score=game.dealer_score,
            player_cards=tuple(round_.player_hand),
            dealer_cards=tuple(round_.dealer_hand),
        )

    @staticmethod
    def _read_view(game: Game) -> GameView:
        return GameView(
            id=game.id,  # type: ignore[arg-type]
            player_id=game.player_id,
            created_at=game.created_at,
            status=game.status,
            turn=game.turn,
            player_score=game.player_score,
            dealer_score=game.dealer_score,
            player_cards=tuple(decode(game.player_hand_blob)),
            dealer_cards=tuple(decode(game.dealer_hand_blob)),
        )
