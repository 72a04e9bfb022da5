"""Domain errors raised by the blackjack core."""


class BlackjackError(Exception):
    """Base class for all domain errors."""


class PlayerNotFoundError(BlackjackError):
    """A player lookup missed, or the lookup key was blank."""

    @classmethod
    def for_missing_name(cls, name: str) -> "PlayerNotFoundError":
        return cls(f"Player with name '{name}' not found.")

    @classmethod
    def for_missing_id(cls, player_id: str) -> "PlayerNotFoundError":
        return cls(f"Player with id '{player_id}' not found.")

    @classmethod
    def for_invalid_input(cls) -> "PlayerNotFoundError":
        return cls("Player name must not be null or empty.")


class InvalidPlayerNameError(BlackjackError):
    """A player name was blank."""


class PlayerAlreadyExistsError(BlackjackError):
    """Another player already uses the requested name."""


class GameNotFoundError(BlackjackError):
    """A game lookup missed, or the game id was missing."""

    @classmethod
    def for_id(cls, game_id: int) -> "GameNotFoundError":
        return cls(f"Game with id '{game_id}' not found.")


class InsufficientCardsError(BlackjackError):
    """A deal or draw needs more cards than remain in the deck."""


class InvalidGameStateError(BlackjackError):
    """An action was attempted in a state that forbids it."""


class InvalidInitialCardsError(BlackjackError):
    """The initial deal did not produce exactly two cards per hand."""


class DecodeError(BlackjackError):
    """A persisted card blob is malformed or the game's cards are inconsistent."""


class ConcurrentModificationError(BlackjackError):
    """A conditional save lost against a concurrent write."""
