"""Game status and turn enumerations."""

from enum import Enum

from core.scoring import Outcome


class GameStatus(Enum):
    """
    Game status.

    Flow: IN_PROGRESS → FINISHED_PLAYER_WON | FINISHED_DEALER_WON | FINISHED_DRAW
    """

    IN_PROGRESS = "IN_PROGRESS"
    FINISHED_PLAYER_WON = "FINISHED_PLAYER_WON"
    FINISHED_DEALER_WON = "FINISHED_DEALER_WON"
    FINISHED_DRAW = "FINISHED_DRAW"

    @property
    def is_terminal(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "GameStatus":
        return _OUTCOME_STATUS[outcome]


class GameTurn(Enum):
    """Whose action is pending. The dealer plays atomically inside stand."""

    PLAYER_TURN = "PLAYER_TURN"
    FINISHED = "FINISHED"

    @classmethod
    def for_status(cls, status: GameStatus) -> "GameTurn":
        """Turn that goes in lockstep with ``status``."""
        return cls.FINISHED if status.is_terminal else cls.PLAYER_TURN


_OUTCOME_STATUS: dict[Outcome, GameStatus] = {
    Outcome.PLAYER_WINS: GameStatus.FINISHED_PLAYER_WON,
    Outcome.DEALER_WINS: GameStatus.FINISHED_DEALER_WON,
    Outcome.DRAW: GameStatus.FINISHED_DRAW,
}
