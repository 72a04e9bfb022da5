"""Tests for hand scoring and winner adjudication."""

from hypothesis import given, strategies as st

from core.game.state import GameStatus
from core.hand import Hand
from core.scoring import Outcome, determine_winner, score


class TestScore:
    """Tests for score()."""

    def test_ten_seven_is_17(self, cards):
        assert score(cards("TS", "7H")) == 17

    def test_king_queen_two_is_22(self, cards):
        assert score(cards("KS", "QH", "2C")) == 22

    def test_empty_hand_is_zero(self):
        assert score([]) == 0

    def test_ace_is_always_eleven(self, cards):
        """Test that aces are never re-valued to avoid a bust."""
        assert score(cards("AS", "AH")) == 22
        assert score(cards("AS", "9H", "5C")) == 25


class TestHand:
    """Tests for the Hand wrapper."""

    def test_value_and_bust(self, hard_17_hand, bust_hand):
        assert hard_17_hand.value == 17
        assert not hard_17_hand.is_busted
        assert bust_hand.value == 22
        assert bust_hand.is_busted

    def test_add_card(self, cards):
        hand = Hand()
        hand.add_card(cards("AS")[0])
        assert len(hand) == 1
        assert hand.value == 11

    def test_twenty_one(self, cards):
        assert Hand(cards("AS", "KH")).is_twenty_one
        assert not Hand(cards("AS", "9H")).is_twenty_one

    def test_str_marks_bust(self, bust_hand):
        assert "(BUST)" in str(bust_hand)


class TestDetermineWinner:
    """Tests for determine_winner()."""

    def test_player_bust_loses(self):
        assert determine_winner(22, 18) == Outcome.DEALER_WINS

    def test_dealer_bust_loses(self):
        assert determine_winner(17, 24) == Outcome.PLAYER_WINS

    def test_equal_scores_draw(self):
        assert determine_winner(18, 18) == Outcome.DRAW

    def test_higher_score_wins(self):
        assert determine_winner(20, 19) == Outcome.PLAYER_WINS
        assert determine_winner(17, 19) == Outcome.DEALER_WINS

    def test_both_bust_dealer_wins(self):
        assert determine_winner(25, 23) == Outcome.DEALER_WINS

    @given(st.integers(22, 40), st.integers(0, 40))
    def test_player_bust_always_loses(self, player, dealer):
        assert determine_winner(player, dealer) == Outcome.DEALER_WINS

    @given(st.integers(0, 21), st.integers(0, 21))
    def test_non_bust_comparison_is_antisymmetric(self, a, b):
        flipped = {
            Outcome.PLAYER_WINS: Outcome.DEALER_WINS,
            Outcome.DEALER_WINS: Outcome.PLAYER_WINS,
            Outcome.DRAW: Outcome.DRAW,
        }
        assert determine_winner(b, a) == flipped[determine_winner(a, b)]

    def test_outcome_maps_to_terminal_status(self):
        assert GameStatus.from_outcome(Outcome.PLAYER_WINS) == GameStatus.FINISHED_PLAYER_WON
        assert GameStatus.from_outcome(Outcome.DEALER_WINS) == GameStatus.FINISHED_DEALER_WON
        assert GameStatus.from_outcome(Outcome.DRAW) == GameStatus.FINISHED_DRAW
