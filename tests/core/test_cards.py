"""Tests for the Card model."""

import pytest

from core.cards import Card, Rank, Suit, full_deck


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_points(self):
        """Test card point values."""
        assert Card(Rank.TWO, Suit.HEARTS).points == 2
        assert Card(Rank.NINE, Suit.HEARTS).points == 9
        assert Card(Rank.TEN, Suit.HEARTS).points == 10
        assert Card(Rank.JACK, Suit.HEARTS).points == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).points == 10
        assert Card(Rank.KING, Suit.HEARTS).points == 10
        assert Card(Rank.ACE, Suit.HEARTS).points == 11

    def test_every_rank_is_worth_between_2_and_11(self):
        """Test that point values stay in range."""
        assert {rank.points for rank in Rank} == set(range(2, 12))

    def test_card_is_ace(self):
        """Test ace detection."""
        assert Card(Rank.ACE, Suit.SPADES).is_ace
        assert not Card(Rank.KING, Suit.SPADES).is_ace

    def test_card_label(self):
        """Test human readable label."""
        assert Card(Rank.ACE, Suit.HEARTS).label == "Ace of Hearts"
        assert Card(Rank.TEN, Suit.CLUBS).label == "Ten of Clubs"

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("KC") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    def test_card_from_invalid_string(self):
        """Test that unknown ranks and suits are rejected."""
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("AX")

    def test_card_str(self):
        """Test string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert "A" in str(card)
        assert "♠" in str(card)

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1


class TestFullDeck:
    """Tests for the ordered 52-card set."""

    def test_full_deck_has_52_unique_cards(self):
        cards = full_deck()
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_full_deck_is_a_fresh_list(self):
        """Test that callers cannot alias each other's decks."""
        first = full_deck()
        first.pop()
        assert len(full_deck()) == 52
