"""Tests for card models."""

import random

import pytest
from pydantic import ValidationError

from memory_match.models.card import (
    Card,
    CardStatus,
    CardView,
    Deck,
    create_deck,
)


class TestCard:
    """Tests for Card class."""

    def test_new_card_is_hidden(self):
        """Test that cards start face down."""
        card = Card(index=0, symbol="A")
        assert card.status == CardStatus.HIDDEN
        assert card.is_hidden

    def test_view_hides_symbol(self):
        """Test that a face-down card does not expose its symbol."""
        card = Card(index=3, symbol="A")
        view = card.view()

        assert view.index == 3
        assert view.status == CardStatus.HIDDEN
        assert view.symbol is None

    def test_view_shows_symbol_when_face_up(self):
        """Test that revealed and matched cards expose their symbol."""
        card = Card(index=0, symbol="A", status=CardStatus.REVEALED)
        assert card.view().symbol == "A"

        card.status = CardStatus.MATCHED
        assert card.view().symbol == "A"

    def test_view_is_frozen(self):
        """Test that views cannot be modified."""
        view = CardView(index=0, status=CardStatus.HIDDEN)
        with pytest.raises(ValidationError):
            view.status = CardStatus.MATCHED


class TestDeck:
    """Tests for Deck class."""

    def test_empty_deck(self):
        """Test empty deck."""
        deck = Deck()
        assert len(deck) == 0
        assert deck.pair_count == 0

    def test_indices_follow_order(self):
        """Test that card indices are reassigned to board order."""
        deck = Deck([Card(index=9, symbol="A"), Card(index=7, symbol="A")])
        assert [c.index for c in deck] == [0, 1]


class TestCreateDeck:
    """Tests for create_deck function."""

    def test_deck_size(self):
        """Test that the deck holds two cards per pair."""
        deck = create_deck(["A", "B", "C"], 3)
        assert len(deck) == 6
        assert deck.pair_count == 3

    def test_each_symbol_twice(self):
        """Test that every symbol appears exactly twice."""
        rng = random.Random(0)
        for _ in range(50):
            deck = create_deck(list("ABCDEFGH"), 8, rng)
            counts = deck.symbol_counts()
            assert set(counts) == set("ABCDEFGH")
            assert all(n == 2 for n in counts.values())

    def test_uses_first_symbols(self):
        """Test that only the first pair_count symbols are dealt."""
        deck = create_deck(["A", "B", "C", "D"], 2)
        assert set(deck.symbol_counts()) == {"A", "B"}

    def test_all_hidden(self):
        """Test that a new deck is face down."""
        deck = create_deck(["A", "B"], 2)
        assert all(c.is_hidden for c in deck)

    def test_seeded_shuffle_reproducible(self):
        """Test that the same seed deals the same deck."""
        deck1 = create_deck(list("ABCDEFGH"), 8, random.Random(42))
        deck2 = create_deck(list("ABCDEFGH"), 8, random.Random(42))
        assert str(deck1) == str(deck2)

    def test_too_many_pairs(self):
        """Test that pair_count above the symbol count fails fast."""
        with pytest.raises(ValueError):
            create_deck(["A", "B"], 3)

    def test_zero_pairs(self):
        """Test that an empty board is rejected."""
        with pytest.raises(ValueError):
            create_deck(["A", "B"], 0)

    def test_duplicate_symbols(self):
        """Test that repeated symbols are rejected."""
        with pytest.raises(ValueError):
            create_deck(["A", "A", "B"], 2)
