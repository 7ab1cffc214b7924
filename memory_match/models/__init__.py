"""Game models."""

from .card import Card, CardStatus, CardView, Deck, create_deck
from .round_state import RoundState

__all__ = [
    "Card",
    "CardStatus",
    "CardView",
    "Deck",
    "RoundState",
    "create_deck",
]
