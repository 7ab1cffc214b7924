"""Card and Deck models."""

import random
from collections import Counter
from enum import Enum
from typing import Iterator, Sequence

from pydantic import BaseModel


class CardStatus(str, Enum):
    """Visibility status of a card."""

    HIDDEN = "hidden"  # Face down
    REVEALED = "revealed"  # Face up, waiting for match evaluation
    MATCHED = "matched"  # Face up for the rest of the round


class Card(BaseModel):
    """Single card on the board."""

    index: int  # Position on the board
    symbol: str
    status: CardStatus = CardStatus.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if the card is face down."""
        return self.status == CardStatus.HIDDEN

    def view(self) -> "CardView":
        """Get the read-only projection shown to the player."""
        return CardView(
            index=self.index,
            status=self.status,
            symbol=None if self.is_hidden else self.symbol,
        )

    def __str__(self) -> str:
        return f"#{self.index}:{self.symbol}({self.status.value})"


class CardView(BaseModel, frozen=True):
    """Read-only card state for the presentation layer.

    The symbol is only exposed while the card is face up.
    """

    index: int
    status: CardStatus
    symbol: str | None = None


class Deck:
    """Ordered sequence of cards, each symbol appearing exactly twice."""

    def __init__(self, cards: list[Card] | None = None):
        """Initialize deck.

        Args:
            cards: Cards in board order. Indices are reassigned to match.
        """
        self._cards: list[Card] = []
        for i, card in enumerate(cards or []):
            card.index = i
            self._cards.append(card)

    @property
    def pair_count(self) -> int:
        """Get number of pairs in the deck."""
        return len(self._cards) // 2

    def symbol_counts(self) -> Counter[str]:
        """Count cards per symbol."""
        return Counter(c.symbol for c in self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __str__(self) -> str:
        return "[" + ", ".join(c.symbol for c in self._cards) + "]"

    def __repr__(self) -> str:
        return f"Deck({self._cards!r})"


def create_deck(
    symbols: Sequence[str],
    pair_count: int,
    rng: random.Random | None = None,
) -> Deck:
    """Create a shuffled deck of pair_count duplicated symbols.

    The first pair_count symbols are used.

    Args:
        symbols: Distinct face values to draw from.
        pair_count: Number of pairs on the board.
        rng: Random source (module-level random if not provided).

    Returns:
        Deck of 2 * pair_count cards in random order.

    Raises:
        ValueError: If pair_count is out of range or symbols repeat.
    """
    if pair_count < 1:
        raise ValueError(f"pair_count must be at least 1, got {pair_count}")
    if pair_count > len(symbols):
        raise ValueError(
            f"pair_count ({pair_count}) exceeds number of symbols ({len(symbols)})"
        )
    chosen = list(symbols[:pair_count])
    if len(set(chosen)) != len(chosen):
        raise ValueError("Symbols must be distinct")

    faces = chosen * 2
    (rng or random).shuffle(faces)

    return Deck([Card(index=i, symbol=s) for i, s in enumerate(faces)])
