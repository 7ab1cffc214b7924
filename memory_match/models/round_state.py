"""Round state model."""

from pydantic import BaseModel, Field

from .card import Deck


class RoundState(BaseModel):
    """State of one play-through, from shuffle to all pairs found."""

    round_id: int = 0
    pair_count: int = 0
    deck: Deck = Field(default_factory=Deck)

    # Progress
    moves: int = 0  # Completed two-card selections
    matched_pairs: int = 0

    # Selection buffer: indices revealed but not yet resolved (0-2)
    selection: list[int] = Field(default_factory=list)

    is_locked: bool = False  # Pair decision pending
    is_complete: bool = False

    model_config = {"arbitrary_types_allowed": True}

    def clear_selection(self) -> None:
        """Empty the selection buffer and unlock the board."""
        self.selection = []
        self.is_locked = False

    def __str__(self) -> str:
        parts = [f"Round {self.round_id}", f"Moves {self.moves}"]
        parts.append(f"Pairs {self.matched_pairs}/{self.pair_count}")
        if self.is_locked:
            parts.append("[LOCK]")
        if self.is_complete:
            parts.append("[COMPLETE]")
        return " ".join(parts)
