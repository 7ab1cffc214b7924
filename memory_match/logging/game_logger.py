"""Game logger for session replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from memory_match.models.card import Deck

from .formatters import format_deck


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of a session.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, pair_count: int, mismatch_delay: float) -> None:
        """Log session start with board settings."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "pairs": pair_count,
            "mismatch_delay": mismatch_delay,
        })

    def log_round_start(self, round_id: int, deck: Deck) -> None:
        """Log round start with the shuffled deck.

        Args:
            round_id: Round number.
            deck: Deck in board order.
        """
        self._write({
            "type": "round_start",
            "round": round_id,
            "pairs": deck.pair_count,
            "deck": format_deck(deck),
        })

    def log_select(
        self,
        round_id: int,
        card_index: int,
        outcome: str,
        moves: int,
    ) -> None:
        """Log a card selection.

        Args:
            round_id: Round number.
            card_index: Board position of the selected card.
            outcome: Selection outcome ("first", "match", "mismatch").
            moves: Move counter after the selection.
        """
        self._write({
            "type": "select",
            "round": round_id,
            "card": card_index,
            "outcome": outcome,
            "moves": moves,
        })

    def log_resolve(self, round_id: int, card_indices: list[int]) -> None:
        """Log a mismatched pair flipping back."""
        self._write({
            "type": "resolve",
            "round": round_id,
            "cards": card_indices,
        })

    def log_round_complete(self, round_id: int, moves: int) -> None:
        """Log round completion."""
        self._write({
            "type": "round_complete",
            "round": round_id,
            "moves": moves,
        })

    def log_session_end(self, results: list[int]) -> None:
        """Log session end.

        Args:
            results: Move counts of completed rounds, in order.
        """
        self._write({
            "type": "session_end",
            "rounds": len(results),
            "results": results,
        })
