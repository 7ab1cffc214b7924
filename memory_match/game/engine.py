"""Game engine for Memory Match."""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from memory_match.config import Config
from memory_match.logging import GameLogger, format_board
from memory_match.models.card import CardStatus, CardView, create_deck
from memory_match.models.round_state import RoundState

from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class SelectionOutcome(str, Enum):
    """Outcome of a card selection."""

    IGNORED = "ignored"  # Locked, out of range, or card not face down
    FIRST = "first"  # First card of a pair attempt
    MATCH = "match"
    MISMATCH = "mismatch"  # Cards flip back once resolved


@dataclass(frozen=True)
class DeferredResolution:
    """Pending flip-back of a mismatched pair.

    Tied to the round that produced it, so it cannot touch a later round.
    The token is unique per mismatch, so a repeat of the same pair is a
    different resolution.
    """

    round_id: int
    card_indices: tuple[int, int]
    delay: float
    token: int = 0


@dataclass
class SelectionResult:
    """Result of a card selection."""

    outcome: SelectionOutcome
    moves: int
    deferred: DeferredResolution | None = None


class GameEngine:
    """Rules of card selection, matching and round completion.

    All methods must be called from a single thread. Rendering and timing
    are left to the host; the only timing concern here is the deferred
    flip-back of a mismatched pair.
    """

    def __init__(
        self,
        config: Config | None = None,
        scheduler: Scheduler | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            scheduler: Timer host for mismatch resolution. If None, the
                caller must pass each DeferredResolution to resolve().
            game_logger: GameLogger instance for event logging
            rng: Random source for shuffling
        """
        self.config = config or Config()
        self.scheduler = scheduler
        self.game_logger = game_logger
        self.rng = rng or random.Random()

        self.state = RoundState()
        self._last_round_id = 0
        self._tokens = itertools.count(1)
        self._pending: TimerHandle | None = None
        self._pending_resolution: DeferredResolution | None = None

        self._on_round_complete: Callable[[int], None] | None = None
        self._on_change: Callable[[], None] | None = None

    def set_callbacks(
        self,
        on_round_complete: Callable[[int], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_round_complete: Called once when all pairs are found (moves)
            on_change: Called after every change to the round
        """
        self._on_round_complete = on_round_complete
        self._on_change = on_change

    # Read-only state

    @property
    def round_id(self) -> int:
        return self.state.round_id

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def matched_pairs(self) -> int:
        return self.state.matched_pairs

    @property
    def pair_count(self) -> int:
        return self.state.pair_count

    @property
    def is_locked(self) -> bool:
        return self.state.is_locked

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    def board(self) -> list[CardView]:
        """Get the visible state of every card in board order."""
        return [card.view() for card in self.state.deck]

    # Operations

    def new_round(
        self,
        symbols: Sequence[str] | None = None,
        pair_count: int | None = None,
    ) -> RoundState:
        """Discard the current round and deal a fresh one.

        Args:
            symbols: Face values (uses config if not specified)
            pair_count: Number of pairs (uses config if not specified)

        Returns:
            The new round state

        Raises:
            ValueError: If pair_count does not fit the symbol set
        """
        symbols = self.config.board.symbols if symbols is None else symbols
        pair_count = self.config.board.pair_count if pair_count is None else pair_count

        deck = create_deck(symbols, pair_count, self.rng)

        self._cancel_pending()
        self._last_round_id += 1
        self.state = RoundState(
            round_id=self._last_round_id,
            pair_count=pair_count,
            deck=deck,
        )
        logger.info(f"Starting round {self.state.round_id} with {pair_count} pairs")

        if self.game_logger:
            self.game_logger.log_round_start(self.state.round_id, deck)

        self._notify_change()
        return self.state

    def select_card(self, index: int) -> SelectionResult:
        """Turn a face-down card face up.

        Ignored while the board is locked, after the round is complete, or
        when the card is not face down.

        Args:
            index: Board position of the card

        Returns:
            SelectionResult
        """
        state = self.state
        if (
            state.is_locked
            or state.is_complete
            or not 0 <= index < len(state.deck)
            or not state.deck[index].is_hidden
        ):
            return SelectionResult(SelectionOutcome.IGNORED, state.moves)

        state.deck[index].status = CardStatus.REVEALED
        state.selection.append(index)

        if len(state.selection) == 1:
            result = SelectionResult(SelectionOutcome.FIRST, state.moves)
        else:
            state.is_locked = True
            state.moves += 1
            result = self._evaluate_pair()

        logger.debug(f"Round {state.round_id}: card {index} -> {result.outcome.value}")
        if self.game_logger:
            self.game_logger.log_select(
                state.round_id, index, result.outcome.value, state.moves
            )

        self._notify_change()
        if result.outcome == SelectionOutcome.MATCH and state.is_complete:
            self._complete_round()
        return result

    def resolve(self, deferred: DeferredResolution) -> bool:
        """Flip a mismatched pair back face down and unlock the board.

        Args:
            deferred: Resolution returned with a MISMATCH result

        Returns:
            True if applied, False if it was stale
        """
        state = self.state
        if deferred != self._pending_resolution or deferred.round_id != state.round_id:
            logger.debug(
                f"Ignoring stale resolution for round {deferred.round_id} "
                f"(current round {state.round_id})"
            )
            return False

        for i in deferred.card_indices:
            state.deck[i].status = CardStatus.HIDDEN
        state.clear_selection()
        self._cancel_pending()

        logger.debug(f"Round {state.round_id}: cards {list(deferred.card_indices)} hidden")
        if self.game_logger:
            self.game_logger.log_resolve(state.round_id, list(deferred.card_indices))

        self._notify_change()
        return True

    # Internals

    def _evaluate_pair(self) -> SelectionResult:
        state = self.state
        first, second = (state.deck[i] for i in state.selection)

        if first.symbol == second.symbol:
            first.status = CardStatus.MATCHED
            second.status = CardStatus.MATCHED
            state.matched_pairs += 1
            state.clear_selection()
            if state.matched_pairs == state.pair_count:
                state.is_complete = True
            return SelectionResult(SelectionOutcome.MATCH, state.moves)

        deferred = DeferredResolution(
            round_id=state.round_id,
            card_indices=(first.index, second.index),
            delay=self.config.timing.mismatch_delay,
            token=next(self._tokens),
        )
        self._pending_resolution = deferred
        if self.scheduler is not None:
            self._pending = self.scheduler.call_later(
                deferred.delay, lambda: self.resolve(deferred)
            )
        return SelectionResult(SelectionOutcome.MISMATCH, state.moves, deferred)

    def _complete_round(self) -> None:
        state = self.state
        logger.info(f"Round {state.round_id} complete in {state.moves} moves")
        logger.debug("Final board:\n" + format_board(self.board(), self.config.board.columns))

        if self.game_logger:
            self.game_logger.log_round_complete(state.round_id, state.moves)
        if self._on_round_complete:
            self._on_round_complete(state.moves)

    def _cancel_pending(self) -> None:
        self._pending_resolution = None
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _notify_change(self) -> None:
        if self._on_change:
            self._on_change()
