"""Tests for board layout and input handling (no terminal needed)."""

import curses
import random

import pytest

from memory_match.config import BoardConfig, Config
from memory_match.game.engine import GameEngine
from memory_match.game.scheduler import TimerQueue
from memory_match.models.card import CardStatus
from memory_match.ui.board import (
    BOARD_LEFT,
    BOARD_TOP,
    INFO_LINE,
    RESTART_X,
    BoardLayout,
    MemoryBoardUI,
)


@pytest.fixture
def layout():
    return BoardLayout(count=16, columns=4)


@pytest.fixture
def ui():
    config = Config(board=BoardConfig(symbols=["A", "B"], pair_count=2, columns=2))
    engine = GameEngine(config, scheduler=TimerQueue(), rng=random.Random(5))
    engine.new_round()
    return MemoryBoardUI(engine, engine.scheduler, columns=2)


def positions(ui: MemoryBoardUI, symbol: str) -> list[int]:
    return [c.index for c in ui.engine.state.deck if c.symbol == symbol]


class TestBoardLayout:
    """Tests for BoardLayout class."""

    def test_dimensions(self, layout):
        """Test rows and size of a 4x4 board."""
        assert layout.rows == 4
        assert layout.height == 4 * 3 + 3 * 1
        assert layout.width == 4 * 6 + 3 * 2

    def test_partial_last_row(self):
        """Test that a partial row still counts."""
        assert BoardLayout(count=10, columns=4).rows == 3

    def test_cell_origin(self, layout):
        """Test screen position of cards."""
        assert layout.cell_origin(0) == (BOARD_TOP, BOARD_LEFT)
        assert layout.cell_origin(5) == (BOARD_TOP + 4, BOARD_LEFT + 8)

    def test_card_at_round_trip(self, layout):
        """Test that every cell hits its own card."""
        for index in range(16):
            y, x = layout.cell_origin(index)
            assert layout.card_at(y, x) == index
            assert layout.card_at(y + 2, x + 5) == index

    def test_card_at_gaps(self, layout):
        """Test that gaps and positions off the board miss."""
        y, x = layout.cell_origin(0)
        assert layout.card_at(y + 3, x) is None  # Row gap
        assert layout.card_at(y, x + 6) is None  # Column gap
        assert layout.card_at(y - 1, x) is None
        assert layout.card_at(y, x - 1) is None
        assert layout.card_at(y + 100, x) is None

    def test_card_at_past_last_card(self):
        """Test that empty cells of a partial row miss."""
        layout = BoardLayout(count=10, columns=4)
        y, x = layout.cell_origin(11)
        assert layout.card_at(y, x) is None

    def test_move_clamped(self, layout):
        """Test cursor movement stays on the board."""
        assert layout.move(0, -1, 0) == 0
        assert layout.move(0, 0, -1) == 0
        assert layout.move(0, 1, 1) == 5
        assert layout.move(15, 1, 1) == 15


class TestMemoryBoardUI:
    """Tests for MemoryBoardUI input handling."""

    def test_quit(self, ui):
        """Test that q quits."""
        assert not ui.handle_key(ord("q"))

    def test_cursor_keys(self, ui):
        """Test moving the cursor with arrows."""
        ui.handle_key(curses.KEY_RIGHT)
        assert ui.cursor == 1
        ui.handle_key(curses.KEY_DOWN)
        assert ui.cursor == 3
        ui.handle_key(curses.KEY_LEFT)
        assert ui.cursor == 2

    def test_enter_selects(self, ui):
        """Test that enter turns the card under the cursor."""
        assert ui.handle_key(ord("\n"))
        assert ui.engine.board()[0].status == CardStatus.REVEALED

    def test_click_selects(self, ui):
        """Test that clicking a card turns it and moves the cursor."""
        y, x = ui.layout.cell_origin(3)
        ui.handle_click(y + 1, x + 1)

        assert ui.cursor == 3
        assert ui.engine.board()[3].status == CardStatus.REVEALED

    def test_click_gap_ignored(self, ui):
        """Test that clicks outside the cards change nothing."""
        ui.handle_click(0, 0)
        assert all(v.status == CardStatus.HIDDEN for v in ui.engine.board())

    def test_restart_key(self, ui):
        """Test that r deals a new round."""
        round_id = ui.engine.round_id
        ui.handle_key(ord("r"))
        assert ui.engine.round_id == round_id + 1

    def test_restart_click(self, ui):
        """Test that clicking the restart control deals a new round."""
        round_id = ui.engine.round_id
        ui.handle_click(INFO_LINE, RESTART_X + 2)
        assert ui.engine.round_id == round_id + 1

    def test_win_and_dismiss(self, ui):
        """Test the win message and restart on dismissal."""
        for symbol in ("A", "B"):
            first, second = positions(ui, symbol)
            ui.handle_click(*ui.layout.cell_origin(first))
            ui.handle_click(*ui.layout.cell_origin(second))

        assert ui.won_moves == 2
        assert ui.results == [2]

        round_id = ui.engine.round_id
        assert ui.handle_key(ord("x"))
        assert ui.won_moves is None
        assert ui.engine.round_id == round_id + 1
        assert ui.engine.moves == 0

    def test_mouse_press_ignored(self, ui):
        """Test that only completed clicks turn cards."""
        y, x = ui.layout.cell_origin(1)
        ui.handle_mouse(y, x, curses.BUTTON1_PRESSED)
        assert ui.engine.board()[1].status == CardStatus.HIDDEN

        ui.handle_mouse(y, x, curses.BUTTON1_CLICKED)
        assert ui.engine.board()[1].status == CardStatus.REVEALED

    def test_single_click_does_not_skip_win_message(self, ui):
        """Test that the press half of a click leaves the win message up."""
        for symbol in ("A", "B"):
            first, second = positions(ui, symbol)
            ui.handle_mouse(*ui.layout.cell_origin(first), curses.BUTTON1_CLICKED)
            ui.handle_mouse(*ui.layout.cell_origin(second), curses.BUTTON1_CLICKED)
        assert ui.won_moves == 2

        round_id = ui.engine.round_id
        ui.handle_mouse(0, 0, curses.BUTTON1_PRESSED)
        assert ui.won_moves == 2
        assert ui.engine.round_id == round_id

        ui.handle_mouse(0, 0, curses.BUTTON1_CLICKED)
        assert ui.won_moves is None
        assert ui.engine.round_id == round_id + 1
