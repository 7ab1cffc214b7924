"""Curses front-end for Memory Match.

Keys:
    arrows: Move cursor
    enter/space: Turn the card under the cursor
    r: Restart
    q: Quit

Mouse clicks on a card turn it; a click on [ Restart ] restarts.
"""

import curses
import logging
import math
from dataclasses import dataclass

from memory_match.game.engine import GameEngine
from memory_match.game.scheduler import TimerQueue
from memory_match.logging.formatters import format_card
from memory_match.models.card import CardStatus, CardView

logger = logging.getLogger(__name__)

INFO_LINE = 1
BOARD_TOP = 3
BOARD_LEFT = 2
RESTART_LABEL = "[ Restart ]"
RESTART_X = 20

# Color pair ids
PAIR_HIDDEN = 1
PAIR_REVEALED = 2
PAIR_MATCHED = 3
PAIR_BUTTON = 4

KEY_ENTER_CODES = (curses.KEY_ENTER, ord("\n"), ord("\r"), ord(" "))


@dataclass(frozen=True)
class BoardLayout:
    """Screen geometry of the card grid."""

    count: int
    columns: int
    top: int = BOARD_TOP
    left: int = BOARD_LEFT
    cell_height: int = 3
    cell_width: int = 6
    gap_y: int = 1
    gap_x: int = 2

    @property
    def rows(self) -> int:
        return math.ceil(self.count / self.columns)

    @property
    def height(self) -> int:
        return self.rows * (self.cell_height + self.gap_y) - self.gap_y

    @property
    def width(self) -> int:
        return self.columns * (self.cell_width + self.gap_x) - self.gap_x

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Get the top-left screen position (y, x) of a card."""
        row, col = divmod(index, self.columns)
        return (
            self.top + row * (self.cell_height + self.gap_y),
            self.left + col * (self.cell_width + self.gap_x),
        )

    def card_at(self, y: int, x: int) -> int | None:
        """Hit-test a screen position.

        Returns:
            Card index, or None for gaps and positions off the board.
        """
        rel_y, rel_x = y - self.top, x - self.left
        if rel_y < 0 or rel_x < 0:
            return None

        row, off_y = divmod(rel_y, self.cell_height + self.gap_y)
        col, off_x = divmod(rel_x, self.cell_width + self.gap_x)
        if off_y >= self.cell_height or off_x >= self.cell_width:
            return None
        if row >= self.rows or col >= self.columns:
            return None

        index = row * self.columns + col
        return index if index < self.count else None

    def move(self, index: int, d_row: int, d_col: int) -> int:
        """Move a cursor index, clamped to the board."""
        row, col = divmod(index, self.columns)
        row = min(max(row + d_row, 0), self.rows - 1)
        col = min(max(col + d_col, 0), self.columns - 1)
        return min(row * self.columns + col, self.count - 1)


CURSOR_MOVES = {
    curses.KEY_UP: (-1, 0),
    curses.KEY_DOWN: (1, 0),
    curses.KEY_LEFT: (0, -1),
    curses.KEY_RIGHT: (0, 1),
}


class MemoryBoardUI:
    """Terminal board driving a GameEngine.

    The engine and the timer queue are only touched from the curses loop.
    """

    def __init__(self, engine: GameEngine, timers: TimerQueue, columns: int = 4):
        self.engine = engine
        self.timers = timers
        self.columns = columns

        self.cursor = 0
        self.won_moves: int | None = None  # Set while the win message is shown
        self.results: list[int] = []
        self._dirty = True

        engine.set_callbacks(
            on_round_complete=self._on_round_complete,
            on_change=self._mark_dirty,
        )

    @property
    def layout(self) -> BoardLayout:
        return BoardLayout(count=len(self.engine.state.deck), columns=self.columns)

    def run(self) -> list[int]:
        """Play until the user quits.

        Returns:
            Move counts of completed rounds.
        """
        if not self.engine.state.deck:
            self.engine.new_round()
        curses.wrapper(self._main_loop)
        return self.results

    # Input

    def restart(self) -> None:
        """Start a new round, dropping any pending flip-back."""
        self.won_moves = None
        self.cursor = 0
        self.engine.new_round()

    def handle_key(self, key: int) -> bool:
        """Handle a key press.

        Returns:
            False if the user asked to quit.
        """
        if key in (ord("q"), ord("Q")):
            return False

        if self.won_moves is not None:
            # Dismissing the win message starts the next round
            self.restart()
            return True

        if key in (ord("r"), ord("R")):
            self.restart()
        elif key in CURSOR_MOVES:
            d_row, d_col = CURSOR_MOVES[key]
            self.cursor = self.layout.move(self.cursor, d_row, d_col)
            self._mark_dirty()
        elif key in KEY_ENTER_CODES:
            self.engine.select_card(self.cursor)
        return True

    def handle_mouse(self, y: int, x: int, bstate: int) -> None:
        """Handle a mouse event. Only completed left clicks count."""
        if bstate & curses.BUTTON1_CLICKED:
            self.handle_click(y, x)

    def handle_click(self, y: int, x: int) -> None:
        """Handle a mouse click at a screen position."""
        if self.won_moves is not None:
            self.restart()
            return

        if y == INFO_LINE and RESTART_X <= x < RESTART_X + len(RESTART_LABEL):
            self.restart()
            return

        index = self.layout.card_at(y, x)
        if index is None:
            return
        self.cursor = index
        self._mark_dirty()
        self.engine.select_card(index)

    # Callbacks

    def _on_round_complete(self, moves: int) -> None:
        self.results.append(moves)
        self.won_moves = moves

    def _mark_dirty(self) -> None:
        self._dirty = True

    # Curses loop

    def _main_loop(self, stdscr) -> None:
        curses.curs_set(0)
        curses.mousemask(curses.BUTTON1_CLICKED)
        self._init_colors()

        while True:
            self.timers.run_due()
            if self._dirty:
                self.draw(stdscr)
                self._dirty = False

            timeout = self.timers.next_timeout()
            stdscr.timeout(-1 if timeout is None else math.ceil(timeout * 1000))

            try:
                key = stdscr.getch()
            except curses.error:
                continue

            if key == -1:
                continue  # Timer due
            if key == curses.KEY_RESIZE:
                self._mark_dirty()
                continue
            if key == curses.KEY_MOUSE:
                try:
                    _, mx, my, _, bstate = curses.getmouse()
                except curses.error:
                    continue
                self.handle_mouse(my, mx, bstate)
                continue
            if not self.handle_key(key):
                break

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(PAIR_HIDDEN, curses.COLOR_WHITE, curses.COLOR_BLUE)
        curses.init_pair(PAIR_REVEALED, curses.COLOR_BLACK, curses.COLOR_WHITE)
        curses.init_pair(PAIR_MATCHED, curses.COLOR_BLACK, curses.COLOR_GREEN)
        curses.init_pair(PAIR_BUTTON, curses.COLOR_WHITE, curses.COLOR_BLUE)

    def draw(self, stdscr) -> None:
        """Draw the current state to the screen."""
        stdscr.erase()
        layout = self.layout

        _put(stdscr, INFO_LINE, BOARD_LEFT, f"Moves: {self.engine.moves}", curses.A_BOLD)
        _put(stdscr, INFO_LINE, RESTART_X, RESTART_LABEL, _color(PAIR_BUTTON) | curses.A_BOLD)

        for view in self.engine.board():
            self._draw_card(stdscr, layout, view)

        status_y = layout.top + layout.height + 1
        status = f"Pairs: {self.engine.matched_pairs}/{self.engine.pair_count}"
        if self.engine.is_locked:
            status += "  (no match)"
        _put(stdscr, status_y, BOARD_LEFT, status)
        _put(stdscr, status_y + 1, BOARD_LEFT, "[arrows] move [enter] flip [r]estart [q]uit")

        if self.won_moves is not None:
            self._draw_win_message(stdscr, layout)

        stdscr.refresh()

    def _draw_card(self, stdscr, layout: BoardLayout, view: CardView) -> None:
        y, x = layout.cell_origin(view.index)
        if view.status == CardStatus.MATCHED:
            attr = _color(PAIR_MATCHED)
        elif view.status == CardStatus.REVEALED:
            attr = _color(PAIR_REVEALED)
        else:
            attr = _color(PAIR_HIDDEN)
        if view.index == self.cursor and self.won_moves is None:
            attr |= curses.A_REVERSE

        blank = " " * layout.cell_width
        for dy in range(layout.cell_height):
            _put(stdscr, y + dy, x, blank, attr)
        _put(stdscr, y + layout.cell_height // 2, x + 2, format_card(view), attr | curses.A_BOLD)

    def _draw_win_message(self, stdscr, layout: BoardLayout) -> None:
        lines = [
            "You Won!",
            f"You matched all cards in {self.won_moves} moves.",
            "Press any key to play again",
        ]
        width = max(len(line) for line in lines) + 4
        top = layout.top + max(layout.height // 2 - 2, 0)
        left = BOARD_LEFT
        border = "+" + "-" * (width - 2) + "+"

        _put(stdscr, top, left, border)
        for i, line in enumerate(lines, 1):
            _put(stdscr, top + i, left, "| " + line.ljust(width - 4) + " |", curses.A_BOLD)
        _put(stdscr, top + len(lines) + 1, left, border)


def _color(pair: int) -> int:
    return curses.color_pair(pair) if curses.has_colors() else 0


def _put(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    """Write text, clipped to the window."""
    height, width = stdscr.getmaxyx()
    if y >= height or x >= width:
        return
    try:
        stdscr.addnstr(y, x, text, width - x - 1, attr)
    except curses.error:
        # Writing the bottom-right cell raises after the text is drawn
        pass
