"""Logging utilities and session summary display."""

import logging
import sys


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Write records to this file instead of stdout. Use this
            while the curses board owns the terminal.
    """
    handler_args: dict = {"stream": sys.stdout}
    if log_file:
        handler_args = {"filename": log_file, "encoding": "utf-8"}

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        **handler_args,
    )


class GameDisplay:
    """Display session information to stdout."""

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 40)

    def print_session_start(self, pair_count: int, mismatch_delay: float) -> None:
        """Print startup banner."""
        print("Memory Match")
        print(f"Pairs: {pair_count}")
        print(f"Mismatch delay: {mismatch_delay:g}s")

    def print_session_summary(self, results: list[int]) -> None:
        """Print moves for every completed round.

        Args:
            results: Move counts of completed rounds, in order.
        """
        self.print_separator()
        print("SESSION SUMMARY")
        self.print_separator()

        if not results:
            print("No rounds completed.")
            return

        for round_num, moves in enumerate(results, 1):
            print(f"  Round {round_num}: {moves} moves")
        print(f"Best: {min(results)} moves")
