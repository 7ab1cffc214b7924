"""Main entry point for Memory Match."""

import argparse
import logging
import random
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from memory_match.config import Config, load_config
from memory_match.game.engine import GameEngine
from memory_match.game.scheduler import TimerQueue
from memory_match.logging import GameLogConfig, GameLogger
from memory_match.ui.board import MemoryBoardUI
from memory_match.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str) -> str:
    """Generate game log filename with timestamp.

    Format: {ISO timestamp}_memory.jsonl

    Args:
        log_dir: Directory for log files.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_memory.jsonl")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Memory Match card game")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--pairs",
        type=int,
        help="Number of pairs on the board (overrides config)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        help="Seconds before a mismatched pair flips back (overrides config)",
    )
    parser.add_argument(
        "--columns",
        type=int,
        help="Cards per row (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible shuffles",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write log records to this file",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game event logs (filename auto-generated)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load config and apply command-line overrides.

    Raises:
        ValidationError: If the resulting configuration is invalid.
    """
    config = load_config(args.config)

    if args.pairs is not None:
        config.board.pair_count = args.pairs
    if args.delay is not None:
        config.timing.mismatch_delay = args.delay
    if args.columns is not None:
        config.board.columns = args.columns
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.log_file:
        config.logging.file = str(args.log_file)
    if args.game_log:
        config.game_log.enabled = True
        config.game_log.output_path = str(args.game_log)

    return config


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(config.logging.level, config.logging.file)

    display = GameDisplay()
    display.print_session_start(config.board.pair_count, config.timing.mismatch_delay)

    if config.game_log.enabled:
        log_path = generate_log_filename(config.game_log.output_path)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            game_logger.log_session_start(
                config.board.pair_count, config.timing.mismatch_delay
            )

            timers = TimerQueue()
            engine = GameEngine(
                config,
                scheduler=timers,
                game_logger=game_logger,
                rng=random.Random(args.seed),
            )
            ui = MemoryBoardUI(engine, timers, columns=config.board.columns)
            results = ui.run()

            game_logger.log_session_end(results)

        display.print_session_summary(results)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
