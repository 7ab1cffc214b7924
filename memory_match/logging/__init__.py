"""Game logging module."""

from .formatters import format_board, format_card, format_deck
from .game_logger import GameLogConfig, GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "format_board",
    "format_card",
    "format_deck",
]
