"""Terminal presentation layer."""

from .board import BoardLayout, MemoryBoardUI

__all__ = ["BoardLayout", "MemoryBoardUI"]
