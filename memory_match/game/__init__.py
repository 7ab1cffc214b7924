"""Game logic."""

from .engine import DeferredResolution, GameEngine, SelectionOutcome, SelectionResult
from .scheduler import Scheduler, TimerHandle, TimerQueue

__all__ = [
    "DeferredResolution",
    "GameEngine",
    "Scheduler",
    "SelectionOutcome",
    "SelectionResult",
    "TimerHandle",
    "TimerQueue",
]
