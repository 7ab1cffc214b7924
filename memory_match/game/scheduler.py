"""One-shot timers for deferred mismatch resolution.

Timers fire on the thread that polls the queue, so callbacks never run
concurrently with card selection.
"""

import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle:
    """Handle for a scheduled callback."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        """Prevent the callback from firing."""
        self.cancelled = True

    def __repr__(self) -> str:
        state = " cancelled" if self.cancelled else ""
        return f"TimerHandle(due={self.due:.3f}{state})"


class Scheduler(ABC):
    """Abstract base class for timer hosts."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback to run once after delay seconds.

        Args:
            delay: Seconds to wait.
            callback: Function to call with no arguments.

        Returns:
            Handle that can cancel the callback.
        """
        pass


class TimerQueue(Scheduler):
    """Timer queue polled from a single event loop."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """Initialize queue.

        Args:
            clock: Monotonic time source in seconds.
        """
        self.clock = clock
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.clock() + max(delay, 0.0), callback)
        heapq.heappush(self._heap, (handle.due, next(self._counter), handle))
        return handle

    def next_timeout(self) -> float | None:
        """Get seconds until the next live timer.

        Returns:
            Seconds (0 if already due), or None if nothing is scheduled.
        """
        self._drop_cancelled()
        if not self._heap:
            return None
        return max(self._heap[0][0] - self.clock(), 0.0)

    def run_due(self) -> int:
        """Fire all timers whose due time has passed.

        Returns:
            Number of callbacks fired.
        """
        now = self.clock()
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.cancelled = True  # One-shot
            handle.callback()
            fired += 1
        if fired:
            logger.debug(f"Fired {fired} timer(s)")
        return fired

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)

    def __len__(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)
