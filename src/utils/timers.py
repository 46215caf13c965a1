"""
Deferred task utilities.

Replaces ambient timers with tasks that are scheduled explicitly, run when
the owner calls run_due() and can be cancelled on teardown. Everything runs
on the caller's thread.
"""
import heapq
import itertools
import time
from typing import Any, Callable, List, Optional, Tuple

from aws_lambda_powertools import Logger

logger = Logger()

class ScheduledTask:
    """Handle for a callback scheduled on a TaskScheduler."""

    def __init__(self, due: float, callback: Callable[[], Any]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        """Prevent the callback from running. Has no effect once it has run."""
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

class TaskScheduler:
    """Single-threaded scheduler for delayed callbacks."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ScheduledTask:
        """
        Schedule a callback to run once `delay` seconds have elapsed.

        Args:
            delay: Seconds to wait, must not be negative
            callback: Function called without arguments

        Returns:
            ScheduledTask handle that can be cancelled

        Raises:
            ValueError: If delay is negative
        """
        if delay < 0:
            raise ValueError("delay must not be negative")
        task = ScheduledTask(self._clock() + delay, callback)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    def run_due(self, now: Optional[float] = None) -> int:
        """
        Run every pending task that is due, in due-time order.

        Args:
            now: Current time, defaults to the scheduler clock

        Returns:
            Number of callbacks run
        """
        if now is None:
            now = self._clock()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.done = True
            task.callback()
            ran += 1
        return ran

    def cancel_all(self) -> None:
        """Cancel every pending task. Used on teardown."""
        cancelled = 0
        for _, _, task in self._queue:
            if task.pending:
                task.cancel()
                cancelled += 1
        self._queue.clear()
        if cancelled:
            logger.debug("Cancelled pending tasks", extra={"count": cancelled})

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if task.pending)

class Debouncer:
    """Coalesce repeated triggers into a single delayed callback."""

    def __init__(self, scheduler: TaskScheduler, delay: float, callback: Callable[[], Any]):
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._task: Optional[ScheduledTask] = None

    def trigger(self) -> ScheduledTask:
        """Restart the delay; only the last trigger in a burst fires."""
        if self._task is not None:
            self._task.cancel()
        self._task = self._scheduler.call_later(self._delay, self._callback)
        return self._task

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
