"""Single-threaded timer queue.

The encounter loop waits on two kinds of timers (opponent deliberation and
the pause before a finished battle is resolved). Both are scheduled here and
can be cancelled through the returned handle; nothing runs on another thread.
Callbacks run only from `run_pending` / `run_until_idle`, in due-time order.
"""
from __future__ import annotations
import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from monster_game.core.logging import logger

@dataclass(order=True)
class ScheduledTask:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    done: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)


class TimerQueue:
    def __init__(self, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self._clock = clock
        self._sleep = sleep
        self._heap: List[ScheduledTask] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledTask:
        task = ScheduledTask(self._clock() + max(0.0, delay), next(self._seq), callback, label)
        heapq.heappush(self._heap, task)
        logger.debug("TaskScheduled", label=label or "-", delay=delay)
        return task

    def _prune(self) -> None:
        while self._heap and not self._heap[0].pending:
            heapq.heappop(self._heap)

    def next_due(self) -> Optional[float]:
        self._prune()
        return self._heap[0].due if self._heap else None

    def has_pending(self) -> bool:
        return self.next_due() is not None

    def run_pending(self) -> int:
        """Run every task that is due now. Returns how many callbacks ran."""
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > self._clock():
                return ran
            task = heapq.heappop(self._heap)
            task.done = True
            task.callback()
            ran += 1

    def run_until_idle(self, max_tasks: int = 1000) -> int:
        """Sleep until each pending task is due and run it, until the queue is empty."""
        ran = 0
        for _ in range(max_tasks):
            due = self.next_due()
            if due is None:
                break
            wait = due - self._clock()
            if wait > 0:
                self._sleep(wait)
            ran += self.run_pending()
        return ran

    def cancel_all(self) -> None:
        for task in self._heap:
            task.cancel()
        self._heap.clear()
