"""
Delayed continuations for the turn engine.

The engine never sleeps: roll animation, bot thinking and grace periods are
callbacks handed to a scheduler. ``ManualScheduler`` runs them on a virtual
clock (tests, headless play); ``AsyncioScheduler`` defers to an event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


@dataclass(order=True, slots=True)
class _Timer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler; nothing runs until the clock is advanced."""

    def __init__(self, max_steps: int = 100_000) -> None:
        self.now = 0.0
        self.max_steps = max_steps
        self._queue: List[_Timer] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = _Timer(self.now + delay, next(self._seq), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def _pop_next(self, until: Optional[float]) -> Optional[_Timer]:
        while self._queue:
            if until is not None and self._queue[0].due > until:
                return None
            timer = heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every callback that falls due."""
        target = self.now + seconds
        fired = 0
        while (timer := self._pop_next(target)) is not None:
            self.now = timer.due
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self) -> int:
        """Fire callbacks in due order until none are left."""
        fired = 0
        while (timer := self._pop_next(None)) is not None:
            if fired >= self.max_steps:
                raise RuntimeError(
                    f"Scheduler did not settle after {self.max_steps} callbacks"
                )
            self.now = timer.due
            timer.callback()
            fired += 1
        return fired


class AsyncioScheduler:
    """Schedules continuations on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
