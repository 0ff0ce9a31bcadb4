"""Schedulers for callbacks that run on wall-clock time, not on ticks."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Protocol
import asyncio
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable:
        ...


class AsyncioScheduler(Scheduler):
    """Uses the running event loop, so callbacks never overlap a tick."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


@dataclass(order=True)
class _Pending:
    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """
    Virtual clock. Nothing fires until advance() is called.

    Used for headless runs and tests where wall-clock time must be
    reproducible.
    """

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._heap: List[_Pending] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable:
        entry = _Pending(self.now_ms + delay_ms, next(self._seq), callback)
        heapq.heappush(self._heap, entry)
        return entry

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._heap if not entry.cancelled)

    def advance(self, ms: float) -> int:
        """Move the clock forward, firing everything that falls due. Returns fire count."""
        target = self.now_ms + ms
        fired = 0
        while self._heap and self._heap[0].due_ms <= target:
            entry = heapq.heappop(self._heap)
            if entry.cancelled:
                continue
            self.now_ms = entry.due_ms
            entry.callback()
            fired += 1
        self.now_ms = target
        return fired
