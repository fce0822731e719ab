from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class TimerHandle:
    """A pending scheduler entry. Call :meth:`cancel` to drop it.

    Ordering is by due time, then by insertion sequence, so entries due at the
    same instant fire in the order they were scheduled.
    """

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    interval: Optional[float] = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Frame-driven timer queue.

    The host advances it once per frame with the elapsed time; due callbacks run
    synchronously inside :meth:`advance`. Nothing here blocks or spawns threads,
    so a "show, wait, hide" effect is just a one-shot entry.
    """

    def __init__(self) -> None:
        self._now: float = 0.0
        self._queue: List[TimerHandle] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once, ``delay`` seconds from now."""
        handle = TimerHandle(self._now + max(0.0, float(delay)), next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def schedule_interval(
        self, interval: float, callback: Callable[[], None], first_delay: float = 0.0
    ) -> TimerHandle:
        """Run ``callback`` every ``interval`` seconds, first after ``first_delay``.

        A zero first delay fires on the next :meth:`advance`, matching a
        repeating invoke that starts immediately.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle(
            self._now + max(0.0, float(first_delay)), next(self._seq), callback, interval=float(interval)
        )
        heapq.heappush(self._queue, handle)
        return handle

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` and fire every entry now due.

        Returns the number of callbacks run.
        """
        if dt < 0:
            logger.debug("Negative dt %.4f clamped to 0", dt)
            dt = 0.0
        self._now += dt
        fired = 0
        while self._queue and self._queue[0].due <= self._now:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            if handle.repeating:
                # Keep a fixed cadence even when a frame spans several intervals
                handle.due += handle.interval  # type: ignore[operator]
                heapq.heappush(self._queue, handle)
            try:
                handle.callback()
            except Exception:
                logger.exception("Scheduled callback %r failed", handle.callback)
            fired += 1
        return fired

    def clear(self) -> None:
        for handle in self._queue:
            handle.cancel()
        self._queue.clear()
