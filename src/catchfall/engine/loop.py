from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """How fast and how long the headless loop runs.

    ``tick_rate`` of 0 means no throttling. ``max_steps`` bounds the run.
    With ``fixed_dt`` set, each step advances simulated time by exactly that
    much regardless of wall-clock time.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None
    fixed_dt: Optional[float] = None


class GameEngine:
    """Steps a frame callback at a target rate for headless runs and tests.

    ``on_update(dt)`` returning False ends the loop. Arcade owns timing in
    GUI mode, so this class is only used without a window.
    """

    def __init__(
        self,
        config: Optional[LoopConfig] = None,
        on_update: Optional[Callable[[float], Optional[bool]]] = None,
    ) -> None:
        self.config = config or LoopConfig()
        self.on_update = on_update
        self._running: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        if self._running:
            logger.debug("GameEngine.start() ignored; already running")
            return
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Advance one step, handing ``dt`` seconds to the frame callback."""
        if not self._running:
            logger.debug("update() ignored; engine not running")
            return
        self._step += 1
        if self.on_update is not None and self.on_update(dt) is False:
            self.stop()
            return

        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Step until the callback or the step limit ends the loop; sleeps off spare frame time."""
        self.start()
        frame_budget = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            frame_budget = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            if self.config.fixed_dt is not None:
                dt = self.config.fixed_dt
            elif self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.update(dt)

            if frame_budget > 0:
                spare = frame_budget - (time.perf_counter() - now)
                if spare > 0:
                    time.sleep(spare)

        logger.info("Loop complete (steps=%d)", self._step)
