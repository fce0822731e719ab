from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .engine.events import ObjectKind
from .engine.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class FallingObject:
    kind: ObjectKind
    x: float
    y: float
    speed: float


class HeadlessWorld:
    """Minimal stand-in for the engine's scene: falling objects and a catcher.

    Implements both SpawnTarget and PointerSource so a session can run without
    a window. Objects fall in a straight line; one is caught when it crosses
    the catcher line within ``catch_radius`` of the catcher, and discarded
    when it reaches the floor.

    With ``autopilot`` on, the pointer chases the lowest good object, which is
    enough to play a whole session in CI.
    """

    def __init__(
        self,
        *,
        spawn_height: float = 10.0,
        catcher_y: float = -4.0,
        floor_y: float = -6.0,
        catch_radius: float = 1.0,
        autopilot: bool = True,
    ) -> None:
        if floor_y >= catcher_y or catcher_y >= spawn_height:
            raise ValueError("Expected floor_y < catcher_y < spawn_height")
        self.spawn_height = spawn_height
        self.catcher_y = catcher_y
        self.floor_y = floor_y
        self.catch_radius = catch_radius
        self.autopilot = autopilot
        self.manual_x: float = 0.0
        self.objects: List[FallingObject] = []
        self.caught: int = 0
        self.missed: int = 0

    # ------------------------ SpawnTarget ------------------------
    def spawn(self, kind: ObjectKind, x: float, speed: float) -> None:
        self.objects.append(FallingObject(kind=kind, x=x, y=self.spawn_height, speed=speed))

    # ------------------------ PointerSource ------------------------
    def pointer_x(self) -> float:
        if self.autopilot:
            target = self._lowest_good()
            if target is not None:
                self.manual_x = target.x
        return self.manual_x

    def _lowest_good(self) -> Optional[FallingObject]:
        goods = [o for o in self.objects if o.kind is ObjectKind.GOOD and o.y >= self.catcher_y]
        return min(goods, key=lambda o: o.y, default=None)

    # ------------------------ Simulation ------------------------
    def clear(self) -> None:
        self.objects.clear()

    def update(self, dt: float, session: GameSession) -> None:
        """Advance every object and report catches to ``session``."""
        remaining: List[FallingObject] = []
        for obj in self.objects:
            prev_y = obj.y
            obj.y -= obj.speed * dt
            if prev_y >= self.catcher_y > obj.y and abs(obj.x - session.player_x) <= self.catch_radius:
                self.caught += 1
                logger.debug("Caught %s at x=%.2f", obj.kind.value, obj.x)
                session.collect(obj.kind)
                continue
            if obj.y <= self.floor_y:
                self.missed += 1
                continue
            remaining.append(obj)
        self.objects = remaining
