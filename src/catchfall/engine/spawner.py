from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .events import ObjectKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnRequest:
    kind: ObjectKind
    x: float
    speed: float


class SpawnPolicy:
    """Picks where and what to drop next.

    Spawn points are chosen uniformly; the kind is GOOD or BAD with equal odds.
    Pass a seed (or your own ``random.Random``) for reproducible runs.
    """

    def __init__(
        self,
        spawn_points: Sequence[float],
        *,
        good_chance: float = 0.5,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not spawn_points:
            raise ValueError("spawn_points must not be empty")
        if not 0.0 <= good_chance <= 1.0:
            raise ValueError("good_chance must be within [0, 1]")
        self.spawn_points = tuple(float(x) for x in spawn_points)
        self.good_chance = good_chance
        self._rng = rng or random.Random(seed)

    def next(self, speed: float) -> SpawnRequest:
        x = self._rng.choice(self.spawn_points)
        kind = ObjectKind.GOOD if self._rng.random() < self.good_chance else ObjectKind.BAD
        request = SpawnRequest(kind=kind, x=x, speed=speed)
        logger.debug("Spawn %s at x=%.2f speed=%.3f", kind.value, x, speed)
        return request
