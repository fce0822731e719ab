from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .engine.session import GameSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[["SceneManager"], GameSession]


class SceneManager:
    """Owns the active session and rebuilds the scene from its initial layout.

    The factory receives this manager so the sessions it builds can use it as
    their scene loader. Reload hooks let the host clear its own scene state
    (falling objects, sprites) before the new session projects a fresh HUD.
    """

    name = "catch"

    def __init__(self, factory: SessionFactory) -> None:
        self._factory = factory
        self._active: Optional[GameSession] = None
        self._reload_hooks: List[Callable[[], None]] = []
        self.loads: int = 0

    @property
    def active_session(self) -> Optional[GameSession]:
        return self._active

    def add_reload_hook(self, hook: Callable[[], None]) -> None:
        self._reload_hooks.append(hook)

    def load(self) -> GameSession:
        """Build the initial scene and return its session."""
        self._active = self._factory(self)
        self.loads += 1
        logger.debug("Entering scene: %s (load #%d)", self.name, self.loads)
        return self._active

    def reload(self) -> GameSession:
        """Discard the current scene and build it again from scratch."""
        logger.debug("Exiting scene: %s", self.name)
        for hook in list(self._reload_hooks):
            try:
                hook()
            except Exception:
                logger.exception("Scene reload hook failed")
        return self.load()
