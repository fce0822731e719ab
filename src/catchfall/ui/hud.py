from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)


@dataclass
class HudModel:
    """In-memory UIProjector: the single source of truth for what the HUD shows.

    The session writes into it; the Arcade window (or a test) reads from it.
    Keeping the UI as plain data makes projection testable without a display.
    """

    score: int = 0
    max_score: int = 1
    lives: List[bool] = field(default_factory=list)
    message: str = ""
    message_visible: bool = False
    panels: Dict[str, bool] = field(default_factory=dict)
    controls: Dict[str, bool] = field(default_factory=dict)
    player_x: float = 0.0
    player_stage: int = 0

    # ------------------------ UIProjector ------------------------
    def set_score(self, value: int, maximum: int) -> None:
        self.max_score = max(1, int(maximum))
        self.score = max(0, min(int(value), self.max_score))

    def set_lives(self, flags: Sequence[bool]) -> None:
        self.lives = [bool(f) for f in flags]

    def set_life(self, index: int, active: bool) -> None:
        if 0 <= index < len(self.lives):
            self.lives[index] = bool(active)
        else:
            logger.debug("No life indicator at index %d", index)

    def show_message(self, text: str) -> None:
        self.message = text
        self.message_visible = True

    def hide_message(self) -> None:
        self.message_visible = False

    def set_panel(self, name: str, visible: bool) -> None:
        self.panels[name] = bool(visible)

    def set_control(self, name: str, enabled: bool) -> None:
        self.controls[name] = bool(enabled)

    def set_player_x(self, x: float) -> None:
        self.player_x = float(x)

    def set_player_stage(self, stage: int) -> None:
        self.player_stage = int(stage)

    # ------------------------ Queries ------------------------
    @property
    def progress(self) -> float:
        """Score as a fraction of the maximum, for the progress bar."""
        return self.score / self.max_score

    @property
    def active_lives(self) -> int:
        return sum(1 for f in self.lives if f)

    def panel_visible(self, name: str) -> bool:
        return self.panels.get(name, False)

    def control_enabled(self, name: str) -> bool:
        return self.controls.get(name, False)
