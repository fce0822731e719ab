"""Contracts for the host-provided collaborators a GameSession talks to.

These are structural protocols: anything with matching methods works, which
keeps Arcade and other engine specifics out of the session itself. Every
collaborator is optional; a session given ``None`` simply skips that effect.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .engine.events import ObjectKind
    from .engine.session import GameSession


class PointerSource(Protocol):
    """Current horizontal pointer position in world units."""

    def pointer_x(self) -> float:  # pragma: no cover - interface
        ...


class SpawnTarget(Protocol):
    """Creates a falling collectible. Catches come back via collect_good/collect_bad."""

    def spawn(self, kind: "ObjectKind", x: float, speed: float) -> None:  # pragma: no cover - interface
        ...


class UIProjector(Protocol):
    """A UI sink that mirrors session state. This abstracts away Arcade UI."""

    def set_score(self, value: int, maximum: int) -> None:  # pragma: no cover - interface
        ...

    def set_lives(self, flags: Sequence[bool]) -> None:  # pragma: no cover - interface
        ...

    def set_life(self, index: int, active: bool) -> None:  # pragma: no cover - interface
        ...

    def show_message(self, text: str) -> None:  # pragma: no cover - interface
        ...

    def hide_message(self) -> None:  # pragma: no cover - interface
        ...

    def set_panel(self, name: str, visible: bool) -> None:  # pragma: no cover - interface
        ...

    def set_control(self, name: str, enabled: bool) -> None:  # pragma: no cover - interface
        ...

    def set_player_x(self, x: float) -> None:  # pragma: no cover - interface
        ...

    def set_player_stage(self, stage: int) -> None:  # pragma: no cover - interface
        ...


class AudioPlayer(Protocol):
    """Fire-and-forget sound cue playback."""

    def play(self, cue: str) -> bool:  # pragma: no cover - interface
        ...


class SceneLoader(Protocol):
    """Reloads the scene's initial layout and hands back the fresh session."""

    def reload(self) -> "GameSession":  # pragma: no cover - interface
        ...


class ScoreReportingSink(Protocol):
    """Receives the final score when a session ends. Best effort."""

    def report(self, final_score: int, game_id: int) -> None:  # pragma: no cover - interface
        ...


# Panel and control names understood by UIProjector implementations
PANEL_START = "start"
PANEL_WIN = "win"
PANEL_LOSE = "lose"
CONTROL_START = "start"
CONTROL_RESTART = "restart"
