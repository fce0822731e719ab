from __future__ import annotations

import logging
import os
from typing import Optional

from .audio.sfx import SFXManager
from .config import GameConfig, load_config
from .engine.loop import GameEngine, LoopConfig
from .engine.scheduler import Scheduler
from .engine.session import GameSession
from .interfaces import AudioPlayer, PointerSource, ScoreReportingSink, SpawnTarget, UIProjector
from .scenes import SceneManager
from .scoring import build_score_sink
from .ui.hud import HudModel
from .world import HeadlessWorld

logger = logging.getLogger(__name__)

# Headless runs without a step limit stop here even if the session never ends
HEADLESS_STEP_CAP = 36_000


def build_scene(
    config: GameConfig,
    *,
    scheduler: Scheduler,
    ui: Optional[UIProjector],
    audio: Optional[AudioPlayer],
    score_sink: Optional[ScoreReportingSink],
    spawn_target: Optional[SpawnTarget],
    pointer: Optional[PointerSource],
) -> SceneManager:
    """Wire collaborators into a SceneManager whose sessions share them."""

    def factory(scenes: SceneManager) -> GameSession:
        return GameSession(
            config,
            scheduler=scheduler,
            pointer=pointer,
            spawn_target=spawn_target,
            ui=ui,
            audio=audio,
            scene_loader=scenes,
            score_sink=score_sink,
        )

    return SceneManager(factory)


class HeadlessGame:
    """Host adapter that plays a session against a simulated world."""

    def __init__(self, config: Optional[GameConfig] = None, *, audio: Optional[AudioPlayer] = None) -> None:
        self.config = config or GameConfig()
        self.scheduler = Scheduler()
        self.world = HeadlessWorld()
        self.hud = HudModel()
        self.score_sink = build_score_sink(self.config.score_url, self.config.report_attempts)
        self.scenes = build_scene(
            self.config,
            scheduler=self.scheduler,
            ui=self.hud,
            audio=audio,
            score_sink=self.score_sink,
            spawn_target=self.world,
            pointer=self.world,
        )
        self.scenes.add_reload_hook(self.world.clear)
        self.session = self.scenes.load()

    def frame(self, dt: float) -> bool:
        """One host frame. Returns False once the session has ended."""
        self.scheduler.advance(dt)
        self.session.tick(dt)
        self.world.update(dt, self.session)
        return not self.session.is_over

    def restart(self) -> GameSession:
        self.session = self.session.restart()
        return self.session


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def run_gui(
    max_steps: Optional[int] = None, tick_rate: float = 60.0, config: Optional[GameConfig] = None
) -> int:
    """Run the game in an Arcade window if available, otherwise fallback to headless.

    Args:
        max_steps: Optional stop after N updates; None runs until window closed.
        tick_rate: Target updates per second for GUI mode.
        config: Game tunables; loaded from defaults/env when omitted.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(max_steps=max_steps, tick_rate=tick_rate, config=config)

    from .app_arcade import run_window

    return run_window(config or load_config(), max_steps=max_steps, tick_rate=tick_rate)


def run_headless(
    max_steps: Optional[int] = None, tick_rate: float = 0.0, config: Optional[GameConfig] = None
) -> int:
    """Play one session against the simulated world with the autopilot pointer.

    Args:
        max_steps: Stop after N updates; None runs until the session ends.
        tick_rate: Target updates per second; 0 runs as fast as possible.
            Simulated time always advances by 1/60s per step.
        config: Game tunables; loaded from defaults/env when omitted.
    """
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = HEADLESS_STEP_CAP

    print("Catchfall (headless)")
    print("Press Ctrl+C to exit. Running...\n")

    try:
        config = config or load_config()
        game = HeadlessGame(config, audio=SFXManager(config.sounds, volume=config.sfx_volume))
        engine = GameEngine(
            LoopConfig(tick_rate=tick_rate, max_steps=max_steps, fixed_dt=1.0 / 60.0),
            on_update=game.frame,
        )
        game.session.start()
        engine.run()
        snap = game.session.snapshot()
        print(f"Session finished: {snap.state.name} (score={snap.score}, lives={snap.lives})")
        print(f"Loop complete (steps={engine.step})")
        return 0
    except KeyboardInterrupt:
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_auto(
    max_steps: Optional[int] = None, tick_rate: float = 60.0, config: Optional[GameConfig] = None
) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - CATCHFALL_HEADLESS=1 forces headless.
      - CATCHFALL_GUI=1 forces GUI (if arcade importable).
    """
    if os.getenv("CATCHFALL_HEADLESS") == "1":
        return run_headless(max_steps=max_steps, tick_rate=tick_rate, config=config)

    if os.getenv("CATCHFALL_GUI") == "1":
        return run_gui(max_steps=max_steps, tick_rate=tick_rate, config=config)

    return run_gui(max_steps=max_steps, tick_rate=tick_rate, config=config)
