from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..config import GameConfig
from ..interfaces import (
    CONTROL_RESTART,
    CONTROL_START,
    PANEL_LOSE,
    PANEL_START,
    PANEL_WIN,
    AudioPlayer,
    PointerSource,
    SceneLoader,
    ScoreReportingSink,
    SpawnTarget,
    UIProjector,
)
from .events import GameEvent, ObjectKind, SessionState
from .scheduler import Scheduler, TimerHandle
from .spawner import SpawnPolicy

logger = logging.getLogger(__name__)

# Sound cue names; values match catchfall.audio.sfx.SoundCue
CUE_WIN = "win"
CUE_LOSE = "lose"
CUE_POINT = "point"
CUE_POINT_LOSS = "point_loss"


def lives_message(lives_left: int) -> str:
    if lives_left > 0:
        return f"You have {lives_left} lives left!"
    return "This is your last life!"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    score: int
    lives: int
    mistake_count: int
    speed: float
    sprite_stage: int
    player_x: float


class GameSession:
    """Score, lives and win/lose rules for one play session.

    The host drives it with :meth:`tick` once per frame and reports catches with
    :meth:`collect_good` / :meth:`collect_bad`. All operations are no-ops
    outside the state they apply to. Collaborators are optional; when one is
    ``None`` that effect is skipped.

    A session is single use: once WON or LOST, :meth:`restart` hands back a
    fresh instance and this one is discarded.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        pointer: Optional[PointerSource] = None,
        spawn_target: Optional[SpawnTarget] = None,
        ui: Optional[UIProjector] = None,
        audio: Optional[AudioPlayer] = None,
        scene_loader: Optional[SceneLoader] = None,
        score_sink: Optional[ScoreReportingSink] = None,
        spawn_policy: Optional[SpawnPolicy] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.scheduler = scheduler or Scheduler()
        self.pointer = pointer
        self.spawn_target = spawn_target
        self.ui = ui
        self.audio = audio
        self.scene_loader = scene_loader
        self.score_sink = score_sink
        self.spawn_policy = spawn_policy or SpawnPolicy(self.config.spawn_points, seed=self.config.seed)

        self.state: SessionState = SessionState.NOT_STARTED
        self.score: int = 0
        self.lives: int = self.config.total_lives
        self.mistake_count: int = 0
        self.speed: float = self.config.initial_speed
        self.sprite_stage: int = 0
        self.player_x: float = 0.0

        self._listeners: List[Callable[[GameEvent, "GameSession"], None]] = []
        self._spawn_timer: Optional[TimerHandle] = None
        self._hide_timer: Optional[TimerHandle] = None

        self._project_initial_layout()
        logger.debug("GameSession created (max_score=%d, lives=%d)", self.config.max_score, self.lives)

    # ------------------------ Observers ------------------------
    def add_listener(self, listener: Callable[[GameEvent, "GameSession"], None]) -> None:
        """Subscribe to session events (score, lives, spawns, outcome)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

    def _effect(self, target: Any, method: str, *args: Any) -> Any:
        if target is None:
            return None
        try:
            return getattr(target, method)(*args)
        except Exception:
            logger.exception("%s.%s failed", type(target).__name__, method)
            return None

    # ------------------------ Queries ------------------------
    @property
    def is_playing(self) -> bool:
        return self.state is SessionState.PLAYING

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            score=self.score,
            lives=self.lives,
            mistake_count=self.mistake_count,
            speed=self.speed,
            sprite_stage=self.sprite_stage,
            player_x=self.player_x,
        )

    # ------------------------ Lifecycle ------------------------
    def start(self) -> None:
        """Begin play and the repeating spawn timer. Ignored unless NOT_STARTED."""
        if self.state is not SessionState.NOT_STARTED:
            logger.debug("start() ignored in state %s", self.state.name)
            return
        self.state = SessionState.PLAYING
        self._effect(self.ui, "set_panel", PANEL_START, False)
        self._effect(self.ui, "set_control", CONTROL_START, False)
        self._spawn_timer = self.scheduler.schedule_interval(self.config.spawn_interval, self._spawn)
        logger.info("Session started (spawn every %.2fs)", self.config.spawn_interval)
        self._emit(GameEvent.STARTED)

    def tick(self, elapsed: float) -> None:
        """Per-frame update: ramp fall speed and follow the pointer."""
        if not self.is_playing:
            return
        if elapsed < 0:
            logger.debug("Negative elapsed %.4f clamped to 0", elapsed)
            elapsed = 0.0
        self.speed += self.config.speed_increase_rate * elapsed
        if self.pointer is not None:
            x = self._effect(self.pointer, "pointer_x")
            if x is not None:
                bound = self.config.screen_bounds
                self.player_x = max(-bound, min(bound, float(x)))
                self._effect(self.ui, "set_player_x", self.player_x)

    def restart(self) -> "GameSession":
        """Return a fresh NOT_STARTED session once this one has ended.

        Uses the scene loader when one is attached so the whole scene is rebuilt;
        otherwise builds a new session with the same collaborators. Before the
        session ends this is a no-op that returns ``self``.
        """
        if not self.is_over:
            logger.debug("restart() ignored in state %s", self.state.name)
            return self
        logger.info("Restarting session (previous outcome: %s)", self.state.name)
        # Nothing of this session may act on the next one
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None
        if self.scene_loader is not None:
            return self.scene_loader.reload()
        return GameSession(
            self.config,
            scheduler=self.scheduler,
            pointer=self.pointer,
            spawn_target=self.spawn_target,
            ui=self.ui,
            audio=self.audio,
            score_sink=self.score_sink,
        )

    # ------------------------ Collisions ------------------------
    def collect(self, kind: ObjectKind) -> None:
        if kind is ObjectKind.GOOD:
            self.collect_good()
        else:
            self.collect_bad()

    def collect_good(self) -> None:
        if not self.is_playing:
            return
        self.score = min(self.score + self.config.score_increment, self.config.max_score)
        self._effect(self.ui, "set_score", self.score, self.config.max_score)
        self._effect(self.audio, "play", CUE_POINT)
        if self.sprite_stage < self.config.sprite_stages - 1:
            self.sprite_stage += 1
            self._effect(self.ui, "set_player_stage", self.sprite_stage)
        logger.debug("Caught good object: score=%d", self.score)
        self._emit(GameEvent.SCORE_CHANGED)
        if self.score == self.config.max_score:
            self._win()

    def collect_bad(self) -> None:
        if not self.is_playing:
            return
        if self.lives > 0:
            self.lives -= 1
            self._effect(self.ui, "set_life", self.lives, False)
        self.mistake_count += 1
        self.score = max(self.score - self.config.score_decrement, 0)
        self._effect(self.ui, "set_score", self.score, self.config.max_score)
        self._show_message(lives_message(self.lives))
        self._effect(self.audio, "play", CUE_POINT_LOSS)
        logger.debug(
            "Caught bad object: score=%d lives=%d mistakes=%d", self.score, self.lives, self.mistake_count
        )
        self._emit(GameEvent.LIFE_LOST)
        if self.mistake_count == self.config.max_mistakes:
            self._lose()

    # ------------------------ Internals ------------------------
    def _project_initial_layout(self) -> None:
        if self.ui is None:
            return
        self._effect(self.ui, "set_score", self.score, self.config.max_score)
        self._effect(self.ui, "set_lives", [True] * self.config.total_lives)
        self._effect(self.ui, "hide_message")
        self._effect(self.ui, "set_panel", PANEL_WIN, False)
        self._effect(self.ui, "set_panel", PANEL_LOSE, False)
        self._effect(self.ui, "set_panel", PANEL_START, True)
        self._effect(self.ui, "set_control", CONTROL_RESTART, False)
        self._effect(self.ui, "set_control", CONTROL_START, True)
        self._effect(self.ui, "set_player_x", self.player_x)
        self._effect(self.ui, "set_player_stage", self.sprite_stage)

    def _spawn(self) -> None:
        if not self.is_playing:
            return
        request = self.spawn_policy.next(self.speed)
        self._effect(self.spawn_target, "spawn", request.kind, request.x, request.speed)
        self._emit(GameEvent.SPAWNED)

    def _show_message(self, text: str) -> None:
        if self.ui is None:
            return
        # A newer message owns the hide timer; the older one must not hide it early
        if self._hide_timer is not None:
            self._hide_timer.cancel()
        self._effect(self.ui, "show_message", text)
        self._hide_timer = self.scheduler.schedule_once(self.config.message_duration, self._hide_message)

    def _hide_message(self) -> None:
        self._hide_timer = None
        self._effect(self.ui, "hide_message")

    def _finish(self, state: SessionState, cue: str, panel: str) -> None:
        self.state = state
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
            self._spawn_timer = None
        self._effect(self.audio, "play", cue)
        self._effect(self.ui, "set_panel", panel, True)
        self._effect(self.score_sink, "report", self.score, self.config.game_id)
        self._effect(self.ui, "set_control", CONTROL_RESTART, True)

    def _win(self) -> None:
        self._finish(SessionState.WON, CUE_WIN, PANEL_WIN)
        logger.info("You win! Final score %d", self.score)
        self._emit(GameEvent.WON)

    def _lose(self) -> None:
        self._finish(SessionState.LOST, CUE_LOSE, PANEL_LOSE)
        logger.info("Game over. Final score %d after %d mistakes", self.score, self.mistake_count)
        self._emit(GameEvent.LOST)
