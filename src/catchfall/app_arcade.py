from __future__ import annotations

import logging
from typing import Optional

import arcade

from .audio.sfx import SFXManager
from .config import GameConfig
from .engine.events import ObjectKind
from .engine.scheduler import Scheduler
from .interfaces import CONTROL_RESTART, CONTROL_START, PANEL_LOSE, PANEL_START, PANEL_WIN
from .scoring import build_score_sink
from .ui.hud import HudModel
from .app import build_scene

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
CATCHER_Y = 60
OBJECT_SIZE = 24

# Player appearance per sprite stage; the last entry repeats
STAGE_COLORS = [
    arcade.color.LIGHT_GRAY,
    arcade.color.SKY_BLUE,
    arcade.color.GOLD,
    arcade.color.ORANGE,
]


class FallingSprite(arcade.SpriteSolidColor):
    def __init__(self, kind: ObjectKind, center_x: float, center_y: float, fall_px: float) -> None:
        color = arcade.color.GREEN if kind is ObjectKind.GOOD else arcade.color.RED
        super().__init__(OBJECT_SIZE, OBJECT_SIZE, center_x=center_x, center_y=center_y, color=color)
        self.kind = kind
        self.fall_px = fall_px


class CatchWindow(arcade.Window):  # pragma: no cover - needs a display
    """Arcade host for a catch session.

    Acts as the session's SpawnTarget and PointerSource; HUD state lives in a
    HudModel and is only read here for drawing.
    """

    def __init__(self, config: GameConfig, max_steps: Optional[int] = None, tick_rate: float = 60.0) -> None:
        update_rate = 1.0 / tick_rate if tick_rate and tick_rate > 0 else 1.0 / 60.0
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Catchfall", update_rate=update_rate)
        self.background_color = arcade.color.MIDNIGHT_BLUE
        self.config = config
        self.max_steps = max_steps
        self.steps = 0
        # Leave a margin of two world units either side of the catcher bounds
        self.px_per_unit = WINDOW_WIDTH / (2.0 * (config.screen_bounds + 2.0))
        self._mouse_x = WINDOW_WIDTH / 2.0

        self.objects = arcade.SpriteList()
        self.players = arcade.SpriteList()
        self.player = arcade.SpriteSolidColor(90, 18, center_x=WINDOW_WIDTH / 2.0, center_y=CATCHER_Y,
                                              color=STAGE_COLORS[0])
        self.players.append(self.player)

        self.scheduler = Scheduler()
        self.hud = HudModel()
        self.sfx = SFXManager(config.sounds, volume=config.sfx_volume, backend=arcade)
        self.scenes = build_scene(
            config,
            scheduler=self.scheduler,
            ui=self.hud,
            audio=self.sfx,
            score_sink=build_score_sink(config.score_url, config.report_attempts),
            spawn_target=self,
            pointer=self,
        )
        self.scenes.add_reload_hook(self.objects.clear)
        self.session = self.scenes.load()

    # ------------------------ Coordinates ------------------------
    def to_px(self, x: float) -> float:
        return WINDOW_WIDTH / 2.0 + x * self.px_per_unit

    def to_world(self, px: float) -> float:
        return (px - WINDOW_WIDTH / 2.0) / self.px_per_unit

    # ------------------------ Collaborators ------------------------
    def spawn(self, kind: ObjectKind, x: float, speed: float) -> None:
        sprite = FallingSprite(kind, self.to_px(x), WINDOW_HEIGHT + OBJECT_SIZE, speed * self.px_per_unit)
        self.objects.append(sprite)

    def pointer_x(self) -> float:
        return self.to_world(self._mouse_x)

    # ------------------------ Input ------------------------
    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float) -> None:
        self._mouse_x = x

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        self._activate()

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.ESCAPE:
            self.close()
        elif symbol in (arcade.key.SPACE, arcade.key.ENTER):
            self._activate()

    def _activate(self) -> None:
        if self.hud.control_enabled(CONTROL_START):
            self.session.start()
        elif self.hud.control_enabled(CONTROL_RESTART):
            self.session = self.session.restart()

    # ------------------------ Frame ------------------------
    def on_update(self, delta_time: float) -> None:
        self.scheduler.advance(delta_time)
        self.session.tick(delta_time)
        self.player.center_x = self.to_px(self.hud.player_x)
        self.player.color = STAGE_COLORS[min(self.hud.player_stage, len(STAGE_COLORS) - 1)]

        for sprite in list(self.objects):
            sprite.center_y -= sprite.fall_px * delta_time
            if sprite.top < 0:
                sprite.remove_from_sprite_lists()
        for sprite in arcade.check_for_collision_with_list(self.player, self.objects):
            sprite.remove_from_sprite_lists()
            self.session.collect(sprite.kind)

        self.steps += 1
        if self.max_steps is not None and self.steps >= self.max_steps:
            self.close()

    def on_draw(self) -> None:
        self.clear()
        self.objects.draw()
        self.players.draw()
        self._draw_hud()

    def _draw_hud(self) -> None:
        hud = self.hud
        # Score bar
        left, right, bottom, top = 20, 320, WINDOW_HEIGHT - 40, WINDOW_HEIGHT - 20
        arcade.draw_lrbt_rectangle_filled(left, left + (right - left) * hud.progress, bottom, top,
                                          arcade.color.DARK_SPRING_GREEN)
        arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, arcade.color.WHITE, 2)
        arcade.draw_text(f"{hud.score}/{hud.max_score}", right + 12, bottom + 2, arcade.color.WHITE, 14)
        # Lives
        for i, active in enumerate(hud.lives):
            color = arcade.color.RED if active else arcade.color.DIM_GRAY
            arcade.draw_circle_filled(WINDOW_WIDTH - 30 - i * 30, WINDOW_HEIGHT - 30, 10, color)

        if hud.message_visible:
            arcade.draw_text(hud.message, WINDOW_WIDTH / 2, WINDOW_HEIGHT / 2 + 80, arcade.color.YELLOW, 20,
                             anchor_x="center")
        if hud.panel_visible(PANEL_START):
            self._draw_panel("Catch the green, dodge the red", "Click or press SPACE to start")
        elif hud.panel_visible(PANEL_WIN):
            self._draw_panel("You Win!", "Click or press SPACE to play again")
        elif hud.panel_visible(PANEL_LOSE):
            self._draw_panel("Game Over", "Click or press SPACE to try again")

    def _draw_panel(self, title: str, hint: str) -> None:
        arcade.draw_text(title, WINDOW_WIDTH / 2, WINDOW_HEIGHT / 2, arcade.color.WHITE, 28, anchor_x="center")
        arcade.draw_text(hint, WINDOW_WIDTH / 2, WINDOW_HEIGHT / 2 - 40, arcade.color.ASH_GREY, 16,
                         anchor_x="center")


def run_window(config: GameConfig, max_steps: Optional[int] = None, tick_rate: float = 60.0) -> int:  # pragma: no cover
    window = CatchWindow(config, max_steps=max_steps, tick_rate=tick_rate)
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        try:
            window.close()
        except Exception:
            logger.debug("Window already closed")
