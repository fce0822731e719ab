from __future__ import annotations

from catchfall.app import HeadlessGame, build_scene
from catchfall.config import GameConfig
from catchfall.engine.events import SessionState
from catchfall.engine.scheduler import Scheduler
from catchfall.scoring import LoggingScoreSink
from catchfall.ui.hud import HudModel


def _scenes(config: GameConfig):
    hud = HudModel()
    sink = LoggingScoreSink()
    scenes = build_scene(
        config, scheduler=Scheduler(), ui=hud, audio=None, score_sink=sink, spawn_target=None, pointer=None
    )
    return scenes, hud, sink


def test_restart_reloads_scene_through_loader():
    scenes, hud, sink = _scenes(GameConfig(max_mistakes=2))
    cleared = []
    scenes.add_reload_hook(lambda: cleared.append(True))
    session = scenes.load()
    session.start()
    session.collect_bad()
    session.collect_bad()
    assert session.state is SessionState.LOST
    assert sink.reports == [(0, 8)]

    fresh = session.restart()
    assert fresh is scenes.active_session
    assert fresh is not session
    assert fresh.scene_loader is scenes
    assert fresh.state is SessionState.NOT_STARTED
    assert scenes.loads == 2
    assert cleared == [True]
    assert hud.lives == [True, True, True]


def test_failing_reload_hook_does_not_block_reload():
    scenes, _, _ = _scenes(GameConfig())

    def broken():
        raise RuntimeError("sprite list gone")

    scenes.add_reload_hook(broken)
    scenes.load()
    assert scenes.reload().state is SessionState.NOT_STARTED


def test_headless_game_restart_clears_world():
    game = HeadlessGame(GameConfig(max_mistakes=1, spawn_interval=0.5, seed=1))
    game.session.start()
    game.frame(0.0)
    game.frame(0.6)
    assert game.world.objects
    game.session.collect_bad()
    assert game.frame(0.1) is False

    first = game.session
    game.restart()
    assert game.session is not first
    assert game.world.objects == []
    assert game.session.state is SessionState.NOT_STARTED
