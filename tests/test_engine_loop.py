from __future__ import annotations

from catchfall.engine.loop import GameEngine, LoopConfig


def test_engine_runs_exact_steps():
    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=5))
    engine.run()
    assert engine.step == 5
    assert engine.running is False


def test_engine_update_and_stop():
    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=2))
    engine.start()
    engine.update(0.016)
    engine.update(0.016)
    assert engine.step == 2
    assert engine.running is False


def test_callback_receives_fixed_dt_and_can_stop_loop():
    seen = []

    def on_update(dt):
        seen.append(dt)
        return len(seen) < 3

    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=100, fixed_dt=0.25), on_update=on_update)
    engine.run()
    assert seen == [0.25, 0.25, 0.25]
    assert engine.step == 3
    assert engine.running is False


def test_update_ignored_when_not_running():
    engine = GameEngine(LoopConfig(tick_rate=0))
    engine.update(0.1)
    assert engine.step == 0


def test_start_twice_keeps_step_count():
    engine = GameEngine(LoopConfig(tick_rate=0))
    engine.start()
    engine.update(0.1)
    engine.start()
    assert engine.running is True
    assert engine.step == 1
    engine.stop()
    engine.stop()
    assert engine.running is False
