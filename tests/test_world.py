from __future__ import annotations

import pytest

from catchfall.config import GameConfig
from catchfall.engine.events import ObjectKind, SessionState
from catchfall.engine.session import GameSession
from catchfall.world import HeadlessWorld


def _session(world: HeadlessWorld, **overrides) -> GameSession:
    session = GameSession(GameConfig(**overrides), pointer=world, spawn_target=world)
    session.start()
    return session


def test_object_caught_when_crossing_catcher_line():
    world = HeadlessWorld(spawn_height=2.0, catcher_y=0.0, floor_y=-1.0)
    session = _session(world, spawn_interval=100.0)
    world.spawn(ObjectKind.GOOD, 3.0, 4.0)
    session.tick(0.0)
    assert session.player_x == 3.0
    world.update(0.25, session)
    assert session.score == 0
    world.update(0.3, session)
    assert session.score == 10
    assert world.caught == 1
    assert world.objects == []


def test_object_outside_radius_is_missed():
    world = HeadlessWorld(spawn_height=2.0, catcher_y=0.0, floor_y=-1.0, autopilot=False)
    world.manual_x = -5.0
    session = _session(world, spawn_interval=100.0)
    session.tick(0.0)
    world.spawn(ObjectKind.BAD, 5.0, 4.0)
    world.update(1.0, session)
    assert session.lives == 3
    assert world.missed == 1
    assert world.objects == []


def test_autopilot_follows_lowest_good_object():
    world = HeadlessWorld()
    world.spawn(ObjectKind.GOOD, -3.0, 1.0)
    world.spawn(ObjectKind.BAD, 6.0, 1.0)
    world.objects[0].y = 5.0
    world.spawn(ObjectKind.GOOD, 3.0, 1.0)
    world.objects[-1].y = 2.0
    assert world.pointer_x() == 3.0


def test_invalid_geometry_rejected():
    with pytest.raises(ValueError):
        HeadlessWorld(spawn_height=1.0, catcher_y=2.0)


def test_autopilot_plays_a_whole_session():
    world = HeadlessWorld()
    session = _session(world, seed=11)
    dt = 1.0 / 60.0
    for _ in range(36_000):
        session.scheduler.advance(dt)
        session.tick(dt)
        world.update(dt, session)
        if session.is_over:
            break
    assert session.state in (SessionState.WON, SessionState.LOST)
