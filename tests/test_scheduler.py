from __future__ import annotations

import pytest

from catchfall.engine.scheduler import Scheduler


def test_once_fires_when_due():
    sched = Scheduler()
    calls = []
    sched.schedule_once(1.0, lambda: calls.append("hide"))
    sched.advance(0.5)
    assert calls == []
    sched.advance(0.5)
    assert calls == ["hide"]
    sched.advance(5.0)
    assert calls == ["hide"]


def test_interval_keeps_fixed_cadence():
    sched = Scheduler()
    calls = []
    sched.schedule_interval(2.0, lambda: calls.append(sched.now))
    sched.advance(0.0)
    sched.advance(1.9)
    assert len(calls) == 1
    sched.advance(0.2)
    assert len(calls) == 2
    # One long frame covering two intervals fires twice
    sched.advance(4.0)
    assert len(calls) == 4


def test_same_due_time_fires_in_schedule_order():
    sched = Scheduler()
    calls = []
    sched.schedule_once(1.0, lambda: calls.append("a"))
    sched.schedule_once(1.0, lambda: calls.append("b"))
    sched.schedule_once(0.5, lambda: calls.append("c"))
    sched.advance(1.0)
    assert calls == ["c", "a", "b"]


def test_cancel_from_inside_callback():
    sched = Scheduler()
    calls = []
    handle = None

    def cb():
        calls.append(1)
        handle.cancel()

    handle = sched.schedule_interval(1.0, cb, first_delay=1.0)
    sched.advance(5.0)
    assert calls == [1]
    assert sched.pending() == 0


def test_failing_callback_does_not_stop_others():
    sched = Scheduler()
    calls = []

    def boom():
        raise RuntimeError("boom")

    sched.schedule_once(0.1, boom)
    sched.schedule_once(0.2, lambda: calls.append("ok"))
    assert sched.advance(1.0) == 2
    assert calls == ["ok"]


def test_invalid_interval_rejected():
    with pytest.raises(ValueError):
        Scheduler().schedule_interval(0.0, lambda: None)


def test_clear_drops_everything():
    sched = Scheduler()
    calls = []
    sched.schedule_once(0.1, lambda: calls.append(1))
    sched.schedule_interval(0.1, lambda: calls.append(2))
    sched.clear()
    sched.advance(1.0)
    assert calls == []
    assert sched.pending() == 0
