from __future__ import annotations

import pytest

from pixelstage.runtime.timers import TimerScheduler


def test_delay_resolves_on_the_update_that_reaches_duration() -> None:
    timers = TimerScheduler()
    done = timers.delay(100)

    assert timers.update(40) == 0
    assert not done.resolved
    assert timers.update(40) == 0
    assert not done.resolved
    assert timers.update(40) == 1
    assert done.resolved
    assert timers.active_count == 0


def test_timers_are_independent_and_fire_once() -> None:
    timers = TimerScheduler()
    fired: list[str] = []
    timers.delay(10, lambda: fired.append("short"))
    timers.delay(10, lambda: fired.append("same"))
    timers.delay(50, lambda: fired.append("long"))

    assert timers.update(10) == 2
    assert sorted(fired) == ["same", "short"]
    timers.update(100)
    timers.update(100)
    assert sorted(fired) == ["long", "same", "short"]


def test_timer_created_from_continuation_starts_next_update() -> None:
    timers = TimerScheduler()
    fired: list[str] = []

    def chain() -> None:
        timers.delay(0, lambda: fired.append("chained"))

    timers.delay(5, chain)
    timers.update(5)
    assert fired == []
    assert timers.active_count == 1
    timers.update(0)
    assert fired == ["chained"]


def test_zero_and_negative_delays_fire_on_first_update() -> None:
    timers = TimerScheduler()
    zero = timers.delay(0)
    negative = timers.delay(-10)
    timers.update(0)
    assert zero.resolved
    assert negative.resolved


def test_clear_drops_pending_timers_without_firing() -> None:
    timers = TimerScheduler()
    fired: list[int] = []
    timers.delay(1, lambda: fired.append(1))
    timers.clear()
    timers.update(10)
    assert fired == []
    assert timers.active_count == 0


def test_raising_callback_does_not_drop_other_due_timers() -> None:
    timers = TimerScheduler()
    fired: list[str] = []

    def broken() -> None:
        raise RuntimeError("boom")

    timers.delay(10, broken)
    second = timers.delay(10, lambda: fired.append("second"))

    with pytest.raises(RuntimeError, match="boom"):
        timers.update(10)

    assert second.resolved
    assert fired == ["second"]
    assert timers.active_count == 0
    timers.update(10)
    assert fired == ["second"]
