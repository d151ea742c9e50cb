from __future__ import annotations

import pytest

from pixelstage.rendering.view_stack import ViewStateStack
from pixelstage.runtime.frame_loop import FrameLoop, FrameLoopState
from pixelstage.runtime.time import FrameClock
from pixelstage.window.manual import ManualFramePacer
from tests.pixelstage.conftest import RecordingSurface


def _loop() -> tuple[FrameLoop, ManualFramePacer, ViewStateStack, list[float]]:
    pacer = ManualFramePacer()
    views = ViewStateStack(RecordingSurface())
    updates: list[float] = []
    loop = FrameLoop(pacer, FrameClock(), views, updates.append)
    return loop, pacer, views, updates


def test_frame_loop_starts_idle_and_ignores_ticks() -> None:
    loop, pacer, _, updates = _loop()
    assert loop.state is FrameLoopState.IDLE
    assert loop.tick(0.0) is None
    assert updates == []
    assert pacer.pending_count == 0


def test_frame_loop_runs_callback_inside_root_view_then_updates() -> None:
    loop, pacer, views, updates = _loop()
    depths: list[int] = []
    loop.start(lambda: depths.append(views.depth))

    assert loop.state is FrameLoopState.RUNNING
    assert pacer.pending_count == 1

    pacer.advance(1000.0)
    pacer.advance(1016.0)

    assert depths == [1, 1]
    assert views.depth == 0
    assert updates == [0.0, 16.0]
    assert pacer.pending_count == 1


def test_frame_loop_stop_cancels_pending_frame() -> None:
    loop, pacer, _, updates = _loop()
    calls: list[int] = []
    loop.start(lambda: calls.append(1))
    loop.stop()

    assert loop.state is FrameLoopState.STOPPED
    assert pacer.pending_count == 0
    assert pacer.advance(0.0) == 0
    assert calls == []
    assert updates == []


def test_frame_loop_restores_stack_and_skips_update_when_callback_raises() -> None:
    loop, pacer, views, updates = _loop()

    def broken() -> None:
        raise RuntimeError("boom")

    loop.start(broken)
    with pytest.raises(RuntimeError, match="boom"):
        pacer.advance(0.0)

    assert views.depth == 0
    assert updates == []
    # The next frame was requested before the callback ran.
    assert pacer.pending_count == 1
