from __future__ import annotations

from pixelstage.api.logging import EngineLoggingConfig
from pixelstage.api.surface import DisplayTransform
from pixelstage.runtime import entrypoint
from pixelstage.runtime.config import EngineConfig
from pixelstage.runtime.frame_loop import FrameLoopState
from pixelstage.window.rendercanvas_host import RenderCanvasHost
from tests.pixelstage.conftest import FakeCanvas


class DrivingLoop:
    """Backend loop fake that draws a fixed number of frames, then returns."""

    def __init__(self, canvas: FakeCanvas, frames: int) -> None:
        self._canvas = canvas
        self._frames = frames
        self.stopped = False

    def run(self) -> None:
        for _ in range(self._frames):
            self._canvas.draw_function()

    def stop(self) -> None:
        self.stopped = True


class FakeAuto:
    def __init__(self, loop: DrivingLoop) -> None:
        self.loop = loop


def test_run_drives_frames_and_shuts_down(monkeypatch) -> None:
    canvas = FakeCanvas((640.0, 360.0))
    auto = FakeAuto(DrivingLoop(canvas, frames=3))
    hosts: list[RenderCanvasHost] = []

    def fake_host(surface, *, config, max_canvas_scale):
        host = RenderCanvasHost(canvas, surface, max_canvas_scale=max_canvas_scale, rc_auto=auto)
        hosts.append(host)
        return host

    monkeypatch.setattr(entrypoint, "create_rendercanvas_host", fake_host)
    frames: list[int] = []

    engine = entrypoint.run(EngineConfig(width=320, height=180, loop=lambda: frames.append(1)))

    assert frames == [1, 1, 1]
    assert len(canvas.context.bitmaps) == 3
    assert engine.surface.display == DisplayTransform.uniform(2.0)
    assert engine.state is FrameLoopState.STOPPED
    assert auto.loop.stopped
    assert canvas.closed
    assert hosts[0].pending_count == 0


def test_run_passes_logging_config_and_shuts_logging_down(monkeypatch) -> None:
    canvas = FakeCanvas((640.0, 360.0))
    auto = FakeAuto(DrivingLoop(canvas, frames=1))
    calls: list[tuple] = []

    def fake_host(surface, *, config, max_canvas_scale):
        return RenderCanvasHost(canvas, surface, max_canvas_scale=max_canvas_scale, rc_auto=auto)

    monkeypatch.setattr(entrypoint, "create_rendercanvas_host", fake_host)
    monkeypatch.setattr(
        entrypoint,
        "setup_engine_logging",
        lambda config, *, debug: calls.append(("setup", config)),
    )
    monkeypatch.setattr(entrypoint, "shutdown_engine_logging", lambda: calls.append(("shutdown",)))
    logging_config = EngineLoggingConfig(level_name="DEBUG", console_format="json")

    entrypoint.run(EngineConfig(loop=lambda: None), logging_config=logging_config)

    assert calls == [("setup", logging_config), ("shutdown",)]
    assert canvas.closed
