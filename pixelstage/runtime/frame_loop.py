"""Per-frame tick orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from pixelstage.api.pacing import FramePacer
from pixelstage.rendering.view_stack import ViewStateStack
from pixelstage.runtime.time import FrameClock, TimeContext

_LOG = logging.getLogger("pixelstage.loop")

UpdateStep = Callable[[float], None]


class FrameLoopState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class FrameLoop:
    """Runs the user callback once per paced frame inside an implicit root view.

    Each tick requests the next frame first, then: clock tick, ``save()``,
    user callback, ``restore()``, update step with the frame delta.
    """

    def __init__(
        self,
        pacer: FramePacer,
        clock: FrameClock,
        views: ViewStateStack,
        update: UpdateStep,
        *,
        trace: bool = False,
    ) -> None:
        self._pacer = pacer
        self._clock = clock
        self._views = views
        self._update = update
        self._trace = trace
        self._state = FrameLoopState.IDLE
        self._callback: Callable[[], None] | None = None
        self._handle: int | None = None

    @property
    def state(self) -> FrameLoopState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is FrameLoopState.RUNNING

    def start(self, callback: Callable[[], None]) -> None:
        """Enter RUNNING and schedule the first frame."""
        self._callback = callback
        self._clock.reset()
        self._state = FrameLoopState.RUNNING
        self._handle = self._pacer.request_frame(self.tick)
        _LOG.info("loop_started")

    def stop(self) -> None:
        """Cancel the scheduled frame and enter STOPPED."""
        if self._handle is not None:
            self._pacer.cancel_frame(self._handle)
            self._handle = None
        was_running = self._state is FrameLoopState.RUNNING
        self._state = FrameLoopState.STOPPED
        self._callback = None
        if was_running:
            _LOG.info("loop_stopped")

    def tick(self, time_ms: float) -> TimeContext | None:
        """Run one frame at host timestamp ``time_ms``."""
        if self._state is not FrameLoopState.RUNNING or self._callback is None:
            return None
        callback = self._callback
        self._handle = self._pacer.request_frame(self.tick)
        frame = self._clock.tick(time_ms)
        self._views.save()
        try:
            callback()
        finally:
            self._views.restore()
        self._update(frame.delta_ms)
        if self._trace:
            _LOG.debug(
                "frame index=%d delta_ms=%.3f elapsed_ms=%.3f",
                frame.frame_index,
                frame.delta_ms,
                frame.elapsed_ms,
            )
        return frame
