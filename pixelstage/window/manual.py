"""Deterministic frame pacer for headless runs and tests."""

from __future__ import annotations

from pixelstage.api.pacing import FrameCallback


class ManualFramePacer:
    """Holds requested frame callbacks until :meth:`advance` is called."""

    def __init__(self) -> None:
        self._next_handle = 1
        self._callbacks: dict[int, FrameCallback] = {}

    @property
    def pending_count(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def advance(self, time_ms: float) -> int:
        """Run every callback requested before this call with the frame timestamp."""
        callbacks = tuple(self._callbacks.values())
        self._callbacks.clear()
        for callback in callbacks:
            callback(time_ms)
        return len(callbacks)

    def run_frames(self, count: int, *, start_ms: float = 0.0, step_ms: float = 1000.0 / 60.0) -> None:
        """Advance ``count`` frames at a fixed interval."""
        for index in range(count):
            self.advance(start_ms + index * step_ms)
