"""Frame pacing contract."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

FrameCallback = Callable[[float], None]


class FramePacer(Protocol):
    """Schedules one callback per display refresh, with timestamps in milliseconds."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame and return a cancellation handle."""

    def cancel_frame(self, handle: int) -> None:
        """Cancel a previously requested frame if it has not run yet."""
