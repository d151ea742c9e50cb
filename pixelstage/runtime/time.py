"""Engine runtime timing primitives."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimeContext:
    """Per-frame timing context, in milliseconds."""

    frame_index: int
    delta_ms: float
    elapsed_ms: float


class FrameClock:
    """Frame clock fed by host frame timestamps.

    The first tick reports a zero delta so a late first frame does not
    produce a large initial jump.
    """

    def __init__(self, *, max_delta_ms: float | None = None) -> None:
        if max_delta_ms is not None and max_delta_ms <= 0.0:
            raise ValueError("max_delta_ms must be > 0")
        self._max_delta_ms = max_delta_ms
        self._last_ms: float | None = None
        self._elapsed_ms = 0.0
        self._delta_ms = 0.0
        self._frame_index = -1

    @property
    def delta_ms(self) -> float:
        """Time between the current frame and the previous one."""
        return self._delta_ms

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    def tick(self, now_ms: float) -> TimeContext:
        """Advance the clock to a frame timestamp and return the frame context."""
        if self._last_ms is None:
            delta = 0.0
        else:
            delta = max(0.0, now_ms - self._last_ms)
            if self._max_delta_ms is not None:
                delta = min(delta, self._max_delta_ms)
        self._last_ms = now_ms
        self._delta_ms = delta
        self._elapsed_ms += delta
        self._frame_index += 1
        return TimeContext(
            frame_index=self._frame_index,
            delta_ms=delta,
            elapsed_ms=self._elapsed_ms,
        )

    def reset(self) -> None:
        """Forget the previous frame so the next tick starts from zero."""
        self._last_ms = None
        self._elapsed_ms = 0.0
        self._delta_ms = 0.0
        self._frame_index = -1
