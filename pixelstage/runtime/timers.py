"""One-shot delayed callbacks driven by the frame clock."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pixelstage.runtime.completion import Completion, resolve_all

_LOG = logging.getLogger("pixelstage.timers")


@dataclass(slots=True)
class _Timer:
    duration: float
    elapsed: float
    completion: Completion


class TimerScheduler:
    """Accumulates frame deltas per timer and resolves timers when they expire."""

    def __init__(self) -> None:
        self._timers: list[_Timer] = []

    @property
    def active_count(self) -> int:
        """Return count of timers that have not fired yet."""
        return len(self._timers)

    def delay(self, ms: float, on_done: Callable[[], None] | None = None) -> Completion:
        """Return a handle that resolves once ``ms`` milliseconds of frame time pass."""
        completion = Completion()
        if on_done is not None:
            completion.then(on_done)
        self._timers.append(_Timer(duration=float(ms), elapsed=0.0, completion=completion))
        return completion

    def update(self, dt: float) -> int:
        """Advance every timer by ``dt`` and fire the ones that are due."""
        if not self._timers:
            return 0
        due: list[Completion] = []
        remaining: list[_Timer] = []
        for timer in self._timers:
            timer.elapsed += dt
            if timer.elapsed >= timer.duration:
                due.append(timer.completion)
            else:
                remaining.append(timer)
        # Timers created by continuations below start counting next tick.
        self._timers = remaining
        if due:
            _LOG.debug("timers_due count=%d remaining=%d", len(due), len(remaining))
        return resolve_all(due)

    def clear(self) -> None:
        """Drop every pending timer without resolving it."""
        self._timers.clear()
