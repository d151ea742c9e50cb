"""Time-based interpolation of numeric properties."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from pixelstage.runtime.completion import Completion, resolve_all

Easing = Callable[[float], float]
StepCallback = Callable[[float], None]

_LOG = logging.getLogger("pixelstage.tweens")

_BACK_OVERSHOOT = 1.70158


def ease_linear(t: float) -> float:
    """Constant speed."""
    return t


def ease_in_out(t: float) -> float:
    """Quadratic acceleration into the midpoint, deceleration out of it."""
    t *= 2.0
    if t < 1.0:
        return 0.5 * t * t
    t -= 1.0
    return -0.5 * (t * (t - 2.0) - 1.0)


def ease_out_back(t: float) -> float:
    """Overshoots past the end value, then settles back."""
    t -= 1.0
    return t * t * ((_BACK_OVERSHOOT + 1.0) * t + _BACK_OVERSHOOT) + 1.0


def clamp(lo: float, hi: float, value: float) -> float:
    return max(lo, min(hi, value))


@dataclass(slots=True)
class _Tween:
    target: Any
    start: dict[str, float]
    end: dict[str, float]
    elapsed: float
    duration: float
    easing: Easing
    on_step: StepCallback | None
    completion: Completion


def _read(target: Any, key: str) -> float:
    if isinstance(target, Mapping):
        return float(target[key])
    return float(getattr(target, key))


def _write(target: Any, key: str, value: float) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    else:
        setattr(target, key, value)


class TweenScheduler:
    """Drives registered tweens with the shared frame delta.

    Targets are not owned: the scheduler only reads and writes their
    properties. Tweens touching the same key all write every tick, so the most
    recently registered one wins.
    """

    def __init__(self) -> None:
        self._tweens: list[_Tween] = []

    @property
    def active_count(self) -> int:
        return len(self._tweens)

    def tween(
        self,
        target: Any,
        to: Mapping[str, float],
        duration: float,
        easing: Easing = ease_linear,
        on_step: StepCallback | None = None,
    ) -> Completion:
        """Interpolate each key of ``to`` from its current value over ``duration`` ms."""
        start = {key: _read(target, key) for key in to}
        completion = Completion()
        self._tweens.append(
            _Tween(
                target=target,
                start=start,
                end={key: float(value) for key, value in to.items()},
                elapsed=0.0,
                duration=float(duration),
                easing=easing,
                on_step=on_step,
                completion=completion,
            )
        )
        return completion

    def update(self, dt: float) -> int:
        """Advance all tweens by ``dt``, write values back and resolve finished ones."""
        if not self._tweens:
            return 0
        due: list[Completion] = []
        remaining: list[_Tween] = []
        count = len(self._tweens)
        for tween in self._tweens[:count]:
            tween.elapsed += dt
            finished = tween.elapsed >= tween.duration
            if finished:
                t = 1.0
            else:
                t = clamp(0.0, 1.0, tween.elapsed / tween.duration)
            k = tween.easing(t)
            for key, end in tween.end.items():
                begin = tween.start[key]
                # t == 1 writes the exact end value regardless of easing rounding.
                value = end if t >= 1.0 else begin + (end - begin) * k
                _write(tween.target, key, value)
            if tween.on_step is not None:
                tween.on_step(t)
            if finished:
                due.append(tween.completion)
            else:
                remaining.append(tween)
        # Tweens registered from on_step callbacks start on the next update.
        self._tweens = remaining + self._tweens[count:]
        if due:
            _LOG.debug("tweens_done count=%d remaining=%d", len(due), len(self._tweens))
        return resolve_all(due)

    def clear(self) -> None:
        """Drop every running tween without resolving it."""
        self._tweens.clear()
