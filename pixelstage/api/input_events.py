"""Public input event types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """Raw pointer event in display coordinates.

    ``button`` uses DOM numbering (0 left, 1 middle, 2 right, 3 back, 4 forward).
    """

    event_type: str
    x: float
    y: float
    button: int = 0


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key event carrying a key name such as ``"Enter"`` or ``"a"``."""

    event_type: str
    value: str


__all__ = ["KeyEvent", "PointerEvent"]
