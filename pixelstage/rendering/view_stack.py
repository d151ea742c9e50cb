"""Nested draw state with save/restore and view coordinate frames."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from pixelstage.api.font import DEFAULT_FONT, Font
from pixelstage.api.geometry import Point, Rectangle
from pixelstage.api.surface import DrawingSurface, Fill

PointerSource = Callable[[], Point]


@dataclass(slots=True)
class DrawState:
    """Engine drawing state, saved and restored like a canvas context."""

    x: float = 0.0
    y: float = 0.0
    w: float = math.inf
    h: float = math.inf
    font: Font = DEFAULT_FONT
    color: Fill = "black"
    text_x: float = 0.0
    text_y: float = 0.0
    text_shadow_color: Fill | None = None


class ViewStateStack:
    """Stack of DrawState snapshots plus the current state.

    ``x``/``y`` of the current state are the global origin of the current view.
    When a surface is attached, its own save/restore/translate calls are made
    1:1 alongside the state stack.
    """

    def __init__(
        self,
        surface: DrawingSurface | None = None,
        *,
        root: DrawState | None = None,
        pointer: PointerSource | None = None,
    ) -> None:
        self._surface = surface
        self._state = root if root is not None else DrawState()
        self._stack: list[DrawState] = []
        self._pointer = pointer

    @property
    def state(self) -> DrawState:
        """The mutable current state."""
        return self._state

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save(self) -> None:
        """Push a copy of the current state."""
        if self._surface is not None:
            self._surface.save()
        self._stack.append(self._state)
        # Fields are scalars or immutable values, so a shallow copy isolates them.
        self._state = replace(self._state)

    def restore(self) -> None:
        """Pop the most recently saved state; no-op when nothing is saved."""
        if self._surface is not None:
            self._surface.restore()
        if self._stack:
            self._state = self._stack.pop()

    def view(self, x: float = 0, y: float = 0, w: float | None = None, h: float | None = None) -> None:
        """Start a view relative to the current one; close it with :meth:`end`."""
        self.save()
        if self._surface is not None:
            self._surface.translate(x, y)
        state = self._state
        state.x += x
        state.y += y
        if w is not None:
            state.w = w
        if h is not None:
            state.h = h

    def end(self) -> None:
        """Finish the current view."""
        self.restore()

    def bounds(self) -> Rectangle:
        """Current view rectangle in global coordinates."""
        state = self._state
        return Rectangle(x=state.x, y=state.y, w=state.w, h=state.h)

    def to_local(self, global_x: float, global_y: float) -> Point:
        return Point(x=global_x - self._state.x, y=global_y - self._state.y)

    def to_global(self, local_x: float, local_y: float) -> Point:
        return Point(x=local_x + self._state.x, y=local_y + self._state.y)

    def over(self, x: float, y: float, w: float, h: float) -> bool:
        """True when the pointer lies inside a rectangle given in local coordinates."""
        if self._pointer is None:
            return False
        pointer = self._pointer()
        local = self.to_local(pointer.x, pointer.y)
        # NaN pointer coordinates (no pointer seen yet) fail every comparison.
        return x <= local.x < x + w and y <= local.y < y + h

    def set_font(self, font: Font) -> None:
        self._state.font = font

    def set_color(self, color: Fill) -> None:
        self._state.color = color

    def cursor(
        self,
        x: float,
        y: float,
        color: Fill | None = None,
        shadow: Fill | None = None,
    ) -> None:
        """Move the text cursor, optionally changing text color and shadow."""
        state = self._state
        state.text_x = x
        state.text_y = y
        if color is not None:
            state.color = color
        if shadow is not None:
            state.text_shadow_color = shadow

    def reset(self) -> None:
        """Unwind every saved state back to the root state."""
        if not self._stack:
            return
        if self._surface is not None:
            for _ in self._stack:
                self._surface.restore()
        self._state = self._stack[0]
        self._stack.clear()


__all__ = ["DrawState", "ViewStateStack"]
