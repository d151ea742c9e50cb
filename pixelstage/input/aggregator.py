"""Per-frame button and pointer state built from raw input events."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from enum import IntEnum
from typing import Any, TypeAlias

from pixelstage.api.geometry import Point
from pixelstage.api.input_events import KeyEvent, PointerEvent
from pixelstage.api.surface import DisplayTransform

# A key name such as "Enter", or a pointer button index.
Button: TypeAlias = str | int

DisplaySource = Callable[[], DisplayTransform]

logger = logging.getLogger(__name__)


class Buttons(IntEnum):
    """Pointer button indices."""

    MOUSE_LEFT = 0
    MOUSE_MIDDLE = 1
    MOUSE_RIGHT = 2
    MOUSE_BACK = 3
    MOUSE_FORWARD = 4


# rendercanvas numbers buttons from 1 (left, right, middle, back, forward).
_RENDERCANVAS_BUTTONS: dict[int, int] = {
    1: Buttons.MOUSE_LEFT,
    2: Buttons.MOUSE_RIGHT,
    3: Buttons.MOUSE_MIDDLE,
    4: Buttons.MOUSE_BACK,
    5: Buttons.MOUSE_FORWARD,
}

_HANDLED_EVENT_TYPES: tuple[str, ...] = (
    "pointer_move",
    "pointer_down",
    "pointer_up",
    "key_down",
    "key_up",
)


def _normalize_button(button: Button) -> Button:
    # IntEnum members hash like ints, but keep plain values in the sets.
    if isinstance(button, Buttons):
        return int(button)
    return button


class InputAggregator:
    """Collects down/pressed/released button sets and the pointer position.

    ``pressed`` and ``released`` hold edges seen since the last :meth:`update`;
    ``down`` persists until the matching release.
    """

    def __init__(self, display: DisplaySource | None = None, *, trace: bool = False) -> None:
        self._display = display or DisplayTransform
        self._pointer_x = math.nan
        self._pointer_y = math.nan
        self._down: set[Button] = set()
        self._pressed: set[Button] = set()
        self._released: set[Button] = set()
        self._bound: list[tuple[Any, Callable[[dict[str, Any]], None], str]] = []
        self._trace = trace

    def pointer(self) -> Point:
        """Pointer position in whole canvas pixels (NaN until the pointer moves)."""
        return Point(self._pointer_x, self._pointer_y)

    def down(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        """True while the button is held."""
        return _normalize_button(button) in self._down

    def pressed(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        """True if the button went down this frame."""
        return _normalize_button(button) in self._pressed

    def released(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        """True if the button went up this frame."""
        return _normalize_button(button) in self._released

    @property
    def down_buttons(self) -> frozenset[Button]:
        return frozenset(self._down)

    @property
    def pressed_buttons(self) -> frozenset[Button]:
        return frozenset(self._pressed)

    @property
    def released_buttons(self) -> frozenset[Button]:
        return frozenset(self._released)

    def pointer_move(self, x: float, y: float) -> None:
        """Record a pointer position given in display coordinates."""
        surface_x, surface_y = self._display().to_surface(x, y)
        self._pointer_x = math.floor(surface_x)
        self._pointer_y = math.floor(surface_y)

    def button_down(self, button: Button) -> None:
        button = _normalize_button(button)
        self._down.add(button)
        self._pressed.add(button)
        if self._trace:
            logger.debug("input_down button=%r", button)

    def button_up(self, button: Button) -> None:
        button = _normalize_button(button)
        self._down.discard(button)
        self._released.add(button)
        if self._trace:
            logger.debug("input_up button=%r", button)

    def consume(self, events: Iterable[PointerEvent | KeyEvent]) -> None:
        """Apply normalized raw events in order."""
        for event in events:
            if isinstance(event, PointerEvent):
                if event.event_type == "pointer_move":
                    self.pointer_move(event.x, event.y)
                elif event.event_type == "pointer_down":
                    self.pointer_move(event.x, event.y)
                    self.button_down(int(event.button))
                elif event.event_type == "pointer_up":
                    self.pointer_move(event.x, event.y)
                    self.button_up(int(event.button))
                continue
            if isinstance(event, KeyEvent):
                if event.event_type == "key_down":
                    self.button_down(event.value)
                elif event.event_type == "key_up":
                    self.button_up(event.value)

    def update(self) -> None:
        """Forget this frame's edges."""
        self._pressed.clear()
        self._released.clear()

    def clear(self) -> None:
        """Reset every button set and forget the pointer."""
        self._down.clear()
        self._pressed.clear()
        self._released.clear()
        self._pointer_x = math.nan
        self._pointer_y = math.nan

    def bind(self, canvas: Any) -> None:
        """Attach pointer and key listeners to a rendercanvas canvas."""
        if not hasattr(canvas, "add_event_handler"):
            raise RuntimeError("Canvas does not support event handlers.")
        for event_type in _HANDLED_EVENT_TYPES:
            canvas.add_event_handler(self._on_event, event_type)
            self._bound.append((canvas, self._on_event, event_type))

    def unbind(self) -> None:
        """Detach every listener registered by :meth:`bind`."""
        bound = self._bound
        self._bound = []
        for canvas, handler, event_type in bound:
            remove = getattr(canvas, "remove_event_handler", None)
            if callable(remove):
                remove(handler, event_type)

    @property
    def is_bound(self) -> bool:
        return bool(self._bound)

    def _on_event(self, event: dict[str, Any]) -> None:
        event_type = event.get("event_type")
        if event_type in {"key_down", "key_up"}:
            key = event.get("key")
            if not isinstance(key, str):
                return
            if event_type == "key_down":
                self.button_down(key)
            else:
                self.button_up(key)
            return
        x = event.get("x")
        y = event.get("y")
        if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            return
        self.pointer_move(float(x), float(y))
        if event_type == "pointer_move":
            return
        raw_button = event.get("button")
        if not isinstance(raw_button, int):
            return
        button = _RENDERCANVAS_BUTTONS.get(raw_button)
        if button is None:
            return
        if event_type == "pointer_down":
            self.button_down(button)
        elif event_type == "pointer_up":
            self.button_up(button)


__all__ = ["Button", "Buttons", "InputAggregator"]
