from __future__ import annotations

from collections import defaultdict
from typing import Any

import numpy as np

from pixelstage.api.font import Font
from pixelstage.api.surface import DisplayTransform


class RecordingSurface:
    """Drawing surface fake that records every call."""

    def __init__(self, width: int = 320, height: int = 180) -> None:
        self.width = width
        self.height = height
        self.display = DisplayTransform()
        self.calls: list[tuple[Any, ...]] = []

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.calls.append(("resize", width, height))

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        self.calls.append(("clear_rect", x, y, w, h))

    def fill_rect(self, x: int, y: int, w: int, h: int, color: tuple[int, ...]) -> None:
        self.calls.append(("fill_rect", x, y, w, h, color))

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: tuple[int, ...]) -> None:
        self.calls.append(("stroke_rect", x, y, w, h, color))

    def draw_image(self, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
        self.calls.append(("draw_image", image, sx, sy, sw, sh, dx, dy, dw, dh))

    def translate(self, x: float, y: float) -> None:
        self.calls.append(("translate", x, y))

    def save(self) -> None:
        self.calls.append(("save",))

    def restore(self) -> None:
        self.calls.append(("restore",))

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def blits(self) -> list[tuple[Any, ...]]:
        """draw_image calls without the image argument."""
        return [call[2:] for call in self.calls if call[0] == "draw_image"]


class FakeCanvas:
    """Minimal rendercanvas canvas fake."""

    def __init__(self, logical_size: tuple[float, float] = (960.0, 540.0)) -> None:
        self.handlers: dict[str, list] = defaultdict(list)
        self.logical_size = logical_size
        self.draw_function = None
        self.draw_requests = 0
        self.context = FakeBitmapContext()
        self.closed = False

    def add_event_handler(self, handler, *event_types: str) -> None:
        for event_type in event_types:
            self.handlers[event_type].append(handler)

    def remove_event_handler(self, handler, *event_types: str) -> None:
        for event_type in event_types:
            if handler in self.handlers[event_type]:
                self.handlers[event_type].remove(handler)

    def emit(self, event_type: str, **payload) -> None:
        event = {"event_type": event_type, **payload}
        for handler in list(self.handlers.get(event_type, [])):
            handler(event)

    def get_logical_size(self) -> tuple[float, float]:
        return self.logical_size

    def request_draw(self, draw_function=None) -> None:
        if draw_function is not None:
            self.draw_function = draw_function
        self.draw_requests += 1

    def get_context(self, kind: str) -> "FakeBitmapContext":
        assert kind == "bitmap"
        return self.context

    def close(self) -> None:
        self.closed = True


class FakeBitmapContext:
    def __init__(self) -> None:
        self.bitmaps: list[np.ndarray] = []

    def set_bitmap(self, bitmap: np.ndarray) -> None:
        self.bitmaps.append(bitmap)


def make_font(**overrides: Any) -> Font:
    values: dict[str, Any] = {
        "url": "font.png",
        "glyph_width": 5,
        "glyph_height": 5,
        "line_height": 8,
    }
    values.update(overrides)
    return Font(**values)


def font_sheet(glyph_width: int = 5, glyph_height: int = 5) -> np.ndarray:
    """Opaque white 16x8 glyph sheet."""
    return np.full((8 * glyph_height, 16 * glyph_width, 4), 255, dtype=np.uint8)
