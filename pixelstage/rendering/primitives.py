"""Rectangles, pixel lines and cached 5x5 stamps."""

from __future__ import annotations

import numpy as np

from pixelstage.api.geometry import Point
from pixelstage.api.surface import DrawingSurface, Fill, ImageData
from pixelstage.rendering.color import color_key, parse_color
from pixelstage.rendering.texture_cache import TextureCache
from pixelstage.rendering.view_stack import ViewStateStack

STAMP_SIZE = 5


def line_to_points(x1: float, y1: float, x2: float, y2: float) -> list[Point]:
    """Bresenham rasterization, both endpoints included."""
    x, y = int(x1), int(y1)
    end_x, end_y = int(x2), int(y2)
    dx = abs(end_x - x)
    dy = -abs(end_y - y)
    step_x = 1 if x < end_x else -1
    step_y = 1 if y < end_y else -1
    err = dx + dy
    points: list[Point] = []
    while True:
        points.append(Point(x, y))
        if x == end_x and y == end_y:
            return points
        doubled = 2 * err
        if doubled >= dy:
            err += dy
            x += step_x
        if doubled <= dx:
            err += dx
            y += step_y


def render_stamp(pattern: int, color: Fill) -> ImageData:
    """Render the low 25 bits of pattern as a 5x5 image, bit index x + y * 5."""
    image = np.zeros((STAMP_SIZE, STAMP_SIZE, 4), dtype=np.uint8)
    rgba = parse_color(color)
    for y in range(STAMP_SIZE):
        for x in range(STAMP_SIZE):
            if (pattern >> (x + y * STAMP_SIZE)) & 1:
                image[y, x] = rgba
    return image


class PrimitiveRenderer:
    """Solid shapes in the current view, defaulting to the current color."""

    def __init__(self, surface: DrawingSurface, views: ViewStateStack, stamps: TextureCache) -> None:
        self._surface = surface
        self._views = views
        self._stamps = stamps

    def clear(self) -> None:
        """Clear the whole surface, ignoring the current view."""
        self._surface.save()
        self._surface.translate(-self._views.state.x, -self._views.state.y)
        self._surface.clear_rect(0, 0, self._surface.width, self._surface.height)
        self._surface.restore()

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Fill | None = None) -> None:
        rgba = parse_color(self._views.state.color if color is None else color)
        self._surface.fill_rect(int(x), int(y), int(w), int(h), rgba)

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Fill | None = None) -> None:
        rgba = parse_color(self._views.state.color if color is None else color)
        self._surface.stroke_rect(int(x), int(y), int(w), int(h), rgba)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Fill | None = None) -> None:
        rgba = parse_color(self._views.state.color if color is None else color)
        for point in line_to_points(x1, y1, x2, y2):
            self._surface.fill_rect(int(point.x), int(point.y), 1, 1, rgba)

    def stamp(self, pattern: int, x: float, y: float, color: Fill | None = None) -> None:
        """Draw a monochrome 5x5 bit pattern."""
        fill = self._views.state.color if color is None else color
        key = f"{pattern}/{color_key(fill)}"
        rect = self._stamps.find_or_create(key, lambda: render_stamp(pattern, fill))
        self._surface.draw_image(
            self._stamps.image,
            rect.x,
            rect.y,
            rect.w,
            rect.h,
            x,
            y,
            rect.w,
            rect.h,
        )


__all__ = ["PrimitiveRenderer", "STAMP_SIZE", "line_to_points", "render_stamp"]
