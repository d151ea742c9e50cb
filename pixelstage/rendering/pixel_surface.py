"""RGBA numpy drawing surface with a translation stack."""

from __future__ import annotations

import math

import numpy as np

from pixelstage.api.surface import Color, DisplayTransform, ImageData


class PixelSurface:
    """In-memory pixel canvas.

    Pixels are stored as an ``(height, width, 4)`` uint8 array. All drawing is
    offset by the current origin, blended source-over, and sampled
    nearest-neighbor when scaled.
    """

    def __init__(self, width: int = 320, height: int = 180) -> None:
        self._pixels = _blank(width, height)
        self._origin = (0.0, 0.0)
        self._saved: list[tuple[float, float]] = []
        self.display = DisplayTransform()

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> ImageData:
        """Backing RGBA array; hosts present this buffer."""
        return self._pixels

    @property
    def origin(self) -> tuple[float, float]:
        return self._origin

    @property
    def save_depth(self) -> int:
        return len(self._saved)

    def pixel(self, x: int, y: int) -> Color:
        """Return the RGBA value at absolute pixel coordinates."""
        r, g, b, a = (int(channel) for channel in self._pixels[y, x])
        return (r, g, b, a)

    def resize(self, width: int, height: int) -> None:
        self._pixels = _blank(width, height)

    def translate(self, x: float, y: float) -> None:
        ox, oy = self._origin
        self._origin = (ox + x, oy + y)

    def save(self) -> None:
        self._saved.append(self._origin)

    def restore(self) -> None:
        if self._saved:
            self._origin = self._saved.pop()

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        region = self._clip(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        self._pixels[y0:y1, x0:x1] = 0

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        if color[3] == 0:
            return
        region = self._clip(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        target = self._pixels[y0:y1, x0:x1]
        if color[3] == 255:
            target[...] = color
            return
        source = np.empty_like(target)
        source[...] = color
        _blend(target, source)

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        self.fill_rect(x, y, w + 1, 1, color)
        if h <= 0:
            return
        self.fill_rect(x, y + h, w + 1, 1, color)
        if h > 1:
            self.fill_rect(x, y + 1, 1, h - 1, color)
            if w > 0:
                self.fill_rect(x + w, y + 1, 1, h - 1, color)

    def draw_image(
        self,
        image: ImageData,
        sx: float,
        sy: float,
        sw: float,
        sh: float,
        dx: float,
        dy: float,
        dw: float,
        dh: float,
    ) -> None:
        dest_w = int(round(dw))
        dest_h = int(round(dh))
        if dest_w <= 0 or dest_h <= 0 or sw <= 0 or sh <= 0:
            return
        ox, oy = self._origin
        left = int(math.floor(dx + ox))
        top = int(math.floor(dy + oy))
        x0 = max(left, 0)
        y0 = max(top, 0)
        x1 = min(left + dest_w, self.width)
        y1 = min(top + dest_h, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        columns = _sample_indices(x0 - left, x1 - left, sx, sw, dest_w, image.shape[1])
        rows = _sample_indices(y0 - top, y1 - top, sy, sh, dest_h, image.shape[0])
        if columns is None or rows is None:
            return
        source = image[np.ix_(rows, columns)]
        _blend(self._pixels[y0:y1, x0:x1], source)

    def _clip(self, x: float, y: float, w: float, h: float) -> tuple[int, int, int, int] | None:
        ox, oy = self._origin
        left = int(math.floor(x + ox))
        top = int(math.floor(y + oy))
        x0 = max(left, 0)
        y0 = max(top, 0)
        x1 = min(left + int(w), self.width)
        y1 = min(top + int(h), self.height)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1


def _blank(width: int, height: int) -> ImageData:
    if width <= 0 or height <= 0:
        raise ValueError("surface size must be > 0")
    return np.zeros((int(height), int(width), 4), dtype=np.uint8)


def _sample_indices(
    start: int,
    stop: int,
    source_offset: float,
    source_size: float,
    dest_size: int,
    limit: int,
) -> np.ndarray | None:
    """Map destination offsets [start, stop) to nearest source indices."""
    if limit <= 0:
        return None
    offsets = np.arange(start, stop, dtype=np.float64) + 0.5
    indices = np.floor(source_offset + offsets * (source_size / dest_size)).astype(np.int64)
    return np.clip(indices, 0, limit - 1)


def _blend(target: ImageData, source: ImageData) -> None:
    """Composite source over target in place."""
    src_alpha = source[..., 3:4].astype(np.float32) / 255.0
    if np.all(src_alpha >= 1.0):
        target[...] = source
        return
    if not np.any(src_alpha > 0.0):
        return
    dst_alpha = target[..., 3:4].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    src_rgb = source[..., :3].astype(np.float32)
    dst_rgb = target[..., :3].astype(np.float32)
    weighted = src_rgb * src_alpha + dst_rgb * dst_alpha * (1.0 - src_alpha)
    safe_alpha = np.where(out_alpha > 0.0, out_alpha, 1.0)
    target[..., :3] = np.clip(np.rint(weighted / safe_alpha), 0, 255).astype(np.uint8)
    target[..., 3:4] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


__all__ = ["PixelSurface"]
