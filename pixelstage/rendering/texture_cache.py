"""Lazily populated key to atlas-rectangle cache."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from pixelstage.api.geometry import Rectangle
from pixelstage.api.surface import ImageData

ImageFactory = Callable[[], ImageData]

_LOG = logging.getLogger("pixelstage.texture_cache")


class TextureCache:
    """Packs factory-rendered images into one shared atlas, keyed by string.

    Images are placed on horizontal shelves. The atlas grows downward (and
    widens for oversized images) without moving entries, so rectangles handed
    out earlier stay valid until :meth:`clear`. Callers must encode full
    visual identity in the key; the cache compares keys by equality only.
    """

    def __init__(self, *, atlas_width: int = 512, name: str = "textures") -> None:
        if atlas_width <= 0:
            raise ValueError("atlas_width must be > 0")
        self._initial_width = atlas_width
        self._name = name
        self._entries: dict[str, Rectangle] = {}
        self._atlas = np.zeros((0, atlas_width, 4), dtype=np.uint8)
        self._cursor_x = 0
        self._shelf_y = 0
        self._shelf_h = 0

    @property
    def image(self) -> ImageData:
        """Atlas pixels. Re-read after populating; growth reallocates the array."""
        return self._atlas

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def find_or_create(self, key: str, factory: ImageFactory) -> Rectangle:
        """Return the cached rectangle for key, rendering it with factory on first use."""
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        image = factory()
        if image.ndim != 3 or image.shape[2] != 4:
            raise ValueError(f"texture factory for {key!r} must return an (H, W, 4) image")
        h, w = int(image.shape[0]), int(image.shape[1])
        x, y = self._allocate(w, h)
        self._atlas[y:y + h, x:x + w] = image
        rect = Rectangle(x=x, y=y, w=w, h=h)
        self._entries[key] = rect
        _LOG.debug(
            "texture_cached cache=%s key=%s rect=%d,%d,%d,%d",
            self._name,
            key,
            x,
            y,
            w,
            h,
        )
        return rect

    def clear(self) -> None:
        """Drop every entry and reset the atlas to empty."""
        self._entries.clear()
        self._atlas = np.zeros((0, self._initial_width, 4), dtype=np.uint8)
        self._cursor_x = 0
        self._shelf_y = 0
        self._shelf_h = 0

    def _allocate(self, w: int, h: int) -> tuple[int, int]:
        atlas_w = int(self._atlas.shape[1])
        if self._cursor_x > 0 and self._cursor_x + w > atlas_w:
            self._shelf_y += self._shelf_h
            self._cursor_x = 0
            self._shelf_h = 0
        x, y = self._cursor_x, self._shelf_y
        self._ensure_size(max(atlas_w, x + w), y + h)
        self._cursor_x += w
        self._shelf_h = max(self._shelf_h, h)
        return x, y

    def _ensure_size(self, width: int, height: int) -> None:
        current_h, current_w = int(self._atlas.shape[0]), int(self._atlas.shape[1])
        if width <= current_w and height <= current_h:
            return
        new_w = max(width, current_w)
        new_h = max(height, current_h * 2) if height > current_h else current_h
        grown = np.zeros((new_h, new_w, 4), dtype=np.uint8)
        grown[:current_h, :current_w] = self._atlas
        self._atlas = grown


__all__ = ["TextureCache"]
