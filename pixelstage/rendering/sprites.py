"""Sprite and 9-slice sprite blitting."""

from __future__ import annotations

from collections.abc import Callable

from pixelstage.api.geometry import NineSliceSprite, Sprite
from pixelstage.api.surface import DrawingSurface, ImageData

ImageLookup = Callable[[str], ImageData]


class SpriteRenderer:
    """Draws sprite slices from loaded images onto the surface."""

    def __init__(self, surface: DrawingSurface, images: ImageLookup) -> None:
        self._surface = surface
        self._images = images

    def draw(
        self,
        sprite: Sprite,
        x: float,
        y: float,
        w: float | None = None,
        h: float | None = None,
    ) -> None:
        """Draw a sprite, scaled when w/h differ from the sprite size."""
        image = self._images(sprite.url)
        self._surface.draw_image(
            image,
            sprite.x,
            sprite.y,
            sprite.w,
            sprite.h,
            x,
            y,
            sprite.w if w is None else w,
            sprite.h if h is None else h,
        )

    def draw_nine_slice(self, sprite: NineSliceSprite, x: float, y: float, w: float, h: float) -> None:
        """Draw a resizable sprite: fixed corners, stretched edges and center."""
        sx, sy, sw, sh = sprite.x, sprite.y, sprite.w, sprite.h
        center = sprite.center
        left = int(center.x)
        top = int(center.y)
        cw = int(center.w)
        ch = int(center.h)
        right = sw - cw - left
        bottom = sh - ch - top

        # Anything smaller than the corners would need negative middle sizes.
        w = int(max(w, left + right))
        h = int(max(h, top + bottom))

        sx1 = sx + left
        sx2 = sx + sw - right
        sy1 = sy + top
        sy2 = sy + sh - bottom
        dx1 = x + left
        dx2 = x + w - right
        dy1 = y + top
        dy2 = y + h - bottom
        dcw = w - left - right
        dch = h - top - bottom
        image = self._images(sprite.url)

        regions = (
            (sx, sy, left, top, x, y, left, top),  # top left
            (sx2, sy, right, top, dx2, y, right, top),  # top right
            (sx, sy2, left, bottom, x, dy2, left, bottom),  # bottom left
            (sx2, sy2, right, bottom, dx2, dy2, right, bottom),  # bottom right
            (sx1, sy, cw, top, dx1, y, dcw, top),  # top
            (sx1, sy2, cw, bottom, dx1, dy2, dcw, bottom),  # bottom
            (sx, sy1, left, ch, x, dy1, left, dch),  # left
            (sx2, sy1, right, ch, dx2, dy1, right, dch),  # right
            (sx1, sy1, cw, ch, dx1, dy1, dcw, dch),  # center
        )
        for src_x, src_y, src_w, src_h, dst_x, dst_y, dst_w, dst_h in regions:
            if src_w <= 0 or src_h <= 0 or dst_w <= 0 or dst_h <= 0:
                continue
            self._surface.draw_image(image, src_x, src_y, src_w, src_h, dst_x, dst_y, dst_w, dst_h)


__all__ = ["SpriteRenderer"]
