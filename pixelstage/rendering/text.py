"""Bitmap font measurement and rendering with cached tinted glyph sheets."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from pixelstage.api.font import Font
from pixelstage.api.geometry import Rectangle
from pixelstage.api.surface import Color, DrawingSurface, Fill, ImageData
from pixelstage.rendering.color import color_key, parse_color
from pixelstage.rendering.texture_cache import TextureCache
from pixelstage.rendering.view_stack import ViewStateStack

ImageLookup = Callable[[str], ImageData]

GLYPH_COLUMNS = 16


def tint_image(image: ImageData, color: Color) -> ImageData:
    """Recolor an image with a multiply fill masked by the image's own alpha.

    The image is multiply-blended over a solid ``color`` fill and the result is
    clipped to the image alpha, so a translucent color lightens the glyphs
    instead of fading them. Fully transparent pixels stay transparent black.
    """
    source = image.astype(np.float64) / 255.0
    rgb = source[..., :3]
    alpha = source[..., 3:4]
    fill = np.asarray(color, dtype=np.float64) / 255.0
    fill_rgb = fill[:3]
    fill_alpha = fill[3]
    # Multiply blend of the image over the fill, premultiplied.
    blended_alpha = alpha + fill_alpha * (1.0 - alpha)
    blended = (
        alpha * (1.0 - fill_alpha) * rgb
        + alpha * fill_alpha * fill_rgb * rgb
        + (1.0 - alpha) * fill_alpha * fill_rgb
    )
    # Clip to the image alpha; the image shows through where the blend is not opaque.
    out_rgb = rgb * (1.0 - blended_alpha) + blended
    tinted = np.empty_like(image)
    tinted[..., :3] = np.rint(np.clip(out_rgb, 0.0, 1.0) * 255.0)
    tinted[..., :3][image[..., 3] == 0] = 0
    tinted[..., 3] = image[..., 3]
    return tinted


class TextRenderer:
    """Writes text with the current font, color and cursor of the view stack."""

    def __init__(
        self,
        surface: DrawingSurface,
        views: ViewStateStack,
        images: ImageLookup,
        cache: TextureCache,
    ) -> None:
        self._surface = surface
        self._views = views
        self._images = images
        self._cache = cache

    def measure(self, text: str, font: Font | None = None) -> Rectangle:
        """Size of the box needed for text. Respects line breaks, never wraps."""
        font = font if font is not None else self._views.state.font
        line_width = 0
        box_width = 0
        box_height = font.line_height
        for char in text:
            if char == "\n":
                box_width = max(box_width, line_width)
                box_height += font.line_height
                line_width = 0
            else:
                line_width += font.width_of(char)
        box_width = max(box_width, line_width)
        return Rectangle(x=0, y=0, w=box_width, h=box_height)

    def write(
        self,
        text: str,
        x: float | None = None,
        y: float | None = None,
        color: Fill | None = None,
        shadow: Fill | None = None,
    ) -> None:
        """Write text at (x, y) or at the text cursor, then move the cursor past it."""
        state = self._views.state
        font = state.font
        x = state.text_x if x is None else x
        y = state.text_y if y is None else y
        color = state.color if color is None else color
        shadow = state.text_shadow_color if shadow is None else shadow

        precolored = font.precolored_glyphs or 0
        raw = self._images(font.url)
        tinted_rect = None if math.isinf(precolored) else self.tint(font, color)
        shadow_rect = self.tint(font, shadow) if shadow is not None else None
        atlas = self._cache.image

        gw = font.glyph_width
        gh = font.glyph_height
        cursor_x = x
        cursor_y = y
        for char in text:
            if char == "\n":
                cursor_x = x
                cursor_y += font.line_height
                continue
            code = ord(char)
            sx = (code % GLYPH_COLUMNS) * gw
            sy = (code // GLYPH_COLUMNS) * gh
            if shadow_rect is not None:
                gx = shadow_rect.x + sx
                gy = shadow_rect.y + sy
                self._surface.draw_image(atlas, gx, gy, gw, gh, cursor_x + 1, cursor_y, gw, gh)
                self._surface.draw_image(atlas, gx, gy, gw, gh, cursor_x, cursor_y + 1, gw, gh)
                self._surface.draw_image(atlas, gx, gy, gw, gh, cursor_x + 1, cursor_y + 1, gw, gh)
            if tinted_rect is None or code < precolored:
                self._surface.draw_image(raw, sx, sy, gw, gh, cursor_x, cursor_y, gw, gh)
            else:
                self._surface.draw_image(
                    atlas,
                    tinted_rect.x + sx,
                    tinted_rect.y + sy,
                    gw,
                    gh,
                    cursor_x,
                    cursor_y,
                    gw,
                    gh,
                )
            cursor_x += font.width_of(char)

        # Leave a space so consecutive writes chain naturally.
        state.text_x = cursor_x + font.width_of(" ")
        state.text_y = cursor_y

    def write_line(
        self,
        text: str,
        x: float | None = None,
        y: float | None = None,
        color: Fill | None = None,
        shadow: Fill | None = None,
    ) -> None:
        """Write text, then move the cursor to the start of the next line."""
        state = self._views.state
        x = state.text_x if x is None else x
        y = state.text_y if y is None else y
        self.write(text, x, y, color, shadow)
        state.text_x = x
        state.text_y += state.font.line_height

    def tint(self, font: Font, color: Fill) -> Rectangle:
        """Atlas rectangle of the font sheet recolored with color."""
        key = f"tint:{font.url}/{color_key(color)}"
        return self._cache.find_or_create(
            key,
            lambda: tint_image(self._images(font.url), parse_color(color)),
        )


__all__ = ["GLYPH_COLUMNS", "TextRenderer", "tint_image"]
