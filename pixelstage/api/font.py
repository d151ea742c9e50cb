"""Bitmap font description."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

BUILTIN_FONT_URL = "builtin:font"


@dataclass(frozen=True, slots=True, eq=False)
class Font:
    """Bitmap font laid out as a 16-column glyph sheet indexed by code point."""

    url: str
    glyph_width: int
    glyph_height: int
    line_height: int
    glyph_widths: Mapping[str, int] = field(default_factory=dict)
    # Leading glyph codes that already carry their color. Use math.inf for
    # fully colored fonts.
    precolored_glyphs: float = 0

    def width_of(self, char: str) -> int:
        """Return advance width for one character."""
        return self.glyph_widths.get(char, self.glyph_width)


DEFAULT_FONT = Font(
    url=BUILTIN_FONT_URL,
    glyph_width=4,
    glyph_height=6,
    line_height=7,
)

__all__ = ["BUILTIN_FONT_URL", "DEFAULT_FONT", "Font"]
