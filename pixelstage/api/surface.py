"""Drawing surface contract consumed by the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeAlias

import numpy as np

Color: TypeAlias = tuple[int, int, int, int]
Fill: TypeAlias = str | tuple[int, ...]
# (H, W, 4) uint8 RGBA pixels.
ImageData: TypeAlias = np.ndarray


@dataclass(frozen=True, slots=True)
class DisplayTransform:
    """Maps window coordinates onto surface pixels.

    The surface is shown with its top-left corner at ``(offset_x, offset_y)``
    and each surface pixel covers ``scale_x`` by ``scale_y`` window units.
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def uniform(cls, scale: float) -> DisplayTransform:
        return cls(scale_x=scale, scale_y=scale)

    def to_surface(self, x: float, y: float) -> tuple[float, float]:
        """Convert a window position to fractional surface coordinates."""
        # Degenerate windows (minimized, zero sized) map 1:1.
        scale_x = self.scale_x if self.scale_x > 0.0 else 1.0
        scale_y = self.scale_y if self.scale_y > 0.0 else 1.0
        return (x - self.offset_x) / scale_x, (y - self.offset_y) / scale_y


class DrawingSurface(Protocol):
    """Pixel canvas with a translation stack and nearest-neighbor blits."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    display: DisplayTransform

    def resize(self, width: int, height: int) -> None:
        """Reallocate the pixel buffer; contents are cleared."""

    def clear_rect(self, x: int, y: int, w: int, h: int) -> None:
        """Reset a region to fully transparent pixels."""

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Blend a solid rectangle."""

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        """Blend a one pixel outline covering x..x+w and y..y+h inclusive."""

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
        """Blit a source rectangle of image into a destination rectangle."""

    def translate(self, x: float, y: float) -> None:
        """Move the coordinate origin."""

    def save(self) -> None:
        """Push the current origin."""

    def restore(self) -> None:
        """Pop the most recently saved origin."""
