"""Public engine data types and collaborator contracts."""

from pixelstage.api.font import DEFAULT_FONT, Font
from pixelstage.api.geometry import (
    NineSliceSprite,
    PivotSprite,
    Point,
    Rectangle,
    Sprite,
    SpriteSheet,
)
from pixelstage.api.input_events import KeyEvent, PointerEvent
from pixelstage.api.pacing import FrameCallback, FramePacer
from pixelstage.api.surface import Color, DrawingSurface, Fill, ImageData

__all__ = [
    "Color",
    "DEFAULT_FONT",
    "DrawingSurface",
    "Fill",
    "Font",
    "FrameCallback",
    "FramePacer",
    "ImageData",
    "KeyEvent",
    "NineSliceSprite",
    "PivotSprite",
    "Point",
    "PointerEvent",
    "Rectangle",
    "Sprite",
    "SpriteSheet",
]
