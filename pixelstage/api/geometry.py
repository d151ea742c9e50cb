"""Geometry and sprite value types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True, slots=True)
class Sprite:
    """Rectangular slice of an image, addressed by the image url."""

    url: str
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True, slots=True)
class NineSliceSprite(Sprite):
    """Sprite with a stretchable center region (Aseprite slice center)."""

    center: Rectangle


@dataclass(frozen=True, slots=True)
class PivotSprite(Sprite):
    """Sprite with a pivot point (Aseprite slice pivot)."""

    pivot: Point


SpriteSheet: TypeAlias = Mapping[str, Sprite]


__all__ = ["NineSliceSprite", "PivotSprite", "Point", "Rectangle", "Sprite", "SpriteSheet"]
