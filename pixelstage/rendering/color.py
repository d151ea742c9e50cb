"""Fill parsing and cache keys for solid RGBA colors."""

from __future__ import annotations

from pixelstage.api.surface import Color, Fill

NAMED_COLORS: dict[str, Color] = {
    "transparent": (0, 0, 0, 0),
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "gray": (128, 128, 128, 255),
    "grey": (128, 128, 128, 255),
    "red": (255, 0, 0, 255),
    "green": (0, 128, 0, 255),
    "lime": (0, 255, 0, 255),
    "blue": (0, 0, 255, 255),
    "yellow": (255, 255, 0, 255),
    "cyan": (0, 255, 255, 255),
    "magenta": (255, 0, 255, 255),
    "orange": (255, 165, 0, 255),
    "purple": (128, 0, 128, 255),
}


def parse_color(value: Fill) -> Color:
    """Normalize a color string or 0-255 channel tuple to an RGBA tuple."""
    if isinstance(value, str):
        normalized = value.strip().lower()
        named = NAMED_COLORS.get(normalized)
        if named is not None:
            return named
        parsed = _parse_hex_color(normalized)
        if parsed is None:
            raise ValueError(f"invalid color: {value!r}")
        return parsed
    if isinstance(value, tuple) and len(value) in (3, 4):
        channels = [max(0, min(255, int(channel))) for channel in value]
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"unsupported color value: {value!r}")


def color_key(value: Fill) -> str:
    """Return a stable cache key that identifies a fill visually."""
    r, g, b, a = parse_color(value)
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def _parse_hex_color(raw: str) -> Color | None:
    if not raw.startswith("#"):
        return None
    value = raw.removeprefix("#")
    if len(value) in (3, 4):
        value = "".join(ch * 2 for ch in value)
    if len(value) == 6:
        value = f"{value}ff"
    if len(value) != 8:
        return None
    try:
        channels = tuple(int(value[index:index + 2], 16) for index in range(0, 8, 2))
    except ValueError:
        return None
    return (channels[0], channels[1], channels[2], channels[3])


__all__ = ["NAMED_COLORS", "color_key", "parse_color"]
