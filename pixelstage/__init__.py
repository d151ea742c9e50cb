"""Immediate-mode 2D pixel engine: views, sprites, bitmap text, timers and tweens."""

from typing import TYPE_CHECKING

from pixelstage.api.font import DEFAULT_FONT, Font
from pixelstage.api.geometry import NineSliceSprite, PivotSprite, Point, Rectangle, Sprite
from pixelstage.api.logging import EngineLoggingConfig
from pixelstage.input.aggregator import Buttons
from pixelstage.runtime.config import EngineConfig
from pixelstage.runtime.engine import Engine
from pixelstage.runtime.tweens import ease_in_out, ease_linear, ease_out_back

if TYPE_CHECKING:
    from pixelstage.runtime.config import WindowConfig


def run(
    config: EngineConfig | None = None,
    *,
    window: "WindowConfig | None" = None,
    logging_config: EngineLoggingConfig | None = None,
) -> Engine:
    """Open a window, start an engine on it and block until the window closes."""
    from pixelstage.runtime.entrypoint import run as runtime_run

    return runtime_run(config, window=window, logging_config=logging_config)


__all__ = [
    "Buttons",
    "DEFAULT_FONT",
    "Engine",
    "EngineConfig",
    "EngineLoggingConfig",
    "Font",
    "NineSliceSprite",
    "PivotSprite",
    "Point",
    "Rectangle",
    "Sprite",
    "ease_in_out",
    "ease_linear",
    "ease_out_back",
    "run",
]
