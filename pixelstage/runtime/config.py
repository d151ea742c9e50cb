"""Engine start configuration and environment-sourced host settings."""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from dataclasses import dataclass, field

from pixelstage.api.font import DEFAULT_FONT, Font
from pixelstage.api.logging import EngineLoggingConfig


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings accepted by ``Engine.start``."""

    width: int = 320
    height: int = 180
    font: Font = field(default=DEFAULT_FONT)
    # Upper bound for the display scale used to fill the host window.
    max_canvas_scale: float = math.inf
    # Called once per frame; the loop only runs when this is set.
    loop: Callable[[], None] | None = None


@dataclass(frozen=True, slots=True)
class WindowConfig:
    """Desktop window settings for the rendercanvas host."""

    title: str = "pixelstage"
    initial_scale: float = 3.0
    update_mode: str = "continuous"
    max_fps: float = 60.0
    vsync: bool = True


@dataclass(frozen=True, slots=True)
class DebugConfig:
    """Immutable runtime debug configuration."""

    input_trace_enabled: bool
    frame_trace_enabled: bool
    log_level: str


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _text(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() or default


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve runtime log level with engine-prefixed override."""
    value = os.getenv("PIXELSTAGE_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_window_config() -> WindowConfig:
    """Load window settings from env vars."""
    defaults = WindowConfig()
    return WindowConfig(
        title=_text("PIXELSTAGE_WINDOW_TITLE", defaults.title),
        initial_scale=max(1.0, _float("PIXELSTAGE_WINDOW_SCALE", defaults.initial_scale)),
        update_mode=_text("PIXELSTAGE_UPDATE_MODE", defaults.update_mode).lower(),
        max_fps=max(1.0, _float("PIXELSTAGE_MAX_FPS", defaults.max_fps)),
        vsync=_flag("PIXELSTAGE_VSYNC", defaults.vsync),
    )


def load_debug_config() -> DebugConfig:
    """Load immutable debug configuration from env vars."""
    return DebugConfig(
        input_trace_enabled=_flag("PIXELSTAGE_DEBUG_INPUT", False),
        frame_trace_enabled=_flag("PIXELSTAGE_DEBUG_FRAMES", False),
        log_level=resolve_log_level_name(),
    )


def load_logging_config(debug: DebugConfig | None = None) -> EngineLoggingConfig:
    """Load the logging pipeline settings from env vars; the level is ``debug.log_level``."""
    debug = debug or load_debug_config()
    defaults = EngineLoggingConfig()
    file_path = _text("PIXELSTAGE_LOG_FILE", "") or None
    return EngineLoggingConfig(
        level_name=debug.log_level,
        console_format=_text("PIXELSTAGE_LOG_FORMAT", defaults.console_format).lower(),
        file_path=file_path,
        file_format=_text("PIXELSTAGE_LOG_FILE_FORMAT", defaults.file_format).lower(),
    )


__all__ = [
    "DebugConfig",
    "EngineConfig",
    "WindowConfig",
    "load_debug_config",
    "load_logging_config",
    "load_window_config",
    "resolve_log_level_name",
]
