from __future__ import annotations

import math

from pixelstage.api.font import DEFAULT_FONT
from pixelstage.runtime.config import (
    DebugConfig,
    EngineConfig,
    load_debug_config,
    load_logging_config,
    load_window_config,
    resolve_log_level_name,
)


def test_engine_config_defaults() -> None:
    config = EngineConfig()
    assert (config.width, config.height) == (320, 180)
    assert config.font is DEFAULT_FONT
    assert config.max_canvas_scale == math.inf
    assert config.loop is None


def test_debug_config_reads_env_flags(monkeypatch) -> None:
    monkeypatch.setenv("PIXELSTAGE_DEBUG_INPUT", "1")
    monkeypatch.setenv("PIXELSTAGE_DEBUG_FRAMES", "yes")
    monkeypatch.setenv("PIXELSTAGE_LOG_LEVEL", "debug")
    config = load_debug_config()
    assert config.input_trace_enabled is True
    assert config.frame_trace_enabled is True
    assert config.log_level == "DEBUG"


def test_debug_config_defaults_are_disabled(monkeypatch) -> None:
    monkeypatch.delenv("PIXELSTAGE_DEBUG_INPUT", raising=False)
    monkeypatch.delenv("PIXELSTAGE_DEBUG_FRAMES", raising=False)
    config = load_debug_config()
    assert config.input_trace_enabled is False
    assert config.frame_trace_enabled is False


def test_log_level_falls_back_to_generic_variable(monkeypatch) -> None:
    monkeypatch.delenv("PIXELSTAGE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert resolve_log_level_name() == "WARNING"


def test_window_config_reads_env_and_bounds_values(monkeypatch) -> None:
    monkeypatch.setenv("PIXELSTAGE_WINDOW_TITLE", "demo")
    monkeypatch.setenv("PIXELSTAGE_WINDOW_SCALE", "0.25")
    monkeypatch.setenv("PIXELSTAGE_UPDATE_MODE", "ONDEMAND")
    monkeypatch.setenv("PIXELSTAGE_MAX_FPS", "not-a-number")
    monkeypatch.setenv("PIXELSTAGE_VSYNC", "off")
    config = load_window_config()
    assert config.title == "demo"
    assert config.initial_scale == 1.0
    assert config.update_mode == "ondemand"
    assert config.max_fps == 60.0
    assert config.vsync is False


def test_logging_config_reads_env_and_uses_debug_level(monkeypatch) -> None:
    monkeypatch.setenv("PIXELSTAGE_LOG_FORMAT", "JSON")
    monkeypatch.setenv("PIXELSTAGE_LOG_FILE", "logs/run.jsonl")
    monkeypatch.delenv("PIXELSTAGE_LOG_FILE_FORMAT", raising=False)
    debug = DebugConfig(input_trace_enabled=False, frame_trace_enabled=False, log_level="ERROR")
    config = load_logging_config(debug)
    assert config.level_name == "ERROR"
    assert config.console_format == "json"
    assert config.file_path == "logs/run.jsonl"
    assert config.file_format == "json"


def test_logging_config_without_file_has_console_only(monkeypatch) -> None:
    monkeypatch.delenv("PIXELSTAGE_LOG_FILE", raising=False)
    monkeypatch.delenv("PIXELSTAGE_LOG_FORMAT", raising=False)
    monkeypatch.setenv("PIXELSTAGE_LOG_LEVEL", "debug")
    config = load_logging_config()
    assert config.file_path is None
    assert config.console_format == "text"
    assert config.level_name == "DEBUG"
