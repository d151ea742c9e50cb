"""Desktop entrypoint wiring an engine to a rendercanvas window."""

from __future__ import annotations

import logging

from pixelstage.api.logging import EngineLoggingConfig
from pixelstage.rendering.pixel_surface import PixelSurface
from pixelstage.runtime.config import EngineConfig, WindowConfig, load_debug_config, load_window_config
from pixelstage.runtime.engine import Engine
from pixelstage.runtime.logging import setup_engine_logging, shutdown_engine_logging
from pixelstage.window.rendercanvas_host import create_rendercanvas_host

_LOG = logging.getLogger("pixelstage.entrypoint")


def run(
    config: EngineConfig | None = None,
    *,
    window: WindowConfig | None = None,
    logging_config: EngineLoggingConfig | None = None,
) -> Engine:
    """Start an engine in a desktop window and run until the window closes."""
    debug = load_debug_config()
    setup_engine_logging(logging_config, debug=debug)
    config = config or EngineConfig()
    window = window or load_window_config()
    surface = PixelSurface(config.width, config.height)
    host = create_rendercanvas_host(
        surface,
        config=window,
        max_canvas_scale=config.max_canvas_scale,
    )
    engine = Engine(
        surface=surface,
        pacer=host,
        input_source=host.canvas,
        debug=debug,
    )
    try:
        engine.start(config)
        host.run_loop()
    finally:
        engine.reset()
        host.close()
        _LOG.info("engine_shutdown")
        shutdown_engine_logging()
    return engine
