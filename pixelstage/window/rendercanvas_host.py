"""Rendercanvas-backed desktop host: frame pacing, presentation and input source."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from time import perf_counter
from typing import Any

import numpy as np

from pixelstage.api.pacing import FrameCallback
from pixelstage.api.surface import DisplayTransform
from pixelstage.rendering.pixel_surface import PixelSurface
from pixelstage.runtime.config import WindowConfig
from pixelstage.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger("pixelstage.window")


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas backend loop."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")


def stop_backend_loop(rc_auto: Any) -> None:
    """Stop rendercanvas backend loop when supported."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "stop"):
        loop.stop()


def fit_scale(
    logical_width: float,
    logical_height: float,
    width: int,
    height: int,
    max_scale: float = math.inf,
) -> float:
    """Largest scale that fits the surface into the window, bounded by max_scale."""
    if width <= 0 or height <= 0 or logical_width <= 0 or logical_height <= 0:
        return 1.0
    return min(logical_width / width, logical_height / height, max_scale)


@dataclass(frozen=True, slots=True)
class Letterbox:
    """Presented bitmap layout: the surface centered in a window-shaped frame."""

    frame_width: int
    frame_height: int
    left: int
    top: int
    display: DisplayTransform


def fit_letterbox(
    logical_width: float,
    logical_height: float,
    width: int,
    height: int,
    max_scale: float = math.inf,
) -> Letterbox:
    """Lay the surface out inside the window without distorting its aspect ratio.

    The frame has the window aspect ratio at surface resolution, so stretching
    it over the canvas scales every surface pixel evenly and leaves bars on the
    sides the surface does not fill.
    """
    if width <= 0 or height <= 0 or logical_width <= 0 or logical_height <= 0:
        return Letterbox(max(width, 0), max(height, 0), 0, 0, DisplayTransform())
    scale = fit_scale(logical_width, logical_height, width, height, max_scale)
    frame_width = max(width, round(logical_width / scale))
    frame_height = max(height, round(logical_height / scale))
    left = (frame_width - width) // 2
    top = (frame_height - height) // 2
    scale_x = logical_width / frame_width
    scale_y = logical_height / frame_height
    display = DisplayTransform(scale_x, scale_y, left * scale_x, top * scale_y)
    return Letterbox(frame_width, frame_height, left, top, display)


class RenderCanvasHost:
    """Presents a PixelSurface through the canvas bitmap context.

    Implements the frame pacer contract on top of ``request_draw``: each
    requested callback runs at the next draw with a millisecond timestamp,
    then the surface pixels are presented.
    """

    def __init__(
        self,
        canvas: Any,
        surface: PixelSurface,
        *,
        max_canvas_scale: float = math.inf,
        rc_auto: Any | None = None,
    ) -> None:
        self.canvas = canvas
        self._surface = surface
        self._max_canvas_scale = max_canvas_scale
        self._rc_auto = rc_auto
        self._next_handle = 1
        self._callbacks: dict[int, FrameCallback] = {}
        self._context: Any | None = None
        self._logical_size: tuple[float, float] | None = None
        self._fitted_size = (surface.width, surface.height)
        self._letterbox = Letterbox(surface.width, surface.height, 0, 0, DisplayTransform())
        self._frame: np.ndarray | None = None
        add_handler = getattr(canvas, "add_event_handler", None)
        if callable(add_handler):
            add_handler(self._on_resize, "resize")
        self.refit()

    @property
    def letterbox(self) -> Letterbox:
        return self._letterbox

    @property
    def pending_count(self) -> int:
        return len(self._callbacks)

    def configure(self, *, max_canvas_scale: float) -> None:
        self._max_canvas_scale = max_canvas_scale
        self.refit()

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        self._request_draw()
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def refit(self) -> None:
        """Recompute the letterbox layout from the canvas logical size."""
        getter = getattr(self.canvas, "get_logical_size", None)
        if not callable(getter):
            return
        try:
            logical_width, logical_height = getter()
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "logical size unavailable")
            return
        self._apply_size(float(logical_width), float(logical_height))

    def present(self) -> None:
        """Push surface pixels to the window, letterboxed when the aspect ratios differ."""
        context = self._bitmap_context()
        if context is None:
            return
        surface = self._surface
        if (surface.width, surface.height) != self._fitted_size:
            if self._logical_size is not None:
                self._apply_size(*self._logical_size)
            else:
                self._fitted_size = (surface.width, surface.height)
                self._letterbox = Letterbox(surface.width, surface.height, 0, 0, DisplayTransform())
        box = self._letterbox
        if (box.frame_width, box.frame_height) == (surface.width, surface.height):
            context.set_bitmap(surface.pixels)
            return
        frame = self._frame
        if frame is None or frame.shape[:2] != (box.frame_height, box.frame_width):
            frame = np.zeros((box.frame_height, box.frame_width, 4), dtype=np.uint8)
            self._frame = frame
        frame[box.top : box.top + surface.height, box.left : box.left + surface.width] = surface.pixels
        context.set_bitmap(frame)

    def run_loop(self) -> None:
        if self._rc_auto is None:
            return
        run_backend_loop(self._rc_auto)

    def stop_loop(self) -> None:
        if self._rc_auto is None:
            return
        stop_backend_loop(self._rc_auto)

    def close(self) -> None:
        self._callbacks.clear()
        self.stop_loop()
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()

    def _draw(self) -> None:
        callbacks = tuple(self._callbacks.values())
        self._callbacks.clear()
        now_ms = perf_counter() * 1000.0
        for callback in callbacks:
            callback(now_ms)
        self.present()

    def _request_draw(self) -> None:
        request_draw = getattr(self.canvas, "request_draw", None)
        if not callable(request_draw):
            return
        try:
            request_draw(self._draw)
        except TypeError:
            request_draw()

    def _bitmap_context(self) -> Any | None:
        if self._context is not None:
            return self._context
        getter = getattr(self.canvas, "get_context", None)
        if not callable(getter):
            return None
        try:
            self._context = getter("bitmap")
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "bitmap context unavailable", level=logging.WARNING)
            return None
        return self._context

    def _on_resize(self, event: dict[str, Any]) -> None:
        width = event.get("width")
        height = event.get("height")
        if not isinstance(width, (int, float)) or not isinstance(height, (int, float)):
            return
        self._apply_size(float(width), float(height))

    def _apply_size(self, logical_width: float, logical_height: float) -> None:
        surface = self._surface
        box = fit_letterbox(
            logical_width,
            logical_height,
            surface.width,
            surface.height,
            self._max_canvas_scale,
        )
        self._logical_size = (logical_width, logical_height)
        self._fitted_size = (surface.width, surface.height)
        self._letterbox = box
        surface.display = box.display
        _LOG.debug(
            "window_fit logical=%.0fx%.0f surface=%dx%d frame=%dx%d scale=%.3fx%.3f",
            logical_width,
            logical_height,
            surface.width,
            surface.height,
            box.frame_width,
            box.frame_height,
            box.display.scale_x,
            box.display.scale_y,
        )


def create_rendercanvas_host(
    surface: PixelSurface,
    *,
    config: WindowConfig,
    max_canvas_scale: float = math.inf,
    canvas: Any | None = None,
) -> RenderCanvasHost:
    """Create a host over an existing canvas or a new rendercanvas window."""
    if canvas is not None:
        return RenderCanvasHost(canvas, surface, max_canvas_scale=max_canvas_scale)
    try:
        import rendercanvas.auto as rc_auto
    except ImportError as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw."
        ) from exc
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    scale = min(config.initial_scale, max_canvas_scale)
    size = (int(surface.width * scale), int(surface.height * scale))
    try:
        canvas = canvas_cls(
            size=size,
            title=config.title,
            update_mode=config.update_mode,
            max_fps=float(config.max_fps),
            vsync=bool(config.vsync),
        )
    except TypeError:
        canvas = canvas_cls(size=size, title=config.title)
    _LOG.info("window_created size=%dx%d title=%s", size[0], size[1], config.title)
    return RenderCanvasHost(canvas, surface, max_canvas_scale=max_canvas_scale, rc_auto=rc_auto)


__all__ = [
    "Letterbox",
    "RenderCanvasHost",
    "create_rendercanvas_host",
    "fit_letterbox",
    "fit_scale",
    "run_backend_loop",
    "stop_backend_loop",
]
