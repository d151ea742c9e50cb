"""Engine context: owns every component and exposes the drawing API."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Future
from typing import Any

from pixelstage.api.font import Font
from pixelstage.api.geometry import NineSliceSprite, Point, Rectangle, Sprite
from pixelstage.api.pacing import FramePacer
from pixelstage.api.surface import DrawingSurface, Fill, ImageData
from pixelstage.assets.registry import AssetRegistry, PreloadResource
from pixelstage.input.aggregator import Button, Buttons, InputAggregator
from pixelstage.rendering.pixel_surface import PixelSurface
from pixelstage.rendering.primitives import PrimitiveRenderer
from pixelstage.rendering.sprites import SpriteRenderer
from pixelstage.rendering.text import TextRenderer
from pixelstage.rendering.texture_cache import TextureCache
from pixelstage.rendering.view_stack import DrawState, ViewStateStack
from pixelstage.runtime.completion import Completion
from pixelstage.runtime.config import DebugConfig, EngineConfig, load_debug_config
from pixelstage.runtime.errors import EngineStateError
from pixelstage.runtime.frame_loop import FrameLoop, FrameLoopState
from pixelstage.runtime.time import FrameClock
from pixelstage.runtime.timers import TimerScheduler
from pixelstage.runtime.tweens import Easing, StepCallback, TweenScheduler, ease_linear
from pixelstage.window.manual import ManualFramePacer

_LOG = logging.getLogger("pixelstage.engine")


class Engine:
    """One independent engine instance.

    All mutable state (draw state stack, caches, schedulers, input sets) lives
    here, so several engines can coexist and tests can reset deterministically.
    Without arguments the engine is headless: it draws into a ``PixelSurface``
    and frames advance through a ``ManualFramePacer``.
    """

    def __init__(
        self,
        surface: DrawingSurface | None = None,
        pacer: FramePacer | None = None,
        assets: AssetRegistry | None = None,
        input_source: Any | None = None,
        *,
        debug: DebugConfig | None = None,
    ) -> None:
        debug = debug or load_debug_config()
        self.surface: DrawingSurface = surface if surface is not None else PixelSurface()
        self.pacer: FramePacer = pacer if pacer is not None else ManualFramePacer()
        self.assets = assets if assets is not None else AssetRegistry()
        self.input = InputAggregator(
            lambda: self.surface.display,
            trace=debug.input_trace_enabled,
        )
        self.views = ViewStateStack(self.surface, root=DrawState(), pointer=self.input.pointer)
        self.timers = TimerScheduler()
        self.tweens = TweenScheduler()
        self.clock = FrameClock()
        self.stamp_cache = TextureCache(name="stamps")
        self.text_cache = TextureCache(name="text")
        self.sprites = SpriteRenderer(self.surface, self.assets.image)
        self.text = TextRenderer(self.surface, self.views, self.assets.image, self.text_cache)
        self.primitives = PrimitiveRenderer(self.surface, self.views, self.stamp_cache)
        self.loop = FrameLoop(
            self.pacer,
            self.clock,
            self.views,
            self.update,
            trace=debug.frame_trace_enabled,
        )
        self._input_source = input_source
        self.config = EngineConfig()

    @property
    def state(self) -> FrameLoopState:
        return self.loop.state

    # Lifecycle

    def start(self, config: EngineConfig | None = None) -> None:
        """Configure, wait for assets, bind input and start the loop if one is set."""
        if self.loop.running:
            raise EngineStateError("engine is already running")
        config = config or EngineConfig()
        self.config = config
        self.views.set_font(config.font)
        self.surface.resize(config.width, config.height)
        configure = getattr(self.pacer, "configure", None)
        if callable(configure):
            configure(max_canvas_scale=config.max_canvas_scale)
        self.preload(config.font)
        self.assets.wait_for_assets()
        if self._input_source is not None and not self.input.is_bound:
            self.input.bind(self._input_source)
        _LOG.info(
            "engine_started size=%dx%d font=%s loop=%s",
            config.width,
            config.height,
            config.font.url,
            config.loop is not None,
        )
        if config.loop is not None:
            self.loop.start(config.loop)

    def update(self, dt: float) -> None:
        """Advance tweens, timers and input by one frame of ``dt`` milliseconds.

        Every step runs even when a continuation raises; the error propagates
        once input edges are cleared.
        """
        try:
            self.tweens.update(dt)
        finally:
            try:
                self.timers.update(dt)
            finally:
                self.input.update()

    def reset(self) -> None:
        """Stop the loop and drop every piece of runtime state."""
        self.loop.stop()
        self.views.reset()
        self.assets.clear()
        self.tweens.clear()
        self.timers.clear()
        self.stamp_cache.clear()
        self.text_cache.clear()
        self.input.clear()
        self.input.unbind()
        self.clock.reset()
        self.primitives.clear()
        _LOG.info("engine_reset")

    def delta(self) -> float:
        """Milliseconds between the current frame and the previous one."""
        return self.clock.delta_ms

    # Assets

    def preload(self, resource: PreloadResource) -> Future[Any]:
        return self.assets.preload(resource)

    def image(self, url: str) -> ImageData:
        return self.assets.image(url)

    # State

    def save(self) -> None:
        self.views.save()

    def restore(self) -> None:
        self.views.restore()

    def font(self, font: Font) -> None:
        self.views.set_font(font)

    def color(self, color: Fill) -> None:
        self.views.set_color(color)

    def cursor(self, x: float, y: float, color: Fill | None = None, shadow: Fill | None = None) -> None:
        self.views.cursor(x, y, color, shadow)

    # Views

    def view(self, x: float = 0, y: float = 0, w: float | None = None, h: float | None = None) -> None:
        self.views.view(x, y, w, h)

    def end(self) -> None:
        self.views.end()

    def bounds(self) -> Rectangle:
        return self.views.bounds()

    def to_local(self, global_x: float, global_y: float) -> Point:
        return self.views.to_local(global_x, global_y)

    def to_global(self, local_x: float, local_y: float) -> Point:
        return self.views.to_global(local_x, local_y)

    def over(self, x: float, y: float, w: float, h: float) -> bool:
        return self.views.over(x, y, w, h)

    # Timers and tweens

    def delay(self, ms: float, on_done: Callable[[], None] | None = None) -> Completion:
        return self.timers.delay(ms, on_done)

    def tween(
        self,
        target: Any,
        to: Mapping[str, float],
        duration: float,
        easing: Easing = ease_linear,
        on_step: StepCallback | None = None,
    ) -> Completion:
        return self.tweens.tween(target, to, duration, easing, on_step)

    # Input

    def pointer(self) -> Point:
        return self.input.pointer()

    def down(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        return self.input.down(button)

    def pressed(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        return self.input.pressed(button)

    def released(self, button: Button = Buttons.MOUSE_LEFT) -> bool:
        return self.input.released(button)

    # Drawing

    def clear(self) -> None:
        self.primitives.clear()

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Fill | None = None) -> None:
        self.primitives.fill_rect(x, y, w, h, color)

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Fill | None = None) -> None:
        self.primitives.stroke_rect(x, y, w, h, color)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Fill | None = None) -> None:
        self.primitives.line(x1, y1, x2, y2, color)

    def stamp(self, pattern: int, x: float, y: float, color: Fill | None = None) -> None:
        self.primitives.stamp(pattern, x, y, color)

    def draw(self, sprite: Sprite, x: float, y: float, w: float | None = None, h: float | None = None) -> None:
        self.sprites.draw(sprite, x, y, w, h)

    def draw_nine_slice(self, sprite: NineSliceSprite, x: float, y: float, w: float, h: float) -> None:
        self.sprites.draw_nine_slice(sprite, x, y, w, h)

    # Text

    def measure(self, text: str, font: Font | None = None) -> Rectangle:
        return self.text.measure(text, font)

    def write(
        self,
        text: str,
        x: float | None = None,
        y: float | None = None,
        color: Fill | None = None,
        shadow: Fill | None = None,
    ) -> None:
        self.text.write(text, x, y, color, shadow)

    def write_line(
        self,
        text: str,
        x: float | None = None,
        y: float | None = None,
        color: Fill | None = None,
        shadow: Fill | None = None,
    ) -> None:
        self.text.write_line(text, x, y, color, shadow)


__all__ = ["Engine"]
