"""Image registry with background preloading."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeAlias

import numpy as np
from PIL import Image

from pixelstage.api.font import BUILTIN_FONT_URL, Font
from pixelstage.api.geometry import Sprite, SpriteSheet
from pixelstage.api.surface import ImageData
from pixelstage.assets.builtin_font import render_builtin_font
from pixelstage.runtime.errors import AssetLoadError

ImageLoader = Callable[[str], ImageData]
PreloadResource: TypeAlias = "str | Font | Sprite | SpriteSheet | Future[Any]"

_LOG = logging.getLogger("pixelstage.assets")

_BUILTIN_IMAGES: dict[str, Callable[[], ImageData]] = {
    BUILTIN_FONT_URL: render_builtin_font,
}


def load_image_file(url: str) -> ImageData:
    """Decode an image file into RGBA pixels."""
    with Image.open(url) as image:
        return np.array(image.convert("RGBA"), dtype=np.uint8)


def preload_target(resource: Any) -> str | Future[Any]:
    """Resolve a preload request to an image url or an already pending load."""
    if isinstance(resource, Future):
        return resource
    if isinstance(resource, str):
        return resource
    if isinstance(resource, (Font, Sprite)):
        return resource.url
    if isinstance(resource, Mapping):
        # Every sprite in a sheet shares one image.
        first = next(iter(resource.values()), None)
        if not isinstance(first, Sprite):
            raise ValueError("sprite sheet must contain at least one sprite")
        return first.url
    raise TypeError(f"unsupported preload resource: {type(resource).__name__}")


class AssetRegistry:
    """Loads images by url and keeps them for synchronous lookup while drawing."""

    def __init__(self, loader: ImageLoader | None = None, *, max_workers: int = 4) -> None:
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self._loader = loader or load_image_file
        self._max_workers = max_workers
        self._images: dict[str, ImageData] = {}
        self._pending: dict[str, Future[ImageData]] = {}
        self._external: list[Future[Any]] = []
        self._executor: ThreadPoolExecutor | None = None

    @property
    def pending_count(self) -> int:
        return len(self._pending) + len(self._external)

    def is_loaded(self, url: str) -> bool:
        return url in self._images

    def preload(self, resource: PreloadResource) -> Future[Any]:
        """Start loading a url, font, sprite, sprite sheet or wait on a pending future."""
        target = preload_target(resource)
        if isinstance(target, Future):
            self._external.append(target)
            return target
        pending = self._pending.get(target)
        if pending is not None:
            return pending
        if target in self._images:
            done: Future[ImageData] = Future()
            done.set_result(self._images[target])
            return done
        future = self._pool().submit(self._load, target)
        self._pending[target] = future
        _LOG.debug("asset_preload url=%s", target)
        return future

    def wait_for_assets(self, timeout: float | None = None) -> None:
        """Block until every preload finished; raise AssetLoadError on the first failure."""
        pending = tuple(self._pending.items())
        external = tuple(self._external)
        self._pending.clear()
        self._external.clear()
        for url, future in pending:
            self._images[url] = self._result(url, future, timeout)
        for future in external:
            self._result("<pending>", future, timeout)
        if pending or external:
            _LOG.info("assets_ready images=%d external=%d", len(pending), len(external))

    def image(self, url: str) -> ImageData:
        """Return loaded pixels for url, loading synchronously when never preloaded."""
        image = self._images.get(url)
        if image is not None:
            return image
        pending = self._pending.pop(url, None)
        if pending is not None:
            image = self._result(url, pending, None)
        else:
            try:
                image = self._load(url)
            except Exception as exc:
                _LOG.exception("asset_load_failed url=%s", url)
                raise AssetLoadError(url, exc) from exc
        self._images[url] = image
        return image

    def clear(self) -> None:
        """Forget every image and pending load and stop the worker pool."""
        for future in self._pending.values():
            future.cancel()
        self._images.clear()
        self._pending.clear()
        self._external.clear()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def _load(self, url: str) -> ImageData:
        builtin = _BUILTIN_IMAGES.get(url)
        if builtin is not None:
            return builtin()
        return self._loader(url)

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="pixelstage-assets",
            )
        return self._executor

    @staticmethod
    def _result(url: str, future: Future[Any], timeout: float | None) -> Any:
        try:
            return future.result(timeout=timeout)
        except Exception as exc:
            _LOG.exception("asset_load_failed url=%s", url)
            raise AssetLoadError(url, exc) from exc


__all__ = ["AssetRegistry", "ImageLoader", "PreloadResource", "load_image_file", "preload_target"]
