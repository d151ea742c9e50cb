from __future__ import annotations

from concurrent.futures import Future

import numpy as np
import pytest
from PIL import Image

from pixelstage.api.font import BUILTIN_FONT_URL, DEFAULT_FONT
from pixelstage.api.geometry import Sprite
from pixelstage.assets.registry import AssetRegistry, load_image_file, preload_target
from pixelstage.runtime.errors import AssetLoadError


class CountingLoader:
    def __init__(self, failing: set[str] | None = None) -> None:
        self.calls: list[str] = []
        self._failing = failing or set()

    def __call__(self, url: str) -> np.ndarray:
        self.calls.append(url)
        if url in self._failing:
            raise FileNotFoundError(url)
        return np.zeros((1, 1, 4), dtype=np.uint8)


def test_preload_target_resolves_resources_to_urls() -> None:
    sprite = Sprite(url="sheet.png", x=0, y=0, w=1, h=1)
    pending: Future[None] = Future()
    assert preload_target("a.png") == "a.png"
    assert preload_target(DEFAULT_FONT) == BUILTIN_FONT_URL
    assert preload_target(sprite) == "sheet.png"
    assert preload_target({"idle": sprite}) == "sheet.png"
    assert preload_target(pending) is pending


def test_preload_target_rejects_unknown_resources() -> None:
    with pytest.raises(ValueError):
        preload_target({})
    with pytest.raises(TypeError):
        preload_target(42)


def test_preload_dedupes_and_wait_makes_images_available() -> None:
    loader = CountingLoader()
    registry = AssetRegistry(loader)
    try:
        first = registry.preload("a.png")
        second = registry.preload("a.png")
        assert first is second
        registry.wait_for_assets()
        assert registry.is_loaded("a.png")
        assert registry.pending_count == 0
        registry.image("a.png")
        registry.preload("a.png")
        assert loader.calls == ["a.png"]
    finally:
        registry.clear()


def test_wait_for_assets_raises_load_error_with_url() -> None:
    registry = AssetRegistry(CountingLoader(failing={"missing.png"}))
    try:
        registry.preload("missing.png")
        with pytest.raises(AssetLoadError) as excinfo:
            registry.wait_for_assets()
        assert excinfo.value.url == "missing.png"
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    finally:
        registry.clear()


def test_wait_for_assets_waits_on_external_futures() -> None:
    registry = AssetRegistry(CountingLoader())
    failed: Future[None] = Future()
    failed.set_exception(RuntimeError("level data"))
    registry.preload(failed)
    with pytest.raises(AssetLoadError):
        registry.wait_for_assets()


def test_image_loads_on_demand_and_builtin_font_needs_no_loader() -> None:
    loader = CountingLoader(failing={"gone.png"})
    registry = AssetRegistry(loader)
    font = registry.image(BUILTIN_FONT_URL)
    assert font.shape == (48, 64, 4)
    assert loader.calls == []
    registry.image("b.png")
    assert loader.calls == ["b.png"]
    with pytest.raises(AssetLoadError):
        registry.image("gone.png")


def test_clear_forgets_loaded_images() -> None:
    registry = AssetRegistry(CountingLoader())
    registry.image("a.png")
    registry.clear()
    assert not registry.is_loaded("a.png")


def test_load_image_file_decodes_to_rgba(tmp_path) -> None:
    path = tmp_path / "pixel.png"
    Image.new("RGB", (2, 1), (255, 0, 0)).save(path)
    pixels = load_image_file(str(path))
    assert pixels.shape == (1, 2, 4)
    assert pixels.dtype == np.uint8
    assert tuple(pixels[0, 1]) == (255, 0, 0, 255)


def test_registry_rejects_invalid_worker_count() -> None:
    with pytest.raises(ValueError):
        AssetRegistry(max_workers=0)
