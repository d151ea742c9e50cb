"""Image loading and the procedural built-in font."""

from pixelstage.assets.registry import AssetRegistry, load_image_file, preload_target

__all__ = ["AssetRegistry", "load_image_file", "preload_target"]
