"""Frame pacing hosts."""

from pixelstage.window.manual import ManualFramePacer

__all__ = ["ManualFramePacer"]
