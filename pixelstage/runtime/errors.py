"""Engine exception types and shared runtime exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias


class PixelStageError(Exception):
    """Base class for engine errors."""


class AssetLoadError(PixelStageError):
    """An image or other preloaded resource failed to load."""

    def __init__(self, url: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to load asset {url!r}{detail}")
        self.url = url


class EngineStateError(PixelStageError):
    """An engine operation was called in a state that does not allow it."""


# Explicitly bounded fallback set for optional backend compatibility paths.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)
