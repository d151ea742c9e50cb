"""Root logging pipeline: console and queued file sinks, trace logger levels."""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from pixelstage.api.logging import EngineLoggingConfig
from pixelstage.runtime.config import DebugConfig, load_debug_config, load_logging_config

INPUT_TRACE_LOGGER = "pixelstage.input"
FRAME_TRACE_LOGGER = "pixelstage.loop"

_QUEUE_LISTENER: QueueListener | None = None

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_engine_logging(config: EngineLoggingConfig, *, debug: DebugConfig | None = None) -> None:
    """Install console and optional file handlers on the root logger.

    The file sink is written from a ``QueueListener`` thread. Debug flags raise the input and frame loop loggers to
    DEBUG independently of the root level.
    """
    global _QUEUE_LISTENER

    shutdown_engine_logging()

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    if debug is not None:
        apply_trace_levels(debug)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def apply_trace_levels(debug: DebugConfig) -> None:
    """Set the trace logger levels from the debug flags."""
    for logger_name, enabled in (
        (INPUT_TRACE_LOGGER, debug.input_trace_enabled),
        (FRAME_TRACE_LOGGER, debug.frame_trace_enabled),
    ):
        logging.getLogger(logger_name).setLevel(logging.DEBUG if enabled else logging.NOTSET)


def setup_engine_logging(
    config: EngineLoggingConfig | None = None,
    *,
    debug: DebugConfig | None = None,
) -> None:
    """Configure engine logging.

    Without an explicit ``config`` the root handlers are left alone when some
    are already installed; only the trace levels are applied then.
    """
    debug = debug or load_debug_config()
    if config is None:
        if logging.getLogger().handlers:
            apply_trace_levels(debug)
            return
        config = load_logging_config(debug)
    configure_engine_logging(config, debug=debug)


def shutdown_engine_logging() -> None:
    """Drain and stop the file sink listener, closing its handlers."""
    global _QUEUE_LISTENER

    listener = _QUEUE_LISTENER
    if listener is None:
        return
    _QUEUE_LISTENER = None
    listener.stop()
    for handler in listener.handlers:
        handler.close()


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
