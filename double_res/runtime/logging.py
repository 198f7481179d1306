"""Runtime logging implementation."""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from double_res.api.logging import LoggingConfig
from double_res.runtime.debug_config import DebugConfig, load_debug_config

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}
_listener: QueueListener | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values go under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; a file target is written through a queue listener."""
    global _listener

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.getLevelNamesMapping().get(config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter(config.file_format))
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _listener = QueueListener(records, console, file_handler, respect_handler_level=True)
    _listener.start()


def shutdown_logging() -> None:
    """Flush and stop the file listener, if one is running."""
    global _listener

    if _listener is not None:
        _listener.stop()
        _listener = None


def setup_logging(config: DebugConfig | None = None) -> None:
    """Configure logging from ``config`` unless the root logger already has handlers."""
    if logging.getLogger().handlers:
        return
    settings = config or load_debug_config()
    configure_logging(
        LoggingConfig(
            level_name=settings.log_level,
            console_format=settings.log_format,
            file_path=settings.log_file,
        )
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
