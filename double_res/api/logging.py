"""Public logging API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Root logger settings; formats are ``text`` or ``json``."""

    level_name: str = "INFO"
    console_format: str = "text"
    file_path: str | None = None
    file_format: str = "json"


def configure_logging(config: LoggingConfig) -> None:
    from double_res.runtime.logging import configure_logging as _configure

    _configure(config)
