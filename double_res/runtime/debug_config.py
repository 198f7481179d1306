"""Runtime debug configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_LOG_FORMATS = frozenset({"text", "json"})


@dataclass(frozen=True, slots=True)
class DebugConfig:
    """Immutable runtime debug configuration."""

    metrics_enabled: bool = False
    borrow_trace_enabled: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None


def load_debug_config() -> DebugConfig:
    """Read every ``DOUBLE_RES_*`` setting once."""
    level = os.getenv("DOUBLE_RES_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    log_format = os.getenv("DOUBLE_RES_LOG_FORMAT", "text").strip().lower()
    log_file = (os.getenv("DOUBLE_RES_LOG_FILE") or "").strip()
    return DebugConfig(
        metrics_enabled=_flag("DOUBLE_RES_DEBUG_METRICS"),
        borrow_trace_enabled=_flag("DOUBLE_RES_DEBUG_BORROW_TRACE"),
        log_level=level.strip().upper(),
        log_format=log_format if log_format in _LOG_FORMATS else "text",
        log_file=log_file or None,
    )


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY
