"""Host runtime modules."""

from double_res.runtime.context import RuntimeContextImpl
from double_res.runtime.debug_config import DebugConfig, load_debug_config
from double_res.runtime.errors import MissingResourceError, ResourceBorrowError
from double_res.runtime.logging import setup_logging
from double_res.runtime.metrics import (
    MetricsCollector,
    MetricsSnapshot,
    NoopMetricsCollector,
    TickMetrics,
    create_metrics_collector,
)
from double_res.runtime.resource_store import DoubleRes, DoubleResMut, RuntimeResourceStore
from double_res.runtime.time import FixedTimestep
from double_res.runtime.update_loop import RuntimeUpdateLoop

__all__ = [
    "DebugConfig",
    "DoubleRes",
    "DoubleResMut",
    "FixedTimestep",
    "MetricsCollector",
    "MetricsSnapshot",
    "MissingResourceError",
    "NoopMetricsCollector",
    "ResourceBorrowError",
    "RuntimeContextImpl",
    "RuntimeResourceStore",
    "RuntimeUpdateLoop",
    "TickMetrics",
    "create_metrics_collector",
    "load_debug_config",
    "setup_logging",
]
