"""Public API contracts."""

from double_res.api.context import RuntimeContext, create_runtime_context
from double_res.api.gameplay import GameplaySystem, SystemSpec, UpdateLoop, create_update_loop
from double_res.api.logging import LoggingConfig, configure_logging
from double_res.api.resources import (
    DoubleBufferToken,
    ResourceStore,
    create_resource_store,
    double_buffer_token,
)

__all__ = [
    "DoubleBufferToken",
    "GameplaySystem",
    "LoggingConfig",
    "ResourceStore",
    "RuntimeContext",
    "SystemSpec",
    "UpdateLoop",
    "configure_logging",
    "create_resource_store",
    "create_runtime_context",
    "create_update_loop",
    "double_buffer_token",
]
