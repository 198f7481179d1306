"""All user-facing names in one import."""

from double_res.api import (
    GameplaySystem,
    RuntimeContext,
    SystemSpec,
    create_resource_store,
    create_runtime_context,
    create_update_loop,
    double_buffer_token,
)
from double_res.buffer import (
    DoubleBuffer,
    IntoDoubleBuffer,
    InvalidSelectorError,
    SlotRef,
    into_double_buffer,
)
from double_res.runtime import DoubleRes, DoubleResMut, MissingResourceError, ResourceBorrowError

__all__ = [
    "DoubleBuffer",
    "DoubleRes",
    "DoubleResMut",
    "GameplaySystem",
    "IntoDoubleBuffer",
    "InvalidSelectorError",
    "MissingResourceError",
    "ResourceBorrowError",
    "RuntimeContext",
    "SlotRef",
    "SystemSpec",
    "create_resource_store",
    "create_runtime_context",
    "create_update_loop",
    "double_buffer_token",
    "into_double_buffer",
]
