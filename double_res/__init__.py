"""Double-buffered resources for self-referential per-tick updates."""

from double_res.buffer import (
    DoubleBuffer,
    IntoDoubleBuffer,
    InvalidSelectorError,
    SlotRef,
    into_double_buffer,
)

__all__ = [
    "DoubleBuffer",
    "IntoDoubleBuffer",
    "InvalidSelectorError",
    "SlotRef",
    "into_double_buffer",
]
