"""Double-buffer container primitives."""

from double_res.buffer.conversion import IntoDoubleBuffer, into_double_buffer
from double_res.buffer.double_buffer import DoubleBuffer, SlotRef
from double_res.buffer.errors import InvalidSelectorError

__all__ = [
    "DoubleBuffer",
    "IntoDoubleBuffer",
    "InvalidSelectorError",
    "SlotRef",
    "into_double_buffer",
]
