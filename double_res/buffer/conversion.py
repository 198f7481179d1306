"""Helpers for seeding double buffers from single values."""

from __future__ import annotations

from collections.abc import Callable
from copy import deepcopy
from typing import Self

from double_res.buffer.double_buffer import DoubleBuffer


def into_double_buffer[T](value: T, *, clone: Callable[[T], T] | None = None) -> DoubleBuffer[T]:
    """Return a fresh buffer with both slots copied from ``value``.

    Neither slot is ``value`` itself; the caller's object is never written.
    """
    copy_fn = clone or deepcopy
    return DoubleBuffer(copy_fn(value), clone=copy_fn)


class IntoDoubleBuffer:
    """Mixin giving value types an ``into_double_buffer()`` method."""

    __slots__ = ()

    def into_double_buffer(self) -> DoubleBuffer[Self]:
        return into_double_buffer(self)
