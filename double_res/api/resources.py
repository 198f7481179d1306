"""Public resource-store API contracts."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from double_res.buffer.double_buffer import DoubleBuffer

if TYPE_CHECKING:
    from double_res.runtime.metrics import MetricsSink
    from double_res.runtime.resource_store import DoubleRes, DoubleResMut


@dataclass(frozen=True, slots=True)
class DoubleBufferToken:
    """Resource key for the one double buffer stored per element type."""

    element_type: type

    def __str__(self) -> str:
        return f"DoubleBuffer[{getattr(self.element_type, '__qualname__', self.element_type)}]"


def double_buffer_token(element_type: type) -> DoubleBufferToken:
    """Return the store key for ``DoubleBuffer[element_type]``."""
    return DoubleBufferToken(element_type)


class ResourceStore(Protocol):
    """Per-token singleton store with shared/exclusive borrows."""

    def insert(self, resource: object, *, token: object | None = None) -> object:
        """Register or replace a resource and return its token."""

    def insert_double_buffer[T](
        self, buffer: DoubleBuffer[T], *, element_type: type[T] | None = None
    ) -> DoubleBufferToken:
        """Register a double buffer keyed by its element type."""

    def contains(self, token: object) -> bool:
        """Return whether a resource is registered under token."""

    def remove(self, token: object) -> object:
        """Unregister and return a resource."""

    def tokens(self) -> tuple[object, ...]:
        """Return registered tokens in insertion order."""

    def read(self, token: object) -> AbstractContextManager[object]:
        """Borrow a resource for shared reading."""

    def write(self, token: object) -> AbstractContextManager[object]:
        """Borrow a resource exclusively."""

    def double[T](self, element_type: type[T]) -> "DoubleRes[T]":
        """Return a read-only double-buffer view (context manager)."""

    def double_mut[T](self, element_type: type[T]) -> "DoubleResMut[T]":
        """Return an exclusive double-buffer view (context manager)."""

    def active_borrows(self) -> Iterator[tuple[object, int, bool]]:
        """Yield ``(token, readers, writer)`` for borrowed resources."""


def create_resource_store(
    *, trace_borrows: bool = False, metrics: MetricsSink | None = None
) -> ResourceStore:
    """Create default resource-store implementation."""
    from double_res.runtime.resource_store import RuntimeResourceStore

    return RuntimeResourceStore(trace_borrows=trace_borrows, metrics=metrics)
