"""Resource store with runtime-checked shared/exclusive borrows."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from types import TracebackType
from typing import Self

from double_res.api.resources import DoubleBufferToken, double_buffer_token
from double_res.buffer.double_buffer import DoubleBuffer, SlotRef
from double_res.runtime.errors import MissingResourceError, ResourceBorrowError, describe_token
from double_res.runtime.logging import get_logger
from double_res.runtime.metrics import MetricsSink, NoopMetricsCollector

_LOG = get_logger("double_res.resources")


@dataclass(slots=True)
class _Entry:
    value: object
    readers: int = 0
    writer: bool = False

    @property
    def borrowed(self) -> bool:
        return self.writer or self.readers > 0


class RuntimeResourceStore:
    """Default resource store; one resource per token."""

    def __init__(self, *, trace_borrows: bool = False, metrics: MetricsSink | None = None) -> None:
        self._entries: dict[object, _Entry] = {}
        self._trace_borrows = trace_borrows
        self._metrics = metrics or NoopMetricsCollector()

    def insert(self, resource: object, *, token: object | None = None) -> object:
        """Register or replace a resource and return its token."""
        key = type(resource) if token is None else token
        if isinstance(key, DoubleBufferToken) and not isinstance(resource, DoubleBuffer):
            raise TypeError(f"{key} must hold a DoubleBuffer, got {type(resource).__qualname__}")
        existing = self._entries.get(key)
        if existing is not None and existing.borrowed:
            raise ResourceBorrowError(f"cannot replace borrowed resource: {describe_token(key)}")
        self._entries[key] = _Entry(resource)
        _LOG.debug(
            "resource_insert token=%s replaced=%s", describe_token(key), existing is not None
        )
        return key

    def insert_double_buffer[T](
        self, buffer: DoubleBuffer[T], *, element_type: type[T] | None = None
    ) -> DoubleBufferToken:
        """Register a double buffer keyed by its element type."""
        resolved = type(buffer.current()) if element_type is None else element_type
        token = double_buffer_token(resolved)
        self.insert(buffer, token=token)
        return token

    def contains(self, token: object) -> bool:
        return token in self._entries

    def remove(self, token: object) -> object:
        """Unregister and return a resource."""
        entry = self._entry(token)
        if entry.borrowed:
            raise ResourceBorrowError(f"cannot remove borrowed resource: {describe_token(token)}")
        del self._entries[token]
        _LOG.debug("resource_remove token=%s", describe_token(token))
        return entry.value

    def tokens(self) -> tuple[object, ...]:
        return tuple(self._entries)

    def active_borrows(self) -> Iterator[tuple[object, int, bool]]:
        for token, entry in self._entries.items():
            if entry.borrowed:
                yield token, entry.readers, entry.writer

    @contextmanager
    def read(self, token: object) -> Iterator[object]:
        """Borrow a resource for shared reading."""
        entry = self._acquire(token, exclusive=False)
        try:
            yield entry.value
        finally:
            self._release(token, exclusive=False)

    @contextmanager
    def write(self, token: object) -> Iterator[object]:
        """Borrow a resource exclusively."""
        entry = self._acquire(token, exclusive=True)
        try:
            yield entry.value
        finally:
            self._release(token, exclusive=True)

    def double[T](self, element_type: type[T]) -> DoubleRes[T]:
        return DoubleRes(self, double_buffer_token(element_type))

    def double_mut[T](self, element_type: type[T]) -> DoubleResMut[T]:
        return DoubleResMut(self, double_buffer_token(element_type))

    def _entry(self, token: object) -> _Entry:
        entry = self._entries.get(token)
        if entry is None:
            raise MissingResourceError(token)
        return entry

    def _acquire(self, token: object, *, exclusive: bool) -> _Entry:
        entry = self._entry(token)
        name = describe_token(token)
        if entry.writer:
            self._metrics.record_conflict(name)
            raise ResourceBorrowError(f"resource already borrowed exclusively: {name}")
        if exclusive and entry.readers:
            self._metrics.record_conflict(name)
            raise ResourceBorrowError(f"resource has {entry.readers} shared borrow(s): {name}")
        if exclusive:
            entry.writer = True
        else:
            entry.readers += 1
        self._metrics.record_borrow(name, exclusive=exclusive)
        self._trace("resource_borrow", name, entry, exclusive=exclusive)
        return entry

    def _release(self, token: object, *, exclusive: bool) -> None:
        entry = self._entry(token)
        name = describe_token(token)
        if exclusive:
            if not entry.writer:
                raise ResourceBorrowError(f"release without exclusive borrow: {name}")
            entry.writer = False
        else:
            if entry.readers == 0:
                raise ResourceBorrowError(f"release without shared borrow: {name}")
            entry.readers -= 1
        self._trace("resource_release", name, entry, exclusive=exclusive)

    def _record_swap(self, token: object) -> None:
        self._metrics.record_swap(describe_token(token))

    def _trace(self, event: str, name: str, entry: _Entry, *, exclusive: bool) -> None:
        if not self._trace_borrows:
            return
        _LOG.debug(
            "%s token=%s mode=%s readers=%d",
            event,
            name,
            "exclusive" if exclusive else "shared",
            entry.readers,
        )


class DoubleRes[T]:
    """Shared, read-only view of a stored double buffer.

    Use as a context manager; the borrow is held for the ``with`` block and
    every accessor raises ``ResourceBorrowError`` outside it.
    """

    _exclusive = False

    def __init__(self, store: RuntimeResourceStore, token: DoubleBufferToken) -> None:
        self._store = store
        self._token = token
        self._buffer: DoubleBuffer[T] | None = None

    @property
    def token(self) -> DoubleBufferToken:
        return self._token

    def __enter__(self) -> Self:
        if self._buffer is not None:
            raise ResourceBorrowError(f"view already active: {self._token}")
        entry = self._store._acquire(self._token, exclusive=self._exclusive)
        self._buffer = entry.value  # type: ignore[assignment]
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._buffer is None:
            return
        self._buffer = None
        self._store._release(self._token, exclusive=self._exclusive)

    def _live(self) -> DoubleBuffer[T]:
        if self._buffer is None:
            raise ResourceBorrowError(f"view used outside its borrow: {self._token}")
        return self._buffer

    @property
    def slots(self) -> tuple[T, T]:
        return self._live().slots

    def index(self) -> int:
        return self._live().index()

    def current(self) -> T:
        return self._live().current()

    def next(self) -> T:
        return self._live().next()

    def split(self) -> tuple[T, T]:
        return self._live().split()


class DoubleResMut[T](DoubleRes[T]):
    """Exclusive view of a stored double buffer.

    Slot handles it returns are tied to the borrow: reading or assigning
    ``value`` after the ``with`` block raises ``ResourceBorrowError``. Objects
    already taken out of a slot are plain references and are not tracked.
    """

    _exclusive = True

    def current_mut(self) -> SlotRef[T]:
        return self._live().current_mut().guarded(self._live)

    def next_mut(self) -> SlotRef[T]:
        return self._live().next_mut().guarded(self._live)

    def set_index(self, value: int) -> None:
        self._live().set_index(value)

    def swap(self) -> None:
        self._live().swap()
        self._store._record_swap(self._token)

    def split_mut(self) -> tuple[SlotRef[T], SlotRef[T]]:
        first, second = self._live().split_mut()
        return first.guarded(self._live), second.guarded(self._live)

    def split_ordered(self) -> tuple[T, SlotRef[T]]:
        current, next_ref = self._live().split_ordered()
        return current, next_ref.guarded(self._live)

    def apply[TResult](self, fn: Callable[[T, SlotRef[T]], TResult]) -> TResult:
        current, next_ref = self.split_ordered()
        return fn(current, next_ref)

    def update(self, fn: Callable[[T], T]) -> T:
        return self._live().update(fn)
