"""Two-slot double buffer with current/next roles and O(1) swap.

Typical self-referential update::

    colors = DoubleBuffer(("red", "blue", "green"))
    colors.update(lambda cur: (cur[1], cur[2], cur[0]))
    colors.swap()

Readers only ever see ``current()``; the next value is assembled in the other
slot and becomes visible in one step when ``swap()`` flips the selector.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from copy import deepcopy
from operator import index as as_index

from double_res.buffer.errors import InvalidSelectorError

_SLOT_COUNT = 2


def _checked_index(value: int) -> int:
    try:
        normalized = as_index(value)
    except TypeError:
        raise InvalidSelectorError(value) from None
    if normalized not in (0, 1):
        raise InvalidSelectorError(value)
    return normalized


class SlotRef[T]:
    """Settable handle bound to one physical slot.

    ``check`` runs before every read or write of ``value``; hosts use it to
    refuse access once the borrow that produced the handle has ended.
    """

    __slots__ = ("_storage", "_position", "_check")

    def __init__(
        self, storage: list[T], position: int, *, check: Callable[[], object] | None = None
    ) -> None:
        self._storage = storage
        self._position = position
        self._check = check

    @property
    def position(self) -> int:
        return self._position

    @property
    def value(self) -> T:
        if self._check is not None:
            self._check()
        return self._storage[self._position]

    @value.setter
    def value(self, value: T) -> None:
        if self._check is not None:
            self._check()
        self._storage[self._position] = value

    def guarded(self, check: Callable[[], object]) -> SlotRef[T]:
        """Return a handle to the same slot that calls ``check`` on every access."""
        return SlotRef(self._storage, self._position, check=check)

    def __repr__(self) -> str:
        return f"SlotRef(position={self._position}, value={self.value!r})"


class DoubleBuffer[T]:
    """Two owned copies of a value plus a selector naming the current one."""

    __slots__ = ("_slots", "_index")

    def __init__(self, seed: T, *, clone: Callable[[T], T] = deepcopy) -> None:
        """Take ownership of ``seed`` as slot 1 and store ``clone(seed)`` as slot 0.

        ``seed`` itself becomes the first next slot, so the first ``apply``
        writes into that object. Callers that keep using their own reference
        should pass a copy, or use ``into_double_buffer`` which copies first.
        """
        self._slots: list[T] = [clone(seed), seed]
        self._index = 0

    @classmethod
    def from_buffer(cls, slots: Sequence[T], index: int) -> DoubleBuffer[T]:
        """Build from two explicit slot values and an explicit selector."""
        storage = list(slots)
        if len(storage) != _SLOT_COUNT:
            raise ValueError(f"double buffer needs exactly 2 slots, got {len(storage)}")
        buffer = cls.__new__(cls)
        buffer._slots = storage
        buffer._index = _checked_index(index)
        return buffer

    @classmethod
    def from_default(
        cls, factory: Callable[[], T], *, clone: Callable[[T], T] = deepcopy
    ) -> DoubleBuffer[T]:
        """Seed both slots from one zero-argument factory call."""
        return cls(factory(), clone=clone)

    @property
    def slots(self) -> tuple[T, T]:
        return self._slots[0], self._slots[1]

    def buffer_mut(self) -> tuple[SlotRef[T], SlotRef[T]]:
        return self.split_mut()

    def index(self) -> int:
        return self._index

    def set_index(self, value: int) -> None:
        """Overwrite the selector; anything but 0 or 1 is rejected."""
        self._index = _checked_index(value)

    def current(self) -> T:
        return self._slots[self._index]

    def current_mut(self) -> SlotRef[T]:
        return SlotRef(self._slots, self._index)

    def next(self) -> T:
        return self._slots[1 - self._index]

    def next_mut(self) -> SlotRef[T]:
        return SlotRef(self._slots, 1 - self._index)

    def swap(self) -> None:
        """Promote next to current. Slot contents are untouched."""
        self._index = 1 - self._index

    def split(self) -> tuple[T, T]:
        """Return both slots in physical order, ignoring the selector."""
        first, second = self._slots
        return first, second

    def split_mut(self) -> tuple[SlotRef[T], SlotRef[T]]:
        """Return write handles for both slots in physical order."""
        return SlotRef(self._slots, 0), SlotRef(self._slots, 1)

    def split_ordered(self) -> tuple[T, SlotRef[T]]:
        """Return the current value and a write handle to the other slot."""
        first, second = self.split_mut()
        if self._index == 0:
            return first.value, second
        return second.value, first

    def apply[TResult](self, fn: Callable[[T, SlotRef[T]], TResult]) -> TResult:
        """Call ``fn(current, next_ref)`` and return its result."""
        current, next_ref = self.split_ordered()
        return fn(current, next_ref)

    def update(self, fn: Callable[[T], T]) -> T:
        """Store ``fn(current)`` into the next slot and return it."""
        current, next_ref = self.split_ordered()
        next_ref.value = fn(current)
        return next_ref.value

    def __repr__(self) -> str:
        return f"DoubleBuffer(index={self._index}, slots={self._slots!r})"
