from __future__ import annotations

import random
from dataclasses import dataclass

import pytest

from double_res.buffer import DoubleBuffer, InvalidSelectorError


@dataclass(slots=True)
class _Pair:
    left: int
    right: int


def _swap_pair(current: _Pair, next_ref) -> None:
    next_ref.value.left = current.right
    next_ref.value.right = current.left


def test_new_seeds_both_slots_with_index_zero() -> None:
    buffer = DoubleBuffer([1, 2])

    assert buffer.index() == 0
    assert buffer.current() == [1, 2]
    assert buffer.next() == [1, 2]


def test_new_clones_seed_into_first_slot() -> None:
    seed = [1, 2]
    buffer = DoubleBuffer(seed)

    first, second = buffer.split()
    assert second is seed
    assert first is not seed


def test_new_accepts_custom_clone() -> None:
    calls: list[list[int]] = []

    def clone(value: list[int]) -> list[int]:
        calls.append(value)
        return list(value)

    buffer = DoubleBuffer([3], clone=clone)

    assert calls == [[3]]
    assert buffer.current() == [3]


def test_from_default_uses_factory_once() -> None:
    calls = 0

    def factory() -> dict[str, int]:
        nonlocal calls
        calls += 1
        return {}

    buffer = DoubleBuffer.from_default(factory)

    assert calls == 1
    assert buffer.current() == {}
    assert buffer.current() is not buffer.next()


def test_from_buffer_with_index_one_reverses_roles() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 1)

    assert buffer.current() == "b"
    assert buffer.next() == "a"
    assert buffer.index() == 1


def test_from_buffer_rejects_invalid_index_and_slot_count() -> None:
    with pytest.raises(InvalidSelectorError):
        DoubleBuffer.from_buffer(["a", "b"], 2)
    with pytest.raises(InvalidSelectorError):
        DoubleBuffer.from_buffer(["a", "b"], "1")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="exactly 2 slots"):
        DoubleBuffer.from_buffer(["a", "b", "c"], 0)


def test_set_index_validates_and_keeps_previous_value() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 0)

    with pytest.raises(InvalidSelectorError) as exc_info:
        buffer.set_index(2)

    assert exc_info.value.value == 2
    assert isinstance(exc_info.value, ValueError)
    assert buffer.index() == 0
    buffer.set_index(1)
    assert buffer.current() == "b"


def test_swap_toggles_roles_without_touching_contents() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 0)

    buffer.swap()

    assert buffer.index() == 1
    assert buffer.current() == "b"
    assert buffer.next() == "a"
    assert buffer.slots == ("a", "b")


def test_double_swap_is_identity() -> None:
    for index in (0, 1):
        buffer = DoubleBuffer.from_buffer([{"v": 1}, {"v": 2}], index)
        before = (buffer.slots, buffer.index())

        buffer.swap()
        buffer.swap()

        assert (buffer.slots, buffer.index()) == before


def test_split_is_physical_and_split_ordered_is_logical() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 0)

    for _ in range(3):
        slot0, slot1 = buffer.split()
        current, next_ref = buffer.split_ordered()
        assert (slot0, slot1) == ("a", "b")
        assert current == buffer.current()
        assert next_ref.value == buffer.next()
        assert next_ref.position == 1 - buffer.index()
        ordered = (current, next_ref.value)
        physical = (slot0, slot1) if buffer.index() == 0 else (slot1, slot0)
        assert ordered == physical
        buffer.swap()


def test_split_mut_writes_physical_slots() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 1)

    first, second = buffer.split_mut()
    first.value = "x"
    second.value = "y"

    assert (first.position, second.position) == (0, 1)
    assert buffer.slots == ("x", "y")
    assert buffer.current() == "y"


def test_apply_then_swap_promotes_next() -> None:
    buffer = DoubleBuffer(_Pair(10, 20))

    buffer.apply(_swap_pair)
    buffer.swap()

    assert buffer.current() == _Pair(20, 10)
    assert buffer.next() == _Pair(10, 20)

    buffer.apply(_swap_pair)
    buffer.swap()

    assert buffer.current() == _Pair(10, 20)
    assert buffer.next() == _Pair(20, 10)


def test_apply_with_immutable_values_and_result() -> None:
    buffer = DoubleBuffer((10, 20))

    def flip(current: tuple[int, int], next_ref) -> str:
        next_ref.value = (current[1], current[0])
        return "done"

    assert buffer.apply(flip) == "done"
    buffer.swap()
    assert buffer.current() == (20, 10)
    assert buffer.next() == (10, 20)


def test_update_writes_next_from_current() -> None:
    buffer = DoubleBuffer(1)

    assert buffer.update(lambda value: value + 1) == 2
    assert buffer.current() == 1
    buffer.swap()
    assert buffer.update(lambda value: value * 10) == 20
    buffer.swap()
    assert buffer.current() == 20
    assert buffer.next() == 2


def test_current_mut_does_not_affect_next() -> None:
    buffer = DoubleBuffer({"hp": 10})

    buffer.current_mut().value["hp"] = 3
    assert buffer.next() == {"hp": 10}

    buffer.next_mut().value = {"hp": 7}
    assert buffer.current() == {"hp": 3}

    buffer.swap()
    assert buffer.current() == {"hp": 7}
    assert buffer.next() == {"hp": 3}


def test_slot_ref_stays_bound_to_physical_position() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 0)
    next_ref = buffer.next_mut()

    buffer.swap()
    next_ref.value = "z"

    assert buffer.current() == "z"
    assert repr(next_ref) == "SlotRef(position=1, value='z')"


def test_buffer_mut_matches_split_mut() -> None:
    buffer = DoubleBuffer.from_buffer([1, 2], 0)

    first, second = buffer.buffer_mut()

    assert (first.value, second.value) == buffer.split()


def test_repr_shows_index_and_slots() -> None:
    buffer = DoubleBuffer.from_buffer([1, 2], 1)

    assert repr(buffer) == "DoubleBuffer(index=1, slots=[1, 2])"


def test_index_stays_valid_across_random_operations() -> None:
    rng = random.Random(1234)
    buffer = DoubleBuffer.from_buffer([0, 0], rng.choice((0, 1)))

    for step in range(200):
        op = rng.choice(("swap", "set", "bad_set", "apply", "update"))
        if op == "swap":
            buffer.swap()
        elif op == "set":
            buffer.set_index(rng.choice((0, 1)))
        elif op == "bad_set":
            with pytest.raises(InvalidSelectorError):
                buffer.set_index(rng.choice((-1, 2, 5)))
        elif op == "apply":
            buffer.apply(lambda cur, nxt: setattr(nxt, "value", cur + step))
        else:
            buffer.update(lambda cur: cur - step)
        assert buffer.index() in (0, 1)
        assert buffer.current() == buffer.slots[buffer.index()]
        assert buffer.next() == buffer.slots[1 - buffer.index()]


def test_guarded_slot_ref_runs_check_on_read_and_write() -> None:
    buffer = DoubleBuffer.from_buffer(["a", "b"], 0)
    checks: list[str] = []
    ref = buffer.next_mut().guarded(lambda: checks.append("check"))

    ref.value = "c"

    assert ref.value == "c"
    assert buffer.next() == "c"
    assert checks == ["check", "check"]
