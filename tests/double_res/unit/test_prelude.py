from __future__ import annotations

import double_res
from double_res import prelude
from double_res.buffer.double_buffer import DoubleBuffer
from double_res.runtime.resource_store import DoubleRes, DoubleResMut


def test_prelude_reexports_public_names() -> None:
    for name in prelude.__all__:
        assert hasattr(prelude, name), name
    assert prelude.DoubleBuffer is DoubleBuffer
    assert prelude.DoubleRes is DoubleRes
    assert prelude.DoubleResMut is DoubleResMut
    assert double_res.DoubleBuffer is DoubleBuffer


def test_prelude_wires_store_and_views_end_to_end() -> None:
    context = prelude.create_runtime_context()
    context.resources.insert_double_buffer(prelude.into_double_buffer([1, 2]))

    with context.resources.double_mut(list) as values:
        assert isinstance(values, prelude.DoubleResMut)
        values.update(lambda cur: cur[::-1])
        values.swap()

    with context.resources.double(list) as values:
        assert values.current() == [2, 1]
