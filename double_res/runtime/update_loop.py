"""Update-loop implementation."""

from __future__ import annotations

import logging
from time import perf_counter

from double_res.api.context import RuntimeContext
from double_res.api.gameplay import SystemSpec
from double_res.runtime.metrics import MetricsSink, NoopMetricsCollector
from double_res.runtime.time import FixedTimestep

_LOG = logging.getLogger("double_res.update")


class RuntimeUpdateLoop:
    """Runs systems in ascending ``(order, system_id)`` once per tick.

    A system that writes and swaps a double buffer must be ordered before the
    systems reading it; within a tick those readers then see the promoted
    value. Without ``fixed_step_seconds`` every ``step`` is one tick.
    """

    def __init__(
        self,
        *,
        fixed_step_seconds: float | None = None,
        max_ticks_per_frame: int = 8,
        metrics: MetricsSink | None = None,
    ) -> None:
        self._timestep = (
            FixedTimestep(fixed_step_seconds, max_ticks_per_frame=max_ticks_per_frame)
            if fixed_step_seconds is not None
            else None
        )
        self._metrics = metrics or NoopMetricsCollector()
        self._specs: dict[str, SystemSpec] = {}
        self._schedule: tuple[SystemSpec, ...] = ()
        self._running: list[str] = []
        self._tick_index = 0

    @property
    def system_ids(self) -> tuple[str, ...]:
        return tuple(spec.system_id for spec in self._schedule)

    @property
    def tick_index(self) -> int:
        """Number of ticks run so far, failed ones included."""
        return self._tick_index

    def add_system(self, spec: SystemSpec) -> None:
        system_id = spec.system_id.strip()
        if not system_id:
            raise ValueError("system_id must not be empty")
        if system_id in self._specs:
            raise ValueError(f"duplicate system_id: {system_id}")
        self._specs[system_id] = SystemSpec(system_id, spec.system, spec.order)
        self._schedule = tuple(
            sorted(self._specs.values(), key=lambda item: (item.order, item.system_id))
        )

    def start(self, context: RuntimeContext) -> None:
        for spec in self._schedule:
            if spec.system_id in self._running:
                continue
            spec.system.start(context)
            self._running.append(spec.system_id)
            _LOG.debug("system_started system_id=%s order=%d", spec.system_id, spec.order)

    def step(self, context: RuntimeContext, delta_seconds: float) -> int:
        """Advance by ``delta_seconds`` and return the number of ticks run."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        if self._timestep is None:
            ticks, tick_seconds = (1 if self._schedule else 0), delta_seconds
        else:
            ticks, tick_seconds = self._timestep.advance(delta_seconds), self._timestep.step_seconds
        for _ in range(ticks):
            self._tick(context, tick_seconds)
        return ticks

    def shutdown(self, context: RuntimeContext) -> None:
        """Shut started systems down in reverse start order."""
        while self._running:
            system_id = self._running.pop()
            self._specs[system_id].system.shutdown(context)

    def _tick(self, context: RuntimeContext, tick_seconds: float) -> None:
        self._metrics.begin_tick(self._tick_index)
        try:
            for spec in self._schedule:
                if spec.system_id not in self._running:
                    continue
                started_at = perf_counter()
                failed = True
                try:
                    spec.system.update(context, tick_seconds)
                    failed = False
                finally:
                    elapsed_ms = (perf_counter() - started_at) * 1000.0
                    self._metrics.record_system(spec.system_id, elapsed_ms, failed=failed)
        finally:
            self._tick_index += 1
            tick = self._metrics.end_tick()
            if tick is not None and _LOG.isEnabledFor(logging.DEBUG):
                _LOG.debug(
                    "tick_done tick=%d swaps=%s conflicts=%d failed=%s",
                    tick.tick_index,
                    tick.swaps,
                    tick.borrow_conflicts,
                    ",".join(tick.failed_systems) or "-",
                )
