"""Per-tick counters for double-buffered resources and the systems using them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TickMetrics:
    """What happened to resources during one fixed tick."""

    tick_index: int
    swaps: dict[str, int] = field(default_factory=dict)
    shared_borrows: int = 0
    exclusive_borrows: int = 0
    borrow_conflicts: int = 0
    failed_systems: tuple[str, ...] = ()
    system_timings_ms: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    """Totals since the collector was created."""

    ticks: int
    swaps: dict[str, int]
    borrow_conflicts: int
    last_tick: TickMetrics | None

    def slowest_systems(self, limit: int = 3) -> list[tuple[str, float]]:
        if self.last_tick is None:
            return []
        timings = self.last_tick.system_timings_ms
        return sorted(timings.items(), key=lambda item: item[1], reverse=True)[:limit]


class NoopMetricsCollector:
    """Accepts every record call and keeps nothing."""

    def begin_tick(self, tick_index: int) -> None:
        _ = tick_index

    def record_borrow(self, resource: str, *, exclusive: bool) -> None:
        _ = (resource, exclusive)

    def record_conflict(self, resource: str) -> None:
        _ = resource

    def record_swap(self, resource: str) -> None:
        _ = resource

    def record_system(self, system_id: str, elapsed_ms: float, *, failed: bool = False) -> None:
        _ = (system_id, elapsed_ms, failed)

    def end_tick(self) -> TickMetrics | None:
        return None

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(ticks=0, swaps={}, borrow_conflicts=0, last_tick=None)


class MetricsCollector:
    """Collects swap and borrow counts per tick and keeps running totals.

    Records made outside a ``begin_tick``/``end_tick`` pair still reach the
    totals but belong to no tick.
    """

    def __init__(self) -> None:
        self._tick_index: int | None = None
        self._swaps: Counter[str] = Counter()
        self._shared = 0
        self._exclusive = 0
        self._conflicts = 0
        self._failed: list[str] = []
        self._timings: dict[str, float] = {}
        self._total_swaps: Counter[str] = Counter()
        self._total_conflicts = 0
        self._ticks = 0
        self._last_tick: TickMetrics | None = None

    def begin_tick(self, tick_index: int) -> None:
        self._tick_index = tick_index
        self._swaps = Counter()
        self._shared = self._exclusive = self._conflicts = 0
        self._failed = []
        self._timings = {}

    def record_borrow(self, resource: str, *, exclusive: bool) -> None:
        _ = resource
        if exclusive:
            self._exclusive += 1
        else:
            self._shared += 1

    def record_conflict(self, resource: str) -> None:
        _ = resource
        self._conflicts += 1
        self._total_conflicts += 1

    def record_swap(self, resource: str) -> None:
        self._swaps[resource] += 1
        self._total_swaps[resource] += 1

    def record_system(self, system_id: str, elapsed_ms: float, *, failed: bool = False) -> None:
        self._timings[system_id] = self._timings.get(system_id, 0.0) + float(elapsed_ms)
        if failed:
            self._failed.append(system_id)

    def end_tick(self) -> TickMetrics | None:
        if self._tick_index is None:
            return None
        self._last_tick = TickMetrics(
            tick_index=self._tick_index,
            swaps=dict(self._swaps),
            shared_borrows=self._shared,
            exclusive_borrows=self._exclusive,
            borrow_conflicts=self._conflicts,
            failed_systems=tuple(self._failed),
            system_timings_ms=dict(self._timings),
        )
        self._tick_index = None
        self._ticks += 1
        return self._last_tick

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            ticks=self._ticks,
            swaps=dict(self._total_swaps),
            borrow_conflicts=self._total_conflicts,
            last_tick=self._last_tick,
        )


type MetricsSink = MetricsCollector | NoopMetricsCollector


def create_metrics_collector(*, enabled: bool) -> MetricsSink:
    """Return a live collector, or the no-op one when metrics are off."""
    if not enabled:
        return NoopMetricsCollector()
    return MetricsCollector()
