"""Systems and the loop that ticks them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from double_res.api.context import RuntimeContext

if TYPE_CHECKING:
    from double_res.runtime.metrics import MetricsSink


class GameplaySystem(Protocol):
    """Something the loop starts once, ticks repeatedly, then shuts down."""

    def start(self, context: RuntimeContext) -> None: ...

    def update(self, context: RuntimeContext, delta_seconds: float) -> None: ...

    def shutdown(self, context: RuntimeContext) -> None: ...


@dataclass(frozen=True, slots=True)
class SystemSpec:
    """A system plus its position in the tick; lower ``order`` runs first."""

    system_id: str
    system: GameplaySystem
    order: int = 0


class UpdateLoop(Protocol):
    @property
    def system_ids(self) -> tuple[str, ...]: ...

    def add_system(self, spec: SystemSpec) -> None: ...

    def start(self, context: RuntimeContext) -> None: ...

    def step(self, context: RuntimeContext, delta_seconds: float) -> int:
        """Advance the loop and return how many ticks ran."""

    def shutdown(self, context: RuntimeContext) -> None: ...


def create_update_loop(
    *, fixed_step_seconds: float | None = None, metrics: MetricsSink | None = None
) -> UpdateLoop:
    """Create the default loop; pass ``fixed_step_seconds`` for fixed ticks."""
    from double_res.runtime.update_loop import RuntimeUpdateLoop

    return RuntimeUpdateLoop(fixed_step_seconds=fixed_step_seconds, metrics=metrics)
