"""Runnable demos driving double-buffered resources through the update loop.

``colors`` rotates three colors once per fixed step: the rotate system writes
the next triple from the current one and swaps, the display system (ordered
after it) only ever reads ``current()``.

``life`` runs Conway's Game of Life on a NumPy grid, computing each generation
into the next slot from the current one.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field

import numpy as np

from double_res.api.context import RuntimeContext, create_runtime_context
from double_res.api.gameplay import SystemSpec, create_update_loop
from double_res.api.resources import create_resource_store
from double_res.buffer import DoubleBuffer, IntoDoubleBuffer, SlotRef
from double_res.runtime.debug_config import DebugConfig, load_debug_config
from double_res.runtime.logging import get_logger, setup_logging
from double_res.runtime.metrics import MetricsSink, create_metrics_collector

_LOG = get_logger("double_res.demo")

ROTATE_ORDER = 0
DISPLAY_ORDER = 10


@dataclass(slots=True)
class RotatingColors(IntoDoubleBuffer):
    """Three named colors shown side by side."""

    first: str
    second: str
    third: str

    def as_tuple(self) -> tuple[str, str, str]:
        return self.first, self.second, self.third


def rotate_colors(current: RotatingColors, next_ref: SlotRef[RotatingColors]) -> None:
    target = next_ref.value
    target.first = current.second
    target.second = current.third
    target.third = current.first


class RotateColorsSystem:
    def start(self, context: RuntimeContext) -> None:
        _ = context

    def update(self, context: RuntimeContext, delta_seconds: float) -> None:
        _ = delta_seconds
        with context.resources.double_mut(RotatingColors) as colors:
            colors.apply(rotate_colors)
            colors.swap()

    def shutdown(self, context: RuntimeContext) -> None:
        _ = context


@dataclass(slots=True)
class ColorDisplaySystem:
    """Records what a renderer would show each tick."""

    shown: list[tuple[str, str, str]] = field(default_factory=list)

    def start(self, context: RuntimeContext) -> None:
        _ = context

    def update(self, context: RuntimeContext, delta_seconds: float) -> None:
        _ = delta_seconds
        with context.resources.double(RotatingColors) as colors:
            frame = colors.current().as_tuple()
        self.shown.append(frame)
        _LOG.info("colors_displayed tick=%d colors=%s", len(self.shown), ",".join(frame))

    def shutdown(self, context: RuntimeContext) -> None:
        _ = context


def life_generation(current: np.ndarray, next_ref: SlotRef[np.ndarray]) -> None:
    """Write the next Game of Life generation (toroidal grid) into next_ref."""
    neighbours = sum(
        np.roll(np.roll(current, dy, axis=0), dx, axis=1)
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
        if (dy, dx) != (0, 0)
    )
    next_ref.value[...] = (neighbours == 3) | (current & (neighbours == 2))


class LifeSystem:
    def start(self, context: RuntimeContext) -> None:
        _ = context

    def update(self, context: RuntimeContext, delta_seconds: float) -> None:
        _ = delta_seconds
        with context.resources.double_mut(np.ndarray) as grid:
            grid.apply(life_generation)
            grid.swap()

    def shutdown(self, context: RuntimeContext) -> None:
        _ = context


@dataclass(slots=True)
class PopulationSystem:
    populations: list[int] = field(default_factory=list)

    def start(self, context: RuntimeContext) -> None:
        _ = context

    def update(self, context: RuntimeContext, delta_seconds: float) -> None:
        _ = delta_seconds
        with context.resources.double(np.ndarray) as grid:
            population = int(grid.current().sum())
        self.populations.append(population)
        _LOG.info("life_population tick=%d population=%d", len(self.populations), population)

    def shutdown(self, context: RuntimeContext) -> None:
        _ = context


@dataclass(frozen=True, slots=True)
class LifeRun:
    populations: list[int]
    final: np.ndarray


def run_colors(
    ticks: int,
    *,
    seed: RotatingColors | None = None,
    step_seconds: float = 1.0,
    config: DebugConfig | None = None,
) -> list[tuple[str, str, str]]:
    """Run the rotating-colors demo and return the displayed triples."""
    context, metrics = _new_context(config or load_debug_config())
    colors = seed or RotatingColors("red", "blue", "green")
    context.resources.insert_double_buffer(colors.into_double_buffer())
    display = ColorDisplaySystem()
    _drive(
        context,
        metrics,
        (
            SystemSpec("rotate_colors", RotateColorsSystem(), order=ROTATE_ORDER),
            SystemSpec("display_colors", display, order=DISPLAY_ORDER),
        ),
        ticks=ticks,
        step_seconds=step_seconds,
    )
    return display.shown


def run_life(
    initial: np.ndarray,
    ticks: int,
    *,
    step_seconds: float = 0.1,
    config: DebugConfig | None = None,
) -> LifeRun:
    """Run Game of Life from a boolean grid."""
    if initial.ndim != 2:
        raise ValueError("life grid must be 2-dimensional")
    context, metrics = _new_context(config or load_debug_config())
    grid = DoubleBuffer(initial.astype(bool), clone=np.copy)
    context.resources.insert_double_buffer(grid, element_type=np.ndarray)
    population = PopulationSystem()
    _drive(
        context,
        metrics,
        (
            SystemSpec("life", LifeSystem(), order=ROTATE_ORDER),
            SystemSpec("population", population, order=DISPLAY_ORDER),
        ),
        ticks=ticks,
        step_seconds=step_seconds,
    )
    return LifeRun(populations=population.populations, final=grid.current().copy())


def random_grid(size: int, *, density: float = 0.3, seed: int | None = None) -> np.ndarray:
    if size <= 0:
        raise ValueError("size must be > 0")
    rng = np.random.default_rng(seed)
    return rng.random((size, size)) < density


def _new_context(config: DebugConfig) -> tuple[RuntimeContext, MetricsSink]:
    metrics = create_metrics_collector(enabled=config.metrics_enabled)
    store = create_resource_store(trace_borrows=config.borrow_trace_enabled, metrics=metrics)
    return create_runtime_context(resources=store), metrics


def _drive(
    context: RuntimeContext,
    metrics: MetricsSink,
    systems: tuple[SystemSpec, ...],
    *,
    ticks: int,
    step_seconds: float,
) -> None:
    if ticks < 0:
        raise ValueError("ticks must be >= 0")
    loop = create_update_loop(fixed_step_seconds=step_seconds, metrics=metrics)
    for spec in systems:
        loop.add_system(spec)
    loop.start(context)
    executed = 0
    try:
        while executed < ticks:
            executed += loop.step(context, step_seconds)
    finally:
        loop.shutdown(context)
    snapshot = metrics.snapshot()
    if snapshot.ticks:
        _LOG.info(
            "demo_finished ticks=%d swaps=%s conflicts=%d slowest=%s",
            snapshot.ticks,
            snapshot.swaps,
            snapshot.borrow_conflicts,
            snapshot.slowest_systems(),
        )


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Double-buffered resource demos.")
    sub = parser.add_subparsers(dest="scenario", required=True)

    colors = sub.add_parser("colors", help="Rotate three colors once per step")
    colors.add_argument("--ticks", type=_positive_int, default=6)
    colors.add_argument("--step-seconds", type=float, default=1.0)

    life = sub.add_parser("life", help="Conway's Game of Life on a NumPy grid")
    life.add_argument("--size", type=_positive_int, default=16)
    life.add_argument("--ticks", type=_positive_int, default=20)
    life.add_argument("--density", type=float, default=0.3)
    life.add_argument("--seed", type=int, default=None)
    life.add_argument("--step-seconds", type=float, default=0.1)

    args = parser.parse_args(argv)
    if args.step_seconds <= 0.0:
        parser.error("--step-seconds must be > 0")
    config = load_debug_config()
    setup_logging(config)

    if args.scenario == "colors":
        shown = run_colors(args.ticks, step_seconds=args.step_seconds, config=config)
        for tick, frame in enumerate(shown, start=1):
            print(f"{tick:>3}: {' '.join(frame)}")
        return 0

    initial = random_grid(args.size, density=args.density, seed=args.seed)
    result = run_life(initial, args.ticks, step_seconds=args.step_seconds, config=config)
    print(f"populations: {' '.join(str(value) for value in result.populations)}")
    for row in result.final:
        print("".join("#" if cell else "." for cell in row))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
