"""Fixed-timestep pacing for the update loop."""

from __future__ import annotations


class FixedTimestep:
    """Turns wall-clock deltas into a whole number of fixed ticks.

    Leftover time carries over to the next frame. At most
    ``max_ticks_per_frame`` ticks run per call; surplus time beyond that is
    dropped so a long stall cannot trigger a burst of catch-up swaps.
    """

    def __init__(self, step_seconds: float, *, max_ticks_per_frame: int = 8) -> None:
        if step_seconds <= 0.0:
            raise ValueError("step_seconds must be > 0")
        if max_ticks_per_frame <= 0:
            raise ValueError("max_ticks_per_frame must be > 0")
        self.step_seconds = step_seconds
        self._max_ticks = max_ticks_per_frame
        self._overstep = 0.0

    @property
    def overstep_seconds(self) -> float:
        return self._overstep

    def overstep_fraction(self) -> float:
        """Progress toward the next tick, in ``[0, 1)``."""
        return self._overstep / self.step_seconds

    def advance(self, delta_seconds: float) -> int:
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        pending = self._overstep + delta_seconds
        ticks = int(pending // self.step_seconds)
        if ticks > self._max_ticks:
            ticks = self._max_ticks
            pending = ticks * self.step_seconds
        self._overstep = pending - ticks * self.step_seconds
        return ticks
