"""
Simulation time abstraction.

Simulations never read the wall clock. The engine hands them elapsed milliseconds and
a `StepClock` converts that into a whole number of fixed-size update steps, so the
same inputs always produce the same number of updates.
"""

from __future__ import annotations

from config import MAX_STEPS_PER_ADVANCE


class StepClock:
    """Fixed-step accumulator (one instance per simulation epoch)."""

    def __init__(self, step_ms: float, max_steps: int = MAX_STEPS_PER_ADVANCE):
        if step_ms <= 0:
            raise ValueError(f"step_ms must be positive, got {step_ms}")
        self.step_ms = float(step_ms)
        self.max_steps = int(max_steps)
        self._accum_ms = 0.0

    def feed(self, dt_ms: float) -> int:
        """
        Add elapsed time and return how many steps are due.

        Backlog beyond `max_steps` is dropped so a long stall never turns into a burst
        of catch-up updates.
        """
        self._accum_ms += max(0.0, float(dt_ms))
        due = int(self._accum_ms // self.step_ms)
        if due > self.max_steps:
            due = self.max_steps
            self._accum_ms = 0.0
        else:
            self._accum_ms -= due * self.step_ms
        return due

