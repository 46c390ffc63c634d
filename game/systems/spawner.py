"""
Pipe spawning system (Flappy).
"""
import math

from config import FLAPPY_PIPE_MARGIN, FLAPPY_PIPE_WIDTH
from game.entities.pipe import Pipe


class PipeSpawner:
    """Emits a pipe every `interval` steps with a gap drawn from its own RNG stream."""

    def __init__(self, rng, canvas_width: float, canvas_height: float, gap: float,
                 spacing: float, pipe_speed: float):
        # Deterministic stream for gap placement.
        self.rng = rng
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.gap = gap
        self.spacing = spacing
        self.interval = max(1, math.ceil(spacing / pipe_speed))
        self.timer = 0.0

    def gap_top_range(self) -> tuple:
        lo = FLAPPY_PIPE_MARGIN
        hi = self.canvas_height - self.gap - FLAPPY_PIPE_MARGIN
        return lo, hi

    def make_pipe(self, x: float) -> Pipe:
        lo, hi = self.gap_top_range()
        gap_top = lo + self.rng.random() * (hi - lo)
        return Pipe(x, gap_top, self.gap, FLAPPY_PIPE_WIDTH, self.canvas_height)

    def prespawn(self, count: int) -> list:
        """`count` pipes already queued up one spacing apart; regular spawns resume after them."""
        pipes = [self.make_pipe(self.canvas_width + i * self.spacing) for i in range(count)]
        self.timer = -(count - 1) * self.interval
        return pipes

    def update(self, rate: float = 1.0) -> list:
        """
        Advance one step and return newly spawned pipes.

        `rate` slows the timer together with the pipes (slowTime) so spacing holds.
        """
        self.timer += rate
        if self.timer >= self.interval:
            self.timer -= self.interval
            return [self.make_pipe(self.canvas_width)]
        return []
