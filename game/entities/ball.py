"""
Breakout ball.
"""
import math


class Ball:
    """Circle with a per-step velocity."""

    def __init__(self, x: float, y: float, dx: float, dy: float, radius: float, speed: float):
        self.x = x
        self.y = y
        self.dx = dx
        self.dy = dy
        self.radius = radius
        # Nominal speed; the paddle bounce scales horizontal deflection by it.
        self.speed = speed

    @property
    def rect(self) -> tuple:
        r = self.radius
        return (self.x - r, self.y - r, 2 * r, 2 * r)

    def step(self):
        self.x += self.dx
        self.y += self.dy
        assert math.isfinite(self.x) and math.isfinite(self.y), "ball position is not finite"

    def scale_velocity(self, factor: float):
        self.dx *= factor
        self.dy *= factor
        self.speed *= factor

    def mirrored(self) -> "Ball":
        return Ball(self.x, self.y, -self.dx, self.dy, self.radius, self.speed)

    def draw(self, surface, color: str):
        surface.fill_circle(self.x, self.y, self.radius, color)
