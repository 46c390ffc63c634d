"""
Flappy bird.
"""
import math


class Bird:
    """The player. Positive velocity is downward."""

    def __init__(self, x: float, y: float, radius: float):
        self.x = x
        self.y = y
        self.radius = radius
        self.velocity = 0.0

    @property
    def rect(self) -> tuple:
        r = self.radius
        return (self.x - r, self.y - r, 2 * r, 2 * r)

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    @property
    def left(self) -> float:
        return self.x - self.radius

    def flap(self, impulse: float):
        """Replace the current velocity with `impulse` (negative is up)."""
        self.velocity = impulse

    def fall(self, gravity: float):
        self.velocity += gravity
        self.y += self.velocity
        assert math.isfinite(self.y), "bird position is not finite"

    def draw(self, surface, color: str, eye_color: str):
        surface.fill_circle(self.x, self.y, self.radius, color)
        surface.fill_circle(self.x + self.radius * 0.4, self.y - self.radius * 0.3, 2, eye_color)
