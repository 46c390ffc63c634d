"""
Collectible power-ups (Breakout drops, Flappy gap pickups).
"""

POWER_UP_SIZE = 20


class PowerUp:
    """A power-up of `kind` at (x, y) (top-left corner), optionally falling."""

    def __init__(self, kind: str, x: float, y: float, fall_speed: float = 0.0, size: float = POWER_UP_SIZE):
        self.kind = kind
        self.x = x
        self.y = y
        self.fall_speed = fall_speed
        self.size = size

    @property
    def rect(self) -> tuple:
        return (self.x, self.y, self.size, self.size)

    def step(self, dx: float = 0.0):
        self.x -= dx
        self.y += self.fall_speed

    def draw(self, surface, color: str, text_color: str):
        surface.fill_rect(self.x, self.y, self.size, self.size, color)
        surface.draw_text(self.kind[0].upper(), self.x + self.size / 2, self.y + self.size / 2,
                          text_color, size=14, align="center")
