"""
Breakout paddle.
"""


class Paddle:
    """Horizontal paddle clamped to [0, canvas_width]."""

    def __init__(self, width: float, height: float, y: float, canvas_width: float):
        self.width = width
        self.height = height
        self.y = y
        self.canvas_width = canvas_width
        self.x = (canvas_width - width) / 2

    @property
    def center(self) -> float:
        return self.x + self.width / 2

    @property
    def rect(self) -> tuple:
        return (self.x, self.y, self.width, self.height)

    def _clamp(self):
        self.x = max(0.0, min(self.canvas_width - self.width, self.x))

    def move(self, dx: float):
        self.x += dx
        self._clamp()

    def center_on(self, x: float):
        self.x = x - self.width / 2
        self._clamp()

    def resize(self, width: float):
        """Change width keeping the center."""
        center = self.center
        self.width = width
        self.center_on(center)

    def offset_of(self, x: float) -> float:
        """Where `x` hits the paddle: -1 (left edge) .. 0 (center) .. 1 (right edge)."""
        half = self.width / 2
        return max(-1.0, min(1.0, (x - self.center) / half))

    def draw(self, surface, color: str):
        surface.fill_rect(self.x, self.y, self.width, self.height, color)
        surface.fill_rect(self.x + 1, self.y + 1, self.width - 2, 2, "#ffffff4d")
