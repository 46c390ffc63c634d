"""
Breakout brick.
"""


class Brick:
    """A brick that takes `max_hits` hits to destroy."""

    def __init__(self, x: float, y: float, width: float, height: float, max_hits: int, color: str):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.max_hits = max_hits
        self.hits = max_hits
        self.color = color

    @property
    def rect(self) -> tuple:
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self) -> tuple:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def hit(self) -> bool:
        """Take one hit, returns True if destroyed."""
        self.hits = max(0, self.hits - 1)
        return self.hits == 0

    def draw(self, surface, color: str, damaged_color: str, text_color: str):
        # Bricks below half strength switch to the damaged color.
        fill = damaged_color if self.hits / self.max_hits < 0.5 else color
        surface.fill_rect(self.x, self.y, self.width, self.height, fill)
        if self.max_hits > 1:
            cx, cy = self.center
            surface.draw_text(str(self.hits), cx, cy, text_color, size=12, align="center")
