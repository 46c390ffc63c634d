"""
Flappy pipe pair.
"""


class Pipe:
    """A top and bottom pipe separated by a gap starting at `gap_top`."""

    def __init__(self, x: float, gap_top: float, gap: float, width: float, canvas_height: float):
        self.x = x
        self.gap_top = gap_top
        self.gap = gap
        self.width = width
        self.canvas_height = canvas_height
        self.passed = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_bottom(self) -> float:
        return self.gap_top + self.gap

    @property
    def top_rect(self) -> tuple:
        return (self.x, 0.0, self.width, self.gap_top)

    @property
    def bottom_rect(self) -> tuple:
        return (self.x, self.gap_bottom, self.width, self.canvas_height - self.gap_bottom)

    @property
    def gap_center(self) -> tuple:
        return (self.x + self.width / 2, self.gap_top + self.gap / 2)

    def move(self, dx: float):
        self.x -= dx

    def draw(self, surface, color: str, cap_color: str):
        for x, y, w, h in (self.top_rect, self.bottom_rect):
            surface.fill_rect(x, y, w, h, color)
        surface.fill_rect(self.x - 3, self.gap_top - 12, self.width + 6, 12, cap_color)
        surface.fill_rect(self.x - 3, self.gap_bottom, self.width + 6, 12, cap_color)
