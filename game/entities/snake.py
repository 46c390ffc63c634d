"""
Snake and food entities (grid coordinates).
"""
from collections import deque

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# kind -> (points, shape); the first `foodTypes` kinds are in play.
FOOD_KINDS = (
    ("apple", 10, "square"),
    ("berry", 20, "circle"),
    ("star", 50, "diamond"),
)

MAX_PENDING_TURNS = 2


class FoodItem:
    """A piece of food on one grid cell."""

    def __init__(self, kind: str, x: int, y: int):
        self.kind = kind
        self.x = x
        self.y = y
        for name, points, shape in FOOD_KINDS:
            if name == kind:
                self.points = points
                self.shape = shape
                break
        else:
            raise ValueError(f"unknown food kind: {kind}")

    @property
    def cell(self) -> tuple:
        return (self.x, self.y)

    def draw(self, surface, cell_px: float, color: str):
        px = self.x * cell_px
        py = self.y * cell_px
        half = cell_px / 2
        if self.shape == "circle":
            surface.fill_circle(px + half, py + half, half - 1, color)
        elif self.shape == "diamond":
            surface.fill_polygon(
                [(px + half, py + 1), (px + cell_px - 1, py + half),
                 (px + half, py + cell_px - 1), (px + 1, py + half)],
                color,
            )
        else:
            surface.fill_rect(px + 1, py + 1, cell_px - 2, cell_px - 2, color)


class Snake:
    """
    Body cells head-first, a current heading and a small buffer of pending turns.

    A queued turn is checked against the last *buffered* heading, so two quick
    inputs (e.g. up then left while heading right) are both accepted while a
    reversal is not.
    """

    def __init__(self, head: tuple, length: int, heading: tuple = DIRECTIONS["right"]):
        hx, hy = head
        dx, dy = heading
        self.body = deque((hx - dx * i, hy - dy * i) for i in range(length))
        self.heading = heading
        self.pending = deque()

    @property
    def head(self) -> tuple:
        return self.body[0]

    def __len__(self):
        return len(self.body)

    def queue_turn(self, direction: tuple) -> bool:
        """Buffer a turn; reversals and repeats of the last buffered heading are rejected."""
        if len(self.pending) >= MAX_PENDING_TURNS:
            return False
        last = self.pending[-1] if self.pending else self.heading
        if direction == last or (direction[0] == -last[0] and direction[1] == -last[1]):
            return False
        self.pending.append(direction)
        return True

    def take_heading(self) -> tuple:
        """Consume one buffered turn (if any) and return the heading for this step."""
        if self.pending:
            self.heading = self.pending.popleft()
        return self.heading

    def occupies(self, cell: tuple) -> bool:
        return cell in self.body

    def move_to(self, new_head: tuple, grow: bool = False):
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    def draw(self, surface, cell_px: float, head_color: str, body_color: str, alpha: str = ""):
        for i, (x, y) in enumerate(self.body):
            color = head_color if i == 0 else body_color
            surface.fill_rect(x * cell_px + 1, y * cell_px + 1, cell_px - 2, cell_px - 2, color + alpha)
