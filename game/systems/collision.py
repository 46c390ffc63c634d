"""
Collision helpers.

Rects are (x, y, w, h) tuples. Overlap is exclusive: rects that only share an edge
do not collide.
"""


def rects_overlap(a: tuple, b: tuple) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def in_bounds(cell: tuple, width: int, height: int) -> bool:
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def wrap_cell(cell: tuple, width: int, height: int) -> tuple:
    """Re-enter at the opposite edge on the same row/column."""
    x, y = cell
    return (x % width, y % height)
