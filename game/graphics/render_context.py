"""
Render surface contract.

Simulations draw through this small interface only, so they can run against a pygame
display, an off-screen surface, or an in-memory recorder in tests. The surface is
borrowed for the duration of one draw() call and never stored by gameplay code
beyond the simulation that was constructed with it.

Colors are "#RRGGBB" or "#RRGGBBAA" strings.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable

Color = Tuple[int, int, int, int]


class RenderSurfaceError(RuntimeError):
    """No usable drawing surface was supplied."""


@runtime_checkable
class RenderSurface(Protocol):
    width: int
    height: int

    def clear(self, color: str) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None: ...

    def fill_polygon(self, points: Sequence[Tuple[float, float]], color: str) -> None: ...

    def draw_text(
        self, text: str, x: float, y: float, color: str, size: int = 20, align: str = "left"
    ) -> None: ...


def parse_color(value: str) -> Color:
    """'#RRGGBB' / '#RRGGBBAA' -> (r, g, b, a)."""
    s = str(value).lstrip("#")
    if len(s) not in (6, 8):
        raise ValueError(f"bad color: {value!r}")
    r, g, b = int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
    a = int(s[6:8], 16) if len(s) == 8 else 255
    return (r, g, b, a)


def require_surface(surface) -> RenderSurface:
    """Reject a missing or incomplete surface before any state is built."""
    if surface is None:
        raise RenderSurfaceError("no drawing surface available")
    if not isinstance(surface, RenderSurface):
        raise RenderSurfaceError(f"{type(surface).__name__} does not implement the render surface contract")
    if surface.width <= 0 or surface.height <= 0:
        raise RenderSurfaceError(f"drawing surface has no area ({surface.width}x{surface.height})")
    return surface
