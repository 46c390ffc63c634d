"""
pygame implementation of the render surface contract.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import pygame

from game.graphics.font_cache import render_text_cached
from game.graphics.render_context import parse_color


class PygameSurface:
    """Adapts a pygame.Surface (usually the display) to the render surface contract."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def _target(self, color):
        """Return (surface to draw on, rgba). Translucent colors draw on a scratch layer."""
        rgba = parse_color(color)
        if rgba[3] == 255:
            return self.surface, rgba
        layer = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        return layer, rgba

    def _commit(self, target):
        if target is not self.surface:
            self.surface.blit(target, (0, 0))

    def clear(self, color: str) -> None:
        self.surface.fill(parse_color(color)[:3])

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        target, rgba = self._target(color)
        pygame.draw.rect(target, rgba, pygame.Rect(int(x), int(y), int(round(w)), int(round(h))))
        self._commit(target)

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        target, rgba = self._target(color)
        pygame.draw.circle(target, rgba, (int(x), int(y)), max(1, int(radius)))
        self._commit(target)

    def fill_polygon(self, points: Sequence[Tuple[float, float]], color: str) -> None:
        target, rgba = self._target(color)
        pygame.draw.polygon(target, rgba, [(int(px), int(py)) for px, py in points])
        self._commit(target)

    def draw_text(self, text: str, x: float, y: float, color: str, size: int = 20, align: str = "left") -> None:
        surf = render_text_cached(size, text, parse_color(color))
        rect = surf.get_rect()
        if align == "center":
            rect.center = (int(x), int(y))
        elif align == "right":
            rect.midright = (int(x), int(y))
        else:
            rect.midleft = (int(x), int(y))
        self.surface.blit(surf, rect)
