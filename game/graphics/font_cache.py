"""
Lightweight pygame font cache.

Creating pygame.font.Font objects inside per-frame render loops is expensive and can
cause stutter. Fonts are cached by size and static text surfaces by size/text/color.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

_FONT_CACHE: Dict[int, pygame.font.Font] = {}
_TEXT_CACHE: Dict[Tuple[int, str, Tuple[int, int, int, int]], pygame.Surface] = {}
_TEXT_CACHE_MAX = 512


def get_font(size: int) -> pygame.font.Font:
    """Get (and cache) the default font at a given size. Safe to call after pygame.font.init()."""
    s = int(size)
    font = _FONT_CACHE.get(s)
    if font is None:
        font = pygame.font.Font(None, s)
        _FONT_CACHE[s] = font
    return font


def render_text_cached(size: int, text: str, color: Tuple[int, int, int, int]) -> pygame.Surface:
    """
    Render and cache a text surface.

    Score labels change often, so the cache is bounded (oldest entry evicted first).
    """
    key = (int(size), str(text), tuple(int(c) for c in color))
    surf = _TEXT_CACHE.get(key)
    if surf is None:
        if len(_TEXT_CACHE) >= _TEXT_CACHE_MAX:
            _TEXT_CACHE.pop(next(iter(_TEXT_CACHE)))
        surf = get_font(size).render(str(text), True, key[2][:3])
        if key[2][3] < 255:
            surf.set_alpha(key[2][3])
        _TEXT_CACHE[key] = surf
    return surf


def clear_caches() -> None:
    _FONT_CACHE.clear()
    _TEXT_CACHE.clear()
