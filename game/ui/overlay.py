"""
Simulation overlays: loading placeholder, ready prompt, end-of-game panel and HUD.

Everything draws through the render surface contract so the same code runs against
pygame and the in-memory test surface.
"""
from __future__ import annotations

from config import COLOR_LOADING_BG, COLOR_MENU_TEXT, COLOR_OVERLAY, COLOR_MENU_ACCENT


def draw_loading(surface, title: str):
    surface.clear(COLOR_LOADING_BG)
    cx, cy = surface.width / 2, surface.height / 2
    surface.draw_text(title, cx, cy - 20, COLOR_MENU_TEXT, size=32, align="center")
    surface.draw_text("Loading variation...", cx, cy + 20, COLOR_MENU_TEXT, size=20, align="center")


def draw_ready(surface, hint: str, accent: str):
    """Translucent banner with the controls hint; the frozen first frame shows underneath."""
    cx, cy = surface.width / 2, surface.height / 2
    surface.fill_rect(0, cy - 40, surface.width, 80, COLOR_OVERLAY)
    surface.draw_text("Ready", cx, cy - 14, accent, size=32, align="center")
    surface.draw_text(hint, cx, cy + 18, COLOR_MENU_TEXT, size=18, align="center")


def draw_end(surface, won: bool, score: int, accent: str):
    surface.fill_rect(0, 0, surface.width, surface.height, COLOR_OVERLAY)
    cx, cy = surface.width / 2, surface.height / 2
    title = "You Win!" if won else "Game Over"
    surface.draw_text(title, cx, cy - 40, accent, size=40, align="center")
    surface.draw_text(f"Score: {score}", cx, cy + 4, COLOR_MENU_TEXT, size=24, align="center")
    surface.draw_text("Press R to play a new variation", cx, cy + 40, COLOR_MENU_TEXT, size=18, align="center")


def draw_hud(surface, lines, color: str, fallback: bool = False):
    """Top-left text lines (score, lives, combo...), plus a marker when running on defaults."""
    y = 14
    for line in lines:
        surface.draw_text(line, 10, y, color, size=20)
        y += 20
    if fallback:
        surface.draw_text("offline: default variation", surface.width - 10, 14, COLOR_MENU_ACCENT, size=16, align="right")
