"""
Fixed theme palette. Cosmetic only: themes never affect physics.
"""

from __future__ import annotations

import re

# name -> (primary, secondary, accent, background)
THEME_PALETTE = {
    "classic": ("#4caf50", "#2e7d32", "#ffeb3b", "#1a1a1a"),
    "neon": ("#39ff14", "#ff00ff", "#00ffff", "#0d0221"),
    "ocean": ("#4fc3f7", "#0288d1", "#ffca28", "#01234a"),
    "forest": ("#8bc34a", "#33691e", "#ffb74d", "#1b2e1b"),
    "sunset": ("#ff7043", "#d84315", "#ffd54f", "#2b1331"),
    "candy": ("#f48fb1", "#ce93d8", "#80deea", "#3b1f3f"),
    "retro": ("#ffb000", "#ff6f00", "#e0e0e0", "#202020"),
    "midnight": ("#7986cb", "#3949ab", "#f06292", "#0b0c1e"),
    "desert": ("#ffcc80", "#e65100", "#4dd0e1", "#3e2723"),
    "arctic": ("#e1f5fe", "#81d4fa", "#ff5252", "#263238"),
}

THEME_NAMES = tuple(THEME_PALETTE.keys())

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_hex_color(value) -> bool:
    return isinstance(value, str) and bool(HEX_COLOR_RE.match(value))
