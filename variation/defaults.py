"""
Fallback bundles used when a fetch fails or a payload does not validate.
"""

from __future__ import annotations

from variation.errors import UnknownGameError
from variation.schema import GAME_IDS, Difficulty, Theme, VariationBundle
from variation.themes import THEME_PALETTE

DEFAULT_THEME = "classic"


def default_theme() -> Theme:
    primary, secondary, accent, background = THEME_PALETTE[DEFAULT_THEME]
    return Theme(DEFAULT_THEME, primary, secondary, accent, background)


def default_bundle(game_id: str) -> VariationBundle:
    """Normal difficulty, no modifiers, every gameSpecific key at its default."""
    if game_id not in GAME_IDS:
        raise UnknownGameError(game_id)
    return VariationBundle(
        game_id=game_id,
        seed=f"default-{game_id}",
        theme=default_theme(),
        difficulty=Difficulty(level="normal", speed_multiplier=1.0, complexity_bonus=0.0),
        modifiers=frozenset(),
        game_specific={},
    )
