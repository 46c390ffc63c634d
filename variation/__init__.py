"""
Variation bundles: seeded per-playthrough perturbations of theme, difficulty,
modifiers and game-specific physics.
"""

from variation.errors import (
    UnknownGameError,
    VariationError,
    VariationFetchError,
    VariationValidationError,
)
from variation.schema import Difficulty, Theme, VariationBundle, parse_bundle

__all__ = [
    "Difficulty",
    "Theme",
    "UnknownGameError",
    "VariationBundle",
    "VariationError",
    "VariationFetchError",
    "VariationValidationError",
    "parse_bundle",
]
