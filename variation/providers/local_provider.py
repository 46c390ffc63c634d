"""
In-process provider: runs the generator directly (no server needed).
"""
from typing import Optional

from variation.generator import generate
from .base import BaseVariationProvider


class LocalProvider(BaseVariationProvider):
    """Generates bundles in-process. `seed` pins every bundle to one seed (replays)."""

    def __init__(self, seed: Optional[str] = None):
        self.seed = seed

    @property
    def name(self) -> str:
        return "local"

    def fetch(self, game_id: str) -> dict:
        return generate(game_id, seed=self.seed).to_dict()
