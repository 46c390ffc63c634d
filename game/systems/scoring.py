"""
Score and combo bookkeeping shared by the games.
"""
import math

from config import MAX_COMBO


def score_multiplier(bundle) -> float:
    """(1 + complexityBonus), doubled under doubleScore."""
    mult = 1.0 + bundle.difficulty.complexity_bonus
    if bundle.has_modifier("doubleScore"):
        mult *= 2
    return mult


class ScoreKeeper:
    """Running score plus a capped combo counter."""

    def __init__(self, multiplier: float = 1.0, max_combo: int = MAX_COMBO):
        self.multiplier = multiplier
        self.max_combo = max_combo
        self.score = 0
        self.combo = 0

    def bump_combo(self) -> int:
        self.combo = min(self.combo + 1, self.max_combo)
        return self.combo

    def reset_combo(self):
        self.combo = 0

    def award(self, base: float, factor: float = 1.0) -> int:
        """Add floor(base x multiplier x factor) points, returns the points added."""
        points = int(math.floor(base * self.multiplier * factor))
        self.score += points
        return points

    def add_flat(self, points: int):
        """Bonus points that bypass the multiplier."""
        self.score += int(points)
