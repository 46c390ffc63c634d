"""
Power-up rolls.
"""

BREAKOUT_POWER_UPS = ("extraBall", "largePaddle", "slowBall", "extraLife")
FLAPPY_POWER_UPS = ("shield", "slowTime", "doubleJump", "scoreBoost")


class PowerUpRoller:
    """Decides whether a drop happens and which kind, from one RNG stream."""

    def __init__(self, rng, chance: float, kinds: tuple, enabled: bool = True):
        self.rng = rng
        self.chance = chance
        self.kinds = kinds
        self.enabled = enabled

    def roll(self):
        """Returns a kind or None. Always consumes one draw when enabled."""
        if not self.enabled:
            return None
        if self.rng.random() >= self.chance:
            return None
        return self.kinds[int(self.rng.random() * len(self.kinds))]
