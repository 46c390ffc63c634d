"""
Game systems package.
"""
from .collision import rects_overlap, wrap_cell, in_bounds
from .scoring import ScoreKeeper, score_multiplier
from .spawner import PipeSpawner
from .powerups import PowerUpRoller, BREAKOUT_POWER_UPS, FLAPPY_POWER_UPS
