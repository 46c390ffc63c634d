"""
Game entities package.
"""
from .snake import Snake, FoodItem, FOOD_KINDS, DIRECTIONS
from .paddle import Paddle
from .ball import Ball
from .brick import Brick
from .bird import Bird
from .pipe import Pipe
from .powerup import PowerUp
