"""
Arcade simulations and the registry used to construct them by game id.
"""
from game.arcade.base import GameSimulation
from game.arcade.breakout import BreakoutSimulation
from game.arcade.flappy import FlappySimulation
from game.arcade.snake import SnakeSimulation
from variation.errors import UnknownGameError

SIMULATIONS = {
    "snake": SnakeSimulation,
    "breakout": BreakoutSimulation,
    "flappy": FlappySimulation,
}


def create_simulation(game_id: str, surface, loader, **kwargs) -> GameSimulation:
    """Construct the simulation for `game_id` (raises RenderSurfaceError on a bad surface)."""
    cls = SIMULATIONS.get(game_id)
    if cls is None:
        raise UnknownGameError(game_id)
    return cls(surface, loader, **kwargs)
