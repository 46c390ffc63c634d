"""
Snake.

Grid movement at a fixed interval derived from the bundle's speed multiplier. Turns are
buffered; walls are fatal or wrap depending on `wallBehavior`; food of up to three kinds
sits on the board at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from config import (
    SNAKE_BASE_INTERVAL_MS,
    SNAKE_FAST_START_LENGTH,
    SNAKE_GHOST_FRAMES,
    SNAKE_INTERVAL_BOUNDS_MS,
    SNAKE_START_LENGTH,
)
from game.arcade.base import GameSimulation
from game.entities.snake import DIRECTIONS, FOOD_KINDS, FoodItem, Snake
from game.sim.contracts import DIRECTION_ACTIONS, Action
from game.sim.determinism import derive_rng
from game.systems.collision import in_bounds, wrap_cell
from game.systems.scoring import ScoreKeeper, score_multiplier


def snake_interval_ms(bundle) -> float:
    """clamp(round(150 / speedMultiplier), 50, 300), x1.5 under slowMotion."""
    lo, hi = SNAKE_INTERVAL_BOUNDS_MS
    interval = max(lo, min(hi, round(SNAKE_BASE_INTERVAL_MS / bundle.difficulty.speed_multiplier)))
    if bundle.has_modifier("slowMotion"):
        interval *= 1.5
    return float(interval)


@dataclass
class SnakeState:
    width: int
    height: int
    wrap: bool
    food_kinds: tuple
    snake: Snake
    rng: object
    scorer: ScoreKeeper
    inverted: bool = False
    ghost_mode: bool = False
    foods: list = field(default_factory=list)
    step: int = 0
    ghost_frames: int = 0

    def food_at(self, cell: tuple):
        for food in self.foods:
            if food.cell == cell:
                return food
        return None

    def free_cells(self) -> list:
        taken = set(self.snake.body)
        taken.update(f.cell for f in self.foods)
        return [(x, y) for y in range(self.height) for x in range(self.width) if (x, y) not in taken]

    def to_dict(self) -> dict:
        return {
            "grid": [self.width, self.height],
            "wrap": self.wrap,
            "body": [list(c) for c in self.snake.body],
            "heading": list(self.snake.heading),
            "pending": [list(d) for d in self.snake.pending],
            "foods": [[f.kind, f.x, f.y] for f in self.foods],
            "score": self.scorer.score,
            "step": self.step,
            "ghostFrames": self.ghost_frames,
        }


class SnakeSimulation(GameSimulation):
    game_id = "snake"
    start_actions = DIRECTION_ACTIONS + (Action.PRIMARY, Action.FLAP)
    controls_hint = "Arrow keys to steer"

    def new_state(self, bundle) -> SnakeState:
        width = bundle.setting("gridWidth")
        height = bundle.setting("gridHeight")
        length = SNAKE_FAST_START_LENGTH if bundle.has_modifier("fastStart") else SNAKE_START_LENGTH
        kinds = tuple(name for name, _, _ in FOOD_KINDS[: bundle.setting("foodTypes")])

        state = SnakeState(
            width=width,
            height=height,
            wrap=bundle.setting("wallBehavior") == "wrap",
            food_kinds=kinds,
            snake=Snake((width // 2, height // 2), length),
            rng=derive_rng(bundle.seed, "food"),
            scorer=ScoreKeeper(score_multiplier(bundle)),
            inverted=bundle.has_modifier("invertedControls"),
            ghost_mode=bundle.has_modifier("ghostMode"),
        )
        for kind in kinds:
            self._place_food(state, kind)
        return state

    def step_interval_ms(self) -> float:
        return snake_interval_ms(self.bundle)

    def _place_food(self, state: SnakeState, kind: str):
        free = state.free_cells()
        if not free:
            return
        x, y = free[int(state.rng.random() * len(free))]
        state.foods.append(FoodItem(kind, x, y))

    def on_action(self, action: Action) -> bool:
        if action not in DIRECTION_ACTIONS:
            return False
        dx, dy = DIRECTIONS[action.value]
        if self.state.inverted:
            dx, dy = -dx, -dy
        return self.state.snake.queue_turn((dx, dy))

    def update(self):
        st = self.state
        st.step += 1

        hx, hy = st.snake.head
        dx, dy = st.snake.take_heading()
        new_head = (hx + dx, hy + dy)

        if not in_bounds(new_head, st.width, st.height):
            if not st.wrap:
                self.end()
                return
            new_head = wrap_cell(new_head, st.width, st.height)

        # Every current segment counts, the tail included.
        if st.snake.occupies(new_head) and st.ghost_frames == 0:
            self.end()
            return
        if st.ghost_frames > 0:
            st.ghost_frames -= 1

        food = st.food_at(new_head)
        st.snake.move_to(new_head, grow=food is not None)

        if food is not None:
            self._eat(st, food)
            if len(st.snake) >= st.width * st.height:
                self.end(won=True)

    def _eat(self, st: SnakeState, food: FoodItem):
        st.foods.remove(food)
        st.scorer.award(food.points)
        if st.ghost_mode:
            st.ghost_frames = SNAKE_GHOST_FRAMES
        self._place_food(st, food.kind)

    def draw_scene(self, surface):
        st = self.state
        theme = self.bundle.theme
        surface.clear(theme.background_color)
        cell = min(surface.width / st.width, surface.height / st.height)
        for food in st.foods:
            food.draw(surface, cell, theme.accent_color)
        alpha = "80" if st.ghost_frames > 0 else ""
        st.snake.draw(surface, cell, theme.primary_color, theme.secondary_color, alpha)

    def hud_lines(self) -> list:
        return [f"Score: {self.score}", f"Length: {len(self.state.snake)}"]
