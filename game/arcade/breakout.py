"""
Breakout.

One or more balls, a paddle whose contact offset steers the bounce, and bricks that
need `1 + floor(complexityBonus x 4)` hits. Losing a ball only costs a life when it was
the last one in play.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from config import (
    BREAKOUT_BALL_RADIUS,
    BREAKOUT_BALL_SPEED,
    BREAKOUT_BASE_PADDLE_WIDTH,
    BREAKOUT_BRICK_HEIGHT,
    BREAKOUT_BRICK_POINTS,
    BREAKOUT_BRICK_TOP,
    BREAKOUT_LIVES,
    BREAKOUT_PADDLE_HEIGHT,
    BREAKOUT_PADDLE_OFFSET,
    BREAKOUT_PADDLE_STEP,
    BREAKOUT_POWER_UP_CHANCE,
    BREAKOUT_POWER_UP_FALL_SPEED,
    FRAME_STEP_MS,
    MAX_COMBO,
)
from game.arcade.base import GameSimulation
from game.entities import Ball, Brick, Paddle, PowerUp
from game.entities.powerup import POWER_UP_SIZE
from game.sim.contracts import Action
from game.sim.determinism import derive_rng
from game.systems.collision import rects_overlap
from game.systems.powerups import BREAKOUT_POWER_UPS, PowerUpRoller
from game.systems.scoring import ScoreKeeper, score_multiplier

BRICK_SIDE_MARGIN = 10
BRICK_GAP = 2


def brick_max_hits(bundle) -> int:
    return 1 + int(bundle.difficulty.complexity_bonus * 4)


@dataclass
class BreakoutState:
    width: float
    height: float
    paddle: Paddle
    ball_speed: float
    paddle_step: float
    ball_rng: object
    drops: PowerUpRoller
    scorer: ScoreKeeper
    inverted: bool = False
    ghost_mode: bool = False
    multiball: bool = False
    balls: list = field(default_factory=list)
    bricks: list = field(default_factory=list)
    power_ups: list = field(default_factory=list)
    lives: int = BREAKOUT_LIVES
    step: int = 0

    def to_dict(self) -> dict:
        return {
            "paddle": [self.paddle.x, self.paddle.width],
            "balls": [[b.x, b.y, b.dx, b.dy] for b in self.balls],
            "bricks": [[b.x, b.y, b.hits] for b in self.bricks],
            "powerUps": [[p.kind, p.x, p.y] for p in self.power_ups],
            "lives": self.lives,
            "score": self.scorer.score,
            "combo": self.scorer.combo,
            "step": self.step,
        }


class BreakoutSimulation(GameSimulation):
    game_id = "breakout"
    start_actions = (Action.LEFT, Action.RIGHT, Action.PRIMARY, Action.FLAP)
    controls_hint = "Left/Right or mouse to move"

    def new_state(self, bundle) -> BreakoutState:
        width, height = self.canvas_size
        speed = bundle.difficulty.speed_multiplier
        slow = bundle.has_modifier("slowMotion")

        paddle_w = min(BREAKOUT_BASE_PADDLE_WIDTH * bundle.setting("paddleSize"), width / 2)
        paddle_y = height - BREAKOUT_PADDLE_OFFSET - BREAKOUT_PADDLE_HEIGHT

        ball_speed = BREAKOUT_BALL_SPEED * speed * bundle.setting("ballSpeed")
        paddle_step = BREAKOUT_PADDLE_STEP * speed
        if slow:
            ball_speed *= 0.5
            paddle_step *= 0.5
        if bundle.has_modifier("fastStart"):
            ball_speed *= 1.25

        state = BreakoutState(
            width=width,
            height=height,
            paddle=Paddle(paddle_w, BREAKOUT_PADDLE_HEIGHT, paddle_y, width),
            ball_speed=ball_speed,
            paddle_step=paddle_step,
            ball_rng=derive_rng(bundle.seed, "ball"),
            drops=PowerUpRoller(
                derive_rng(bundle.seed, "powerups"),
                BREAKOUT_POWER_UP_CHANCE,
                BREAKOUT_POWER_UPS,
                enabled=bundle.setting("powerUps"),
            ),
            scorer=ScoreKeeper(score_multiplier(bundle)),
            inverted=bundle.has_modifier("invertedControls"),
            ghost_mode=bundle.has_modifier("ghostMode"),
            multiball=bundle.setting("multiball"),
        )
        state.bricks = self._build_bricks(bundle, width)
        self._serve(state)
        return state

    def _build_bricks(self, bundle, width: float) -> list:
        rows = bundle.setting("brickRows")
        cols = bundle.setting("brickCols")
        hits = brick_max_hits(bundle)
        theme = bundle.theme
        colors = (theme.primary_color, theme.secondary_color, theme.accent_color)
        cell_w = (width - 2 * BRICK_SIDE_MARGIN) / cols
        bricks = []
        for row in range(rows):
            for col in range(cols):
                bricks.append(Brick(
                    BRICK_SIDE_MARGIN + col * cell_w,
                    BREAKOUT_BRICK_TOP + row * BREAKOUT_BRICK_HEIGHT,
                    cell_w - BRICK_GAP,
                    BREAKOUT_BRICK_HEIGHT - BRICK_GAP,
                    hits,
                    colors[row % len(colors)],
                ))
        return bricks

    def _serve(self, st: BreakoutState):
        """New ball(s) from the canvas center heading up, horizontal sign from the ball stream."""
        sign = 1 if st.ball_rng.random() < 0.5 else -1
        s = st.ball_speed
        ball = Ball(st.width / 2, st.height / 2, s * sign, -s, BREAKOUT_BALL_RADIUS, s)
        st.balls = [ball]
        if st.multiball:
            st.balls.append(ball.mirrored())

    def step_interval_ms(self) -> float:
        return FRAME_STEP_MS

    def on_action(self, action: Action) -> bool:
        if action not in (Action.LEFT, Action.RIGHT):
            return False
        direction = -1 if action == Action.LEFT else 1
        if self.state.inverted:
            direction = -direction
        self.state.paddle.move(direction * self.state.paddle_step)
        return True

    def on_pointer(self, x: float) -> bool:
        st = self.state
        if st.inverted:
            x = st.width - x
        st.paddle.center_on(x)
        return True

    def update(self):
        st = self.state
        st.step += 1

        for ball in list(st.balls):
            ball.step()
            self._bounce_walls(st, ball)
            self._bounce_paddle(st, ball)
            for brick in st.bricks:
                if rects_overlap(ball.rect, brick.rect):
                    self._hit_brick(st, ball, brick)
                    break
            if ball.y - ball.radius >= st.height:
                st.balls.remove(ball)

        self._update_power_ups(st)

        if not st.bricks:
            self.end(won=True)
            return
        if not st.balls:
            st.lives -= 1
            st.scorer.reset_combo()
            if st.lives > 0:
                self._serve(st)
            else:
                self.end()

    def _bounce_walls(self, st: BreakoutState, ball: Ball):
        r = ball.radius
        if ball.x - r <= 0:
            ball.x = r
            ball.dx = abs(ball.dx)
        elif ball.x + r >= st.width:
            ball.x = st.width - r
            ball.dx = -abs(ball.dx)
        if ball.y - r <= 0:
            ball.y = r
            ball.dy = abs(ball.dy)

    def _bounce_paddle(self, st: BreakoutState, ball: Ball):
        paddle = st.paddle
        if ball.dy <= 0 or not rects_overlap(ball.rect, paddle.rect):
            return
        ball.dx = ball.speed * paddle.offset_of(ball.x)
        ball.dy = -abs(ball.dy)
        ball.y = paddle.y - ball.radius

    def _hit_brick(self, st: BreakoutState, ball: Ball, brick: Brick):
        destroyed = brick.hit()
        combo = st.scorer.bump_combo()
        st.scorer.award(BREAKOUT_BRICK_POINTS, min(combo, MAX_COMBO))
        # A ghost ball passes through the brick it destroys.
        if not (destroyed and st.ghost_mode):
            self._bounce_brick(ball, brick)
        if destroyed:
            st.bricks.remove(brick)
            kind = st.drops.roll()
            if kind is not None:
                cx, _ = brick.center
                st.power_ups.append(PowerUp(kind, cx - POWER_UP_SIZE / 2, brick.y + brick.height,
                                            fall_speed=BREAKOUT_POWER_UP_FALL_SPEED))

    def _bounce_brick(self, ball: Ball, brick: Brick):
        """Reflect along the shallower overlap and move the ball clear, so one contact is one hit."""
        bx, by, bw, bh = ball.rect
        overlap_x = min(bx + bw, brick.x + brick.width) - max(bx, brick.x)
        overlap_y = min(by + bh, brick.y + brick.height) - max(by, brick.y)
        cx, cy = brick.center
        r = ball.radius
        if overlap_x < overlap_y:
            if ball.x < cx:
                ball.x = brick.x - r
                ball.dx = -abs(ball.dx)
            else:
                ball.x = brick.x + brick.width + r
                ball.dx = abs(ball.dx)
        elif ball.y < cy:
            ball.y = brick.y - r
            ball.dy = -abs(ball.dy)
        else:
            ball.y = brick.y + brick.height + r
            ball.dy = abs(ball.dy)

    def _update_power_ups(self, st: BreakoutState):
        for power_up in list(st.power_ups):
            power_up.step()
            if rects_overlap(power_up.rect, st.paddle.rect):
                st.power_ups.remove(power_up)
                self.apply_power_up(power_up.kind)
            elif power_up.y >= st.height:
                st.power_ups.remove(power_up)

    def apply_power_up(self, kind: str):
        st = self.state
        if kind == "extraBall":
            if st.balls:
                st.balls.append(st.balls[0].mirrored())
        elif kind == "largePaddle":
            st.paddle.resize(min(st.paddle.width * 1.5, st.width / 2))
        elif kind == "slowBall":
            for ball in st.balls:
                ball.scale_velocity(0.7)
        elif kind == "extraLife":
            st.lives += 1
        else:
            raise ValueError(f"unknown power-up: {kind}")

    def draw_scene(self, surface):
        st = self.state
        theme = self.bundle.theme
        surface.clear(theme.background_color)
        for brick in st.bricks:
            brick.draw(surface, brick.color, theme.secondary_color, theme.background_color)
        st.paddle.draw(surface, theme.primary_color)
        alpha = "80" if st.ghost_mode else ""
        for ball in st.balls:
            ball.draw(surface, theme.accent_color + alpha)
        for power_up in st.power_ups:
            power_up.draw(surface, theme.accent_color, theme.background_color)

    def hud_lines(self) -> list:
        lines = [f"Score: {self.score}", f"Lives: {self.state.lives}"]
        if self.state.scorer.combo > 1:
            lines.append(f"Combo x{self.state.scorer.combo}")
        return lines
