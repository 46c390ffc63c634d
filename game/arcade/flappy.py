"""
Flappy Bird.

Gravity pulls the bird down every step, a flap replaces its velocity, and pipes with a
randomly placed gap scroll in from the right. Touching edges do not count as a hit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from config import (
    FLAPPY_BIRD_RADIUS,
    FLAPPY_BIRD_X,
    FLAPPY_GHOST_FRAMES,
    FLAPPY_POWER_UP_CHANCE,
    FLAPPY_POWER_UP_STEPS,
    FRAME_STEP_MS,
)
from game.arcade.base import GameSimulation
from game.entities import Bird, PowerUp
from game.entities.powerup import POWER_UP_SIZE
from game.sim.contracts import Action
from game.sim.determinism import derive_rng
from game.systems.collision import rects_overlap
from game.systems.powerups import FLAPPY_POWER_UPS, PowerUpRoller
from game.systems.scoring import ScoreKeeper, score_multiplier
from game.systems.spawner import PipeSpawner

FAST_START_PIPES = 3
SLOW_MOTION_FACTOR = 0.6
SLOW_TIME_FACTOR = 0.3
DOUBLE_JUMP_FLAPS = 3
DOUBLE_JUMP_BOOST = 1.5
SCORE_BOOST_POINTS = 5
# Pipes are dropped once this far past the left edge.
OFFSCREEN_MARGIN = 50


@dataclass
class FlappyState:
    width: float
    height: float
    bird: Bird
    gravity: float
    jump: float
    pipe_speed: float
    spawner: PipeSpawner
    pickups: PowerUpRoller
    scorer: ScoreKeeper
    inverted: bool = False
    pipes: list = field(default_factory=list)
    power_ups: list = field(default_factory=list)
    step: int = 0
    ghost_steps: int = 0
    shield_steps: int = 0
    slow_steps: int = 0
    double_jumps: int = 0

    @property
    def immune(self) -> bool:
        return self.ghost_steps > 0 or self.shield_steps > 0

    def to_dict(self) -> dict:
        return {
            "bird": [self.bird.x, self.bird.y, self.bird.velocity],
            "pipes": [[p.x, p.gap_top, p.passed] for p in self.pipes],
            "powerUps": [[p.kind, p.x, p.y] for p in self.power_ups],
            "score": self.scorer.score,
            "step": self.step,
            "ghostSteps": self.ghost_steps,
            "shieldSteps": self.shield_steps,
            "slowSteps": self.slow_steps,
            "doubleJumps": self.double_jumps,
        }


class FlappySimulation(GameSimulation):
    game_id = "flappy"
    start_actions = (Action.FLAP, Action.UP, Action.PRIMARY)
    controls_hint = "Space / Up / click to flap"

    def new_state(self, bundle) -> FlappyState:
        width, height = self.canvas_size
        speed = bundle.difficulty.speed_multiplier
        slow = SLOW_MOTION_FACTOR if bundle.has_modifier("slowMotion") else 1.0

        gravity = bundle.setting("gravity") * speed * slow
        jump = bundle.setting("jumpForce") * speed * slow
        pipe_speed = bundle.setting("pipeSpeed") * speed * slow

        state = FlappyState(
            width=width,
            height=height,
            bird=Bird(FLAPPY_BIRD_X, height / 2, FLAPPY_BIRD_RADIUS),
            gravity=gravity,
            jump=jump,
            pipe_speed=pipe_speed,
            spawner=PipeSpawner(
                derive_rng(bundle.seed, "pipes"),
                width,
                height,
                bundle.setting("pipeGap"),
                bundle.setting("pipeSpacing"),
                pipe_speed,
            ),
            pickups=PowerUpRoller(
                derive_rng(bundle.seed, "powerups"),
                FLAPPY_POWER_UP_CHANCE,
                FLAPPY_POWER_UPS,
                enabled=bundle.setting("powerUps"),
            ),
            scorer=ScoreKeeper(score_multiplier(bundle)),
            inverted=bundle.has_modifier("invertedControls"),
            ghost_steps=FLAPPY_GHOST_FRAMES if bundle.has_modifier("ghostMode") else 0,
        )
        if bundle.has_modifier("fastStart"):
            self._add_pipes(state, state.spawner.prespawn(FAST_START_PIPES))
        return state

    def step_interval_ms(self) -> float:
        return FRAME_STEP_MS

    def _add_pipes(self, st: FlappyState, pipes: list):
        for pipe in pipes:
            st.pipes.append(pipe)
            kind = st.pickups.roll()
            if kind is not None:
                cx, cy = pipe.gap_center
                st.power_ups.append(PowerUp(kind, cx - POWER_UP_SIZE / 2, cy - POWER_UP_SIZE / 2))

    def on_action(self, action: Action) -> bool:
        if action not in self.start_actions:
            return False
        st = self.state
        impulse = st.jump if st.inverted else -st.jump
        if st.double_jumps > 0:
            st.double_jumps -= 1
            impulse *= DOUBLE_JUMP_BOOST
        st.bird.flap(impulse)
        return True

    def update(self):
        st = self.state
        st.step += 1
        bird = st.bird

        bird.fall(st.gravity)
        assert math.isfinite(bird.velocity), "bird velocity is not finite"
        if bird.top <= 0:
            bird.y = bird.radius
            bird.velocity = 0.0
        if bird.bottom >= st.height:
            self.end()
            return

        rate = SLOW_TIME_FACTOR if st.slow_steps > 0 else 1.0
        dx = st.pipe_speed * rate
        for pipe in st.pipes:
            pipe.move(dx)
        st.pipes = [p for p in st.pipes if p.right > -OFFSCREEN_MARGIN]
        self._add_pipes(st, st.spawner.update(rate))

        for power_up in list(st.power_ups):
            power_up.step(dx)
            if rects_overlap(power_up.rect, bird.rect):
                st.power_ups.remove(power_up)
                self.apply_power_up(power_up.kind)
            elif power_up.x + power_up.size < -OFFSCREEN_MARGIN:
                st.power_ups.remove(power_up)

        if not st.immune:
            for pipe in st.pipes:
                if rects_overlap(bird.rect, pipe.top_rect) or rects_overlap(bird.rect, pipe.bottom_rect):
                    self.end()
                    return

        for pipe in st.pipes:
            if not pipe.passed and pipe.right < bird.left:
                pipe.passed = True
                st.scorer.award(1)

        if st.ghost_steps > 0:
            st.ghost_steps -= 1
        if st.shield_steps > 0:
            st.shield_steps -= 1
        if st.slow_steps > 0:
            st.slow_steps -= 1

    def apply_power_up(self, kind: str):
        st = self.state
        if kind == "shield":
            st.shield_steps = FLAPPY_POWER_UP_STEPS
        elif kind == "slowTime":
            st.slow_steps = FLAPPY_POWER_UP_STEPS
        elif kind == "doubleJump":
            st.double_jumps = DOUBLE_JUMP_FLAPS
        elif kind == "scoreBoost":
            st.scorer.add_flat(SCORE_BOOST_POINTS)
        else:
            raise ValueError(f"unknown power-up: {kind}")

    def draw_scene(self, surface):
        st = self.state
        theme = self.bundle.theme
        surface.clear(theme.background_color)
        for pipe in st.pipes:
            pipe.draw(surface, theme.secondary_color, theme.primary_color)
        for power_up in st.power_ups:
            power_up.draw(surface, theme.accent_color, theme.background_color)
        alpha = "80" if st.immune else ""
        st.bird.draw(surface, theme.primary_color + alpha, theme.background_color)

    def hud_lines(self) -> list:
        st = self.state
        lines = [f"Score: {self.score}"]
        if st.shield_steps:
            lines.append(f"Shield {math.ceil(st.shield_steps * FRAME_STEP_MS / 1000)}s")
        if st.slow_steps:
            lines.append(f"Slow time {math.ceil(st.slow_steps * FRAME_STEP_MS / 1000)}s")
        if st.double_jumps:
            lines.append(f"Double jumps: {st.double_jumps}")
        return lines
