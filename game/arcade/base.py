"""
Shared simulation lifecycle.

    Loading -> Ready -> Running -> GameOver | Won -> (restart) Loading

A simulation owns its state and RNG streams. The state object is built from a bundle in
one go (`new_state`) and replaced wholesale on restart, never patched back to zero.
Time only enters through `advance(dt_ms)`, which a fixed-step clock turns into whole
`update()` calls; each update finishes physics, collisions and scoring before the
caller gets to draw.
"""

from __future__ import annotations

from typing import Any, Optional

from config import AUTO_START, CANVAS_SIZES, DEBUG
from game.graphics.render_context import require_surface
from game.sim.contracts import Action, Phase, SimulationSnapshot
from game.sim.timebase import StepClock
from game.ui import overlay
from game.ui.menu import GAME_TITLES


def debug_log(msg: str):
    if DEBUG:
        print(f"[arcade] {msg}")


class GameSimulation:
    """Base class; subclasses fill in the game rules."""

    game_id = ""
    # Actions that leave Ready (and are then applied as the first move).
    start_actions = (Action.PRIMARY,)
    controls_hint = "Press Space to start"

    def __init__(self, surface, loader, auto_start: bool = AUTO_START):
        # Validate before anything else so a bad surface never leaves half-built state.
        self.surface = require_surface(surface)
        self.loader = loader
        self.auto_start = auto_start

        self.phase = Phase.LOADING
        self.bundle = None
        self.fallback = False
        self.state: Any = None
        self.clock: Optional[StepClock] = None
        self.epoch = 0
        self.active = False
        self._token: Optional[int] = None

        self.request_bundle()

    # ---- lifecycle ---------------------------------------------------------------

    @property
    def canvas_size(self) -> tuple:
        return CANVAS_SIZES[self.game_id]

    def request_bundle(self):
        """Drop the current epoch and ask for a new bundle (last fetch wins)."""
        self.loader.cancel(self._token)
        self.phase = Phase.LOADING
        self.state = None
        self.clock = None
        self._token = self.loader.request(self.game_id)
        debug_log(f"{self.game_id}: requested bundle (token {self._token})")

    def start(self):
        """Arm the loop. Idempotent."""
        self.active = True
        # Stopped while Loading: the cancelled fetch has to be issued again.
        if self.phase == Phase.LOADING and self._token is None:
            self.request_bundle()

    def stop(self):
        """Halt updates and forget any in-flight fetch. Idempotent."""
        self.active = False
        self.loader.cancel(self._token)
        self._token = None

    def restart(self):
        self.request_bundle()

    def apply_bundle(self, bundle, fallback: bool = False):
        """Start a new epoch from `bundle`."""
        if bundle.game_id != self.game_id:
            raise ValueError(f"{self.game_id} simulation cannot use a {bundle.game_id} bundle")
        self.bundle = bundle
        self.fallback = fallback
        self.epoch += 1
        self.state = self.new_state(bundle)
        self.clock = StepClock(self.step_interval_ms())
        self.phase = Phase.RUNNING if self.auto_start else Phase.READY
        debug_log(f"{self.game_id}: epoch {self.epoch} seed={bundle.seed} fallback={fallback}")

    def _poll_bundle(self):
        if self._token is None:
            return
        result = self.loader.poll(self._token)
        if result is None:
            return
        self._token = None
        self.apply_bundle(result.bundle, fallback=result.fallback)

    def advance(self, dt_ms: float) -> int:
        """Feed elapsed time; returns how many update steps ran."""
        if not self.active:
            return 0
        if self.phase == Phase.LOADING:
            self._poll_bundle()
            return 0
        if self.phase != Phase.RUNNING:
            return 0
        due = self.clock.feed(dt_ms)
        ran = 0
        for _ in range(due):
            self.update()
            ran += 1
            if self.phase != Phase.RUNNING:
                break
        return ran

    def end(self, won: bool = False):
        self.phase = Phase.WON if won else Phase.GAME_OVER
        debug_log(f"{self.game_id}: {self.phase.value} score={self.score}")

    # ---- input -------------------------------------------------------------------

    def handle_action(self, action: Action) -> bool:
        """Route one input action. Returns True if it had an effect."""
        if self.phase == Phase.LOADING:
            return False
        if self.phase.is_terminal:
            if action == Action.RESTART:
                self.restart()
                return True
            return False
        if self.phase == Phase.READY:
            if action not in self.start_actions:
                return False
            self.phase = Phase.RUNNING
            if action != Action.PRIMARY:
                self.on_action(action)
            return True
        return self.on_action(action)

    def handle_pointer(self, x: float) -> bool:
        """Pointer x over the canvas (Breakout paddle); only while Ready or Running."""
        if self.phase not in (Phase.READY, Phase.RUNNING):
            return False
        return self.on_pointer(x)

    def on_pointer(self, x: float) -> bool:
        return False

    # ---- rendering ---------------------------------------------------------------

    def draw(self):
        surface = self.surface
        if self.phase == Phase.LOADING:
            overlay.draw_loading(surface, GAME_TITLES.get(self.game_id, self.game_id))
            return
        theme = self.bundle.theme
        self.draw_scene(surface)
        overlay.draw_hud(surface, self.hud_lines(), theme.accent_color, fallback=self.fallback)
        if self.phase == Phase.READY:
            overlay.draw_ready(surface, self.controls_hint, theme.accent_color)
        elif self.phase.is_terminal:
            overlay.draw_end(surface, self.phase == Phase.WON, self.score, theme.accent_color)

    def hud_lines(self) -> list:
        return [f"Score: {self.score}"]

    # ---- introspection -----------------------------------------------------------

    @property
    def score(self) -> int:
        return self.state.scorer.score if self.state is not None else 0

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            game_id=self.game_id,
            phase=self.phase,
            score=self.score,
            seed=self.bundle.seed if self.bundle is not None else None,
            fallback=self.fallback,
            extra=self.state.to_dict() if self.state is not None else {},
        )

    # ---- game rules (subclasses) -------------------------------------------------

    def new_state(self, bundle):
        raise NotImplementedError

    def step_interval_ms(self) -> float:
        raise NotImplementedError

    def update(self):
        raise NotImplementedError

    def on_action(self, action: Action) -> bool:
        raise NotImplementedError

    def draw_scene(self, surface):
        raise NotImplementedError
