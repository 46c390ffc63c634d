"""
Thin, stable data contracts shared by the simulations, the engine and the UI.

These are intentionally small so:
- simulations and the engine can share data without import cycles
- state is easy to serialize (debug overlays, tests)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.GAME_OVER, Phase.WON)


class Action(str, Enum):
    """Game-level input actions (the engine translates raw events into these)."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    FLAP = "flap"
    PRIMARY = "primary"
    RESTART = "restart"


DIRECTION_ACTIONS = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


@dataclass(slots=True)
class SimulationSnapshot:
    """
    A small UI/debug-facing view of a simulation.

    Keep this light: it is meant for overlays and tests, not for replays.
    """

    game_id: str
    phase: Phase
    score: int
    seed: Optional[str] = None
    fallback: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["phase"] = self.phase.value
        return d
