from __future__ import annotations

import pytest

from game.sim.contracts import Phase
from variation.defaults import default_theme
from variation.loader import VariationLoader
from variation.providers.base import BaseVariationProvider
from variation.schema import Difficulty, VariationBundle


class RecordingSurface:
    """In-memory render surface: records every draw call."""

    def __init__(self, width: int = 480, height: int = 640):
        self.width = width
        self.height = height
        self.calls = []

    def clear(self, color):
        self.calls.append(("clear", color))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("rect", x, y, w, h, color))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("circle", x, y, radius, color))

    def fill_polygon(self, points, color):
        self.calls.append(("polygon", tuple(points), color))

    def draw_text(self, text, x, y, color, size=20, align="left"):
        self.calls.append(("text", text, x, y, color))

    def texts(self) -> list:
        return [c[1] for c in self.calls if c[0] == "text"]


class StaticProvider(BaseVariationProvider):
    """Returns a fixed payload (or raises a fixed error) for every fetch."""

    def __init__(self, payload=None, error: Exception = None):
        self.payload = payload
        self.error = error
        self.calls = []

    @property
    def name(self) -> str:
        return "static"

    def fetch(self, game_id: str):
        self.calls.append(game_id)
        if self.error is not None:
            raise self.error
        return self.payload


def make_bundle(game_id: str, *, modifiers=(), game_specific=None, speed=1.0, complexity=0.0,
                seed="test-seed", level="normal") -> VariationBundle:
    return VariationBundle(
        game_id=game_id,
        seed=seed,
        theme=default_theme(),
        difficulty=Difficulty(level=level, speed_multiplier=speed, complexity_bonus=complexity),
        modifiers=frozenset(modifiers),
        game_specific=game_specific or {},
    )


def make_loader(bundle: VariationBundle = None, **kwargs) -> VariationLoader:
    payload = bundle.to_dict() if bundle is not None else None
    return VariationLoader(provider=StaticProvider(payload, **kwargs), background=False)


def make_sim(cls, bundle: VariationBundle, *, surface=None, auto_start=True):
    """A started simulation with `bundle` applied (Running, or Ready when auto_start=False)."""
    from config import CANVAS_SIZES

    if surface is None:
        surface = RecordingSurface(*CANVAS_SIZES[cls.game_id])
    sim = cls(surface, make_loader(bundle), auto_start=auto_start)
    sim.start()
    sim.advance(0)
    assert sim.phase == (Phase.RUNNING if auto_start else Phase.READY)
    return sim


def run_updates(sim, n: int) -> int:
    """Call update() up to n times while Running; returns how many ran."""
    ran = 0
    for _ in range(n):
        if sim.phase != Phase.RUNNING:
            break
        sim.update()
        ran += 1
    return ran


@pytest.fixture
def surface():
    return RecordingSurface()
