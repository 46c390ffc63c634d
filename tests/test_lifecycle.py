import pytest

from game.arcade import SIMULATIONS, create_simulation
from game.arcade.breakout import BreakoutSimulation
from game.arcade.snake import SnakeSimulation
from game.graphics.render_context import RenderSurfaceError
from game.sim.contracts import Action, Phase
from variation.errors import UnknownGameError, VariationFetchError
from variation.loader import VariationLoader
from variation.providers.base import BaseVariationProvider
from variation.providers.local_provider import LocalProvider
from tests.conftest import RecordingSurface, StaticProvider, make_bundle, make_loader, make_sim


class CountingProvider(BaseVariationProvider):
    """Every fetch hands out a new seed."""

    def __init__(self, game_id):
        self.game_id = game_id
        self.count = 0

    @property
    def name(self) -> str:
        return "counting"

    def fetch(self, game_id):
        self.count += 1
        return make_bundle(self.game_id, seed=f"s{self.count}").to_dict()


@pytest.mark.parametrize("bad", [None, object(), RecordingSurface(0, 600)])
def test_bad_surface_fails_before_fetching(bad):
    loader = make_loader(make_bundle("snake"))
    with pytest.raises(RenderSurfaceError):
        SnakeSimulation(bad, loader)
    assert loader.provider.calls == []


def test_registry_and_unknown_game():
    assert set(SIMULATIONS) == {"snake", "breakout", "flappy"}
    sim = create_simulation("flappy", RecordingSurface(400, 600), make_loader(make_bundle("flappy")))
    assert sim.game_id == "flappy"
    with pytest.raises(UnknownGameError):
        create_simulation("pong", RecordingSurface(), make_loader())


def test_phases_from_loading_to_running():
    sim = SnakeSimulation(RecordingSurface(), make_loader(make_bundle("snake")), auto_start=False)
    assert sim.phase == Phase.LOADING
    assert sim.handle_action(Action.PRIMARY) is False
    # Not started: nothing happens.
    assert sim.advance(1000) == 0
    assert sim.phase == Phase.LOADING

    sim.start()
    sim.advance(0)
    assert sim.phase == Phase.READY
    assert sim.handle_action(Action.RESTART) is False
    assert sim.handle_action(Action.PRIMARY) is True
    assert sim.phase == Phase.RUNNING


def test_advance_runs_whole_steps_and_caps_backlog():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    assert sim.advance(149) == 0
    assert sim.advance(1) == 1
    assert sim.advance(10_000) == 8
    assert sim.advance(149) == 0


def test_advance_stops_at_game_over():
    sim = make_sim(SnakeSimulation, make_bundle("snake", game_specific={"gridWidth": 15, "gridHeight": 15}))
    sim.state.foods = []
    # Head at x=7 hits the right wall on the 8th step.
    assert sim.advance(150 * 8) == 8
    assert sim.phase == Phase.GAME_OVER
    assert sim.advance(1000) == 0


def test_terminal_phase_only_accepts_restart():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    sim.end()
    assert sim.phase == Phase.GAME_OVER
    assert sim.handle_action(Action.UP) is False
    assert sim.handle_action(Action.PRIMARY) is False
    assert sim.handle_action(Action.RESTART) is True
    assert sim.phase == Phase.LOADING
    sim.advance(0)
    assert sim.phase == Phase.RUNNING
    assert sim.epoch == 2


def test_restart_is_a_fresh_game():
    loader = VariationLoader(provider=LocalProvider(seed="replay-1"), background=False)
    played = BreakoutSimulation(RecordingSurface(480, 640), loader, auto_start=True)
    played.start()
    played.advance(0)
    for _ in range(30):
        played.handle_action(Action.LEFT)
        played.update()
    played.end()
    played.handle_action(Action.RESTART)
    played.advance(0)

    fresh = BreakoutSimulation(
        RecordingSurface(480, 640),
        VariationLoader(provider=LocalProvider(seed="replay-1"), background=False),
        auto_start=True,
    )
    fresh.start()
    fresh.advance(0)
    assert played.state.to_dict() == fresh.state.to_dict()
    assert played.score == 0


def test_last_fetch_wins():
    loader = VariationLoader(provider=CountingProvider("snake"), background=False)
    sim = SnakeSimulation(RecordingSurface(), loader)
    sim.start()
    sim.restart()
    sim.advance(0)
    assert sim.bundle.seed == "s2"
    assert sim.epoch == 1


def test_stop_is_idempotent_and_drops_the_pending_fetch():
    sim = SnakeSimulation(RecordingSurface(), make_loader(make_bundle("snake")), auto_start=True)
    sim.stop()
    sim.stop()
    assert sim.phase == Phase.LOADING
    assert sim.loader.provider.calls == ["snake"]

    # Starting again issues a new fetch instead of waiting on the dropped one.
    sim.start()
    assert sim.loader.provider.calls == ["snake", "snake"]
    sim.advance(0)
    assert sim.phase == Phase.RUNNING


def test_resuming_a_running_simulation_does_not_refetch():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    sim.stop()
    sim.start()
    assert sim.loader.provider.calls == ["snake"]
    assert sim.phase == Phase.RUNNING


def test_stopped_simulation_does_not_advance():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    sim.stop()
    assert sim.advance(1000) == 0
    assert sim.state.step == 0


def test_fallback_bundle_is_marked():
    loader = make_loader(error=VariationFetchError("server down"))
    sim = SnakeSimulation(RecordingSurface(), loader)
    sim.start()
    sim.advance(0)
    assert sim.fallback is True
    assert sim.bundle.seed == "default-snake"
    sim.draw()
    assert "offline: default variation" in sim.surface.texts()


def test_loader_defect_surfaces_on_advance():
    loader = VariationLoader(provider=StaticProvider(error=RuntimeError("boom")), background=False)
    sim = SnakeSimulation(RecordingSurface(), loader)
    sim.start()
    with pytest.raises(RuntimeError, match="boom"):
        sim.advance(0)


def test_overlays_per_phase():
    sim = SnakeSimulation(RecordingSurface(), make_loader(make_bundle("snake")), auto_start=False)
    sim.draw()
    assert "Loading variation..." in sim.surface.texts()

    sim.start()
    sim.advance(0)
    sim.surface.calls.clear()
    sim.draw()
    assert "Ready" in sim.surface.texts()

    sim.handle_action(Action.PRIMARY)
    sim.end(won=True)
    sim.surface.calls.clear()
    sim.draw()
    texts = sim.surface.texts()
    assert "You Win!" in texts
    assert "Press R to play a new variation" in texts


def test_snapshot():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    snap = sim.snapshot().to_dict()
    assert snap["game_id"] == "snake"
    assert snap["phase"] == "running"
    assert snap["seed"] == "test-seed"
    assert snap["fallback"] is False
    assert snap["extra"]["grid"] == [20, 20]


def test_apply_bundle_rejects_other_games():
    sim = make_sim(SnakeSimulation, make_bundle("snake"))
    with pytest.raises(ValueError):
        sim.apply_bundle(make_bundle("flappy"))
