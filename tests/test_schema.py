import dataclasses

import pytest

from variation.defaults import default_bundle
from variation.errors import UnknownGameError, VariationValidationError
from variation.schema import VariationBundle, parse_bundle
from tests.conftest import make_bundle


def payload(**overrides):
    base = make_bundle("snake", modifiers=("doubleScore",), game_specific={"gridWidth": 18}).to_dict()
    base.update(overrides)
    return base


@pytest.mark.parametrize("game_id", ["snake", "breakout", "flappy"])
def test_default_bundles_are_valid_and_plain(game_id):
    bundle = default_bundle(game_id)
    assert bundle.game_id == game_id
    assert bundle.modifiers == frozenset()
    assert bundle.difficulty.level == "normal"
    assert bundle.difficulty.speed_multiplier == 1.0


def test_default_bundle_unknown_game():
    with pytest.raises(UnknownGameError):
        default_bundle("pong")


def test_absent_keys_fall_back_to_documented_defaults():
    snake = default_bundle("snake")
    assert (snake.setting("gridWidth"), snake.setting("gridHeight")) == (20, 20)
    assert snake.setting("wallBehavior") == "solid"
    assert snake.setting("foodTypes") == 1
    flappy = default_bundle("flappy")
    assert flappy.setting("pipeGap") == 150
    assert flappy.setting("powerUps") is False
    assert default_bundle("breakout").setting("paddleSize") == 1.0


def test_bundle_is_immutable():
    bundle = make_bundle("snake", game_specific={"gridWidth": 18})
    with pytest.raises(dataclasses.FrozenInstanceError):
        bundle.seed = "other"
    with pytest.raises(TypeError):
        bundle.game_specific["gridWidth"] = 30


def test_to_dict_uses_wire_keys_and_sorted_modifiers():
    bundle = make_bundle("flappy", modifiers=("slowMotion", "doubleScore"))
    d = bundle.to_dict()
    assert d["gameId"] == "flappy"
    assert d["modifiers"] == ["doubleScore", "slowMotion"]
    assert set(d["difficulty"]) == {"level", "speedMultiplier", "complexityBonus"}
    assert set(d["theme"]) == {"name", "primaryColor", "secondaryColor", "accentColor", "backgroundColor"}


def test_parse_accepts_a_good_payload():
    bundle = parse_bundle(payload(), expected_game_id="snake")
    assert bundle.has_modifier("doubleScore")
    assert bundle.setting("gridWidth") == 18


@pytest.mark.parametrize(
    "broken",
    [
        {"theme": {"name": "classic"}},
        {"theme": {"name": "plaid", "primaryColor": "#000000", "secondaryColor": "#000000",
                   "accentColor": "#000000", "backgroundColor": "#000000"}},
        {"difficulty": {"level": "normal", "speedMultiplier": 3.0, "complexityBonus": 0.1}},
        {"difficulty": {"level": "insane", "speedMultiplier": 1.0, "complexityBonus": 0.1}},
        {"difficulty": {"level": "normal", "speedMultiplier": "fast", "complexityBonus": 0.1}},
        {"modifiers": ["moonGravity"]},
        {"modifiers": ["ghostMode", "ghostMode"]},
        {"modifiers": ["ghostMode", "doubleScore", "fastStart", "slowMotion", "invertedControls"]},
        {"modifiers": "ghostMode"},
        {"gameSpecific": {"pipeGap": 150}},
        {"gameSpecific": {"gridWidth": 40}},
        {"gameSpecific": {"gridWidth": 20.5}},
        {"gameSpecific": {"gridWidth": True}},
        {"gameSpecific": {"wallBehavior": "bouncy"}},
        {"seed": ""},
        {"gameId": "pong"},
    ],
)
def test_parse_rejects_malformed_payloads(broken):
    with pytest.raises(VariationValidationError):
        parse_bundle(payload(**broken))


def test_parse_rejects_missing_keys_and_non_objects():
    d = payload()
    del d["difficulty"]
    with pytest.raises(VariationValidationError):
        parse_bundle(d)
    with pytest.raises(VariationValidationError):
        parse_bundle(["not", "a", "bundle"])


def test_parse_rejects_bundle_for_another_game():
    with pytest.raises(VariationValidationError):
        parse_bundle(payload(), expected_game_id="flappy")


def test_bool_settings_must_be_bools():
    with pytest.raises(VariationValidationError):
        make_bundle("breakout", game_specific={"powerUps": 1})


def test_evolve_merges_and_revalidates():
    bundle = make_bundle("breakout", game_specific={"brickRows": 4})
    wider = bundle.evolve(game_specific={"brickCols": 10})
    assert dict(wider.game_specific) == {"brickRows": 4, "brickCols": 10}
    assert dict(bundle.game_specific) == {"brickRows": 4}
    with pytest.raises(VariationValidationError):
        bundle.evolve(game_specific={"paddleSize": 5.0})


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        VariationBundle.from_dict(payload(seed=""))
