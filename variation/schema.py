"""
VariationBundle schema.

A bundle is parsed and validated once, at the boundary (generator output or fetched
payload), and is immutable afterwards. Constructing a `VariationBundle` always
validates it, so holding an instance means holding a valid bundle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from config import (
    CANVAS_SIZES,
    COMPLEXITY_BONUS_RANGE,
    SPEED_MULTIPLIER_RANGE,
    MODIFIER_COUNT_RANGE,
    BREAKOUT_BASE_PADDLE_WIDTH,
    FLAPPY_BIRD_RADIUS,
    FLAPPY_PIPE_MARGIN,
)
from variation.errors import VariationValidationError
from variation.themes import THEME_NAMES, is_hex_color

GAME_IDS = ("snake", "breakout", "flappy")

DIFFICULTY_LEVELS = ("easy", "normal", "hard", "extreme")

MODIFIERS = ("invertedControls", "ghostMode", "doubleScore", "fastStart", "slowMotion")


@dataclass(frozen=True)
class SettingRule:
    """Type, bounds and default of one gameSpecific key."""

    kind: str  # int, float, bool, choice
    default: Any
    lo: Optional[float] = None
    hi: Optional[float] = None
    choices: tuple = ()

    def check(self, key: str, value: Any) -> None:
        if self.kind == "bool":
            if not isinstance(value, bool):
                raise VariationValidationError(f"gameSpecific.{key} must be a bool, got {value!r}")
            return
        if self.kind == "choice":
            if value not in self.choices:
                raise VariationValidationError(f"gameSpecific.{key} must be one of {self.choices}, got {value!r}")
            return
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise VariationValidationError(f"gameSpecific.{key} must be a number, got {value!r}")
        if self.kind == "int" and not isinstance(value, int):
            raise VariationValidationError(f"gameSpecific.{key} must be an integer, got {value!r}")
        if not math.isfinite(value) or not (self.lo <= value <= self.hi):
            raise VariationValidationError(f"gameSpecific.{key}={value!r} outside [{self.lo}, {self.hi}]")


# Table order is also the generator's sampling order.
GAME_SPECIFIC_RULES: Dict[str, Dict[str, SettingRule]] = {
    "snake": {
        "gridWidth": SettingRule("int", 20, 15, 30),
        "gridHeight": SettingRule("int", 20, 15, 25),
        "wallBehavior": SettingRule("choice", "solid", choices=("solid", "wrap")),
        "foodTypes": SettingRule("int", 1, 1, 3),
    },
    "breakout": {
        "brickRows": SettingRule("int", 5, 3, 8),
        "brickCols": SettingRule("int", 8, 6, 12),
        "paddleSize": SettingRule("float", 1.0, 0.6, 1.6),
        "ballSpeed": SettingRule("float", 1.0, 0.8, 1.3),
        "powerUps": SettingRule("bool", False),
        "multiball": SettingRule("bool", False),
    },
    "flappy": {
        "pipeGap": SettingRule("int", 150, 100, 200),
        "gravity": SettingRule("float", 0.5, 0.3, 0.6),
        "jumpForce": SettingRule("float", 8.0, 6.0, 10.0),
        "pipeSpeed": SettingRule("float", 3.0, 2.0, 4.0),
        "pipeSpacing": SettingRule("int", 260, 220, 320),
        "powerUps": SettingRule("bool", False),
    },
}


def default_setting(game_id: str, key: str) -> Any:
    return GAME_SPECIFIC_RULES[game_id][key].default


def _require(d: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(d, Mapping):
        raise VariationValidationError(f"{where} must be an object, got {type(d).__name__}")
    if key not in d:
        raise VariationValidationError(f"missing {where}.{key}")
    return d[key]


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise VariationValidationError(f"{where} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise VariationValidationError(f"{where} must be finite, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Theme:
    name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str

    def __post_init__(self):
        if self.name not in THEME_NAMES:
            raise VariationValidationError(f"theme.name must be one of {THEME_NAMES}, got {self.name!r}")
        for attr in ("primary_color", "secondary_color", "accent_color", "background_color"):
            if not is_hex_color(getattr(self, attr)):
                raise VariationValidationError(f"theme.{attr} must be #RRGGBB, got {getattr(self, attr)!r}")

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "primaryColor": self.primary_color,
            "secondaryColor": self.secondary_color,
            "accentColor": self.accent_color,
            "backgroundColor": self.background_color,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Theme":
        return cls(
            name=_require(d, "name", "theme"),
            primary_color=_require(d, "primaryColor", "theme"),
            secondary_color=_require(d, "secondaryColor", "theme"),
            accent_color=_require(d, "accentColor", "theme"),
            background_color=_require(d, "backgroundColor", "theme"),
        )


@dataclass(frozen=True)
class Difficulty:
    level: str
    speed_multiplier: float
    complexity_bonus: float

    def __post_init__(self):
        if self.level not in DIFFICULTY_LEVELS:
            raise VariationValidationError(f"difficulty.level must be one of {DIFFICULTY_LEVELS}, got {self.level!r}")
        speed = _number(self.speed_multiplier, "difficulty.speedMultiplier")
        lo, hi = SPEED_MULTIPLIER_RANGE
        if not (lo <= speed <= hi):
            raise VariationValidationError(f"difficulty.speedMultiplier={speed} outside [{lo}, {hi}]")
        bonus = _number(self.complexity_bonus, "difficulty.complexityBonus")
        lo, hi = COMPLEXITY_BONUS_RANGE
        if not (lo <= bonus <= hi):
            raise VariationValidationError(f"difficulty.complexityBonus={bonus} outside [{lo}, {hi}]")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "speedMultiplier": self.speed_multiplier,
            "complexityBonus": self.complexity_bonus,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Difficulty":
        return cls(
            level=_require(d, "level", "difficulty"),
            speed_multiplier=_require(d, "speedMultiplier", "difficulty"),
            complexity_bonus=_require(d, "complexityBonus", "difficulty"),
        )


@dataclass(frozen=True)
class VariationBundle:
    """
    The contract between the variation server and a simulation.

    `game_specific` only carries keys relevant to `game_id`; use `setting()` to read a
    key with its documented default.
    """

    game_id: str
    seed: str
    theme: Theme
    difficulty: Difficulty
    modifiers: frozenset = field(default_factory=frozenset)
    game_specific: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "modifiers", frozenset(self.modifiers))
        object.__setattr__(self, "game_specific", MappingProxyType(dict(self.game_specific)))
        self._validate()

    def _validate(self) -> None:
        if self.game_id not in GAME_IDS:
            raise VariationValidationError(f"gameId must be one of {GAME_IDS}, got {self.game_id!r}")
        if not isinstance(self.seed, str) or not self.seed:
            raise VariationValidationError("seed must be a non-empty string")
        if not isinstance(self.theme, Theme) or not isinstance(self.difficulty, Difficulty):
            raise VariationValidationError("theme/difficulty must be parsed objects")

        unknown = set(self.modifiers) - set(MODIFIERS)
        if unknown:
            raise VariationValidationError(f"unknown modifiers: {sorted(unknown)}")
        if len(self.modifiers) > MODIFIER_COUNT_RANGE[1]:
            raise VariationValidationError(f"at most {MODIFIER_COUNT_RANGE[1]} modifiers allowed")

        rules = GAME_SPECIFIC_RULES[self.game_id]
        for key, value in self.game_specific.items():
            rule = rules.get(key)
            if rule is None:
                raise VariationValidationError(f"gameSpecific.{key} is not a {self.game_id} setting")
            rule.check(key, value)

        if self.game_id == "flappy":
            gap = self.setting("pipeGap")
            if gap <= 2 * FLAPPY_BIRD_RADIUS:
                raise VariationValidationError(f"pipeGap={gap} must exceed twice the bird radius")
            height = CANVAS_SIZES["flappy"][1]
            if gap > height - 2 * FLAPPY_PIPE_MARGIN:
                raise VariationValidationError(f"pipeGap={gap} leaves no room for pipe margins")
        elif self.game_id == "breakout":
            width = CANVAS_SIZES["breakout"][0]
            if BREAKOUT_BASE_PADDLE_WIDTH * self.setting("paddleSize") > width / 2:
                raise VariationValidationError("paddleSize would push the paddle off-screen")

    def setting(self, key: str) -> Any:
        if key in self.game_specific:
            return self.game_specific[key]
        return default_setting(self.game_id, key)

    def has_modifier(self, name: str) -> bool:
        return name in self.modifiers

    def evolve(self, **changes) -> "VariationBundle":
        """
        Copy with changes (re-validated). `game_specific` entries are merged into the
        existing mapping rather than replacing it.
        """
        if "game_specific" in changes:
            merged = dict(self.game_specific)
            merged.update(changes["game_specific"])
            changes["game_specific"] = merged
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gameId": self.game_id,
            "seed": self.seed,
            "theme": self.theme.to_dict(),
            "difficulty": self.difficulty.to_dict(),
            "modifiers": sorted(self.modifiers),
            "gameSpecific": dict(self.game_specific),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "VariationBundle":
        """Parse an untrusted payload. Raises VariationValidationError on any defect."""
        mods = _require(d, "modifiers", "bundle")
        if not isinstance(mods, (list, tuple)) or not all(isinstance(m, str) for m in mods):
            raise VariationValidationError("modifiers must be a list of strings")
        if len(set(mods)) != len(mods):
            raise VariationValidationError("modifiers must not repeat")
        game_specific = d.get("gameSpecific", {})
        if not isinstance(game_specific, Mapping):
            raise VariationValidationError("gameSpecific must be an object")
        return cls(
            game_id=_require(d, "gameId", "bundle"),
            seed=_require(d, "seed", "bundle"),
            theme=Theme.from_dict(_require(d, "theme", "bundle")),
            difficulty=Difficulty.from_dict(_require(d, "difficulty", "bundle")),
            modifiers=frozenset(mods),
            game_specific=game_specific,
        )


def parse_bundle(payload: Any, expected_game_id: Optional[str] = None) -> VariationBundle:
    """Boundary parser: payload (dict from JSON) -> validated bundle."""
    if not isinstance(payload, Mapping):
        raise VariationValidationError(f"bundle must be an object, got {type(payload).__name__}")
    bundle = VariationBundle.from_dict(payload)
    if expected_game_id is not None and bundle.game_id != expected_game_id:
        raise VariationValidationError(f"expected a {expected_game_id} bundle, got {bundle.game_id}")
    return bundle

