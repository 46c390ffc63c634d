"""
Variation generator.

One seeded stream (`next() -> float in [0, 1)`) is consumed in a fixed order:
theme, level, speedMultiplier, complexityBonus, modifier count, modifier picks,
then the game-specific keys in table order. Changing that order changes every
bundle ever issued for a seed, so treat it as part of the format.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from config import (
    COMPLEXITY_BONUS_RANGE,
    MODIFIER_COUNT_RANGE,
    SPEED_MULTIPLIER_RANGE,
    VARIATION_POLICIES,
    DEBUG,
)
from game.sim.determinism import fresh_seed, make_next
from variation.errors import UnknownGameError
from variation.schema import (
    DIFFICULTY_LEVELS,
    GAME_IDS,
    GAME_SPECIFIC_RULES,
    MODIFIERS,
    Difficulty,
    SettingRule,
    Theme,
    VariationBundle,
)
from variation.themes import THEME_NAMES, THEME_PALETTE

NextFn = Callable[[], float]


def debug_log(msg: str):
    if DEBUG:
        print(f"[variation] {msg}")


def _clamp(value, lo, hi):
    return max(lo, min(hi, value))


def _pick(next_fn: NextFn, options):
    return options[int(next_fn() * len(options))]


def _randint(next_fn: NextFn, lo: int, hi: int) -> int:
    return _clamp(lo + int(next_fn() * (hi - lo + 1)), lo, hi)


def _uniform(next_fn: NextFn, lo: float, hi: float) -> float:
    return _clamp(round(lo + next_fn() * (hi - lo), 2), lo, hi)


def _sample_setting(next_fn: NextFn, rule: SettingRule) -> Any:
    if rule.kind == "int":
        return _randint(next_fn, int(rule.lo), int(rule.hi))
    if rule.kind == "float":
        return _uniform(next_fn, rule.lo, rule.hi)
    if rule.kind == "bool":
        return next_fn() < 0.5
    if rule.kind == "choice":
        return _pick(next_fn, rule.choices)
    raise ValueError(f"unknown setting kind: {rule.kind}")


def seed_for(game_id: str) -> str:
    """Seed chosen by the game's policy (deterministic-per-id or fresh-per-request)."""
    policy = VARIATION_POLICIES.get(game_id, "deterministic")
    if policy == "fresh":
        return fresh_seed()
    return game_id


def generate(game_id: str, seed: Optional[str] = None) -> VariationBundle:
    """
    Build a validated bundle for `game_id`.

    `seed` overrides the per-game seed policy (replays, tests). Raises UnknownGameError
    for an unsupported id and VariationValidationError if the assembled bundle does not
    validate.
    """
    if game_id not in GAME_IDS:
        raise UnknownGameError(game_id)
    if seed is None:
        seed = seed_for(game_id)
    next_fn = make_next(seed)

    theme_name = _pick(next_fn, THEME_NAMES)
    primary, secondary, accent, background = THEME_PALETTE[theme_name]

    level = _pick(next_fn, DIFFICULTY_LEVELS)
    speed = _uniform(next_fn, *SPEED_MULTIPLIER_RANGE)
    bonus = _uniform(next_fn, *COMPLEXITY_BONUS_RANGE)

    lo, hi = MODIFIER_COUNT_RANGE
    count = _randint(next_fn, lo, hi)
    pool = list(MODIFIERS)
    picked = []
    for _ in range(count):
        picked.append(pool.pop(int(next_fn() * len(pool))))

    game_specific: Dict[str, Any] = {}
    for key, rule in GAME_SPECIFIC_RULES[game_id].items():
        game_specific[key] = _sample_setting(next_fn, rule)

    bundle = VariationBundle(
        game_id=game_id,
        seed=seed,
        theme=Theme(theme_name, primary, secondary, accent, background),
        difficulty=Difficulty(level=level, speed_multiplier=speed, complexity_bonus=bonus),
        modifiers=frozenset(picked),
        game_specific=game_specific,
    )
    debug_log(f"generated {game_id} seed={seed} theme={theme_name} level={level} modifiers={sorted(picked)}")
    return bundle
