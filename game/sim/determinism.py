"""
Determinism helpers.

Goals:
- Turn an opaque seed string into a reproducible RNG (same seed -> same sequence)
- Provide stable sub-streams derived from a seed (avoid hidden coupling between systems)

Non-goals:
- Cryptographic security

The generator is MT19937 (`random.Random`). Seeds are reduced with zlib.crc32, never
Python's built-in hash(), which is randomized per process. Callers that need the
portable `next() -> float in [0, 1)` contract should only consume `rng.random()`.
"""

from __future__ import annotations

import random
import secrets
import time
import zlib
from typing import Callable


def seed_to_int(seed: str) -> int:
    """Stable 32-bit integer for a seed string."""
    return zlib.crc32(str(seed).encode("utf-8")) & 0xFFFFFFFF


def seeded_rng(seed: str) -> random.Random:
    """Return an independent RNG seeded from `seed`."""
    return random.Random(seed_to_int(seed))


def derive_rng(seed: str, tag: str) -> random.Random:
    """
    Deterministic sub-RNG for a specific system (e.g. "food", "pipes").

    Streams with different tags are independent of each other's call order.
    """
    crc = zlib.crc32(str(tag).encode("utf-8")) & 0xFFFFFFFF
    return random.Random((seed_to_int(seed) ^ crc) & 0xFFFFFFFF)


def make_next(seed: str) -> Callable[[], float]:
    """`seed(value) -> next()`: a callable yielding floats in [0, 1)."""
    return seeded_rng(seed).random


def fresh_seed() -> str:
    """New seed from wall-clock time plus entropy (for fresh-per-request policies)."""
    return _to_base36(int(time.time() * 1000)) + secrets.token_hex(6)


def _to_base36(n: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if n <= 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(digits[r])
    return "".join(reversed(out))
