"""
Determinism guard (static check).

Purpose:
- Keep gameplay and bundle generation reproducible from a seed (replays, literal test
  scenarios, deterministic-per-id bundles).

What we flag (in simulation and generator code):
- Wall-clock-ish time: pygame.time.get_ticks(), time.time(), time.monotonic(), datetime.now(), etc.
- Global or unseeded RNG: random.random/randint/choice/shuffle/..., random.Random()
- OS entropy: secrets.*, os.urandom()
- Python's hash() (process-randomized by default)

We intentionally DO NOT scan:
- game/ui/** and game/graphics/** (drawing may use wall-clock time)
- game/sim/** (this contains the deterministic wrappers, including fresh_seed())
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]


DEFAULT_SCAN_DIRS = [
    PROJECT_ROOT / "game" / "arcade",
    PROJECT_ROOT / "game" / "entities",
    PROJECT_ROOT / "game" / "systems",
    PROJECT_ROOT / "variation",
]

DEFAULT_EXCLUDE_DIRS = [
    PROJECT_ROOT / "game" / "ui",
    PROJECT_ROOT / "game" / "graphics",
    PROJECT_ROOT / "game" / "sim",
]


_RANDOM_ATTRS = {
    "random",
    "randint",
    "uniform",
    "choice",
    "choices",
    "sample",
    "shuffle",
    "seed",
    "randrange",
    "getrandbits",
}

_TIME_ATTRS_FORBIDDEN = {
    "time",
    "time_ns",
    "monotonic",
    "perf_counter",
}

_DATETIME_ATTRS_FORBIDDEN = {
    "now",
    "utcnow",
    "today",
}


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def _display_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


def _iter_py_files(roots: Iterable[Path], *, exclude_dirs: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        if root.is_file() and root.suffix.lower() == ".py":
            out.append(root)
            continue
        for p in root.rglob("*.py"):
            if any(_is_under(p, ex) for ex in exclude_dirs):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """
    For Attribute chains, return list like ["pygame", "time", "get_ticks"].
    For Names, return ["name"].
    """
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display_path(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def _classify(chain: list[str], node: ast.Call) -> tuple[str, str] | None:
    """Return (kind, detail) for a forbidden call, else None."""
    if chain == ["pygame", "time", "get_ticks"]:
        return "wall_clock_time", "Simulations get time from advance(dt_ms); avoid pygame.time.get_ticks()."

    if len(chain) == 2 and chain[0] == "time" and chain[1] in _TIME_ATTRS_FORBIDDEN:
        return "wall_clock_time", f"Use the fixed-step clock (game.sim.timebase.StepClock); avoid time.{chain[1]}()."

    if chain[-1] in _DATETIME_ATTRS_FORBIDDEN and "datetime" in chain:
        return "wall_clock_time", "Avoid datetime.now()/utcnow() in simulation logic."

    if len(chain) == 2 and chain[0] == "random" and chain[1] in _RANDOM_ATTRS:
        return "global_rng", "Use game.sim.determinism.seeded_rng/derive_rng(...) instead of random.*."

    if chain == ["random", "Random"] and not node.args and not node.keywords:
        return "global_rng", "random.Random() without a seed is entropy-seeded; pass a seed via seeded_rng()."

    if chain[0] == "secrets" or chain == ["os", "urandom"]:
        return "entropy", "OS entropy belongs in game.sim.determinism.fresh_seed() only."

    if chain == ["hash"]:
        return "unstable_hash", "Avoid Python hash() for deterministic behavior; use zlib.crc32 (seed_to_int)."

    return None


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": _display_path(file_path),
                "line": int(getattr(e, "lineno", 0) or 0),
                "col": int(getattr(e, "offset", 0) or 0),
                "detail": f"SyntaxError: {e}",
            }
        ]

    findings: list[dict] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        chain = _attr_chain(node.func)
        if not chain:
            continue
        hit = _classify(chain, node)
        if hit is not None:
            findings.append(_violation(hit[0], file_path, node, hit[1]))
    return findings


def scan_file(file_path: Path) -> list[dict]:
    try:
        src = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        src = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, file_path)


def scan_paths(roots: Iterable[Path] | None = None) -> list[dict]:
    roots = list(roots) if roots else list(DEFAULT_SCAN_DIRS)
    files = _iter_py_files(roots, exclude_dirs=list(DEFAULT_EXCLUDE_DIRS))
    all_findings: list[dict] = []
    for f in files:
        all_findings.extend(scan_file(f))
    return all_findings


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (simulation and generator code)")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans game/arcade, game/entities, game/systems, variation.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    all_findings = scan_paths([Path(p) for p in ns.paths])

    if ns.json:
        print(json.dumps({"findings": all_findings}, indent=2))
    else:
        if not all_findings:
            print("[determinism_guard] PASS: no violations found")
        else:
            print(f"[determinism_guard] FAIL: {len(all_findings)} violation(s)")
            for v in all_findings:
                print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not all_findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
