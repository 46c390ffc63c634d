from __future__ import annotations

import argparse
import json
import sys

from config import VARIATION_SERVER_HOST, VARIATION_SERVER_PORT
from variation.errors import VariationError
from variation.generator import generate

from . import __version__
from .daemon import serve


def cmd_generate(args: argparse.Namespace) -> int:
    try:
        bundle = generate(args.game_id, seed=args.seed)
    except VariationError as e:
        print(f"[variation_server] ERROR: {e}", file=sys.stderr)
        return 2
    print(json.dumps(bundle.to_dict(), indent=2, sort_keys=True))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    serve(host=str(args.host), port=int(args.port))  # blocks
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="variation-server", description="Arcade variation bundle server")
    ap.add_argument("--version", action="store_true", help="print version and exit")
    sp = ap.add_subparsers(dest="cmd")

    p_serve = sp.add_parser("serve", help="run the HTTP daemon")
    p_serve.add_argument("--host", default=VARIATION_SERVER_HOST, help=f"bind host (default: {VARIATION_SERVER_HOST})")
    p_serve.add_argument("--port", type=int, default=VARIATION_SERVER_PORT,
                         help=f"bind port (default: {VARIATION_SERVER_PORT})")
    p_serve.set_defaults(func=cmd_serve)

    p_gen = sp.add_parser("generate", help="print one bundle (json)")
    p_gen.add_argument("game_id", help="snake, breakout or flappy")
    p_gen.add_argument("--seed", default=None, help="explicit seed (replays)")
    p_gen.set_defaults(func=cmd_generate)

    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(argv)
    if ns.version:
        print(__version__)
        return 0
    if not hasattr(ns, "func"):
        ap.print_help()
        return 2
    return int(ns.func(ns))
