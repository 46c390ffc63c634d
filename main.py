"""
Arcade Variations - Snake, Breakout and Flappy Bird, a little different every run.

Usage:
    python main.py [--game <game_id>] [--source <source>]

Sources:
    http   - fetch bundles from the variation server (VARIATION_API_URL)
    local  - generate bundles in-process (no server needed)
"""
import argparse

from config import GAME_IDS, VARIATION_API_URL, VARIATION_SOURCE
from game.engine import ArcadeEngine
from variation.loader import VariationLoader
from variation.providers import create_provider


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arcade Variations - classic arcade games with per-run variations"
    )
    parser.add_argument(
        "--game",
        type=str,
        default=None,
        choices=list(GAME_IDS),
        help="Start straight into a game instead of the menu"
    )
    parser.add_argument(
        "--source",
        type=str,
        default=VARIATION_SOURCE,
        choices=["http", "local"],
        help=f"Where variation bundles come from (default: {VARIATION_SOURCE})"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    print("=" * 50)
    print("  Arcade Variations")
    print("=" * 50)
    print()
    if args.source == "http":
        print(f"Variation source: {VARIATION_API_URL} (falls back to defaults if unreachable)")
    else:
        print("Variation source: local generator")

    loader = VariationLoader(provider=create_provider(args.source))
    game = ArcadeEngine(initial_game=args.game, loader=loader)

    print()
    print("Controls:")
    print("  1 / 2 / 3        - Snake / Breakout / Flappy")
    print("  Arrows / WASD    - Steer, move paddle")
    print("  Space / Click    - Flap, start")
    print("  Enter            - Start / pick from menu")
    print("  Mouse            - Move paddle (Breakout)")
    print("  R                - New variation after game over")
    print("  Esc              - Back to menu / quit")
    print()

    game.run()

    print("Thanks for playing!")


if __name__ == "__main__":
    main()
