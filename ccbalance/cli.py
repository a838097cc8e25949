"""
CCBalance CLI - Command-line interface for the engine.

Usage:
    ccbalance levels                              List level presets
    ccbalance simulate <level> <action>...        Run a scripted action sequence

Actions are heat, cool, pressurize, depressurize or add:<species>.
"""

import argparse
import sys

from .config import Settings, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="CCBalance - Chemical Equilibrium Duel Engine",
        prog="ccbalance",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default from CCBALANCE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("levels", help="List level presets")

    simulate_parser = subparsers.add_parser("simulate", help="Run a scripted action sequence")
    simulate_parser.add_argument("level", help="Level preset id")
    simulate_parser.add_argument("actions", nargs="+", help="heat, cool, pressurize, depressurize, add:<species>")
    simulate_parser.add_argument("--actor", choices=["player", "ai"], default="player")
    simulate_parser.add_argument("--difficulty", type=int, default=None, help="AI difficulty (1-4)")

    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "levels":
        cmd_levels(args)
    elif args.command == "simulate":
        cmd_simulate(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_levels(args):
    """List level presets."""
    from .levels import list_levels

    for preset in list_levels():
        config = preset.config
        print(f"{config.level_id:<20} {config.container_type.value:<9} {preset.reaction.equation()}")


def cmd_simulate(args, settings: Settings):
    """Run actions back to back and print each result."""
    from .engine_core.action import Action, Actor
    from .levels import UnknownLevelError
    from .session import MatchManager

    manager = MatchManager(settings=settings)
    try:
        match = manager.create_match(level_id=args.level, difficulty=args.difficulty)
    except UnknownLevelError as e:
        print(f"Error: {e}")
        sys.exit(1)

    actor = Actor(args.actor)
    _print_snapshot("start", match.snapshot())

    for name in args.actions:
        try:
            action = Action.parse(name)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

        result = match.execute(action, actor)
        if result.success:
            for change in result.changes:
                print(f"  + {change}")
        else:
            print(f"  - {action}: {result.reason}")

    _print_snapshot("end", match.snapshot())
    manager.end_match(match.match_id)


def _print_snapshot(label, snapshot):
    concentrations = ", ".join(f"{s}={c:.4f}" for s, c in snapshot.concentrations.items())
    print(f"[{label}] T={snapshot.temperature:g} K  P={snapshot.pressure:.3f} kPa  V={snapshot.volume:.4f} L")
    print(f"[{label}] {concentrations}")
    if snapshot.K is not None:
        print(f"[{label}] K={snapshot.K:.4g}  Q={snapshot.Q:.4g}")


if __name__ == "__main__":
    main()
