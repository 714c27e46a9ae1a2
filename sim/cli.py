"""
Tycoon Simulator - CLI Entry Point
====================================
Usage:
    python cli.py run <scenario> [--turns 10] [--output end.yaml]
    python cli.py stock <scenario> [--owner 0] [--export-json out.json]
    python cli.py generate [--seed 42] [--cities 6] [--businesses 2] [--output world.yaml]
    python cli.py interactive [<scenario>]
    python cli.py web [--port 8080]
"""

import argparse
import logging
import sys

import yaml

from tycoon_sim.engine import TurnEngine
from tycoon_sim.format import print_stock, print_turn_report, print_world
from tycoon_sim.io import load_scenario, save_scenario
from tycoon_sim.ledger import compute_stock
from tycoon_sim.models import GameConfig


def _count(value):
    """argparse type for counts that may be zero but not negative."""
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be at least 0, got {n}")
    return n


def _load_or_exit(path):
    try:
        return load_scenario(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading {path}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_run(args):
    world = _load_or_exit(args.file)
    engine = TurnEngine(world, args.turns)
    result = engine.run()
    print_turn_report(result)

    if args.output:
        save_scenario(world, args.output)
        print(f"\nSaved end state to {args.output}")


def cmd_stock(args):
    world = _load_or_exit(args.file)
    if not 0 <= args.owner < len(world.businesses):
        print(f"No business {args.owner} in {world.name} "
              f"({len(world.businesses)} businesses)", file=sys.stderr)
        sys.exit(1)
    print_stock(compute_stock(world, args.owner), title=f"BUSINESS {args.owner} STOCK")

    if args.export_json:
        from tycoon_sim.io import export_stock_json
        export_stock_json(world, args.owner, args.export_json)
        print(f"\nExported JSON to {args.export_json}")


def cmd_generate(args):
    from tycoon_sim.worldgen import generate_world
    config = GameConfig(
        starting_money=args.starting_money,
        max_scale=args.max_scale,
    )
    world = generate_world(seed=args.seed, cities=args.cities,
                           businesses=args.businesses, config=config)
    print_world(world)
    if args.output:
        save_scenario(world, args.output)
        print(f"\nSaved to {args.output}")


def cmd_interactive(args):
    from tycoon_sim.repl import TycoonREPL
    world = _load_or_exit(args.file) if args.file else None
    repl = TycoonREPL(world)
    repl.cmdloop()


def main():
    parser = argparse.ArgumentParser(
        description="Tycoon Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # run
    p_run = sub.add_parser("run", aliases=["sim"],
                           help="Advance a scenario by a number of turns")
    p_run.add_argument("file", help="Path to scenario YAML file")
    p_run.add_argument("--turns", "-t", type=_count, default=10,
                       help="Number of turns to advance (default: 10)")
    p_run.add_argument("--output", "-o", default=None,
                       help="Save the end state to YAML")

    # stock
    p_stock = sub.add_parser("stock", help="Show one business's stock and flow")
    p_stock.add_argument("file", help="Path to scenario YAML file")
    p_stock.add_argument("--owner", type=int, default=0,
                         help="Business id (default: 0)")
    p_stock.add_argument("--export-json", default=None,
                         help="Export the stock view as JSON")

    # generate
    p_gen = sub.add_parser("generate", aliases=["gen"],
                           help="Generate a random world")
    p_gen.add_argument("--seed", type=int, default=42,
                       help="Random seed (default: 42)")
    p_gen.add_argument("--cities", type=_count, default=6,
                       help="Number of cities (default: 6)")
    p_gen.add_argument("--businesses", type=_count, default=2,
                       help="Number of businesses (default: 2)")
    p_gen.add_argument("--starting-money", type=int, default=GameConfig.starting_money,
                       help="Money granted to each business (default: %(default)s)")
    p_gen.add_argument("--max-scale", type=int, default=GameConfig.max_scale,
                       help="Maximum recipe scale (default: %(default)s)")
    p_gen.add_argument("--output", "-o", default=None,
                       help="Save the generated world to YAML")

    # interactive
    p_int = sub.add_parser("interactive", aliases=["repl", "i"],
                           help="Interactive REPL mode")
    p_int.add_argument("file", nargs="?", default=None,
                       help="Scenario to start from (default: generated world)")

    # web
    p_web = sub.add_parser("web", aliases=["serve"],
                           help="Start the JSON web API")
    p_web.add_argument("--port", type=int, default=8080,
                       help="Port to serve on (default: 8080)")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.command in ("run", "sim"):
        cmd_run(args)
    elif args.command == "stock":
        cmd_stock(args)
    elif args.command in ("generate", "gen"):
        cmd_generate(args)
    elif args.command in ("interactive", "repl", "i"):
        cmd_interactive(args)
    elif args.command in ("web", "serve"):
        from tycoon_sim.web import start_server
        start_server(port=args.port)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
