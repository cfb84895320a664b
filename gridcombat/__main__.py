"""Entry point: ``python -m gridcombat``.

Supports three modes:
  - ``python -m gridcombat``                 -> Launch FastAPI server
  - ``python -m gridcombat simulate MAP``    -> Outcome of a plain combat
  - ``python -m gridcombat boost MAP``       -> Outcome with the minimal elf boost
"""

from __future__ import annotations

import argparse
import logging

from gridcombat.config import LOG_LEVELS

logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--hit-points", type=int, default=200)
    parser.add_argument("--attack-power", type=int, default=3)
    parser.add_argument("--max-rounds", type=int, default=10_000)
    parser.add_argument("--log-level", type=str, default="WARNING", choices=list(LOG_LEVELS))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic Goblins vs. Elves combat engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    _add_common(srv)

    # --- Plain combat ---
    sim = sub.add_parser("simulate", help="Run a combat and print its outcome")
    sim.add_argument("map", type=str, help="Path to the scenario file")
    sim.add_argument("--show-board", action="store_true", help="Print the final board")
    sim.add_argument("--replay", type=str, default=None, help="Write a JSON replay to this path")
    _add_common(sim)

    # --- Boost search ---
    bst = sub.add_parser("boost", help="Find the minimal elf boost and print its outcome")
    bst.add_argument("map", type=str, help="Path to the scenario file")
    bst.add_argument("--strategy", type=str, default="linear", choices=["linear", "binary"])
    bst.add_argument("--workers", type=int, default=1)
    bst.add_argument("--show-board", action="store_true", help="Print the final board")
    _add_common(bst)

    return parser


def _config_from(args: argparse.Namespace):
    from gridcombat.config import CombatConfig

    return CombatConfig(
        hit_points=args.hit_points,
        attack_power=args.attack_power,
        max_rounds=args.max_rounds,
        boost_strategy=getattr(args, "strategy", "linear"),
        boost_workers=getattr(args, "workers", 1),
        log_level=args.log_level,
        replay_file=getattr(args, "replay", None),
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from gridcombat.api.app import create_app

    config = _config_from(args)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_simulate(args: argparse.Namespace) -> None:
    from gridcombat.core.board import format_board, load_scenario
    from gridcombat.engine.simulator import simulate
    from gridcombat.utils.logging import setup_logging
    from gridcombat.utils.replay import ReplayRecorder

    config = _config_from(args)
    setup_logging(config.log_level)

    scenario = load_scenario(args.map, hit_points=config.hit_points, attack_power=config.attack_power)
    recorder = None
    if config.replay_file:
        recorder = ReplayRecorder(config.replay_file, format_board(scenario.grid, scenario.units))

    result = simulate(scenario.grid, scenario.units, config, recorder=recorder)
    if recorder is not None:
        recorder.flush()

    if args.show_board:
        print(format_board(scenario.grid, result.units))
    logger.info("Rounds: %d, hit points: %d", result.completed_rounds, result.hit_points)
    print(result.outcome)


def _run_boost(args: argparse.Namespace) -> None:
    from gridcombat.core.board import format_board, load_scenario
    from gridcombat.engine.boost import BoostSearch
    from gridcombat.utils.logging import setup_logging

    config = _config_from(args)
    setup_logging(config.log_level)

    scenario = load_scenario(args.map, hit_points=config.hit_points, attack_power=config.attack_power)
    found = BoostSearch(scenario.grid, scenario.units, config).search()

    if args.show_board:
        print(format_board(scenario.grid, found.result.units))
    logger.info(
        "Boost: %d (elf attack %d), rounds: %d, hit points: %d",
        found.boost, found.elf_attack, found.result.completed_rounds, found.result.hit_points,
    )
    print(found.outcome)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "simulate":
        _run_simulate(args)
    elif args.command == "boost":
        _run_boost(args)


if __name__ == "__main__":
    main()
