#!/usr/bin/env python3
"""Combat profiler.

Usage:
    python scripts/profile_combat.py maps/input.txt
    python scripts/profile_combat.py maps/input.txt --boost --strategy binary
    python scripts/profile_combat.py maps/input.txt --cprofile combat.prof

Reports:
    - Per-round timing statistics (min, max, mean, p50, p95)
    - Units alive over time
    - Throughput (rounds/sec)
    - Optional: boost search wall time and trial count
    - Optional: cProfile dump
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridcombat.config import CombatConfig
from gridcombat.core.board import Scenario, load_scenario
from gridcombat.core.enums import CombatState
from gridcombat.engine.boost import BoostSearch
from gridcombat.engine.simulator import CombatSimulator


def _run_rounds(scenario: Scenario, cfg: CombatConfig) -> dict:
    """Play a plain combat round by round and collect timings."""
    sim = CombatSimulator(scenario.grid, scenario.fresh_units(), cfg)
    round_times: list[float] = []
    alive_counts: list[int] = []

    state = CombatState.CONTINUE
    while state == CombatState.CONTINUE:
        t_start = time.perf_counter()
        state = sim.run_round()
        round_times.append(time.perf_counter() - t_start)
        alive_counts.append(len(sim.units.living()))

    return {
        "round_times": round_times,
        "alive_counts": alive_counts,
        "completed_rounds": sim.completed_rounds,
        "state": state.name,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    round_times = data["round_times"]
    alive_counts = data["alive_counts"]

    print("\n" + "=" * 60)
    print("  COMBAT PERFORMANCE REPORT")
    print("=" * 60)

    print(f"\n  Rounds played:     {len(round_times)} ({data['completed_rounds']} full, ends {data['state']})")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {len(round_times) / wall_time:.1f} rounds/sec")

    print(f"\n  Units alive (start):  {alive_counts[0]}")
    print(f"  Units alive (end):    {alive_counts[-1]}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(round_times) * 1000:>10.3f}")
    print(f"  {'Mean':<16} {statistics.mean(round_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(round_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(round_times, 95) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(round_times) * 1000:>10.3f}")
    print("\n" + "=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the combat engine")
    parser.add_argument("map", type=str, help="Path to the scenario file")
    parser.add_argument("--boost", action="store_true", help="Also time the boost search")
    parser.add_argument("--strategy", type=str, default="linear", choices=["linear", "binary"])
    parser.add_argument("--workers", type=int, default=1, help="Boost trial threads")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = CombatConfig(boost_strategy=args.strategy, boost_workers=args.workers)
    scenario = load_scenario(args.map)

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_rounds(scenario, cfg)
    wall_time = time.perf_counter() - wall_start
    _print_report(data, wall_time)

    if args.boost:
        boost_start = time.perf_counter()
        found = BoostSearch(scenario.grid, scenario.units, cfg).search()
        boost_time = time.perf_counter() - boost_start
        print(f"\n  Boost search ({args.strategy}, {args.workers} workers): "
              f"boost={found.boost} trials={found.trials} time={boost_time:.3f}s")

    if profiler and args.cprofile:
        profiler.disable()
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
