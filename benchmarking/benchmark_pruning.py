#!/usr/bin/env python3
"""
Benchmark upper-bound pruning across terrain modes.

Runs the exact search with and without pruning on each synthetic terrain
mode, checks that both agree on the result, and compares the work done.

Outputs:
- Console table of states, terminal placements and runtimes per mode
- Bar chart of terminal placements scored, pruned vs exhaustive
"""

import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import matplotlib.pyplot as plt

from vantage.config.settings import SolverConfig
from vantage.search.runner import PlacementResult, optimize_probe_placement
from vantage.terrain.synthetic import generate_random_probes, generate_synthetic_grid


MODES = ('flat', 'ramp', 'peak', 'random')


def run_mode(mode: str, size: int, probes: List[int], seed: int) -> Dict[str, PlacementResult]:
    """Solve one terrain mode with pruning on and off."""
    grid = generate_synthetic_grid(size, size, mode=mode, seed=seed)
    results = {}
    for prune in (True, False):
        results['pruned' if prune else 'exhaustive'] = optimize_probe_placement(
            grid, probes, config=SolverConfig(prune=prune),
        )
    if results['pruned'].triple != results['exhaustive'].triple:
        raise RuntimeError(
            f"{mode}: pruned {results['pruned'].triple} != "
            f"exhaustive {results['exhaustive'].triple}"
        )
    return results


def plot_pruning_comparison(all_results: Dict[str, Dict[str, PlacementResult]], output_path: Path):
    """Grouped bar chart of terminal placements per mode."""
    modes = list(all_results.keys())
    pruned = [all_results[m]['pruned'].statistics.terminal_states for m in modes]
    exhaustive = [all_results[m]['exhaustive'].statistics.terminal_states for m in modes]

    fig, ax = plt.subplots(figsize=(8, 5))
    positions = np.arange(len(modes))
    width = 0.38

    ax.bar(positions - width / 2, exhaustive, width, label='Exhaustive', color='#999999')
    ax.bar(positions + width / 2, pruned, width, label='Pruned', color='#2a7ab9')
    ax.set_xticks(positions)
    ax.set_xticklabels(modes, fontsize=11)
    ax.set_ylabel('Terminal placements scored', fontsize=12)
    ax.set_yscale('log')
    ax.set_title('Search Work by Terrain Mode', fontsize=14, fontweight='bold')
    ax.legend()
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=200, bbox_inches='tight')
    plt.close()


def run_benchmark(size: int = 4, num_probes: int = 3, max_range: int = 3, seed: int = 42):
    """Run the pruning benchmark across all terrain modes."""

    print("=" * 70)
    print("PRUNING BENCHMARK (vantage package)")
    print("=" * 70)

    probes = generate_random_probes(num_probes, max_range=max_range, seed=seed)
    print(f"Grid: {size}x{size}, probes: {sorted(probes, reverse=True)}")

    output_dir = Path(__file__).parent / 'outputs' / 'benchmark'
    output_dir.mkdir(parents=True, exist_ok=True)

    all_results = {}
    start = time.perf_counter()
    for mode in MODES:
        all_results[mode] = run_mode(mode, size, probes, seed)

    print(f"\n{'Mode':<10}{'Result':<16}{'Variant':<12}{'Expanded':>10}{'Terminal':>10}{'Time (s)':>10}")
    print("-" * 68)
    for mode, results in all_results.items():
        for variant, result in results.items():
            stats = result.statistics
            print(f"{mode:<10}{result.format_line():<16}{variant:<12}"
                  f"{stats.states_expanded:>10}{stats.terminal_states:>10}"
                  f"{result.runtime_seconds:>10.3f}")

    plot_pruning_comparison(all_results, output_dir / 'pruning_comparison.png')
    print(f"\nTotal time: {time.perf_counter() - start:.2f}s")
    print(f"Plot saved to {output_dir / 'pruning_comparison.png'}")


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description='Compare pruned and exhaustive probe placement search'
    )
    parser.add_argument('--size', type=int, default=4, help='Grid side length (size*size <= 64)')
    parser.add_argument('--probes', type=int, default=3, help='Number of probes')
    parser.add_argument('--max-range', type=int, default=3, help='Longest probe range')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    args = parser.parse_args()

    run_benchmark(size=args.size, num_probes=args.probes, max_range=args.max_range, seed=args.seed)


if __name__ == '__main__':
    main()
