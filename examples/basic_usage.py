#!/usr/bin/env python3
"""
Basic usage example for the vantage probe placement solver.

This script demonstrates the core functionality of the vantage package:
1. Loading a problem from text
2. Generating synthetic terrain
3. Running the exact search
4. Visualizing results
"""

from pathlib import Path

from vantage import (
    optimize_probe_placement,
    load_problem,
    SolverConfig,
)
from vantage.core import (
    VisibilityTable,
    compute_visibility_mask,
)
from vantage.terrain import (
    generate_synthetic_grid,
    generate_random_probes,
)
from vantage.visualization import save_placement_figure


PROBLEM_TEXT = """4 5
3 1 4 1 5
9 2 6 5 3
5 8 9 7 9
3 2 3 8 4
3
3 2 1
"""


def example_text_problem():
    """Example: Solve a problem given in the line-oriented text format."""
    print("=" * 60)
    print("TEXT PROBLEM EXAMPLE")
    print("=" * 60)

    print("\n1. Parsing problem...")
    problem = load_problem(PROBLEM_TEXT)
    print(problem.describe())

    print("\n2. Running search...")
    result = optimize_probe_placement(problem.grid, problem.probes, verbose=True)

    print("\n3. Results:")
    print(f"   Output line: {result.format_line()}")
    print(f"   Probe cells: {result.placed_cells(problem.grid)}")
    print(f"   Runtime: {result.runtime_seconds:.3f}s")

    return problem.grid, result


def example_single_probe_view():
    """Example: Inspect what one probe sees from one cell."""
    print("\n" + "=" * 60)
    print("SINGLE PROBE VIEW EXAMPLE")
    print("=" * 60)

    grid = generate_synthetic_grid(6, 6, mode='peak', low=0, high=30)
    print(grid.describe())

    for x, y in [(0, 0), (2, 2), (5, 3)]:
        mask = compute_visibility_mask(grid, x, y, visibility_range=3)
        print(f"\n   Probe at ({x}, {y}) range 3 sees {bin(mask).count('1')} cells:")
        print(grid.mask_to_array(mask).astype(int))

    table = VisibilityTable.build(grid, [3, 1])
    for i, probe_range in enumerate(table.probes):
        cell, mask = table.best_single_placement(i)
        print(f"\n   Best lone cell for range {probe_range}: "
              f"{grid.index_to_coord(cell)} ({bin(mask).count('1')} cells)")


def example_pruning_effect():
    """Example: Compare pruned and exhaustive search on random terrain."""
    print("\n" + "=" * 60)
    print("PRUNING EFFECT EXAMPLE")
    print("=" * 60)

    grid = generate_synthetic_grid(5, 5, mode='random', seed=42)
    probes = generate_random_probes(3, max_range=3, seed=42)
    print(f"   Probes: {probes}")

    for prune in (True, False):
        result = optimize_probe_placement(grid, probes, config=SolverConfig(prune=prune))
        stats = result.statistics
        print(f"\n   Pruning {'on' if prune else 'off'}:")
        print(f"     Result: {result.format_line()}")
        print(f"     States expanded: {stats.states_expanded}")
        print(f"     Terminal states: {stats.terminal_states}")
        print(f"     Runtime: {result.runtime_seconds:.3f}s")

    return grid, result


def main():
    output_dir = Path("outputs")
    output_dir.mkdir(exist_ok=True)

    grid, result = example_text_problem()
    save_placement_figure(
        grid, result.occupied_mask, result.visible_mask,
        output_dir / "text_problem.png",
        title=f"Text problem ({result.format_line()})",
    )

    example_single_probe_view()

    grid, result = example_pruning_effect()
    save_placement_figure(
        grid, result.occupied_mask, result.visible_mask,
        output_dir / "random_terrain.png",
        title=f"Random terrain ({result.format_line()})",
    )

    print(f"\nFigures saved to {output_dir}/")


if __name__ == "__main__":
    main()
