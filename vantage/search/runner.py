"""
High-level runner for probe placement.

This module ties the pieces together: probe ordering, table construction,
the branch-and-bound search and result packaging.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from vantage.config.settings import SolverConfig
from vantage.core.grid import Grid
from vantage.core.probes import Probe, sort_probes
from vantage.core.table import VisibilityTable
from vantage.errors import CapacityError
from vantage.search.ranking import PlacementOutcome
from vantage.search.solver import PlacementSolver, SearchStatistics
from vantage.terrain.loader import format_result

_logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """
    Result of a placement run.

    Attributes:
        peaks_visible: Number of distinct observed cells
        altitude_sum_visible: Summed altitude of observed cells
        altitude_sum_placed: Summed altitude of occupied cells
        probes: Probe ranges in placement order (descending)
        occupied_mask: Occupancy mask of the best placement
        visible_mask: Visibility mask of the best placement
        statistics: Search counters
        table_seconds: Wall-clock time spent building the visibility table
        runtime_seconds: Total wall-clock time
        pruning: Whether upper-bound pruning was enabled
    """
    peaks_visible: int
    altitude_sum_visible: int
    altitude_sum_placed: int
    probes: List[int] = field(default_factory=list)
    occupied_mask: int = 0
    visible_mask: int = 0
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    table_seconds: float = 0.0
    runtime_seconds: float = 0.0
    pruning: bool = True

    @classmethod
    def from_outcome(
        cls,
        outcome: PlacementOutcome,
        probes: Sequence[int],
        statistics: SearchStatistics,
        **kwargs,
    ) -> "PlacementResult":
        return cls(
            peaks_visible=outcome.peaks_visible,
            altitude_sum_visible=outcome.altitude_sum_visible,
            altitude_sum_placed=outcome.altitude_sum_placed,
            probes=list(probes),
            occupied_mask=outcome.occupied,
            visible_mask=outcome.visible,
            statistics=statistics,
            **kwargs,
        )

    @property
    def triple(self) -> Tuple[int, int, int]:
        return (self.peaks_visible, self.altitude_sum_visible, self.altitude_sum_placed)

    def placed_cells(self, grid: Grid) -> List[Tuple[int, int]]:
        """(x, y) coordinates of the occupied cells, row-major."""
        return [grid.index_to_coord(i) for i in grid.mask_to_indices(self.occupied_mask)]

    def observed_cells(self, grid: Grid) -> List[Tuple[int, int]]:
        """(x, y) coordinates of the observed cells, row-major."""
        return [grid.index_to_coord(i) for i in grid.mask_to_indices(self.visible_mask)]

    def format_line(self) -> str:
        """Single output line: ``peaks altitude_sum placed_sum``."""
        return format_result(*self.triple)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "peaks_visible": self.peaks_visible,
            "altitude_sum_visible": self.altitude_sum_visible,
            "altitude_sum_placed": self.altitude_sum_placed,
            "probes": list(self.probes),
            "occupied_mask": self.occupied_mask,
            "visible_mask": self.visible_mask,
            "statistics": self.statistics.to_dict(),
            "table_seconds": self.table_seconds,
            "runtime_seconds": self.runtime_seconds,
            "pruning": self.pruning,
        }


def check_capacity(grid: Grid, probes: Sequence[int], config: SolverConfig) -> None:
    """
    Reject problems that do not fit the bitmask representation.

    Raises:
        CapacityError: Too many cells, too many probes, or more probes than
            cells to put them on.
    """
    if grid.num_cells > config.max_cells:
        raise CapacityError(
            f"Grid has {grid.num_cells} cells, at most {config.max_cells} supported",
            stage="dimensions",
        )
    if len(probes) > config.max_probes:
        raise CapacityError(
            f"Got {len(probes)} probes, at most {config.max_probes} supported",
            stage="probes",
        )
    if len(probes) > grid.num_cells:
        raise CapacityError(
            f"Cannot place {len(probes)} probes on distinct cells of a "
            f"{grid.num_cells}-cell grid",
            stage="probes",
        )


def optimize_probe_placement(
    grid: Grid,
    probes: Sequence[Union[int, Probe]],
    config: Optional[SolverConfig] = None,
    verbose: bool = False,
) -> PlacementResult:
    """
    Find the best placement of ``probes`` on ``grid``.

    This is the main entry point. Probes are sorted by descending range, the
    visibility table is built once, and the exact search runs to exhaustion.

    Args:
        grid: Altitude grid
        probes: Probe ranges (ints or Probe objects), any order
        config: Solver settings (default: SolverConfig())
        verbose: Log a header and a summary at INFO level

    Returns:
        PlacementResult with the best scores and search statistics

    Raises:
        CapacityError: If the problem exceeds the configured limits.
        ValueError: If a probe range is not positive.

    Example:
        >>> grid = Grid.from_rows([[5]])
        >>> optimize_probe_placement(grid, [1]).format_line()
        '1 5 5'
    """
    if config is None:
        config = SolverConfig()

    ordered = sort_probes(probes)
    check_capacity(grid, ordered, config)

    if verbose:
        _logger.info("Probe Placement Search")
        _logger.info("  Grid shape: %dx%d (%d cells)", grid.height, grid.width, grid.num_cells)
        _logger.info("  Probes: %s", ordered)
        _logger.info("  Pruning: %s", "on" if config.prune else "off")

    t0 = time.perf_counter()
    table = VisibilityTable.build(grid, ordered)
    table_seconds = time.perf_counter() - t0

    outcome = PlacementSolver(grid, ordered, table, prune=config.prune).solve()
    runtime = time.perf_counter() - t0

    result = PlacementResult.from_outcome(
        outcome.best,
        ordered,
        outcome.statistics,
        table_seconds=table_seconds,
        runtime_seconds=runtime,
        pruning=config.prune,
    )

    if verbose:
        stats = outcome.statistics
        _logger.info("  Best: %s", result.format_line())
        _logger.info(
            "  States expanded: %d, pruned: %d, terminal: %d",
            stats.states_expanded, stats.children_pruned, stats.terminal_states,
        )
        _logger.info("  Runtime: %.3fs (table %.3fs)", runtime, table_seconds)

    return result
