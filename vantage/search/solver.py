"""
Exact branch-and-bound placement search.

The search is a depth-first walk over partial placements driven by an
explicit stack. Probes are placed in table order (longest range first), one
level per probe, on every cell not yet occupied. A child is discarded when
even the best possible completion cannot reach the incumbent's observed-cell
count.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from vantage.core.grid import Grid
from vantage.core.table import VisibilityTable
from vantage.search.ranking import PlacementOutcome, is_better
from vantage.search.state import SearchState

_logger = logging.getLogger(__name__)


@dataclass
class SearchStatistics:
    """
    Counters collected during one search.

    Attributes:
        states_expanded: Non-terminal states popped and expanded
        children_pruned: Candidate children discarded by the bound
        terminal_states: Complete placements scored
        improvements: Times the incumbent was replaced
    """
    states_expanded: int = 0
    children_pruned: int = 0
    terminal_states: int = 0
    improvements: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "states_expanded": self.states_expanded,
            "children_pruned": self.children_pruned,
            "terminal_states": self.terminal_states,
            "improvements": self.improvements,
        }


@dataclass
class SearchOutcome:
    """Best placement found plus the statistics of the search."""
    best: PlacementOutcome
    statistics: SearchStatistics = field(default_factory=SearchStatistics)


@dataclass
class PlacementSolver:
    """
    Branch-and-bound solver for one grid and probe list.

    Attributes:
        grid: Altitude grid
        probes: Probe ranges in placement order (sorted by descending range)
        table: Visibility table built for ``grid`` and ``probes``
        prune: Whether to apply the upper-bound pruning. Turning it off never
            changes the result, only the amount of work.

    Example:
        >>> grid = Grid.from_rows([[1, 100]])
        >>> table = VisibilityTable.build(grid, [10])
        >>> PlacementSolver(grid, [10], table).solve().best.triple
        (2, 101, 1)
    """
    grid: Grid
    probes: Sequence[int]
    table: VisibilityTable
    prune: bool = True

    def __post_init__(self):
        if tuple(self.probes) != self.table.probes:
            raise ValueError(
                f"Visibility table was built for probes {list(self.table.probes)}, "
                f"got {list(self.probes)}"
            )
        if len(self.table.masks) and len(self.table.masks[0]) != self.grid.num_cells:
            raise ValueError("Visibility table does not match the grid size")

    @property
    def num_probes(self) -> int:
        return len(self.probes)

    def expand(self, state: SearchState, best_peaks: int) -> Tuple[List[SearchState], int]:
        """
        Children of a non-terminal state that survive the pruning bound.

        Places probe ``state.next_probe`` on each unoccupied cell, in
        increasing cell order.

        Args:
            state: State to expand.
            best_peaks: Observed-cell count of the incumbent (0 if none).

        Returns:
            children: Surviving child states.
            pruned: Number of candidates discarded by the bound.
        """
        state.check_invariant(self.num_probes)

        children = []
        pruned = 0
        probe_index = state.next_probe
        for cell in range(self.grid.num_cells):
            if state.is_occupied(cell):
                continue
            child = state.place(cell, self.table.mask(probe_index, cell))
            if self.prune and self.table.upper_bound(child.visible, child.remaining) < best_peaks:
                pruned += 1
                continue
            children.append(child)
        return children, pruned

    def score(self, state: SearchState) -> PlacementOutcome:
        """Score a terminal state."""
        return PlacementOutcome.from_masks(self.grid, state.occupied, state.visible)

    def solve(self) -> SearchOutcome:
        """
        Run the search to exhaustion.

        Returns:
            SearchOutcome with the best placement under the ranking rule.
        """
        stats = SearchStatistics()
        best: Optional[PlacementOutcome] = None

        stack = [SearchState.initial(self.num_probes)]
        while stack:
            state = stack.pop()

            if state.is_terminal:
                stats.terminal_states += 1
                candidate = self.score(state)
                if is_better(candidate, best):
                    best = candidate
                    stats.improvements += 1
                    _logger.debug("new best placement: %s", candidate.triple)
                continue

            stats.states_expanded += 1
            best_peaks = best.peaks_visible if best is not None else 0
            children, pruned = self.expand(state, best_peaks)
            stack.extend(children)
            stats.children_pruned += pruned

        if best is None:
            # More probes than cells: no complete placement exists
            best = PlacementOutcome.empty()

        return SearchOutcome(best=best, statistics=stats)


def solve_placement(
    grid: Grid,
    probes: Sequence[int],
    table: Optional[VisibilityTable] = None,
    prune: bool = True,
) -> SearchOutcome:
    """
    Convenience wrapper: build the table if needed and run the solver.

    Args:
        grid: Altitude grid.
        probes: Probe ranges, already sorted by descending range.
        table: Optional prebuilt table for ``grid`` and ``probes``.
        prune: Whether to enable upper-bound pruning.
    """
    if table is None:
        table = VisibilityTable.build(grid, probes)
    return PlacementSolver(grid, list(probes), table, prune=prune).solve()
