"""
Probe placement search.

This module provides:
    - SearchState: immutable node of the branch-and-bound search
    - PlacementOutcome and the ranking helpers
    - PlacementSolver: the explicit-stack depth-first search
    - optimize_probe_placement: high-level runner returning PlacementResult
"""

from vantage.search.state import SearchState
from vantage.search.ranking import (
    PlacementOutcome,
    is_better,
    update_best,
    best_outcome,
)
from vantage.search.solver import (
    PlacementSolver,
    SearchOutcome,
    SearchStatistics,
    solve_placement,
)
from vantage.search.runner import (
    PlacementResult,
    check_capacity,
    optimize_probe_placement,
)

__all__ = [
    "SearchState",
    "PlacementOutcome",
    "is_better",
    "update_best",
    "best_outcome",
    "PlacementSolver",
    "SearchOutcome",
    "SearchStatistics",
    "solve_placement",
    "PlacementResult",
    "check_capacity",
    "optimize_probe_placement",
]
