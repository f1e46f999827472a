"""
vantage - exact probe placement over altitude grids.

Given a small grid of altitudes and a handful of probes with integer
visibility ranges, vantage finds the placement of probes on distinct cells
that observes the most cells, preferring higher observed altitude and then
lower probe altitude on ties.

Main modules:
    - vantage.core: grid, probes, line-of-sight visibility and tables
    - vantage.search: branch-and-bound search, ranking and runner
    - vantage.terrain: problem parsing and synthetic grids
    - vantage.visualization: placement plots
    - vantage.config: configuration management

Quick start:
    >>> from vantage import Grid, optimize_probe_placement
    >>> grid = Grid.from_rows([[1, 100]])
    >>> result = optimize_probe_placement(grid, [10])
    >>> result.format_line()
    '2 101 1'
"""

__version__ = "0.1.0"
__author__ = "Vantage Team"

# Core exports
from vantage.core.grid import Grid
from vantage.core.probes import Probe, sort_probes
from vantage.core.visibility import compute_visibility_mask
from vantage.core.table import VisibilityTable

# Config exports
from vantage.config.settings import VantageConfig, SolverConfig

# Search exports
from vantage.search.solver import PlacementSolver
from vantage.search.runner import PlacementResult, optimize_probe_placement

# Input exports
from vantage.terrain.loader import load_problem, parse_problem

# Error exports
from vantage.errors import VantageError, InputFormatError, CapacityError

__all__ = [
    # Version
    "__version__",
    # Core
    "Grid",
    "Probe",
    "sort_probes",
    "compute_visibility_mask",
    "VisibilityTable",
    # Config
    "VantageConfig",
    "SolverConfig",
    # Search
    "PlacementSolver",
    "PlacementResult",
    "optimize_probe_placement",
    # Input
    "load_problem",
    "parse_problem",
    # Errors
    "VantageError",
    "InputFormatError",
    "CapacityError",
]
