"""
Core grid, probe and visibility computation.

This module provides:
    - Grid: immutable altitude matrix with index/coordinate conversion
    - Probe utilities: validation and descending-range ordering
    - Radial horizon-sweep visibility computation
    - VisibilityTable: per-probe, per-cell precomputed masks
"""

from vantage.core.grid import Grid, MAX_CELLS
from vantage.core.probes import Probe, MAX_PROBES, sort_probes
from vantage.core.visibility import (
    DIRECTIONS,
    compute_visibility_mask,
    compute_visibility_score,
    popcount,
)
from vantage.core.table import VisibilityTable

__all__ = [
    "Grid",
    "MAX_CELLS",
    "Probe",
    "MAX_PROBES",
    "sort_probes",
    "DIRECTIONS",
    "compute_visibility_mask",
    "compute_visibility_score",
    "popcount",
    "VisibilityTable",
]
