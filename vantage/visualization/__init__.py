"""
Visualization tools for probe placements.

This module provides static plotting of a placement over its altitude grid.
"""

from vantage.visualization.plotting import (
    draw_probe_markers,
    plot_placement,
    save_placement_figure,
)

__all__ = [
    "draw_probe_markers",
    "plot_placement",
    "save_placement_figure",
]
