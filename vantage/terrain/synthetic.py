"""
Synthetic altitude grids and probe lists for testing and development.

This module provides small grids with predictable features (flat plains,
monotonic ramps, single peaks) and seeded random instances for exercising
the solver.
"""

from typing import List, Optional
import numpy as np

from vantage.core.grid import Grid, MAX_CELLS
from vantage.core.probes import MAX_PROBES


def generate_synthetic_grid(
    height: int = 4,
    width: int = 4,
    mode: str = 'random',
    seed: Optional[int] = None,
    low: int = 0,
    high: int = 100,
) -> Grid:
    """
    Generate a synthetic altitude grid.

    Args:
        height: Number of rows.
        width: Number of columns.
        mode: Type of terrain:
            - 'random': Uniform random integers in [low, high] (default)
            - 'flat': All cells at ``low``
            - 'ramp': Altitude grows by one per column and per row
            - 'peak': Single peak in the centre, falling off with distance
        seed: Random seed for reproducibility.
        low: Lowest altitude.
        high: Highest altitude.

    Returns:
        Grid of shape (height, width).

    Example:
        >>> grid = generate_synthetic_grid(3, 3, mode='ramp')
        >>> grid.altitude(2, 2)
        4
    """
    if height * width > MAX_CELLS:
        raise ValueError(f"Grid of {height}x{width} exceeds {MAX_CELLS} cells")

    rng = np.random.default_rng(seed)
    y, x = np.mgrid[0:height, 0:width]

    if mode == 'random':
        altitudes = rng.integers(low, high, size=(height, width), endpoint=True)

    elif mode == 'flat':
        altitudes = np.full((height, width), low, dtype=np.int64)

    elif mode == 'ramp':
        altitudes = low + x + y

    elif mode == 'peak':
        cx, cy = (width - 1) / 2, (height - 1) / 2
        dist = np.sqrt((x - cx) ** 2 + (y - cy) ** 2)
        falloff = 1.0 - dist / (dist.max() + 1e-8)
        altitudes = np.rint(low + falloff * (high - low))

    else:
        raise ValueError(f"Unknown grid mode: {mode}. Choose from: 'random', 'flat', 'ramp', 'peak'")

    return Grid(altitudes.astype(np.int64))


def generate_random_probes(
    count: int,
    max_range: int = 4,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Generate random probe ranges in [1, max_range].

    Args:
        count: Number of probes (at most 8).
        max_range: Longest range to draw.
        seed: Random seed for reproducibility.
    """
    if count > MAX_PROBES:
        raise ValueError(f"At most {MAX_PROBES} probes supported, got {count}")
    rng = np.random.default_rng(seed)
    return [int(r) for r in rng.integers(1, max_range, size=count, endpoint=True)]
