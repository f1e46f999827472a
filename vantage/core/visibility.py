"""
Line-of-sight visibility computation on altitude grids.

Visibility is evaluated along the eight principal and diagonal rays leaving a
probe cell. Along each ray a radial horizon sweep keeps the steepest slope
seen so far; a cell is visible when its own slope from the probe is at least
that maximum. Occluded cells do not stop the ray, a later and higher cell can
still be visible.

The result is a bitmask over linear cell indices (see ``Grid.coord_to_index``).
"""

import math
from typing import List, Tuple

from vantage.core.grid import Grid

# (dx, dy) unit steps: N, S, E, W, NE, SE, NW, SW. y grows downward (row index).
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (0, 1),
    (1, 0),
    (-1, 0),
    (1, -1),
    (1, 1),
    (-1, -1),
    (-1, 1),
)


def euclidean_distance(x1: int, y1: int, x2: int, y2: int) -> float:
    """Euclidean distance between two cell coordinates."""
    dx = float(x2 - x1)
    dy = float(y2 - y1)
    return math.sqrt(dx * dx + dy * dy)


def popcount(mask: int) -> int:
    """Number of set bits in a mask."""
    return bin(mask).count("1")


def compute_visibility_mask(grid: Grid, x: int, y: int, visibility_range: int) -> int:
    """
    Compute the set of cells visible from a probe at (x, y).

    The origin cell is always visible. For every direction the walk stops at
    the grid edge or at the first cell farther than ``visibility_range``.
    Slope ties count as visible.

    Args:
        grid: Altitude grid.
        x: Probe column, 0 <= x < grid.width.
        y: Probe row, 0 <= y < grid.height.
        visibility_range: Maximum Euclidean viewing distance (positive).

    Returns:
        Bitmask of visible cell indices.

    Raises:
        ValueError: If the origin is off the grid or the range is not positive.

    Example:
        >>> grid = Grid.from_rows([[1, 100]])
        >>> compute_visibility_mask(grid, 0, 0, 10)
        3
    """
    if not grid.in_bounds(x, y):
        raise ValueError(
            f"Origin ({x}, {y}) outside grid of size {grid.width}x{grid.height}"
        )
    if visibility_range <= 0:
        raise ValueError(f"Visibility range must be positive, got {visibility_range}")

    altitudes = grid.altitudes
    origin_altitude = int(altitudes[y, x])
    visible = 1 << grid.coord_to_index(x, y)

    for dx, dy in DIRECTIONS:
        cx, cy = x, y
        max_slope = -math.inf
        while True:
            cx += dx
            cy += dy
            if not grid.in_bounds(cx, cy):
                break

            distance = euclidean_distance(x, y, cx, cy)
            if distance > visibility_range:
                break

            slope = (int(altitudes[cy, cx]) - origin_altitude) / distance
            if slope < max_slope:
                # Occluded; keep walking
                continue

            max_slope = slope
            visible |= 1 << grid.coord_to_index(cx, cy)

    return visible


def compute_visibility_score(
    grid: Grid, x: int, y: int, visibility_range: int
) -> Tuple[int, int]:
    """
    Visibility mask of a probe at (x, y) together with its popcount.

    Returns:
        mask: Bitmask of visible cell indices.
        count: Number of visible cells.
    """
    mask = compute_visibility_mask(grid, x, y, visibility_range)
    return mask, popcount(mask)


def ray_cells(grid: Grid, x: int, y: int, direction: Tuple[int, int]) -> List[Tuple[int, int]]:
    """
    Cells along one ray from (x, y), nearest first, excluding the origin.

    Useful for inspecting a single horizon sweep.
    """
    dx, dy = direction
    cells = []
    cx, cy = x + dx, y + dy
    while grid.in_bounds(cx, cy):
        cells.append((cx, cy))
        cx += dx
        cy += dy
    return cells
