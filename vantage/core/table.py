"""
Precomputed per-probe visibility tables.

Before the search starts, every (probe, cell) pair is evaluated once. The
search then looks up the marginal visibility of a placement in O(1) and uses
the per-probe best popcount as an admissible pruning bound.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from vantage.core.grid import Grid
from vantage.core.visibility import compute_visibility_score, popcount

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibilityTable:
    """
    Dense probe x cell table of visibility masks.

    Attributes:
        probes: Probe ranges the table was built for, in table order
            (the caller passes them sorted by descending range).
        masks: ``masks[i][c]`` is the visibility mask of probe ``i`` placed on
            cell index ``c``.
        max_popcount: int64 array, ``max_popcount[i]`` is the largest number of
            cells probe ``i`` can observe from any single cell.
    """
    probes: Tuple[int, ...]
    masks: Tuple[Tuple[int, ...], ...]
    max_popcount: np.ndarray

    @classmethod
    def build(cls, grid: Grid, probes: Sequence[int]) -> "VisibilityTable":
        """
        Evaluate every probe on every cell of the grid (row-major).

        Args:
            grid: Altitude grid.
            probes: Probe ranges, already sorted by the caller.

        Returns:
            Immutable VisibilityTable.
        """
        table = []
        best = np.zeros(len(probes), dtype=np.int64)

        for probe_index, visibility_range in enumerate(probes):
            row = []
            for x, y in grid.cells():
                mask, count = compute_visibility_score(grid, x, y, visibility_range)
                row.append(mask)
                if count > best[probe_index]:
                    best[probe_index] = count
            table.append(tuple(row))
            _logger.debug(
                "probe %d (range %d): best single placement sees %d cells",
                probe_index, visibility_range, int(best[probe_index]),
            )

        best.setflags(write=False)
        return cls(
            probes=tuple(int(p) for p in probes),
            masks=tuple(table),
            max_popcount=best,
        )

    @property
    def num_probes(self) -> int:
        return len(self.probes)

    def mask(self, probe_index: int, cell: int) -> int:
        """Visibility mask of probe ``probe_index`` placed on ``cell``."""
        return self.masks[probe_index][cell]

    def upper_bound(self, visible: int, remaining: int) -> int:
        """
        Admissible bound on the final observed-cell count.

        Adds the best single-placement popcount of every probe still in the
        ``remaining`` set to the cells already observed.

        Args:
            visible: Current visibility mask.
            remaining: Bit set of probe indices not yet placed.
        """
        bound = popcount(visible)
        for probe_index in range(self.num_probes):
            if remaining >> probe_index & 1:
                bound += int(self.max_popcount[probe_index])
        return bound

    def best_single_placement(self, probe_index: int) -> Tuple[int, int]:
        """
        First cell (row-major) achieving ``max_popcount[probe_index]``.

        Returns:
            (cell index, mask) tuple.
        """
        target = int(self.max_popcount[probe_index])
        for cell, mask in enumerate(self.masks[probe_index]):
            if popcount(mask) == target:
                return cell, mask
        raise ValueError(f"Empty table row for probe {probe_index}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, VisibilityTable):
            return NotImplemented
        return (
            self.probes == other.probes
            and self.masks == other.masks
            and np.array_equal(self.max_popcount, other.max_popcount)
        )

    def __hash__(self) -> int:
        return hash((self.probes, self.masks))
