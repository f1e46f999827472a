"""
Ranking of completed placements.

Outcomes are compared lexicographically:
    1. more observed cells wins
    2. then a larger summed altitude of observed cells
    3. then a smaller summed altitude of the occupied cells

Equal outcomes keep the incumbent, so the first one found wins.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from vantage.core.grid import Grid
from vantage.core.visibility import popcount


@dataclass(frozen=True)
class PlacementOutcome:
    """
    Score of a complete placement.

    Attributes:
        peaks_visible: Number of distinct observed cells
        altitude_sum_visible: Sum of altitudes of observed cells
        altitude_sum_placed: Sum of altitudes of cells holding a probe
        occupied: Occupancy mask that produced this outcome
        visible: Visibility mask that produced this outcome
    """
    peaks_visible: int
    altitude_sum_visible: int
    altitude_sum_placed: int
    occupied: int = 0
    visible: int = 0

    @classmethod
    def from_masks(cls, grid: Grid, occupied: int, visible: int) -> "PlacementOutcome":
        """Score a terminal placement from its occupancy and visibility masks."""
        return cls(
            peaks_visible=popcount(visible),
            altitude_sum_visible=grid.altitude_sum(visible),
            altitude_sum_placed=grid.altitude_sum(occupied),
            occupied=occupied,
            visible=visible,
        )

    @classmethod
    def empty(cls) -> "PlacementOutcome":
        """Outcome of placing no probes at all."""
        return cls(0, 0, 0)

    @property
    def triple(self) -> Tuple[int, int, int]:
        return (self.peaks_visible, self.altitude_sum_visible, self.altitude_sum_placed)

    def rank_key(self) -> Tuple[int, int, int]:
        """Key whose natural ordering matches the ranking (larger is better)."""
        return (self.peaks_visible, self.altitude_sum_visible, -self.altitude_sum_placed)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "peaks_visible": self.peaks_visible,
            "altitude_sum_visible": self.altitude_sum_visible,
            "altitude_sum_placed": self.altitude_sum_placed,
            "occupied": self.occupied,
            "visible": self.visible,
        }


def is_better(candidate: PlacementOutcome, incumbent: Optional[PlacementOutcome]) -> bool:
    """
    True when ``candidate`` strictly beats ``incumbent``.

    Any outcome beats a missing incumbent. Ties on all three scores return
    False.
    """
    if incumbent is None:
        return True
    return candidate.rank_key() > incumbent.rank_key()


def update_best(
    incumbent: Optional[PlacementOutcome],
    candidate: PlacementOutcome,
) -> Optional[PlacementOutcome]:
    """Fold one outcome into the running best and return the new best."""
    if is_better(candidate, incumbent):
        return candidate
    return incumbent


def best_outcome(outcomes: Iterable[PlacementOutcome]) -> Optional[PlacementOutcome]:
    """
    Best outcome of an iterable under the ranking, or None if it is empty.

    The returned scores do not depend on the iteration order; among outcomes
    with identical scores the first one seen is returned.
    """
    best = None
    for outcome in outcomes:
        best = update_best(best, outcome)
    return best
