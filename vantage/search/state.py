"""
Search state for the branch-and-bound placement search.

States are immutable values. Expanding a state returns a new child, so
sibling branches never see each other's placements.
"""

from typing import NamedTuple

from vantage.core.probes import all_probes_mask, suffix_mask


class SearchState(NamedTuple):
    """
    One node of the placement search.

    Attributes:
        occupied: Bit set of cells holding a placed probe.
        visible: Bit set of cells observed by any placed probe.
        remaining: Bit set of probe indices not placed yet.
        next_probe: Index of the probe to place next.
    """
    occupied: int
    visible: int
    remaining: int
    next_probe: int

    @classmethod
    def initial(cls, num_probes: int) -> "SearchState":
        """Root state: nothing placed, every probe remaining."""
        return cls(
            occupied=0,
            visible=0,
            remaining=all_probes_mask(num_probes),
            next_probe=0,
        )

    @property
    def is_terminal(self) -> bool:
        return self.remaining == 0

    def is_occupied(self, cell: int) -> bool:
        return bool(self.occupied >> cell & 1)

    def place(self, cell: int, visibility_mask: int) -> "SearchState":
        """
        Place probe ``next_probe`` on ``cell``.

        Args:
            cell: Unoccupied cell index.
            visibility_mask: Mask the probe observes from ``cell``.

        Returns:
            Child state with the cell occupied, its mask merged and the probe
            removed from the remaining set.
        """
        if self.is_occupied(cell):
            raise ValueError(f"Cell {cell} is already occupied")
        return SearchState(
            occupied=self.occupied | (1 << cell),
            visible=self.visible | visibility_mask,
            remaining=self.remaining & ~(1 << self.next_probe),
            next_probe=self.next_probe + 1,
        )

    def check_invariant(self, num_probes: int) -> None:
        """Assert that the remaining set is exactly the unplaced suffix."""
        expected = suffix_mask(self.next_probe, num_probes)
        assert self.remaining == expected, (
            f"remaining probes {self.remaining:#x} != suffix {expected:#x} "
            f"from index {self.next_probe}"
        )
