"""
Probe (sensor) definitions and utilities.

A probe is reduced to its visibility range: the maximum Euclidean distance
at which it can observe a cell. The search always works on probes sorted by
descending range so long-range probes are placed first and tighten the
pruning bound early.
"""

from dataclasses import dataclass
from typing import Iterable, List, Union

# RemainingProbes is an 8-bit set.
MAX_PROBES = 8


@dataclass(frozen=True, order=True)
class Probe:
    """
    A probe with an integer visibility range.

    Attributes:
        range: Maximum observation distance in cells (positive)
    """
    range: int

    def __post_init__(self):
        if isinstance(self.range, bool) or not isinstance(self.range, int):
            raise TypeError(f"Probe range must be an int, got {type(self.range).__name__}")
        if self.range <= 0:
            raise ValueError(f"Probe range must be positive, got {self.range}")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"range": self.range}

    @classmethod
    def from_dict(cls, data: dict) -> "Probe":
        """Create from dictionary."""
        return cls(range=data["range"])


def sort_probes(ranges: Iterable[Union[int, Probe]]) -> List[int]:
    """
    Validate probe ranges and sort them in descending order.

    Args:
        ranges: Visibility ranges, duplicates allowed.

    Returns:
        New list of ranges, longest first.

    Raises:
        ValueError: If any range is not positive.
    """
    probes = [Probe(int(r)).range for r in as_ranges(ranges)]
    return sorted(probes, reverse=True)


def all_probes_mask(num_probes: int) -> int:
    """RemainingProbes set with every probe index present."""
    return (1 << num_probes) - 1


def suffix_mask(start: int, num_probes: int) -> int:
    """RemainingProbes set holding indices ``start .. num_probes - 1``."""
    if start >= num_probes:
        return 0
    return all_probes_mask(num_probes) & ~all_probes_mask(start)


def as_ranges(probes: Iterable[Union[int, Probe]]) -> List[int]:
    """Accept a mix of Probe objects and bare ranges, return plain ranges."""
    return [p.range if isinstance(p, Probe) else p for p in probes]
