"""
Altitude grid data structure.

The grid is a small rectangular matrix of integer altitudes. Every cell has a
linear index ``y * width + x`` which doubles as its bit position in the
64-bit visibility and occupancy masks used throughout the search.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple
import numpy as np

# Masks are 64-bit words, one bit per cell.
MAX_CELLS = 64


@dataclass(frozen=True)
class Grid:
    """
    Immutable altitude grid.

    Attributes:
        altitudes: int64 array (H, W) of altitudes, row-major. Stored read-only.
        width: Number of columns (W)
        height: Number of rows (H)

    Example:
        >>> grid = Grid.from_rows([[1, 100]])
        >>> grid.width, grid.height
        (2, 1)
        >>> grid.coord_to_index(1, 0)
        1
    """
    altitudes: np.ndarray
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self):
        array = np.array(self.altitudes, dtype=np.int64)
        if array.ndim != 2:
            raise ValueError(f"Altitude matrix must be 2D, got shape {array.shape}")
        height, width = array.shape
        if height == 0 or width == 0:
            raise ValueError(f"Grid must have at least one cell, got shape {array.shape}")
        if height * width > MAX_CELLS:
            raise ValueError(
                f"Grid of {height}x{width} has {height * width} cells, at most {MAX_CELLS} supported"
            )
        array.setflags(write=False)

        # frozen dataclass: bypass __setattr__ for derived fields
        object.__setattr__(self, "altitudes", array)
        object.__setattr__(self, "height", int(height))
        object.__setattr__(self, "width", int(width))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """
        Create a grid from a list of rows.

        Raises:
            ValueError: If rows are empty or ragged.
        """
        if len(rows) == 0:
            raise ValueError("Grid must have at least one row")
        width = len(rows[0])
        for row_number, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {row_number} has {len(row)} values, expected {width}"
                )
        return cls(np.array(rows, dtype=np.int64))

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) tuple, numpy order."""
        return (self.height, self.width)

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    @property
    def full_mask(self) -> int:
        """Mask with one bit set for every cell."""
        return (1 << self.num_cells) - 1

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def coord_to_index(self, x: int, y: int) -> int:
        return y * self.width + x

    def index_to_coord(self, index: int) -> Tuple[int, int]:
        """Return the (x, y) coordinate of a linear cell index."""
        return index % self.width, index // self.width

    def altitude(self, x: int, y: int) -> int:
        return int(self.altitudes[y, x])

    def altitude_at(self, index: int) -> int:
        x, y = self.index_to_coord(index)
        return int(self.altitudes[y, x])

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Iterate (x, y) coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def mask_to_indices(self, mask: int) -> List[int]:
        """List the cell indices whose bits are set in ``mask``."""
        return [i for i in range(self.num_cells) if mask >> i & 1]

    def mask_to_array(self, mask: int) -> np.ndarray:
        """Boolean (H, W) array of the cells set in ``mask``."""
        bits = [(mask >> i) & 1 for i in range(self.num_cells)]
        return np.array(bits, dtype=bool).reshape(self.height, self.width)

    def altitude_sum(self, mask: int) -> int:
        """Sum of altitudes over the cells set in ``mask``."""
        flat = self.altitudes.ravel()
        return int(flat[self.mask_to_indices(mask)].sum())

    def describe(self) -> str:
        """Multi-line dump of the dimensions and altitude matrix."""
        lines = [f"width: {self.width}, height: {self.height}"]
        for row in self.altitudes:
            lines.append(" ".join(str(int(v)) for v in row))
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.altitudes, other.altitudes)

    def __hash__(self) -> int:
        return hash((self.shape, self.altitudes.tobytes()))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "width": self.width,
            "height": self.height,
            "altitudes": self.altitudes.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        """Create from dictionary."""
        return cls.from_rows(data["altitudes"])
