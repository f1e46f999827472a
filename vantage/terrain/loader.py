"""
Problem loading from line-oriented text.

Input layout:
    line 1:        H W
    lines 2..H+1:  W altitudes per line
    next line:     probe count (informational)
    next line:     probe ranges

The probe count line is kept for reference only; the actual probes are the
tokens of the last line.
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Union

from vantage.core.grid import Grid, MAX_CELLS
from vantage.core.probes import MAX_PROBES
from vantage.errors import CapacityError, InputFormatError


@dataclass
class ProbeProblem:
    """
    A parsed problem instance.

    Attributes:
        grid: Altitude grid
        probes: Probe ranges in input order
        declared_probe_count: Value of the probe count line
    """
    grid: Grid
    probes: List[int] = field(default_factory=list)
    declared_probe_count: Optional[int] = None

    def describe(self) -> str:
        """Dimensions, altitude matrix and probe list as text."""
        return f"{self.grid.describe()}\nprobes: {self.probes}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "grid": self.grid.to_dict(),
            "probes": list(self.probes),
            "declared_probe_count": self.declared_probe_count,
        }


def _parse_ints(line: str, stage: str) -> List[int]:
    values = []
    for token in line.split():
        try:
            values.append(int(token))
        except ValueError:
            raise InputFormatError(stage, f"non-integer token {token!r}") from None
    return values


def _next_line(lines: Iterator[str], stage: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise InputFormatError(stage, "unexpected end of input") from None


def parse_problem(
    lines: Iterable[str],
    max_cells: int = MAX_CELLS,
    max_probes: int = MAX_PROBES,
) -> ProbeProblem:
    """
    Parse a problem from an iterable of text lines.

    Args:
        lines: Input lines (trailing newlines allowed)
        max_cells: Largest accepted grid
        max_probes: Largest accepted probe count

    Returns:
        ProbeProblem

    Raises:
        InputFormatError: Missing line, non-integer token, or a row/column
            count that does not match the declared dimensions.
        CapacityError: Grid larger than ``max_cells`` or more than
            ``max_probes`` probes.
    """
    it = iter(lines)

    dims = _parse_ints(_next_line(it, "dimensions"), "dimensions")
    if len(dims) != 2:
        raise InputFormatError("dimensions", f"expected 'H W', got {len(dims)} values")
    height, width = dims
    if height <= 0 or width <= 0:
        raise InputFormatError("dimensions", f"dimensions must be positive, got {height}x{width}")
    if height * width > max_cells:
        raise CapacityError(
            f"grid has {height * width} cells, at most {max_cells} supported",
            stage="dimensions",
        )

    rows = []
    for row_number in range(1, height + 1):
        stage = f"matrix row {row_number}"
        row = _parse_ints(_next_line(it, stage), stage)
        if len(row) != width:
            raise InputFormatError(stage, f"expected {width} values, got {len(row)}")
        rows.append(row)

    count = _parse_ints(_next_line(it, "probe count"), "probe count")
    if len(count) != 1:
        raise InputFormatError("probe count", f"expected one integer, got {len(count)} values")

    if count[0] == 0:
        # The probes line may be absent when no probes are declared
        probes = _parse_ints(next(it, ""), "probes")
    else:
        probes = _parse_ints(_next_line(it, "probes"), "probes")
    for value in probes:
        if value <= 0:
            raise InputFormatError("probes", f"probe range must be positive, got {value}")
    if len(probes) > max_probes:
        raise CapacityError(
            f"got {len(probes)} probes, at most {max_probes} supported",
            stage="probes",
        )

    return ProbeProblem(
        grid=Grid.from_rows(rows),
        probes=probes,
        declared_probe_count=count[0],
    )


def load_problem(
    source: Union[str, Path, TextIO],
    max_cells: int = MAX_CELLS,
    max_probes: int = MAX_PROBES,
) -> ProbeProblem:
    """
    Load a problem from a file path, a text stream or a string.

    Strings without a newline are treated as file paths; any other string is
    parsed as the problem text itself. A complete problem always spans
    several lines.

    Example:
        >>> problem = load_problem("1 2\\n1 100\\n1\\n10\\n")
        >>> problem.grid.shape, problem.probes
        ((1, 2), [10])
    """
    if isinstance(source, Path) or (isinstance(source, str) and "\n" not in source):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Problem file not found: {path}")
        with open(path, 'r') as f:
            return parse_problem(f, max_cells=max_cells, max_probes=max_probes)

    if isinstance(source, str):
        source = io.StringIO(source)
    return parse_problem(source, max_cells=max_cells, max_probes=max_probes)


def format_result(peaks_visible: int, altitude_sum_visible: int, altitude_sum_placed: int) -> str:
    """Render the three result integers as the output line."""
    return f"{peaks_visible} {altitude_sum_visible} {altitude_sum_placed}"
