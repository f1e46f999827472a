"""
Exception types for vantage.

Input problems are split into format errors (the text could not be read as a
problem description) and capacity errors (the problem is well-formed but does
not fit the 64-cell / 8-probe bitmask representation).
"""

from typing import Optional


class VantageError(Exception):
    """Base class for all vantage errors."""


class InputFormatError(VantageError):
    """
    Raised when the problem text is malformed.

    Attributes:
        stage: Input stage that failed (e.g. "dimensions", "matrix row 2").
        message: Human-readable description of the problem.
    """

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"[{stage}] {message}")


class CapacityError(VantageError):
    """Raised when a grid or probe list exceeds the supported limits."""

    def __init__(self, message: str, stage: Optional[str] = None):
        self.stage = stage
        self.message = message
        if stage is None:
            super().__init__(message)
        else:
            super().__init__(f"[{stage}] {message}")
