"""
Problem input and synthetic terrain.

This module provides:
    - Parsing problems from line-oriented text (files, streams, strings)
    - Result line formatting
    - Synthetic grids and probe lists for testing
"""

from vantage.terrain.loader import (
    ProbeProblem,
    parse_problem,
    load_problem,
    format_result,
)
from vantage.terrain.synthetic import (
    generate_synthetic_grid,
    generate_random_probes,
)

__all__ = [
    # Loading
    "ProbeProblem",
    "parse_problem",
    "load_problem",
    "format_result",
    # Synthetic generation
    "generate_synthetic_grid",
    "generate_random_probes",
]
