"""
Configuration management for vantage.

This module provides dataclass-based configuration models with validation.
"""

from vantage.config.settings import (
    VantageConfig,
    SolverConfig,
    VisualizationConfig,
    load_config,
)

__all__ = [
    "VantageConfig",
    "SolverConfig",
    "VisualizationConfig",
    "load_config",
]
