"""
Configuration settings for vantage.

This module provides typed configuration classes for the solver, plotting
and logging, supporting loading from YAML/JSON files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union
import json
import logging

from vantage.core.grid import MAX_CELLS
from vantage.core.probes import MAX_PROBES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SolverConfig:
    """
    Search configuration.

    Attributes:
        prune: Enable upper-bound pruning (never changes the result)
        max_cells: Largest accepted grid, in cells (at most 64)
        max_probes: Largest accepted probe count (at most 8)
    """
    prune: bool = True
    max_cells: int = MAX_CELLS
    max_probes: int = MAX_PROBES

    def __post_init__(self):
        if not 1 <= self.max_cells <= MAX_CELLS:
            raise ValueError(f"max_cells must be in [1, {MAX_CELLS}], got {self.max_cells}")
        if not 0 <= self.max_probes <= MAX_PROBES:
            raise ValueError(f"max_probes must be in [0, {MAX_PROBES}], got {self.max_probes}")


@dataclass
class VisualizationConfig:
    """
    Plot settings.

    Attributes:
        output_path: Where to save the placement figure (None = no plot)
        dpi: Resolution for saved images
        figsize: Figure size (width, height) in inches
        cmap: Colormap for altitudes
    """
    output_path: Optional[str] = None
    dpi: int = 150
    figsize: Tuple[float, float] = (6, 6)
    cmap: str = "terrain"


@dataclass
class VantageConfig:
    """
    Main vantage configuration.

    Attributes:
        solver: Search settings
        visualization: Plot settings
        log_level: Logging level name for the command-line tool
        verbose: Log run header and summary
    """
    solver: SolverConfig = field(default_factory=SolverConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    log_level: str = "WARNING"
    verbose: bool = False

    def __post_init__(self):
        if not isinstance(self.log_level, str):
            raise ValueError(f"log_level must be a level name, got {self.log_level!r}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}. Choose from: {LOG_LEVELS}")

    @property
    def logging_level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        def convert(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(v) for v in obj]
            else:
                return obj
        return convert(self)

    @classmethod
    def from_dict(cls, data: dict) -> "VantageConfig":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")
        solver = SolverConfig(**data.get('solver', {}))
        vis_data = dict(data.get('visualization', {}))
        if 'figsize' in vis_data:
            vis_data['figsize'] = tuple(vis_data['figsize'])
        visualization = VisualizationConfig(**vis_data)

        return cls(
            solver=solver,
            visualization=visualization,
            log_level=data.get('log_level', "WARNING"),
            verbose=data.get('verbose', False),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "VantageConfig":
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "VantageConfig":
        """Load configuration from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        import yaml

        path = Path(path)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_json(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(path: Optional[Union[str, Path]] = None) -> VantageConfig:
    """
    Load configuration from file or return defaults.

    Supports YAML and JSON files based on extension.

    Args:
        path: Path to configuration file (optional)

    Returns:
        VantageConfig instance
    """
    if path is None:
        return VantageConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ['.yaml', '.yml']:
        return VantageConfig.from_yaml(path)
    elif suffix == '.json':
        return VantageConfig.from_json(path)
    else:
        raise ValueError(f"Unsupported configuration format: {suffix}")
