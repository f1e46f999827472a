"""
Static plotting of probe placements.

Draws the altitude grid, shades the observed cells and marks the cells that
hold a probe.
"""

from typing import Optional, Tuple, Union
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from vantage.core.grid import Grid


def draw_probe_markers(
    ax: plt.Axes,
    grid: Grid,
    occupied_mask: int,
    color: str = 'red',
    show_labels: bool = True,
) -> None:
    """
    Mark occupied cells on a matplotlib axes.

    Args:
        ax: Matplotlib axes to draw on
        grid: Altitude grid (for index to coordinate conversion)
        occupied_mask: Bit set of cells holding a probe
        color: Marker color
        show_labels: Annotate each marker with the cell altitude
    """
    for index in grid.mask_to_indices(occupied_mask):
        x, y = grid.index_to_coord(index)
        ax.plot(
            x, y, 'o',
            color=color,
            markersize=10,
            markeredgecolor='white',
            markeredgewidth=1.5,
            zorder=10
        )
        if show_labels:
            ax.annotate(
                f'{grid.altitude(x, y)}', (x + 0.2, y - 0.2),
                fontsize=8, color='white', fontweight='bold',
                zorder=11,
                bbox=dict(boxstyle='round,pad=0.2', facecolor=color, alpha=0.7)
            )


def plot_placement(
    grid: Grid,
    occupied_mask: int,
    visible_mask: int,
    ax: Optional[plt.Axes] = None,
    cmap: str = 'terrain',
    title: Optional[str] = None,
    show_colorbar: bool = True,
) -> plt.Axes:
    """
    Plot a placement over the altitude grid.

    Args:
        grid: Altitude grid
        occupied_mask: Bit set of cells holding a probe
        visible_mask: Bit set of observed cells
        ax: Matplotlib axes (creates new figure if None)
        cmap: Colormap for altitudes
        title: Optional title
        show_colorbar: Whether to show colorbar

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))

    im = ax.imshow(grid.altitudes, cmap=cmap, origin='upper', aspect='equal')

    # Hatch cells nobody observes
    hidden = ~grid.mask_to_array(visible_mask)
    hidden_overlay = np.ma.masked_where(~hidden, hidden.astype(float))
    ax.imshow(hidden_overlay, cmap='binary', origin='upper', aspect='equal',
              alpha=0.6, vmin=0, vmax=1)

    draw_probe_markers(ax, grid, occupied_mask)

    ax.set_xticks(np.arange(grid.width))
    ax.set_yticks(np.arange(grid.height))
    ax.set_xlabel('X')
    ax.set_ylabel('Y')

    if title:
        ax.set_title(title, fontweight='bold')

    observed_patch = mpatches.Patch(color='white', label='Observed')
    hidden_patch = mpatches.Patch(color='black', alpha=0.6, label='Not observed')
    ax.legend(handles=[observed_patch, hidden_patch], loc='upper right', fontsize=8)

    if show_colorbar:
        plt.colorbar(im, ax=ax, label='Altitude', shrink=0.7)

    return ax


def save_placement_figure(
    grid: Grid,
    occupied_mask: int,
    visible_mask: int,
    output_path: Union[str, Path],
    title: str = "Probe Placement",
    dpi: int = 150,
    figsize: Tuple[float, float] = (6, 6),
    cmap: str = 'terrain',
) -> Path:
    """
    Render a placement and save it to ``output_path``.

    Returns:
        Path of the written image
    """
    output_path = Path(output_path)
    fig, ax = plt.subplots(figsize=figsize)
    plot_placement(grid, occupied_mask, visible_mask, ax=ax, cmap=cmap, title=title)
    fig.tight_layout()
    fig.savefig(output_path, dpi=dpi)
    plt.close(fig)
    return output_path
