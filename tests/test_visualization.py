"""
Tests for vantage.visualization module.
"""

import matplotlib
matplotlib.use('Agg')


class TestPlotting:
    """Tests for placement plots."""

    def test_plot_placement(self):
        """Plot draws one marker per occupied cell."""
        import matplotlib.pyplot as plt
        from vantage.core.grid import Grid
        from vantage.visualization.plotting import plot_placement

        grid = Grid.from_rows([[1, 2, 3], [4, 5, 6]])
        ax = plot_placement(grid, occupied_mask=0b100001, visible_mask=0b110011, title="Test")

        assert ax.get_title() == "Test"
        assert len(ax.lines) == 2
        plt.close('all')

    def test_plot_on_existing_axes(self):
        """Caller-supplied axes are reused."""
        import matplotlib.pyplot as plt
        from vantage.core.grid import Grid
        from vantage.visualization.plotting import plot_placement

        fig, ax = plt.subplots()
        grid = Grid.from_rows([[1, 100]])

        assert plot_placement(grid, 0b01, 0b11, ax=ax, show_colorbar=False) is ax
        plt.close(fig)

    def test_save_figure(self, tmp_path):
        """Figure is written to disk."""
        from vantage.search.runner import optimize_probe_placement
        from vantage.terrain.synthetic import generate_synthetic_grid
        from vantage.visualization.plotting import save_placement_figure

        grid = generate_synthetic_grid(3, 3, mode='peak', high=20)
        result = optimize_probe_placement(grid, [1, 1])

        path = save_placement_figure(
            grid, result.occupied_mask, result.visible_mask,
            tmp_path / "placement.png", dpi=50, figsize=(3, 3),
        )

        assert path.exists()
        assert path.stat().st_size > 0
