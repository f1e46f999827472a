"""
Tests for vantage.search module.

These tests verify search states, the ranking rule, the branch-and-bound
solver and the high-level runner.
"""

import itertools

import pytest


def _brute_force(grid, probes):
    """Best outcome over every assignment of sorted probes to distinct cells."""
    from vantage.core.probes import sort_probes
    from vantage.core.table import VisibilityTable
    from vantage.search.ranking import PlacementOutcome, best_outcome

    ordered = sort_probes(probes)
    table = VisibilityTable.build(grid, ordered)

    def outcomes():
        for cells in itertools.permutations(range(grid.num_cells), len(ordered)):
            occupied = 0
            visible = 0
            for probe_index, cell in enumerate(cells):
                occupied |= 1 << cell
                visible |= table.mask(probe_index, cell)
            yield PlacementOutcome.from_masks(grid, occupied, visible)

    return best_outcome(outcomes())


class TestSearchState:
    """Tests for SearchState."""

    def test_initial(self):
        """Root state has nothing placed and every probe remaining."""
        from vantage.search.state import SearchState

        state = SearchState.initial(3)

        assert state.occupied == 0
        assert state.visible == 0
        assert state.remaining == 0b111
        assert state.next_probe == 0
        assert not state.is_terminal

    def test_place_returns_new_state(self):
        """Placing a probe never mutates the parent."""
        from vantage.search.state import SearchState

        parent = SearchState.initial(2)
        child = parent.place(3, 0b1100)

        assert parent == SearchState.initial(2)
        assert child.occupied == 0b1000
        assert child.visible == 0b1100
        assert child.remaining == 0b10
        assert child.next_probe == 1

        sibling = parent.place(0, 0b0001)
        assert sibling.occupied == 0b0001
        assert child.occupied == 0b1000

    def test_terminal(self):
        """State is terminal once every probe is placed."""
        from vantage.search.state import SearchState

        state = SearchState.initial(2).place(0, 1).place(1, 2)

        assert state.is_terminal
        assert SearchState.initial(0).is_terminal

    def test_place_on_occupied_raises(self):
        """A cell cannot hold two probes."""
        from vantage.search.state import SearchState

        state = SearchState.initial(2).place(0, 1)

        with pytest.raises(ValueError):
            state.place(0, 1)

    def test_invariant(self):
        """Remaining set must be the suffix after next_probe."""
        from vantage.search.state import SearchState

        state = SearchState.initial(3).place(0, 1)
        state.check_invariant(3)

        broken = SearchState(occupied=1, visible=1, remaining=0b101, next_probe=1)
        with pytest.raises(AssertionError):
            broken.check_invariant(3)


class TestRanking:
    """Tests for the ranking rule."""

    def test_peaks_first(self):
        """More observed cells wins regardless of altitudes."""
        from vantage.search.ranking import PlacementOutcome, is_better

        assert is_better(PlacementOutcome(3, 0, 100), PlacementOutcome(2, 500, 0))
        assert not is_better(PlacementOutcome(2, 500, 0), PlacementOutcome(3, 0, 100))

    def test_altitude_sum_second(self):
        """Higher observed altitude breaks peak ties."""
        from vantage.search.ranking import PlacementOutcome, is_better

        assert is_better(PlacementOutcome(3, 10, 100), PlacementOutcome(3, 9, 0))

    def test_placed_altitude_third(self):
        """Lower placed altitude breaks the remaining ties."""
        from vantage.search.ranking import PlacementOutcome, is_better

        assert is_better(PlacementOutcome(3, 10, 1), PlacementOutcome(3, 10, 2))
        assert not is_better(PlacementOutcome(3, 10, 2), PlacementOutcome(3, 10, 1))

    def test_full_tie_keeps_incumbent(self):
        """Equal outcomes do not replace the incumbent."""
        from vantage.search.ranking import PlacementOutcome, is_better, update_best

        first = PlacementOutcome(3, 10, 1, occupied=0b01)
        second = PlacementOutcome(3, 10, 1, occupied=0b10)

        assert not is_better(second, first)
        assert update_best(first, second) is first

    def test_anything_beats_missing_incumbent(self):
        """The first outcome always becomes the incumbent."""
        from vantage.search.ranking import PlacementOutcome, is_better

        assert is_better(PlacementOutcome(0, -5, 7), None)

    def test_order_independent(self):
        """The best scores do not depend on the order outcomes arrive in."""
        from vantage.search.ranking import PlacementOutcome, best_outcome

        outcomes = [
            PlacementOutcome(4, 10, 3),
            PlacementOutcome(5, 2, 9),
            PlacementOutcome(5, 7, 4),
            PlacementOutcome(5, 7, 2),
            PlacementOutcome(1, 99, 0),
        ]

        results = {best_outcome(p).triple for p in itertools.permutations(outcomes)}

        assert results == {(5, 7, 2)}
        assert best_outcome([]) is None


class TestPlacementSolver:
    """Tests for the branch-and-bound solver."""

    def test_single_cell(self):
        """1x1 grid, one probe: sees and sits on the only cell."""
        from vantage.core.grid import Grid
        from vantage.search.solver import solve_placement

        outcome = solve_placement(Grid.from_rows([[5]]), [1])

        assert outcome.best.triple == (1, 5, 5)

    def test_two_cells_prefers_low_seat(self):
        """Ties on coverage are broken by the lower occupied altitude."""
        from vantage.core.grid import Grid
        from vantage.search.solver import solve_placement

        outcome = solve_placement(Grid.from_rows([[1, 100]]), [10])

        assert outcome.best.triple == (2, 101, 1)
        assert outcome.best.occupied == 0b01

    def test_no_probes(self):
        """Without probes nothing is observed."""
        from vantage.core.grid import Grid
        from vantage.search.solver import solve_placement

        outcome = solve_placement(Grid.from_rows([[3, 4]]), [])

        assert outcome.best.triple == (0, 0, 0)
        assert outcome.statistics.terminal_states == 1

    def test_extra_probes_cannot_exceed_grid(self):
        """More probes than needed never exceed the grid totals."""
        from vantage.search.solver import solve_placement
        from vantage.terrain.synthetic import generate_synthetic_grid

        grid = generate_synthetic_grid(2, 2, mode='ramp')
        outcome = solve_placement(grid, [1, 1, 1, 1])

        assert outcome.best.peaks_visible == 4
        assert outcome.best.altitude_sum_visible == grid.altitude_sum(grid.full_mask)
        # every cell holds a probe
        assert outcome.best.altitude_sum_placed == grid.altitude_sum(grid.full_mask)

    def test_table_mismatch_raises(self):
        """Solver refuses a table built for other probes."""
        from vantage.core.grid import Grid
        from vantage.core.table import VisibilityTable
        from vantage.search.solver import PlacementSolver

        grid = Grid.from_rows([[1, 2]])
        table = VisibilityTable.build(grid, [2])

        with pytest.raises(ValueError):
            PlacementSolver(grid, [3], table)

    def test_expand_places_next_probe_only(self):
        """Expansion fills every free cell with the next probe."""
        from vantage.core.grid import Grid
        from vantage.core.table import VisibilityTable
        from vantage.search.solver import PlacementSolver
        from vantage.search.state import SearchState

        grid = Grid.from_rows([[0, 0, 0]])
        table = VisibilityTable.build(grid, [1, 1])
        solver = PlacementSolver(grid, [1, 1], table, prune=False)

        root = SearchState.initial(2)
        children, pruned = solver.expand(root, best_peaks=0)

        assert pruned == 0
        assert [c.occupied for c in children] == [0b001, 0b010, 0b100]
        assert all(c.next_probe == 1 for c in children)

        grandchildren, _ = solver.expand(children[1], best_peaks=0)
        assert len(grandchildren) == 2
        assert all(c.is_terminal for c in grandchildren)

    def test_expand_prunes_hopeless_children(self):
        """Children whose bound is below the incumbent are dropped."""
        from vantage.core.grid import Grid
        from vantage.core.table import VisibilityTable
        from vantage.search.solver import PlacementSolver
        from vantage.search.state import SearchState

        grid = Grid.from_rows([[0, 0, 0, 0, 0]])
        table = VisibilityTable.build(grid, [1])
        solver = PlacementSolver(grid, [1], table)

        # end cells see 2, middle cells see 3
        children, pruned = solver.expand(SearchState.initial(1), best_peaks=3)

        assert pruned == 2
        assert [c.occupied for c in children] == [0b00010, 0b00100, 0b01000]

    @pytest.mark.parametrize("seed", range(6))
    def test_pruning_does_not_change_result(self, seed):
        """Pruned and exhaustive searches agree."""
        from vantage.search.solver import solve_placement
        from vantage.terrain.synthetic import generate_random_probes, generate_synthetic_grid

        grid = generate_synthetic_grid(3, 4, mode='random', seed=seed, low=-20, high=20)
        probes = sorted(generate_random_probes(3, max_range=3, seed=seed), reverse=True)

        pruned = solve_placement(grid, probes, prune=True)
        exhaustive = solve_placement(grid, probes, prune=False)

        assert pruned.best.triple == exhaustive.best.triple
        assert exhaustive.statistics.children_pruned == 0
        assert pruned.statistics.terminal_states <= exhaustive.statistics.terminal_states

    @pytest.mark.parametrize("seed", range(4))
    def test_matches_brute_force(self, seed):
        """Solver agrees with enumeration of every assignment."""
        from vantage.core.probes import sort_probes
        from vantage.search.solver import solve_placement
        from vantage.terrain.synthetic import generate_random_probes, generate_synthetic_grid

        grid = generate_synthetic_grid(3, 3, mode='random', seed=100 + seed)
        probes = generate_random_probes(3, max_range=2, seed=seed)

        outcome = solve_placement(grid, sort_probes(probes))

        assert outcome.best.triple == _brute_force(grid, probes).triple

    @pytest.mark.parametrize("seed", range(3))
    def test_at_least_best_single_placement(self, seed):
        """The optimum covers at least what any single probe covers alone."""
        from vantage.core.table import VisibilityTable
        from vantage.search.solver import solve_placement
        from vantage.terrain.synthetic import generate_synthetic_grid

        grid = generate_synthetic_grid(4, 4, mode='random', seed=seed)
        probes = [3, 2]
        table = VisibilityTable.build(grid, probes)

        outcome = solve_placement(grid, probes, table=table)

        assert outcome.best.peaks_visible >= int(table.max_popcount.max())

    def test_result_scores_match_masks(self):
        """Reported sums are consistent with the reported masks."""
        from vantage.core.visibility import popcount
        from vantage.search.solver import solve_placement
        from vantage.terrain.synthetic import generate_synthetic_grid

        grid = generate_synthetic_grid(3, 3, mode='peak', low=1, high=9)
        best = solve_placement(grid, [2, 1]).best

        assert popcount(best.occupied) == 2
        assert best.peaks_visible == popcount(best.visible)
        assert best.altitude_sum_visible == grid.altitude_sum(best.visible)
        assert best.altitude_sum_placed == grid.altitude_sum(best.occupied)
        assert best.occupied & ~best.visible == 0


class TestOptimizeProbePlacement:
    """Tests for the high-level runner."""

    def test_scenarios(self):
        """Reference scenarios from the problem statement."""
        from vantage.core.grid import Grid
        from vantage.search.runner import optimize_probe_placement

        assert optimize_probe_placement(Grid.from_rows([[5]]), [1]).format_line() == "1 5 5"
        assert optimize_probe_placement(Grid.from_rows([[1, 100]]), [10]).format_line() == "2 101 1"

    def test_unsorted_probes_and_probe_objects(self):
        """Probes may come in any order and as Probe objects."""
        from vantage.core.grid import Grid
        from vantage.core.probes import Probe
        from vantage.search.runner import optimize_probe_placement

        grid = Grid.from_rows([[0, 1, 2, 3]])
        result = optimize_probe_placement(grid, [Probe(1), 3])

        assert result.probes == [3, 1]
        assert result.triple == optimize_probe_placement(grid, [3, 1]).triple

    def test_result_details(self):
        """Result exposes cells, statistics and a serializable dict."""
        from vantage.core.grid import Grid
        from vantage.search.runner import optimize_probe_placement

        grid = Grid.from_rows([[1, 100]])
        result = optimize_probe_placement(grid, [10])

        assert result.placed_cells(grid) == [(0, 0)]
        assert result.observed_cells(grid) == [(0, 0), (1, 0)]
        assert result.statistics.terminal_states >= 1
        assert result.runtime_seconds >= result.table_seconds >= 0.0

        data = result.to_dict()
        assert data["peaks_visible"] == 2
        assert data["probes"] == [10]
        assert data["statistics"]["states_expanded"] == 1

    def test_no_prune_config(self):
        """Disabling pruning is reflected in the result."""
        from vantage.config.settings import SolverConfig
        from vantage.search.runner import optimize_probe_placement
        from vantage.terrain.synthetic import generate_synthetic_grid

        grid = generate_synthetic_grid(3, 3, mode='random', seed=11)
        result = optimize_probe_placement(grid, [2, 1], config=SolverConfig(prune=False))

        assert not result.pruning
        assert result.statistics.children_pruned == 0

    def test_capacity_errors(self):
        """Problems that do not fit the bitmasks are rejected."""
        from vantage.config.settings import SolverConfig
        from vantage.core.grid import Grid
        from vantage.errors import CapacityError
        from vantage.search.runner import optimize_probe_placement

        with pytest.raises(CapacityError):
            optimize_probe_placement(
                Grid.from_rows([[0] * 5] * 4), [1], config=SolverConfig(max_cells=16),
            )

        with pytest.raises(CapacityError):
            optimize_probe_placement(Grid.from_rows([[0] * 4] * 4), [1] * 9)

        with pytest.raises(CapacityError):
            optimize_probe_placement(Grid.from_rows([[0]]), [1, 1])

    def test_verbose_logs_summary(self, caplog):
        """Verbose runs log a header and summary."""
        import logging
        from vantage.core.grid import Grid
        from vantage.search.runner import optimize_probe_placement

        with caplog.at_level(logging.INFO, logger="vantage"):
            optimize_probe_placement(Grid.from_rows([[5]]), [1], verbose=True)

        assert "Probe Placement Search" in caplog.text
        assert "Best: 1 5 5" in caplog.text
