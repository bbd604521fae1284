import pytest

from routegen.algorithms.heuristic import heuristic_search
from routegen.algorithms.window import window_search
from tests.algorithms.sample_graphs import flat_copy


class TestHeuristicSearch:
    def test_exact_target(self, diamond):
        results = heuristic_search(diamond, 0, 3, k=5, target=10.0, tolerance=0.0)
        assert results == [([0, 1, 3], 10.0)]

    def test_closest_estimate_expanded_first(self, diamond):
        """Node 2 (6 m) is closer to the 11 m target than node 1 (5 m)."""
        results = heuristic_search(diamond, 0, 3, k=5, target=11.0, tolerance=2.0)
        assert results == [([0, 2, 3], 12.0), ([0, 1, 3], 10.0)]

    def test_same_results_as_window_search(self, complex_graph):
        heuristic = heuristic_search(complex_graph, 0, 5, k=10, target=7.0, tolerance=1.0)
        window = window_search(complex_graph, 0, 5, k=10, target=7.0, tolerance=1.0)
        assert sorted(heuristic) == sorted(window)

    def test_loop_through_goal(self, loop_graph):
        results = heuristic_search(loop_graph, 1, 1, k=1, target=15.0, tolerance=0.1)
        assert results == [([1, 2, 3, 1], 15.0)]

    def test_complex_graph(self, complex_graph):
        results = heuristic_search(complex_graph, 0, 5, k=3, target=6.0, tolerance=1.0)
        assert results == [([0, 1, 3, 5], 6.0), ([0, 2, 3, 5], 6.0)]

    def test_unreachable_goal(self, disconnected):
        assert heuristic_search(disconnected, 0, 1, k=3, target=1.0, tolerance=10.0) == []

    def test_nothing_in_window(self, diamond):
        assert heuristic_search(diamond, 0, 3, k=5, target=11.0, tolerance=0.0) == []

    def test_state_cap_fails_closed(self, diamond, caplog):
        results = heuristic_search(
            diamond, 0, 3, k=5, target=11.0, tolerance=2.0, max_states=4
        )
        # root, 1, 2 and 3-via-2 fit; the cap is hit before 3-via-1 is stored
        assert results == [([0, 2, 3], 12.0)]
        assert "state cap" in caplog.text

    def test_uncapped(self, diamond):
        results = heuristic_search(
            diamond, 0, 3, k=5, target=11.0, tolerance=2.0, max_states=None
        )
        assert len(results) == 2

    def test_bad_index(self, diamond):
        with pytest.raises(IndexError):
            heuristic_search(diamond, 7, 3, k=1, target=10.0, tolerance=0.0)


class TestStraightLinePruning:
    def test_branch_away_from_goal_is_never_stored(self, corridor, caplog):
        target = corridor.path_length([0, 1, 2])
        results = heuristic_search(
            corridor, 0, 2, k=5, target=target, tolerance=1.0, max_states=3
        )
        assert results == [([0, 1, 2], target)]
        assert "state cap" not in caplog.text

    def test_without_coordinates_the_spur_fills_the_cap(self, corridor, caplog):
        target = corridor.path_length([0, 1, 2])
        results = heuristic_search(
            flat_copy(corridor), 0, 2, k=5, target=target, tolerance=1.0, max_states=3
        )
        assert results == []
        assert "state cap" in caplog.text

    @pytest.mark.parametrize("route, tolerance", [([0, 5, 2], 1.0), ([0, 5, 2], 150.0)])
    def test_no_fitting_route_lost(self, corridor, route, tolerance):
        target = corridor.path_length(route)
        pruned = heuristic_search(corridor, 0, 2, k=100, target=target, tolerance=tolerance)
        unpruned = heuristic_search(
            flat_copy(corridor), 0, 2, k=100, target=target, tolerance=tolerance
        )
        assert (route, target) in pruned
        assert sorted(pruned) == sorted(unpruned)
