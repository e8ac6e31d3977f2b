import random

import pytest

from gcp.graph import AdjacencyList, AdjacencyMatrix
from gcp.grasp import (
    GraspSolver,
    assign_color,
    construct,
    count_remaining_edges,
    get_n_largest_degree,
    grasp,
    grasp_attempt,
    grasp_wrapper,
)
from gcp.solution import count_colors, is_valid, to_coloring


def test_get_n_largest_degree_on_induced_subgraph(myciel3):
    assert get_n_largest_degree(3, myciel3, [10, 3, 4, 5]) == [3, 5, 4]


def test_get_n_largest_degree_on_whole_graph(myciel3):
    everything = list(range(myciel3.num_vertices()))

    assert get_n_largest_degree(5, myciel3, everything) == [10, 0, 1, 2, 3]


def test_get_n_largest_degree_truncates_to_subset(myciel3):
    subset = [10, 3, 4, 5]
    everything = list(range(myciel3.num_vertices()))

    assert len(get_n_largest_degree(len(subset) + 1, myciel3, subset)) == len(subset)
    assert len(get_n_largest_degree(len(everything) + 1, myciel3, everything)) == len(everything)


def test_get_n_largest_degree_against_other_list(myciel3):
    # Degree of 5, 6, 7 counted against {10, 1}: 5 -> 2, 6 -> 1, 7 -> 2
    assert get_n_largest_degree(2, myciel3, [5, 6, 7], within=[10, 1]) == [5, 7]


def test_count_remaining_edges(myciel3):
    assert count_remaining_edges(myciel3, [0, 1, 2]) == 2


def test_assign_color_builds_independent_set(myciel3, rng):
    color_class = assign_color(myciel3, list(range(11)), 3, rng)

    assert color_class
    for u in color_class:
        for v in color_class:
            assert not myciel3.has_edge(u, v)


def test_assign_color_is_maximal(myciel3, rng):
    uncolored = list(range(11))
    color_class = set(assign_color(myciel3, uncolored, 5, rng))

    # Every uncolored vertex left out neighbors a class member
    for v in set(uncolored) - color_class:
        assert myciel3.neighbors(v) & color_class


def test_assign_color_rejects_empty_candidate_list(myciel3, rng):
    with pytest.raises(ValueError):
        assign_color(myciel3, list(range(11)), 0, rng)


def test_construct_covers_every_vertex(myciel3, rng):
    class_list = construct(myciel3, 5, 5, rng)
    coloring = to_coloring(class_list, myciel3.num_vertices())

    assert is_valid(myciel3, coloring)
    assert count_colors(coloring) == len(class_list)


def test_construct_rejects_zero_color_iterations(myciel3, rng):
    with pytest.raises(ValueError):
        construct(myciel3, 0, 5, rng)


def test_grasp_attempt_is_valid(myciel3, rng):
    solution = grasp_attempt(myciel3, 5, 5, rng)

    assert is_valid(myciel3, solution.coloring)
    assert solution.num_colors == count_colors(solution.coloring)
    assert solution.num_colors >= 4


def test_grasp_returns_sorted_best_k(myciel3, rng):
    solutions = grasp(myciel3, 10, 5, 5, 3, rng)

    assert len(solutions) == 3
    assert [s.num_colors for s in solutions] == sorted(s.num_colors for s in solutions)
    for solution in solutions:
        assert is_valid(myciel3, solution.coloring)


def test_grasp_keeps_fewer_solutions_than_iterations(myciel3, rng):
    assert len(grasp(myciel3, 2, 5, 5, 5, rng)) == 2


def test_grasp_is_reproducible_with_seed(myciel3):
    first = grasp(myciel3, 6, 3, 3, 6, random.Random(7), num_workers=4)
    second = grasp(myciel3, 6, 3, 3, 6, random.Random(7), num_workers=1)

    assert [s.coloring for s in first] == [s.coloring for s in second]


def test_grasp_wrapper(myciel3, rng):
    num_colors, coloring = grasp_wrapper(myciel3, 10, 5, 5, rng)

    assert is_valid(myciel3, coloring)
    assert num_colors == count_colors(coloring)
    assert 4 <= num_colors <= 6


def test_grasp_wrapper_on_complete_graph(k5, rng):
    num_colors, coloring = grasp_wrapper(k5, 3, 2, 2, rng)

    assert num_colors == 5
    assert sorted(coloring) == [1, 2, 3, 4, 5]


def test_grasp_wrapper_on_edgeless_graph(rng):
    num_colors, coloring = grasp_wrapper(AdjacencyList(6), 3, 2, 2, rng)

    assert num_colors == 1
    assert coloring == [1] * 6


def test_grasp_on_empty_graph(rng):
    assert grasp_wrapper(AdjacencyMatrix(0), 2, 2, 2, rng) == (0, [])


def test_grasp_rejects_bad_configuration(myciel3, rng):
    with pytest.raises(ValueError):
        grasp(myciel3, 2, 5, 0, 1, rng)
    with pytest.raises(ValueError):
        grasp(myciel3, 2, 5, 5, 0, rng)


def test_grasp_solver(myciel3_instance):
    solver = GraspSolver(grasp_iterations=4, color_iterations=3, color_list_size=3, num_runs=3, base_seed=1)
    result = solver.solve(myciel3_instance)

    assert result.algorithm == "grasp"
    assert result.num_runs == 3
    assert len(result.all_colors) == 3
    assert result.best_colors == min(result.all_colors)
    assert solver.verify_solution(myciel3_instance, result)
    assert solver.get_params()["color_list_size"] == 3
