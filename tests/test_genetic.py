import random

import pytest

from gcp.genetic import (
    GeneticSolver,
    coloring_upper_bound,
    crossover,
    generate_individual,
    genetic,
    mutate,
    replace,
    select,
    valid_color_assignment,
)
from gcp.graph import AdjacencyList, AdjacencyMatrix
from gcp.solution import count_colors, is_valid, neighbor_sets


@pytest.fixture
def diamond():
    graph = AdjacencyList(4)
    graph.add_edge(0, 1)
    graph.add_edge(0, 2)
    graph.add_edge(1, 2)
    graph.add_edge(2, 3)
    return graph


def test_valid_color_assignment(diamond):
    adjacency = neighbor_sets(diamond)

    assert valid_color_assignment(adjacency, [1, 2, 3, 1], 2)
    assert not valid_color_assignment(adjacency, [1, 2, 2, 1], 2)


def test_valid_color_assignment_upto_checks_lower_neighbors(diamond):
    adjacency = neighbor_sets(diamond)

    # Vertex 2 clashes only with vertex 3
    assert valid_color_assignment(adjacency, [1, 2, 3, 3], 2, upto=2)
    assert not valid_color_assignment(adjacency, [1, 2, 3, 3], 2)
    assert not valid_color_assignment(adjacency, [1, 3, 3, 1], 2, upto=2)


def test_coloring_upper_bound(diamond, myciel3):
    assert coloring_upper_bound(diamond) == 4
    assert coloring_upper_bound(myciel3) == 6


def test_coloring_upper_bound_rejects_empty_graph():
    with pytest.raises(ValueError):
        coloring_upper_bound(AdjacencyMatrix(0))


def test_generate_individual(myciel3, rng):
    upper_bound = coloring_upper_bound(myciel3)
    individual = generate_individual(myciel3, upper_bound, rng)

    assert is_valid(myciel3, individual)
    assert all(1 <= color <= upper_bound for color in individual)


def test_mutate(myciel3, rng):
    upper_bound = coloring_upper_bound(myciel3)
    individual = generate_individual(myciel3, upper_bound, rng)

    mutate(myciel3, individual, upper_bound, 0.2, rng)

    assert is_valid(myciel3, individual)
    assert all(1 <= color <= upper_bound for color in individual)


def test_mutate_with_certainty_recolors_within_bound(k5, rng):
    individual = [1, 2, 3, 4, 5]

    mutate(k5, individual, 5, 1.0, rng)

    assert sorted(individual) == [1, 2, 3, 4, 5]


def test_mutate_with_zero_probability_is_noop(myciel3, rng):
    individual = [1, 2, 1, 2, 3, 1, 2, 1, 2, 3, 4]

    mutate(myciel3, individual, 6, 0.0, rng)

    assert individual == [1, 2, 1, 2, 3, 1, 2, 1, 2, 3, 4]


def test_select(rng):
    population = [
        (3, [1, 2, 1, 3, 1]),
        (2, [2, 1, 2, 2, 1]),
        (4, [1, 2, 3, 4]),
        (3, [3, 2, 2, 1, 3, 1]),
        (3, [1, 2, 3, 1, 2, 3, 1, 2, 3]),
        (5, [1, 2, 3, 4, 5]),
    ]
    population.sort(key=lambda item: item[0])

    for _ in range(20):
        p1, p2 = select(population, len(population), 0.2, rng)

        assert p1 != p2
        for i, (_, individual) in enumerate(population):
            if individual == p1 or individual == p2:
                assert i <= int(len(population) * 0.2)


def test_select_needs_two_individuals(rng):
    with pytest.raises(ValueError):
        select([(1, [1])], 1, 0.5, rng)


def test_crossover_produces_valid_offspring(myciel3, rng):
    upper_bound = coloring_upper_bound(myciel3)
    population = []
    for _ in range(6):
        individual = generate_individual(myciel3, upper_bound, rng)
        population.append((count_colors(individual), individual))
    population.sort(key=lambda item: item[0])

    for _ in range(10):
        p1, p2 = select(population, len(population), 0.2, rng)
        offspring = crossover(myciel3, p1, p2, rng)

        assert len(offspring) == myciel3.num_vertices()
        assert is_valid(myciel3, offspring)


def test_crossover_repairs_conflicting_parents(k5):
    offspring = crossover(k5, [1, 1, 1, 1, 1], [1, 1, 1, 1, 1], random.Random(0))

    # Vertex 0 keeps its color, every later vertex takes the smallest free one
    assert offspring == [1, 2, 3, 4, 5]


def test_replace():
    population = [
        (3, [1, 2, 1, 3, 1]),
        (2, [2, 1, 2, 2, 1]),
        (4, [1, 2, 3, 4]),
        (3, [3, 2, 2, 1, 3, 1]),
    ]

    pop1 = list(population)
    replace(pop1, 3)
    assert pop1 == population[:3]

    pop2 = list(population)
    replace(pop2, 1)
    assert pop2 == [(3, [1, 2, 1, 3, 1])]


def test_genetic(myciel3, rng):
    best, coloring = genetic(myciel3, 300, 20, 2, 0.01, 0.2, rng)

    assert best <= coloring_upper_bound(myciel3)
    assert best == count_colors(coloring)
    assert is_valid(myciel3, coloring)


def test_genetic_on_complete_graph(k5, rng):
    best, coloring = genetic(k5, 20, 10, 2, 0.05, 0.2, rng)

    assert best == 5
    assert is_valid(k5, coloring)


def test_genetic_rejects_bad_configuration(myciel3, rng):
    with pytest.raises(ValueError):
        genetic(myciel3, 10, 1, 2, 0.01, 0.2, rng)
    with pytest.raises(ValueError):
        genetic(myciel3, 10, 10, 2, 1.5, 0.2, rng)
    with pytest.raises(ValueError):
        genetic(AdjacencyMatrix(0), 10, 10, 2, 0.01, 0.2, rng)


def test_genetic_solver(myciel3_instance):
    solver = GeneticSolver(generations=50, population_size=10, num_runs=2, base_seed=11)
    result = solver.solve(myciel3_instance)

    assert result.algorithm == "genetic"
    assert len(result.all_colors) == 2
    assert solver.verify_solution(myciel3_instance, result)
    assert solver.get_params()["population_size"] == 10
