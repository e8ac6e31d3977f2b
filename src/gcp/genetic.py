"""
Genetic Algorithm for the Graph Coloring Problem.

An individual is a coloring: a list whose i-th entry is the color (1 to the
upper bound) of vertex i. Fitness is the number of distinct colors.

## Algorithm:
1. Generate population_size random valid individuals, colors drawn from
   1..upper_bound where upper_bound = max degree + 1 (Brooks' bound)
2. For each generation, produce offsprings_per_generation children:
   a. Select two distinct parents among the fittest fraction of the population
   b. One-point crossover, then greedy left-to-right repair of conflicts
   c. Mutation: each vertex is recolored at random with a small probability
3. Append the children, sort by fitness, truncate back to population_size
4. Return the best individual seen over all generations
"""

import logging
import math
import random
from typing import Optional, Sequence

from .graph import Graph
from .solution import Solution, count_colors, neighbor_sets
from .solver import HeuristicSolver

logger = logging.getLogger(__name__)

# Rejected draws allowed before sampling among the free colors directly
_MAX_REROLLS = 64


def coloring_upper_bound(graph: Graph) -> int:
    """
    Upper bound on the number of colors: maximum degree plus one.

    Raises:
        ValueError: If the graph has no vertices
    """
    if graph.num_vertices() == 0:
        raise ValueError("Cannot bound the colors of a graph with no vertices")
    return graph.max_degree() + 1


def valid_color_assignment(
    adjacency: Sequence[set[int]],
    individual: Sequence[int],
    vertex: int,
    upto: Optional[int] = None,
) -> bool:
    """
    Check that vertex shares its color with none of its neighbors.

    When upto is given only neighbors with an index below it are checked.
    """
    color = individual[vertex]
    return not any(individual[u] == color for u in adjacency[vertex] if upto is None or u < upto)


def _random_free_color(rng: random.Random, upper_bound: int, used: set[int]) -> int:
    """
    Draw a color in 1..upper_bound uniformly among those not in used.

    Re-rolls a bounded number of times, then draws from the free colors
    directly (same distribution).
    """
    for _ in range(_MAX_REROLLS):
        color = rng.randint(1, upper_bound)
        if color not in used:
            return color
    free = [c for c in range(1, upper_bound + 1) if c not in used]
    if not free:
        raise ValueError(f"No free color within upper bound {upper_bound}")
    return rng.choice(free)


def generate_individual(
    graph: Graph,
    upper_bound: int,
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> list[int]:
    """
    Generate a random valid coloring.

    Vertices are colored in index order; each one gets a random color that
    none of its already colored (lower index) neighbors uses.
    """
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    individual = [0] * graph.num_vertices()
    for v in range(graph.num_vertices()):
        used = {individual[u] for u in adjacency[v] if u < v}
        individual[v] = _random_free_color(rng, upper_bound, used)
    return individual


def mutate(
    graph: Graph,
    individual: list[int],
    upper_bound: int,
    mutation_probability: float,
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> None:
    """Recolor each vertex with probability mutation_probability (in place)."""
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    for v in range(graph.num_vertices()):
        if rng.random() < mutation_probability:
            used = {individual[u] for u in adjacency[v]}
            individual[v] = _random_free_color(rng, upper_bound, used)


def select(
    population: Sequence[tuple[int, list[int]]],
    population_size: int,
    selected_population_ratio: float,
    rng: random.Random,
) -> tuple[list[int], list[int]]:
    """
    Pick two distinct parents among the fittest individuals.

    The population must be sorted by number of colors. The elite slice holds
    floor(population_size * ratio) + 1 individuals.
    """
    limit = math.floor(population_size * selected_population_ratio) + 1
    elite = population[: min(limit, len(population))]
    if len(elite) < 2:
        elite = population[:2]
    if len(elite) < 2:
        raise ValueError("Selection needs at least two individuals")

    first, second = rng.sample(range(len(elite)), 2)
    return list(elite[first][1]), list(elite[second][1])


def crossover(
    graph: Graph,
    p1: Sequence[int],
    p2: Sequence[int],
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> list[int]:
    """
    One-point crossover with greedy repair.

    The offspring copies p1 up to and including a random cut position and p2
    after it. Vertices are then scanned in order; one that shares its color
    with a lower-index neighbor gets the smallest color unused by its
    neighbors.
    """
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    n = graph.num_vertices()
    pos = rng.randrange(n)
    offspring = list(p1[: pos + 1]) + list(p2[pos + 1 :])

    for v in range(n):
        if not valid_color_assignment(adjacency, offspring, v, upto=v):
            used = {offspring[u] for u in adjacency[v]}
            color = 1
            while color in used:
                color += 1
            offspring[v] = color

    return offspring


def replace(population: list[tuple[int, list[int]]], population_size: int) -> None:
    """Truncate a sorted population back to population_size (in place)."""
    del population[population_size:]


def genetic(
    graph: Graph,
    generations: int,
    population_size: int,
    offsprings_per_generation: int,
    mutation_probability: float,
    selected_population_ratio: float,
    rng: random.Random,
) -> tuple[int, list[int]]:
    """
    Run the genetic algorithm.

    Args:
        graph: Graph to color
        generations: Number of generations
        population_size: Individuals kept after each generation
        offsprings_per_generation: Children produced per generation
        mutation_probability: Per-vertex mutation probability
        selected_population_ratio: Fraction of the population eligible as parents
        rng: Random number generator

    Returns:
        (num_colors, coloring) of the best individual seen
    """
    if population_size < 2:
        raise ValueError(f"population_size must be at least 2, got {population_size}")
    if not 0.0 <= mutation_probability <= 1.0:
        raise ValueError(f"mutation_probability must be in [0, 1], got {mutation_probability}")
    if not 0.0 <= selected_population_ratio <= 1.0:
        raise ValueError(f"selected_population_ratio must be in [0, 1], got {selected_population_ratio}")

    upper_bound = coloring_upper_bound(graph)
    adjacency = neighbor_sets(graph)

    population: list[tuple[int, list[int]]] = []
    for _ in range(population_size):
        individual = generate_individual(graph, upper_bound, rng, adjacency)
        population.append((count_colors(individual), individual))
    population.sort(key=lambda item: item[0])

    best_colors, best_coloring = population[0][0], list(population[0][1])

    for generation in range(generations):
        for _ in range(offsprings_per_generation):
            p1, p2 = select(population, population_size, selected_population_ratio, rng)
            offspring = crossover(graph, p1, p2, rng, adjacency)
            mutate(graph, offspring, upper_bound, mutation_probability, rng, adjacency)
            population.append((count_colors(offspring), offspring))

        population.sort(key=lambda item: item[0])
        replace(population, population_size)

        if population[0][0] < best_colors:
            best_colors, best_coloring = population[0][0], list(population[0][1])
            logger.debug("Generation %d: new best = %d colors", generation + 1, best_colors)

    return best_colors, best_coloring


class GeneticSolver(HeuristicSolver):
    """
    Genetic Algorithm solver for the GCP.

    Elitist steady-state evolution over valid colorings with repairing
    crossover and conflict-free mutation.
    """

    algorithm = "genetic"

    def __init__(
        self,
        generations: int = 10000,
        population_size: int = 100,
        offsprings_per_generation: int = 2,
        mutation_probability: float = 0.01,
        selected_population_ratio: float = 0.2,
        num_runs: int = 1,
        base_seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the genetic solver.

        Args:
            generations: Number of generations
            population_size: Individuals kept after each generation
            offsprings_per_generation: Children produced per generation
            mutation_probability: Per-vertex mutation probability
            selected_population_ratio: Fraction of the population eligible as parents
            num_runs: Number of independent runs for statistical evaluation
            base_seed: Base random seed for reproducibility
            verbose: Whether to log progress
        """
        super().__init__(num_runs=num_runs, base_seed=base_seed, verbose=verbose)
        self.generations = generations
        self.population_size = population_size
        self.offsprings_per_generation = offsprings_per_generation
        self.mutation_probability = mutation_probability
        self.selected_population_ratio = selected_population_ratio

    def _single_run(self, graph: Graph, rng: random.Random) -> Solution:
        num_colors, coloring = genetic(
            graph,
            self.generations,
            self.population_size,
            self.offsprings_per_generation,
            self.mutation_probability,
            self.selected_population_ratio,
            rng,
        )
        return Solution(num_colors, coloring)

    def get_params(self) -> dict:
        """Get solver parameters as a dictionary."""
        params = super().get_params()
        params.update(
            {
                "generations": self.generations,
                "population_size": self.population_size,
                "offsprings_per_generation": self.offsprings_per_generation,
                "mutation_probability": self.mutation_probability,
                "selected_population_ratio": self.selected_population_ratio,
            }
        )
        return params
