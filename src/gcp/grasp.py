"""
GRASP (Greedy Randomized Adaptive Search Procedure) for the Graph Coloring Problem.

## Algorithm:
1. Construction: build one color class at a time from the uncolored vertices
   - Restricted candidate list (RCL) of the color_list_size uncolored vertices
     with largest degree: in the subgraph induced by the admissible vertices
     for the first pick, then counted against the inadmissible vertices
     (vertices already excluded from the class)
   - Pick a random vertex from the RCL, exclude its neighbors, repeat
   - Each class is built color_iterations times; keep the one leaving the
     fewest edges among the still-uncolored vertices
2. Improve phase: merge the two smallest classes and repair by local search
   (see local_search.py)
3. Multi-start: grasp_iterations independent attempts run on a thread pool,
   keeping the best num_solutions results
"""

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence

from .graph import Graph
from .local_search import improve_phase
from .solution import Solution, SolutionPool, neighbor_sets, to_coloring
from .solver import HeuristicSolver

logger = logging.getLogger(__name__)


def get_n_largest_degree(
    n: int,
    graph: Graph,
    subset: Iterable[int],
    within: Optional[Iterable[int]] = None,
) -> list[int]:
    """
    Rank the vertices of subset by degree and keep the first n.

    Args:
        n: Maximum number of vertices to return
        graph: Graph being colored
        subset: Candidate vertices
        within: Vertices the degree is counted against; None means the
                subgraph induced by subset

    Returns:
        Up to n vertices of subset, by descending degree (ties by vertex index)

    Example:
        >>> get_n_largest_degree(3, myciel3, [10, 3, 4, 5])
        [3, 5, 4]
    """
    candidates = sorted(set(subset))
    counted = set(within) if within is not None else set(candidates)
    degrees = [(v, graph.degree_within(v, counted)) for v in candidates]
    # sorted() is stable, so equal degrees keep ascending vertex order
    degrees.sort(key=lambda item: item[1], reverse=True)
    return [v for v, _ in degrees[:n]]


def count_remaining_edges(graph: Graph, vertices: Iterable[int]) -> int:
    """Count the edges of the subgraph induced by vertices."""
    return graph.induced_edge_count(vertices)


def assign_color(
    graph: Graph,
    uncolored: Sequence[int],
    color_list_size: int,
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> list[int]:
    """
    Build one color class (an independent set) from the uncolored vertices.

    Args:
        graph: Graph being colored
        uncolored: Vertices not yet colored
        color_list_size: Size of the restricted candidate list
        rng: Random number generator
        adjacency: Precomputed neighbor sets (computed from graph if None)

    Returns:
        Vertices of the new color class, in pick order

    Raises:
        ValueError: If the candidate list is empty (color_list_size < 1)
    """
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    uncolored_set = set(uncolored)
    admissible = set(uncolored)
    inadmissible: set[int] = set()
    color_class: list[int] = []

    while admissible:
        if inadmissible:
            candidates = get_n_largest_degree(color_list_size, graph, admissible, inadmissible)
        else:
            candidates = get_n_largest_degree(color_list_size, graph, admissible)

        if not candidates:
            raise ValueError(f"color_list_size must be at least 1, got {color_list_size}")

        vertex = rng.choice(candidates)
        color_class.append(vertex)

        neighbors = adjacency[vertex]
        admissible.discard(vertex)
        admissible -= neighbors
        inadmissible |= neighbors & uncolored_set

    return color_class


def construct(
    graph: Graph,
    color_iterations: int,
    color_list_size: int,
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> list[list[int]]:
    """
    Greedy randomized construction of a complete class list.

    Args:
        graph: Graph being colored
        color_iterations: Attempts per color class
        color_list_size: Size of the restricted candidate list
        rng: Random number generator
        adjacency: Precomputed neighbor sets (computed from graph if None)

    Returns:
        Conflict-free class list covering every vertex
    """
    if color_iterations < 1:
        raise ValueError(f"color_iterations must be at least 1, got {color_iterations}")
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    uncolored = list(range(graph.num_vertices()))
    class_list: list[list[int]] = []

    while uncolored:
        best_class: list[int] = []
        min_remaining_edges: Optional[int] = None

        for _ in range(color_iterations):
            color_class = assign_color(graph, uncolored, color_list_size, rng, adjacency)
            members = set(color_class)
            remaining = [v for v in uncolored if v not in members]
            remaining_edges = count_remaining_edges(graph, remaining)

            if min_remaining_edges is None or remaining_edges < min_remaining_edges:
                min_remaining_edges = remaining_edges
                best_class = color_class

        class_list.append(best_class)
        members = set(best_class)
        uncolored = [v for v in uncolored if v not in members]

    return class_list


def grasp_attempt(
    graph: Graph,
    color_iterations: int,
    color_list_size: int,
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> Solution:
    """One full construction + improve phase."""
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    class_list = construct(graph, color_iterations, color_list_size, rng, adjacency)
    constructed = len(class_list)
    class_list = improve_phase(graph, class_list, rng, adjacency)
    logger.debug("GRASP attempt: constructed %d classes, improved to %d", constructed, len(class_list))

    return Solution(len(class_list), to_coloring(class_list, graph.num_vertices()))


def grasp(
    graph: Graph,
    grasp_iterations: int,
    color_iterations: int,
    color_list_size: int,
    num_solutions: int,
    rng: random.Random,
    num_workers: Optional[int] = None,
) -> list[Solution]:
    """
    Multi-start GRASP keeping the best num_solutions solutions.

    Attempts run in parallel, each with its own random stream seeded from
    rng; their results are then folded sequentially into a bounded pool.

    Args:
        graph: Graph to color
        grasp_iterations: Number of independent attempts
        color_iterations: Attempts per color class
        color_list_size: Size of the restricted candidate list
        num_solutions: Number of best solutions to keep
        rng: Random number generator (source of the per-attempt seeds)
        num_workers: Worker threads (None: executor default, 1: sequential).
            Attempts are pure Python, so the GIL keeps threads from running
            them in parallel; more workers do not shorten the run on CPython

    Returns:
        Kept solutions, best first
    """
    if color_list_size < 1:
        raise ValueError(f"color_list_size must be at least 1, got {color_list_size}")
    if color_iterations < 1:
        raise ValueError(f"color_iterations must be at least 1, got {color_iterations}")

    pool = SolutionPool(num_solutions)
    adjacency = neighbor_sets(graph)
    seeds = [rng.getrandbits(64) for _ in range(grasp_iterations)]

    def run(seed: int) -> Solution:
        return grasp_attempt(graph, color_iterations, color_list_size, random.Random(seed), adjacency)

    if num_workers == 1:
        solutions = [run(seed) for seed in seeds]
    else:
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            solutions = list(executor.map(run, seeds))

    for solution in solutions:
        pool.try_insert(solution)

    return pool.sorted()


def grasp_wrapper(
    graph: Graph,
    grasp_iterations: int,
    color_iterations: int,
    color_list_size: int,
    rng: random.Random,
    num_workers: Optional[int] = None,
) -> tuple[int, list[int]]:
    """
    Run GRASP and return the single best solution as (num_colors, coloring).

    With zero iterations no attempt runs and the trivial coloring (one color
    per vertex) is returned.
    """
    solutions = grasp(graph, grasp_iterations, color_iterations, color_list_size, 1, rng, num_workers)
    if not solutions:
        n = graph.num_vertices()
        return n, list(range(1, n + 1))
    best = solutions[0]
    return best.num_colors, best.coloring


class GraspSolver(HeuristicSolver):
    """
    GRASP solver for the GCP.

    Greedy randomized class-by-class construction followed by an improve
    phase that merges classes and repairs them by local search.
    """

    algorithm = "grasp"

    def __init__(
        self,
        grasp_iterations: int = 10,
        color_iterations: int = 5,
        color_list_size: int = 5,
        num_workers: Optional[int] = None,
        num_runs: int = 1,
        base_seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the GRASP solver.

        Args:
            grasp_iterations: Independent construction + improve attempts
            color_iterations: Attempts per color class
            color_list_size: Size of the restricted candidate list
            num_workers: Worker threads for the attempts
            num_runs: Number of independent runs for statistical evaluation
            base_seed: Base random seed for reproducibility
            verbose: Whether to log progress
        """
        super().__init__(num_runs=num_runs, base_seed=base_seed, verbose=verbose)
        self.grasp_iterations = grasp_iterations
        self.color_iterations = color_iterations
        self.color_list_size = color_list_size
        self.num_workers = num_workers

    def _single_run(self, graph: Graph, rng: random.Random) -> Solution:
        num_colors, coloring = grasp_wrapper(
            graph,
            self.grasp_iterations,
            self.color_iterations,
            self.color_list_size,
            rng,
            self.num_workers,
        )
        return Solution(num_colors, coloring)

    def get_params(self) -> dict:
        """Get solver parameters as a dictionary."""
        params = super().get_params()
        params.update(
            {
                "grasp_iterations": self.grasp_iterations,
                "color_iterations": self.color_iterations,
                "color_list_size": self.color_list_size,
                "num_workers": self.num_workers,
            }
        )
        return params
