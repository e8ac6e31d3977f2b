"""
GRASP + Path Relinking (GRASP+PR) for the Graph Coloring Problem.

A pool of GRASP solutions is relinked against the running best:
1. Keep the num_solutions best GRASP solutions; the best one starts as the
   running best
2. For every other pool member (the guide):
   - compute the positions where guide and running best differ
   - walk them in random order, copying the best's color into the guide
   - each intermediate coloring that is valid and uses no more colors than
     the running best becomes the new running best
3. After the walk the guide equals the best it was relinked against
"""

import logging
import random
from typing import Optional

from .graph import Graph
from .grasp import grasp
from .solution import ColoringInvariantError, Solution, count_colors, is_valid, symmetric_difference
from .solver import HeuristicSolver

logger = logging.getLogger(__name__)


def relink(graph: Graph, guide: Solution, best: Solution, rng: random.Random) -> Solution:
    """
    Walk from guide towards best, returning the best intermediate found.

    Args:
        graph: Graph being colored
        guide: Starting solution
        best: Current best solution (the walk's target)
        rng: Random number generator (walk order)

    Returns:
        The new running best (best itself if nothing was at least as good)

    Raises:
        ColoringInvariantError: If the walk does not end on the target coloring
    """
    target = list(best.coloring)
    current = list(guide.coloring)
    difference = symmetric_difference(target, current)
    rng.shuffle(difference)

    for vertex in difference:
        current[vertex] = target[vertex]

        if not is_valid(graph, current):
            continue

        num_colors = count_colors(current)
        if num_colors <= best.num_colors:
            if num_colors < best.num_colors:
                logger.debug("Path relinking improved best to %d colors", num_colors)
            best = Solution(num_colors, list(current))

    if current != target:
        raise ColoringInvariantError("Path relinking walk did not reach the target coloring")

    return best


def grasp_path_relinking(
    graph: Graph,
    num_solutions: int,
    rng: random.Random,
    grasp_iterations: int = 10,
    color_iterations: int = 5,
    color_list_size: int = 5,
    num_workers: Optional[int] = None,
) -> Solution:
    """
    Run GRASP, then relink the pooled solutions against the running best.

    Args:
        graph: Graph to color
        num_solutions: Number of GRASP solutions kept for relinking
        rng: Random number generator
        grasp_iterations: GRASP attempts
        color_iterations: Attempts per color class
        color_list_size: Size of the restricted candidate list
        num_workers: Worker threads for the GRASP attempts

    Returns:
        Best solution found
    """
    pool = grasp(graph, grasp_iterations, color_iterations, color_list_size, num_solutions, rng, num_workers)
    if not pool:
        n = graph.num_vertices()
        return Solution(n, list(range(1, n + 1)))

    best = pool.pop(0)
    while pool:
        guide = pool.pop()
        best = relink(graph, guide, best, rng)

    return best


class GraspPathRelinkingSolver(HeuristicSolver):
    """GRASP solver whose best solutions are combined by path relinking."""

    algorithm = "grasp-pr"

    def __init__(
        self,
        num_solutions: int = 5,
        grasp_iterations: int = 10,
        color_iterations: int = 5,
        color_list_size: int = 5,
        num_workers: Optional[int] = None,
        num_runs: int = 1,
        base_seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the GRASP+PR solver.

        Args:
            num_solutions: GRASP solutions kept in the relinking pool
            grasp_iterations: GRASP attempts
            color_iterations: Attempts per color class
            color_list_size: Size of the restricted candidate list
            num_workers: Worker threads for the GRASP attempts
            num_runs: Number of independent runs for statistical evaluation
            base_seed: Base random seed for reproducibility
            verbose: Whether to log progress
        """
        super().__init__(num_runs=num_runs, base_seed=base_seed, verbose=verbose)
        self.num_solutions = num_solutions
        self.grasp_iterations = grasp_iterations
        self.color_iterations = color_iterations
        self.color_list_size = color_list_size
        self.num_workers = num_workers

    def _single_run(self, graph: Graph, rng: random.Random) -> Solution:
        return grasp_path_relinking(
            graph,
            self.num_solutions,
            rng,
            grasp_iterations=self.grasp_iterations,
            color_iterations=self.color_iterations,
            color_list_size=self.color_list_size,
            num_workers=self.num_workers,
        )

    def get_params(self) -> dict:
        """Get solver parameters as a dictionary."""
        params = super().get_params()
        params.update(
            {
                "num_solutions": self.num_solutions,
                "grasp_iterations": self.grasp_iterations,
                "color_iterations": self.color_iterations,
                "color_list_size": self.color_list_size,
                "num_workers": self.num_workers,
            }
        )
        return params
