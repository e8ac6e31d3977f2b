"""
Improve phase for GRASP colorings.

The improve phase repeatedly merges the two smallest color classes and asks
a local search to repair the conflicts created by the merge:

1. Rank classes by size, merge the two smallest non-empty ones
2. Local search on the merged class list:
   - pick a random forbidden vertex (endpoint of a same-colored edge)
   - move it to the color class minimizing its conflicts, if strictly better
   - stop when no conflicts remain or after 2 x (initial forbidden edges)
     consecutive non-improving iterations
3. If the conflicts were all removed, accept and try to merge again;
   otherwise keep the last conflict-free class list
"""

import logging
import random
from typing import Optional, Sequence

from .graph import Graph
from .solution import count_forbidden_edges, forbidden_vertices, neighbor_sets, to_coloring

logger = logging.getLogger(__name__)


def _conflicts_with_color(adjacency: Sequence[set[int]], coloring: Sequence[int], v: int, color: int) -> int:
    return sum(1 for u in adjacency[v] if coloring[u] == color)


def local_search(
    graph: Graph,
    class_list: list[list[int]],
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> bool:
    """
    Repair conflicts in a class list by single-vertex recoloring.

    The class list is modified in place. The forbidden-edge count never
    increases across iterations.

    Args:
        graph: Graph being colored
        class_list: Color classes (index i holds color i + 1), possibly conflicting
        rng: Random number generator
        adjacency: Precomputed neighbor sets (computed from graph if None)

    Returns:
        True if all conflicts were removed
    """
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    coloring = to_coloring(class_list, graph.num_vertices())
    num_classes = len(class_list)

    forbidden = forbidden_vertices(adjacency, coloring)
    num_forbidden = count_forbidden_edges(adjacency, coloring)
    max_non_improving = 2 * num_forbidden
    non_improving = 0

    while num_forbidden > 0 and non_improving < max_non_improving:
        vertex = rng.choice(sorted(forbidden))
        current_color = coloring[vertex]
        current_conflicts = _conflicts_with_color(adjacency, coloring, vertex, current_color)

        best_color = current_color
        best_conflicts = current_conflicts
        for color in range(1, num_classes + 1):
            if color == current_color:
                continue
            conflicts = _conflicts_with_color(adjacency, coloring, vertex, color)
            if conflicts < best_conflicts:
                best_color = color
                best_conflicts = conflicts

        if best_color == current_color:
            non_improving += 1
            continue

        class_list[current_color - 1].remove(vertex)
        class_list[best_color - 1].append(vertex)
        coloring[vertex] = best_color

        num_forbidden -= current_conflicts - best_conflicts
        forbidden = forbidden_vertices(adjacency, coloring)
        non_improving = 0

    return num_forbidden == 0


def merge_smallest_classes(class_list: Sequence[Sequence[int]]) -> list[list[int]]:
    """
    Merge the two smallest non-empty classes; empty classes are dropped.

    The remaining classes keep their descending-size ranking and the merged
    class is placed last.
    """
    ranked = sorted((list(c) for c in class_list if c), key=len, reverse=True)
    if len(ranked) < 2:
        return ranked
    merged = ranked[-2] + ranked[-1]
    return ranked[:-2] + [merged]


def improve_phase(
    graph: Graph,
    class_list: Sequence[Sequence[int]],
    rng: random.Random,
    adjacency: Optional[Sequence[set[int]]] = None,
) -> list[list[int]]:
    """
    Reduce the number of classes of a valid class list.

    Args:
        graph: Graph being colored
        class_list: Conflict-free color classes
        rng: Random number generator
        adjacency: Precomputed neighbor sets (computed from graph if None)

    Returns:
        Conflict-free class list with at most as many non-empty classes
    """
    if adjacency is None:
        adjacency = neighbor_sets(graph)

    accepted = [list(c) for c in class_list if c]

    while len(accepted) > 1:
        candidate = merge_smallest_classes(accepted)
        if not local_search(graph, candidate, rng, adjacency):
            break
        accepted = [c for c in candidate if c]
        logger.debug("Improve phase reduced coloring to %d classes", len(accepted))

    return accepted
