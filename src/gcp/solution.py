"""
Solution representations and validity checks shared by every solver.

A coloring is a list of length n where entry v is the (1-indexed) color of
vertex v; 0 marks an uncolored vertex. A class list is the dual view: entry i
holds the vertices colored i + 1. The class list is the canonical form used
during construction; colorings are derived from it on demand.
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .graph import Graph


class ColoringInvariantError(RuntimeError):
    """Raised when a solver breaks an internal invariant (a bug, not bad input)."""


@dataclass(order=True)
class Solution:
    """A coloring ranked by its number of colors (fewer is better)."""

    num_colors: int
    coloring: list[int] = field(compare=False)


def neighbor_sets(graph: Graph) -> list[set[int]]:
    """Materialize the neighborhood of every vertex once for hot loops."""
    return [graph.neighbors(v) for v in range(graph.num_vertices())]


def to_coloring(class_list: Sequence[Iterable[int]], num_vertices: int) -> list[int]:
    """
    Convert a class list into a coloring.

    Raises:
        ColoringInvariantError: If a vertex belongs to more than one class
    """
    coloring = [0] * num_vertices
    for i, color_class in enumerate(class_list):
        for v in color_class:
            if coloring[v] != 0:
                raise ColoringInvariantError(
                    f"Vertex {v} assigned to classes {coloring[v]} and {i + 1}"
                )
            coloring[v] = i + 1
    return coloring


def to_class_list(coloring: Sequence[int], num_classes: Optional[int] = None) -> list[list[int]]:
    """Convert a coloring into a class list, padded to num_classes if given."""
    size = max(coloring, default=0)
    if num_classes is not None:
        size = max(size, num_classes)
    class_list: list[list[int]] = [[] for _ in range(size)]
    for v, color in enumerate(coloring):
        if color > 0:
            class_list[color - 1].append(v)
    return class_list


def count_colors(coloring: Iterable[int]) -> int:
    """Count the distinct colors in use, ignoring uncolored (0) entries."""
    return len({color for color in coloring if color > 0})


def conflicts_at(graph: Graph, coloring: Sequence[int], v: int) -> int:
    """Count the neighbors of v that share its color."""
    return sum(1 for u in graph.neighbors(v) if coloring[u] == coloring[v])


def is_valid(graph: Graph, coloring: Sequence[int]) -> bool:
    """
    Check that a complete coloring is proper.

    Every vertex must be colored and no edge may join two vertices of the
    same color.
    """
    if len(coloring) != graph.num_vertices():
        return False
    for v in range(graph.num_vertices()):
        if coloring[v] <= 0:
            return False
        for u in graph.neighbors(v):
            if u > v and coloring[u] == coloring[v]:
                return False
    return True


def forbidden_vertices(adjacency: Sequence[set[int]], coloring: Sequence[int]) -> set[int]:
    """Vertices that are an endpoint of at least one same-colored edge."""
    forbidden = set()
    for v, neighbors in enumerate(adjacency):
        for u in neighbors:
            if coloring[u] == coloring[v]:
                forbidden.add(v)
                forbidden.add(u)
    return forbidden


def count_forbidden_edges(adjacency: Sequence[set[int]], coloring: Sequence[int]) -> int:
    """Number of edges whose endpoints share a color."""
    count = 0
    for v, neighbors in enumerate(adjacency):
        for u in neighbors:
            if v < u and coloring[u] == coloring[v]:
                count += 1
    return count


def symmetric_difference(lhs: Sequence[int], rhs: Sequence[int]) -> list[int]:
    """Positions where two colorings differ; empty if their lengths differ."""
    if len(lhs) != len(rhs):
        return []
    return [i for i, (a, b) in enumerate(zip(lhs, rhs)) if a != b]


class SolutionPool:
    """
    Bounded container keeping the best `capacity` solutions seen.

    Backed by a max-heap on num_colors so the worst kept solution is always
    at the top and can be evicted in O(log k).
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Solution pool capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._heap: list[tuple[int, int, Solution]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def worst(self) -> Optional[Solution]:
        return self._heap[0][2] if self._heap else None

    def try_insert(self, solution: Solution) -> bool:
        """
        Offer a solution to the pool.

        The solution is kept if there is spare capacity, or if it strictly
        beats the worst kept solution (which is then evicted).

        Returns:
            True if the solution was kept
        """
        entry = (-solution.num_colors, next(self._counter), solution)
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, entry)
            return True
        if solution.num_colors < -self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def sorted(self) -> list[Solution]:
        """Kept solutions, best first (insertion order among equals)."""
        entries = sorted(self._heap, key=lambda entry: (-entry[0], entry[1]))
        return [solution for _, _, solution in entries]

    def best(self) -> Optional[Solution]:
        solutions = self.sorted()
        return solutions[0] if solutions else None
