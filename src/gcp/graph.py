"""
Graph representations for the Graph Coloring Problem (GCP).

Two interchangeable representations are provided:
- AdjacencyList: one neighbor sequence per vertex (order not guaranteed,
  duplicates possible when an edge is inserted twice)
- AdjacencyMatrix: dense N x N symmetric boolean matrix (numpy), false diagonal

Both expose the same read-only queries used by the solvers and can be
converted into each other without loss.
"""

from typing import Iterable, Protocol

import numpy as np


class Graph(Protocol):
    """Protocol for undirected graphs consumed by the solvers."""

    def num_vertices(self) -> int: ...
    def neighbors(self, v: int) -> set[int]: ...
    def degree_within(self, v: int, subset: Iterable[int]) -> int: ...
    def has_edge(self, u: int, v: int) -> bool: ...
    def induced_edge_count(self, vertices: Iterable[int]) -> int: ...
    def max_degree(self) -> int: ...


class AdjacencyList:
    """Undirected graph stored as a neighbor list per vertex."""

    def __init__(self, num_vertices: int):
        self._num_vertices = num_vertices
        self._adj: list[list[int]] = [[] for _ in range(num_vertices)]

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Iterable[tuple[int, int]]) -> "AdjacencyList":
        graph = cls(num_vertices)
        for u, v in edges:
            graph.add_edge(u, v)
        return graph

    @classmethod
    def complete(cls, num_vertices: int) -> "AdjacencyList":
        graph = cls(num_vertices)
        for i in range(num_vertices):
            graph._adj[i] = [j for j in range(num_vertices) if j != i]
        return graph

    def _in_range(self, v: int) -> bool:
        return 0 <= v < self._num_vertices

    def add_edge(self, u: int, v: int) -> None:
        """Insert edge (u, v); out-of-range endpoints and self-loops are ignored."""
        if not (self._in_range(u) and self._in_range(v)) or u == v:
            return
        self._adj[u].append(v)
        self._adj[v].append(u)

    def remove_edge(self, u: int, v: int) -> None:
        if not (self._in_range(u) and self._in_range(v)):
            return
        self._adj[u] = [x for x in self._adj[u] if x != v]
        self._adj[v] = [x for x in self._adj[v] if x != u]

    def num_vertices(self) -> int:
        return self._num_vertices

    def adjacency_list(self) -> list[list[int]]:
        return [list(neighbors) for neighbors in self._adj]

    def neighbors(self, v: int) -> set[int]:
        if not self._in_range(v):
            return set()
        return set(self._adj[v])

    def degree_within(self, v: int, subset: Iterable[int]) -> int:
        """Count the distinct neighbors of v that lie in subset."""
        if not self._in_range(v):
            return 0
        return len(self.neighbors(v).intersection(subset))

    def has_edge(self, u: int, v: int) -> bool:
        if not (self._in_range(u) and self._in_range(v)):
            return False
        return v in self._adj[u]

    def induced_edge_count(self, vertices: Iterable[int]) -> int:
        vertex_set = set(vertices)
        count = 0
        for u in vertex_set:
            count += sum(1 for v in self.neighbors(u) if v in vertex_set and u < v)
        return count

    def max_degree(self) -> int:
        return max((len(self.neighbors(v)) for v in range(self._num_vertices)), default=0)

    def to_matrix(self) -> "AdjacencyMatrix":
        matrix = AdjacencyMatrix(self._num_vertices)
        for u, neighbors in enumerate(self._adj):
            for v in neighbors:
                matrix.add_edge(u, v)
        return matrix

    def to_list(self) -> "AdjacencyList":
        return self

    def __str__(self) -> str:
        return f"AdjacencyList(n={self._num_vertices})"


class AdjacencyMatrix:
    """Undirected graph stored as a dense symmetric boolean matrix."""

    def __init__(self, num_vertices: int):
        self._num_vertices = num_vertices
        self._matrix = np.zeros((num_vertices, num_vertices), dtype=bool)

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Iterable[tuple[int, int]]) -> "AdjacencyMatrix":
        graph = cls(num_vertices)
        for u, v in edges:
            graph.add_edge(u, v)
        return graph

    @classmethod
    def complete(cls, num_vertices: int) -> "AdjacencyMatrix":
        graph = cls(num_vertices)
        graph._matrix[:, :] = True
        np.fill_diagonal(graph._matrix, False)
        return graph

    def _in_range(self, v: int) -> bool:
        return 0 <= v < self._num_vertices

    def add_edge(self, u: int, v: int) -> None:
        """Insert edge (u, v); out-of-range endpoints and self-loops are ignored."""
        if not (self._in_range(u) and self._in_range(v)) or u == v:
            return
        self._matrix[u, v] = True
        self._matrix[v, u] = True

    def remove_edge(self, u: int, v: int) -> None:
        if not (self._in_range(u) and self._in_range(v)):
            return
        self._matrix[u, v] = False
        self._matrix[v, u] = False

    def num_vertices(self) -> int:
        return self._num_vertices

    def adjacency_matrix(self) -> np.ndarray:
        """Return a copy of the underlying matrix."""
        return self._matrix.copy()

    def neighbors(self, v: int) -> set[int]:
        if not self._in_range(v):
            return set()
        return set(np.flatnonzero(self._matrix[v]).tolist())

    def degree_within(self, v: int, subset: Iterable[int]) -> int:
        """Count the neighbors of v that lie in subset."""
        if not self._in_range(v):
            return 0
        indices = [u for u in set(subset) if self._in_range(u)]
        if not indices:
            return 0
        return int(self._matrix[v, indices].sum())

    def has_edge(self, u: int, v: int) -> bool:
        if not (self._in_range(u) and self._in_range(v)):
            return False
        return bool(self._matrix[u, v])

    def induced_edge_count(self, vertices: Iterable[int]) -> int:
        indices = sorted(u for u in set(vertices) if self._in_range(u))
        if len(indices) < 2:
            return 0
        # Each edge shows up twice in the symmetric submatrix
        return int(self._matrix[np.ix_(indices, indices)].sum()) // 2

    def max_degree(self) -> int:
        if self._num_vertices == 0:
            return 0
        return int(self._matrix.sum(axis=1).max())

    def to_list(self) -> AdjacencyList:
        graph = AdjacencyList(self._num_vertices)
        for u, v in zip(*np.nonzero(np.triu(self._matrix, k=1))):
            graph.add_edge(int(u), int(v))
        return graph

    def to_matrix(self) -> "AdjacencyMatrix":
        return self

    def __str__(self) -> str:
        return f"AdjacencyMatrix(n={self._num_vertices})"
