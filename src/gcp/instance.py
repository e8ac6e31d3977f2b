"""
GCP instance data structure and DIMACS parser.

Instance file format (DIMACS .col):
- "p edge <n> <m>": declares n vertices (numbered 1 to n) and m edges
- "e <u> <v>": an edge between vertices u and v (1-indexed)
- Any other line (comments "c ...", blank lines) is ignored

Edges are converted to 0-indexed on load. Edges referencing vertices outside
1..n, or appearing before the "p" line, are ignored.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .graph import AdjacencyMatrix


@dataclass
class GraphInstance:
    """Represents a Graph Coloring Problem instance."""

    name: str
    num_vertices: int
    num_edges: int  # As declared on the "p" line
    edges: list[tuple[int, int]]

    # Derived data, computed after loading
    graph: AdjacencyMatrix = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Build the adjacency matrix."""
        self.graph = AdjacencyMatrix.from_edges(self.num_vertices, self.edges)

    @classmethod
    def from_file(cls, filepath: str | Path) -> "GraphInstance":
        """
        Parse a GCP instance from a DIMACS file.

        Args:
            filepath: Path to the instance file

        Returns:
            GraphInstance object

        Raises:
            OSError: If the file cannot be read
            ValueError: If a numeric field is malformed or no "p" line is found
        """
        filepath = Path(filepath)

        with open(filepath, "r") as f:
            text = f.read()

        return cls.from_text(text, name=filepath.stem, source=str(filepath))

    @classmethod
    def from_text(cls, text: str, name: str = "instance", source: str | None = None) -> "GraphInstance":
        """Parse a GCP instance from DIMACS text."""
        source = source or name
        num_vertices: int | None = None
        num_edges = 0
        edges: list[tuple[int, int]] = []

        for line_number, raw in enumerate(text.splitlines(), start=1):
            parts = raw.split()
            if not parts:
                continue

            try:
                if parts[0] == "p":
                    if len(parts) < 3:
                        continue
                    # A new problem line restarts the graph
                    num_vertices = int(parts[2])
                    num_edges = int(parts[3]) if len(parts) > 3 else 0
                    edges = []
                elif parts[0] == "e":
                    if len(parts) < 3 or num_vertices is None:
                        continue
                    u, v = int(parts[1]) - 1, int(parts[2]) - 1
                    if 0 <= u < num_vertices and 0 <= v < num_vertices:
                        edges.append((u, v))
            except ValueError as e:
                raise ValueError(f"Invalid number on line {line_number} in {source}: {e}")

        if num_vertices is None:
            raise ValueError(f"No graph found in {source}: missing 'p edge' line")
        if num_vertices < 0:
            raise ValueError(f"Invalid vertex count {num_vertices} in {source}")

        return cls(name=name, num_vertices=num_vertices, num_edges=num_edges, edges=edges)

    def __str__(self) -> str:
        return f"GraphInstance({self.name}: n={self.num_vertices}, m={self.num_edges})"
