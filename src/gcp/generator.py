"""
Random GCP instance generator.

Generates Erdos-Renyi style graphs (every pair of vertices is joined with a
fixed probability) and writes them in DIMACS .col format, ready for
GraphInstance.from_file.

Usage:
    gcp-generate 50 > data/random/50/1.col
    gcp-generate 250 --density 0.2 --seed 7 > data/random/250/7.col
"""

import argparse
import random
from typing import Optional

DEFAULT_DENSITY = 0.1


def random_graph(
    num_vertices: int,
    density: float = DEFAULT_DENSITY,
    rng: Optional[random.Random] = None,
) -> list[tuple[int, int]]:
    """
    Draw a random edge list.

    Args:
        num_vertices: Number of vertices (numbered 0 to n-1)
        density: Probability of each edge
        rng: Random number generator

    Returns:
        Edges (i, j) with i < j
    """
    if num_vertices < 0:
        raise ValueError(f"num_vertices must be non-negative, got {num_vertices}")
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")
    rng = rng or random.Random()

    edges = []
    for i in range(num_vertices):
        for j in range(i + 1, num_vertices):
            if rng.random() < density:
                edges.append((i, j))
    return edges


def format_dimacs(num_vertices: int, edges: list[tuple[int, int]]) -> str:
    """Render a 0-indexed edge list as DIMACS text (1-indexed vertices)."""
    lines = [f"p edge {num_vertices} {len(edges)}"]
    lines.extend(f"e {u + 1} {v + 1}" for u, v in edges)
    return "\n".join(lines) + "\n"


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a random GCP instance in DIMACS format")
    parser.add_argument("num_vertices", type=int, help="Number of vertices")
    parser.add_argument(
        "--density",
        type=float,
        default=DEFAULT_DENSITY,
        help=f"Edge probability (default: {DEFAULT_DENSITY})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: None = random)")
    args = parser.parse_args(argv)

    if args.num_vertices < 0:
        parser.error("the number of vertices must be non-negative")
    if not 0.0 <= args.density <= 1.0:
        parser.error("the density must be in [0, 1]")

    edges = random_graph(args.num_vertices, args.density, random.Random(args.seed))
    print(format_dimacs(args.num_vertices, edges), end="")


if __name__ == "__main__":
    main()
