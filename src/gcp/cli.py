"""
Command line entry point: color a single DIMACS instance.

Usage:
    gcp-heuristics --path data/myc/myciel3.col --algorithm grasp
    gcp-heuristics -p data/myc/myciel6.col -a grasp-pr --pr-solutions 5
    gcp-heuristics -p data/random/50/1.col -a genetic --generations 80000 --seed 1
"""

import argparse
import logging
import random
import sys
import time
from typing import Optional

from .genetic import genetic
from .grasp import grasp_wrapper
from .instance import GraphInstance
from .path_relinking import grasp_path_relinking

ALGORITHMS = ["genetic", "grasp", "grasp-pr"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Heuristic solvers for the Graph Coloring Problem")

    parser.add_argument("-p", "--path", type=str, required=True, help="Path to a Graph Coloring instance")
    parser.add_argument(
        "-a",
        "--algorithm",
        type=str,
        required=True,
        choices=ALGORITHMS,
        help="Heuristic approach used to solve the instance",
    )

    # GRASP+PR parameters
    parser.add_argument(
        "--pr-solutions",
        type=int,
        default=5,
        help="Number of GRASP solutions used in path relinking (default: 5)",
    )

    # GRASP parameters
    parser.add_argument("--grasp-iterations", type=int, default=10, help="Total GRASP iterations (default: 10)")
    parser.add_argument("--color-iterations", type=int, default=5, help="Iterations per color for GRASP (default: 5)")
    parser.add_argument(
        "--color-list-size",
        type=int,
        default=5,
        help="Size of the restricted candidate list in GRASP (default: 5)",
    )

    # Genetic parameters
    parser.add_argument("--generations", type=int, default=10000, help="Number of generations (default: 10000)")
    parser.add_argument("--population-size", type=int, default=100, help="Population size (default: 100)")
    parser.add_argument("--offspring-size", type=int, default=2, help="Offspring per generation (default: 2)")
    parser.add_argument(
        "--mutation-probability",
        type=float,
        default=0.01,
        help="Per-vertex mutation probability (default: 0.01)",
    )
    parser.add_argument(
        "--population-ratio",
        type=float,
        default=0.2,
        help="Fraction of the population eligible for selection (default: 0.2)",
    )

    # Common parameters
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: None = random)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for GRASP attempts (default: executor default). Set to 1 for sequential.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log solver progress")

    return parser


def run(args: argparse.Namespace, instance: GraphInstance) -> tuple[int, list[int]]:
    """Dispatch to the selected algorithm."""
    rng = random.Random(args.seed)
    graph = instance.graph

    if args.algorithm == "genetic":
        return genetic(
            graph,
            args.generations,
            args.population_size,
            args.offspring_size,
            args.mutation_probability,
            args.population_ratio,
            rng,
        )
    if args.algorithm == "grasp":
        return grasp_wrapper(
            graph,
            args.grasp_iterations,
            args.color_iterations,
            args.color_list_size,
            rng,
            args.workers,
        )
    if args.algorithm == "grasp-pr":
        best = grasp_path_relinking(
            graph,
            args.pr_solutions,
            rng,
            grasp_iterations=args.grasp_iterations,
            color_iterations=args.color_iterations,
            color_list_size=args.color_list_size,
            num_workers=args.workers,
        )
        return best.num_colors, best.coloring
    raise ValueError(f"Unknown algorithm: {args.algorithm}")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        instance = GraphInstance.from_file(args.path)
    except (OSError, ValueError) as e:
        print(f"Failed to open the specified instance: {args.path} ({e})", file=sys.stderr)
        return 1

    logging.getLogger(__name__).info("Loaded %s", instance)

    start = time.perf_counter()
    try:
        num_colors, coloring = run(args, instance)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    duration_ms = int((time.perf_counter() - start) * 1000)

    print(f"Number of colors used: {num_colors}")
    print(f"Color assignment: {coloring}")
    print(f"Duration: {duration_ms}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
