#!/usr/bin/env python3
"""
Main script to run GCP experiments.

Usage:
    # Run GRASP on a single instance
    python run_experiments.py --instance data/myc/myciel6.col --solver grasp

    # Run on a family of instances (first 5 files of data/random/50)
    python run_experiments.py --family random/50 --max-instances 5

    # Run on all families under data/
    python run_experiments.py --all --solver genetic --generations 80000

    # GRASP+PR with 5 pooled solutions and 10 independent runs per instance
    python run_experiments.py --solver grasp-pr --family myc --runs 10 --pr-solutions 5

    # Sweep a GRASP parameter grid over a family
    python run_experiments.py --solver grasp --family reg --grid
"""

import argparse
import itertools
import logging
from pathlib import Path

from gcp import GeneticSolver, GraphInstance, GraspPathRelinkingSolver, GraspSolver, HeuristicSolver
from gcp.runner import ExperimentRunner

# GRASP parameter grid: (grasp_iterations, color_iterations, color_list_size)
GRASP_GRID = list(itertools.product([5, 15, 25], [5, 15, 25], [3, 6, 9]))


def build_solver(args: argparse.Namespace, **overrides) -> HeuristicSolver:
    params = {
        "grasp_iterations": args.grasp_iterations,
        "color_iterations": args.color_iterations,
        "color_list_size": args.color_list_size,
    }
    params.update(overrides)

    if args.solver == "grasp":
        return GraspSolver(
            **params,
            num_workers=args.workers,
            num_runs=args.runs,
            base_seed=args.seed,
            verbose=args.verbose,
        )
    if args.solver == "grasp-pr":
        return GraspPathRelinkingSolver(
            num_solutions=args.pr_solutions,
            **params,
            num_workers=args.workers,
            num_runs=args.runs,
            base_seed=args.seed,
            verbose=args.verbose,
        )
    if args.solver == "genetic":
        return GeneticSolver(
            generations=args.generations,
            population_size=args.population_size,
            offsprings_per_generation=args.offspring_size,
            mutation_probability=args.mutation_probability,
            selected_population_ratio=args.population_ratio,
            num_runs=args.runs,
            base_seed=args.seed,
            verbose=args.verbose,
        )
    raise ValueError(f"Unknown solver type: {args.solver}")


def run_selection(runner: ExperimentRunner, args: argparse.Namespace, output_file: str | None) -> None:
    runner.init_output(output_file)

    if args.instance:
        print(f"Running on instance: {args.instance}")
        instance = GraphInstance.from_file(args.instance)
        print(f"  {instance}")

        result = runner.run_instance(args.instance)

        print(f"\nResult ({result.num_runs} runs):")
        print(f"  Best colors: {result.best_colors}")
        print(f"  Avg colors: {result.avg_colors:.2f}")
        print(f"  Std colors: {result.std_colors:.2f}")
        print(f"  All runs: {result.all_colors}")
        print(f"  Best coloring: {result.best_coloring}")
        if runner.solver.verify_solution(instance, result):
            print("  Best solution verified: VALID")
        else:
            print("  Best solution verified: INVALID!")
        print(f"  Total runtime: {result.total_runtime_seconds:.3f}s")

    elif args.family:
        runner.run_directory(
            args.instances_dir / args.family,
            max_instances=args.max_instances,
            from_end=args.from_end,
        )
        runner.print_table()
        runner.print_summary()

    else:
        runner.run_all_families(
            args.instances_dir,
            max_per_family=args.max_instances,
            from_end=args.from_end,
        )
        runner.print_table()
        runner.print_summary()


def main():
    parser = argparse.ArgumentParser(description="Run GCP heuristics on benchmark instances")

    # Instance selection
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--instance", type=Path, help="Path to a single instance file")
    group.add_argument("--family", type=str, help="Instance family to run (e.g., 'myc', 'random/50')")
    group.add_argument("--all", action="store_true", help="Run on all instance families")

    # Solver selection
    parser.add_argument(
        "--solver",
        type=str,
        default="grasp",
        choices=["grasp", "grasp-pr", "genetic"],
        help="Solver type to use (default: grasp)",
    )

    # GRASP parameters
    parser.add_argument("--grasp-iterations", type=int, default=10, help="GRASP iterations (default: 10)")
    parser.add_argument("--color-iterations", type=int, default=5, help="GRASP iterations per color (default: 5)")
    parser.add_argument("--color-list-size", type=int, default=5, help="GRASP candidate list size (default: 5)")
    parser.add_argument(
        "--grid",
        action="store_true",
        help="Sweep the GRASP parameter grid (iterations x color iterations x list size)",
    )

    # GRASP+PR parameters
    parser.add_argument("--pr-solutions", type=int, default=5, help="Solutions relinked by GRASP+PR (default: 5)")

    # Genetic parameters
    parser.add_argument("--generations", type=int, default=10000, help="Generations (default: 10000)")
    parser.add_argument("--population-size", type=int, default=100, help="Population size (default: 100)")
    parser.add_argument("--offspring-size", type=int, default=2, help="Offspring per generation (default: 2)")
    parser.add_argument("--mutation-probability", type=float, default=0.01, help="Mutation probability (default: 0.01)")
    parser.add_argument("--population-ratio", type=float, default=0.2, help="Selection ratio (default: 0.2)")

    # Common parameters
    parser.add_argument("--runs", type=int, default=1, help="Independent runs per instance (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Base random seed (default: None = random)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for GRASP attempts (default: executor default). Set to 1 for sequential.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log detailed solver output")

    # Experiment parameters
    parser.add_argument("--max-instances", type=int, help="Maximum instances to run (for testing)")
    parser.add_argument(
        "--from-end",
        action="store_true",
        help="Select instances from end of sorted list (larger instances)",
    )
    parser.add_argument(
        "--instances-dir",
        type=Path,
        default=Path("data"),
        help="Directory containing instance families",
    )
    parser.add_argument("--output-dir", type=Path, default=Path("results"), help="Directory for output files")
    parser.add_argument("--output-file", type=str, help="Output CSV filename (default: auto-generated)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.grid:
        if args.solver == "genetic":
            parser.error("--grid only applies to the GRASP solvers")
        for grasp_iterations, color_iterations, color_list_size in GRASP_GRID:
            solver = build_solver(
                args,
                grasp_iterations=grasp_iterations,
                color_iterations=color_iterations,
                color_list_size=color_list_size,
            )
            print(f"\nGRASP grid point: G={grasp_iterations}, C={color_iterations}, S={color_list_size}")
            output_file = None
            if args.output_file:
                stem = Path(args.output_file).stem
                output_file = f"{stem}_g{grasp_iterations}_c{color_iterations}_s{color_list_size}.csv"
            run_selection(ExperimentRunner(solver, output_dir=args.output_dir), args, output_file)
    else:
        solver = build_solver(args)
        run_selection(ExperimentRunner(solver, output_dir=args.output_dir), args, args.output_file)


if __name__ == "__main__":
    main()
