"""
Experiment runner for GCP instances.

Runs a heuristic solver (GRASP, GRASP+PR or Genetic) over DIMACS instance
files, appending one CSV row per instance as results come in.
"""

import csv
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .instance import GraphInstance
from .solver import HeuristicResult, HeuristicSolver

logger = logging.getLogger(__name__)


class ExperimentRunner:
    """Runs experiments on GCP instances and collects results."""

    def __init__(self, solver: HeuristicSolver, output_dir: Path | None = None):
        """
        Initialize the experiment runner.

        Args:
            solver: The GCP solver to use (GraspSolver, GraspPathRelinkingSolver or GeneticSolver)
            output_dir: Directory for output files (default: current directory)
        """
        self.solver = solver
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.results: list[HeuristicResult] = []
        self.output_path: Optional[Path] = None

    def init_output(self, filename: str | None = None) -> Path:
        """
        Create the results CSV (header only) and its JSON parameter sidecar.

        Args:
            filename: Output filename (default: results_ALGORITHM_TIMESTAMP.csv)

        Returns:
            Path to the CSV file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"results_{self.solver.algorithm}_{timestamp}.csv"

        self.output_path = self.output_dir / filename
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.output_path, "w", newline="") as f:
            csv.writer(f).writerow(HeuristicResult.csv_header().split(","))

        self.save_params_json(self.output_path)
        return self.output_path

    def _append_result_csv(self, result: HeuristicResult) -> None:
        """Append a single result row to the CSV, if output was initialized."""
        if self.output_path is None:
            return
        with open(self.output_path, "a", newline="") as f:
            csv.writer(f).writerow(result.to_csv_row().split(","))

    def run_instance(self, filepath: Path) -> HeuristicResult:
        """Run solver on a single instance."""
        instance = GraphInstance.from_file(filepath)
        result = self.solver.solve(instance)
        if not self.solver.verify_solution(instance, result):
            logger.error("Invalid coloring reported for %s", instance.name)
        self.results.append(result)
        self._append_result_csv(result)
        return result

    def run_directory(
        self,
        directory: Path,
        pattern: str = "*.col",
        max_instances: int | None = None,
        from_end: bool = False,
    ) -> list[HeuristicResult]:
        """
        Run solver on all instances in a directory.

        Args:
            directory: Directory containing instance files
            pattern: Glob pattern for instance files
            max_instances: Maximum number of instances to run (for testing)
            from_end: If True, select instances from the end of the sorted list

        Returns:
            List of results
        """
        directory = Path(directory)
        files = sorted(directory.glob(pattern))

        if max_instances:
            if from_end:
                files = files[-max_instances:]
            else:
                files = files[:max_instances]

        results = []
        for i, filepath in enumerate(files):
            print(f"[{i + 1}/{len(files)}] Processing {filepath.name}...", end=" ")
            sys.stdout.flush()

            try:
                result = self.run_instance(filepath)
            except (OSError, ValueError) as e:
                print(f"ERROR: {e}")
                continue

            self._print_result_line(result)
            results.append(result)

        return results

    def run_all_families(
        self,
        instances_dir: Path,
        families: list[str] | None = None,
        max_per_family: int | None = None,
        from_end: bool = False,
    ) -> dict[str, list[HeuristicResult]]:
        """
        Run solver on all instance families (one subdirectory per family).

        Args:
            instances_dir: Root directory containing family subdirectories
            families: List of family names to run (default: all)
            max_per_family: Maximum instances per family (for testing)
            from_end: If True, select instances from the end of the sorted list

        Returns:
            Dictionary mapping family name to results
        """
        instances_dir = Path(instances_dir)

        if families is None:
            families = sorted(d.name for d in instances_dir.iterdir() if d.is_dir())

        all_results = {}
        for family in families:
            family_dir = instances_dir / family
            if not family_dir.exists():
                print(f"Warning: Family directory {family} not found, skipping.")
                continue

            print(f"\n{'=' * 60}")
            print(f"Running family: {family}")
            print(f"{'=' * 60}")

            all_results[family] = self.run_directory(
                family_dir, max_instances=max_per_family, from_end=from_end
            )

        return all_results

    def _print_result_line(self, result: HeuristicResult) -> None:
        print(
            f"best={result.best_colors}, avg={result.avg_colors:.2f}, "
            f"std={result.std_colors:.2f} in {result.total_runtime_seconds:.2f}s"
        )

    def save_params_json(self, csv_filepath: Path) -> Path:
        """
        Save solver parameters to a JSON file alongside the CSV.

        Args:
            csv_filepath: Path to the CSV file (JSON will be saved with same name)

        Returns:
            Path to the saved JSON file
        """
        json_filepath = csv_filepath.with_suffix(".json")

        params = self.solver.get_params()
        params["timestamp"] = datetime.now().isoformat()

        with open(json_filepath, "w") as f:
            json.dump(params, f, indent=2)

        return json_filepath

    def print_summary(self):
        """Print a summary of results."""
        if not self.results:
            print("No results to summarize.")
            return

        total = len(self.results)
        avg_best = sum(r.best_colors for r in self.results) / total
        avg_avg = sum(r.avg_colors for r in self.results) / total
        avg_time = sum(r.total_runtime_seconds for r in self.results) / total

        print(f"\n{'=' * 60}")
        print("SUMMARY")
        print(f"{'=' * 60}")
        print(f"Algorithm: {self.solver.algorithm}")
        print(f"Total instances: {total}")
        print(f"Runs per instance: {self.results[0].num_runs}")
        print(f"Avg best colors: {avg_best:.2f}")
        print(f"Avg avg colors: {avg_avg:.2f}")
        print(f"Avg time per instance: {avg_time:.2f}s")

    def print_table(self):
        """Print results as a formatted table."""
        if not self.results:
            print("No results to display.")
            return

        print(
            f"\n{'Instance':<25} {'V':>5} {'E':>6} {'Algorithm':>9} "
            f"{'Runs':>5} {'Best':>5} {'Avg':>7} {'Std':>6} {'Time':>8}"
        )
        print("-" * 85)

        for r in self.results:
            print(
                f"{r.instance_name:<25} {r.num_vertices:>5} {r.num_edges:>6} "
                f"{r.algorithm:>9} {r.num_runs:>5} {r.best_colors:>5} "
                f"{r.avg_colors:>7.2f} {r.std_colors:>6.2f} {r.total_runtime_seconds:>7.2f}s"
            )
