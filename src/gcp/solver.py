"""
Shared result type and multi-run driver for the GCP heuristics.

Every heuristic is randomized, so a solver runs it num_runs times with
independent seeds (base_seed + run index) and reports best/avg/std over the
runs, keeping the best coloring found.
"""

import logging
import random
import statistics
import time
from dataclasses import dataclass, field
from typing import Optional

from .graph import Graph
from .instance import GraphInstance
from .solution import Solution, count_colors, is_valid

logger = logging.getLogger(__name__)


@dataclass
class HeuristicResult:
    """Result of a heuristic solver on a GCP instance."""

    instance_name: str
    num_vertices: int
    num_edges: int
    algorithm: str
    num_runs: int  # Number of independent runs
    best_colors: int  # Best result across all runs
    avg_colors: float  # Average colors across runs
    std_colors: float  # Standard deviation of colors (0 if single run)
    total_runtime_seconds: float  # Total time for all runs
    all_colors: list[int] = field(default_factory=list)  # Colors from each run
    best_coloring: Optional[list[int]] = None  # 1-indexed color per vertex

    def to_csv_row(self) -> str:
        """Format as CSV row."""
        return ",".join(
            [
                self.instance_name,
                str(self.num_vertices),
                str(self.num_edges),
                self.algorithm,
                str(self.num_runs),
                str(self.best_colors),
                f"{self.avg_colors:.2f}",
                f"{self.std_colors:.2f}",
                f"{self.total_runtime_seconds:.3f}",
            ]
        )

    @staticmethod
    def csv_header() -> str:
        """Return CSV header."""
        return "instance,vertices,edges,algorithm,runs,best,avg,std,total_time_s"


class HeuristicSolver:
    """
    Base class for randomized GCP solvers.

    Subclasses implement _single_run(graph, rng) and get_params().
    """

    algorithm = "heuristic"

    def __init__(
        self,
        num_runs: int = 1,
        base_seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Args:
            num_runs: Number of independent runs for statistical evaluation
            base_seed: Base random seed (run i uses base_seed + i, None for random)
            verbose: Whether to log progress at INFO level
        """
        if num_runs < 1:
            raise ValueError(f"num_runs must be at least 1, got {num_runs}")
        self.num_runs = num_runs
        self.base_seed = base_seed
        self.verbose = verbose

    def solve(self, instance: GraphInstance) -> HeuristicResult:
        """
        Solve a GCP instance num_runs times and aggregate the results.

        Args:
            instance: The GCP instance to solve

        Returns:
            HeuristicResult with statistics across all runs
        """
        start_time = time.time()

        all_colors: list[int] = []
        best: Optional[Solution] = None

        for run_idx in range(self.num_runs):
            seed = self.base_seed + run_idx if self.base_seed is not None else None
            rng = random.Random(seed)

            solution = self._single_run(instance.graph, rng)
            all_colors.append(solution.num_colors)

            if best is None or solution.num_colors < best.num_colors:
                best = solution
                if self.verbose:
                    logger.info(
                        "%s run %d/%d on %s: new best = %d colors",
                        self.algorithm, run_idx + 1, self.num_runs, instance.name, best.num_colors,
                    )

        total_runtime = time.time() - start_time

        best_colors = min(all_colors)
        avg_colors = statistics.mean(all_colors)
        std_colors = statistics.stdev(all_colors) if len(all_colors) > 1 else 0.0

        if self.verbose:
            logger.info("Final: best=%d, avg=%.2f, std=%.2f", best_colors, avg_colors, std_colors)

        return HeuristicResult(
            instance_name=instance.name,
            num_vertices=instance.num_vertices,
            num_edges=instance.num_edges,
            algorithm=self.algorithm,
            num_runs=self.num_runs,
            best_colors=best_colors,
            avg_colors=avg_colors,
            std_colors=std_colors,
            total_runtime_seconds=total_runtime,
            all_colors=all_colors,
            best_coloring=best.coloring if best is not None else None,
        )

    def _single_run(self, graph: Graph, rng: random.Random) -> Solution:
        raise NotImplementedError

    def get_params(self) -> dict:
        """Get solver parameters as a dictionary."""
        return {
            "solver": self.algorithm,
            "num_runs": self.num_runs,
            "base_seed": self.base_seed,
        }

    def verify_solution(self, instance: GraphInstance, result: HeuristicResult) -> bool:
        """
        Verify that the best coloring is proper and matches the reported count.

        Args:
            instance: The GCP instance
            result: The result to verify

        Returns:
            True if the best solution is valid
        """
        if result.best_coloring is None:
            return False
        if not is_valid(instance.graph, result.best_coloring):
            return False
        return count_colors(result.best_coloring) == result.best_colors
