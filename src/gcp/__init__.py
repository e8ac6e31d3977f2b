"""
Graph Coloring Problem (GCP)

This package provides heuristic solvers for the Graph Coloring Problem:
GRASP, GRASP with path relinking, and a genetic algorithm.
"""

from .genetic import GeneticSolver, genetic
from .graph import AdjacencyList, AdjacencyMatrix, Graph
from .grasp import GraspSolver, grasp, grasp_wrapper
from .instance import GraphInstance
from .path_relinking import GraspPathRelinkingSolver, grasp_path_relinking
from .solution import (
    ColoringInvariantError,
    Solution,
    SolutionPool,
    count_colors,
    is_valid,
    to_class_list,
    to_coloring,
)
from .solver import HeuristicResult, HeuristicSolver

__all__ = [
    # Graph model
    "Graph",
    "AdjacencyList",
    "AdjacencyMatrix",
    # Instance
    "GraphInstance",
    # Solutions
    "Solution",
    "SolutionPool",
    "ColoringInvariantError",
    "to_coloring",
    "to_class_list",
    "count_colors",
    "is_valid",
    # Algorithms
    "grasp",
    "grasp_wrapper",
    "grasp_path_relinking",
    "genetic",
    # Solvers
    "HeuristicSolver",
    "HeuristicResult",
    "GraspSolver",
    "GraspPathRelinkingSolver",
    "GeneticSolver",
]
