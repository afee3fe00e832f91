"""Fitness evaluation: tree-width, distances and the evaluator."""

from .treewidth import treewidth, graph_treewidth, moral_graph, minor_min_width
from .distance import smhd, shd, get_distance
from .evaluator import BestSolution, Evaluation, FitnessEvaluator, penalized_fitness

__all__ = [
    "treewidth",
    "graph_treewidth",
    "moral_graph",
    "minor_min_width",
    "smhd",
    "shd",
    "get_distance",
    "BestSolution",
    "Evaluation",
    "FitnessEvaluator",
    "penalized_fitness",
]
