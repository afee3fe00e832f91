"""Core fusion algorithms."""

from .alpha import alpha_order, transform_to_alpha, make_sink, check_inputs
from .union import apply_union, apply_greedy_max_treewidth
from .genetic import GeneticTreewidthUnion, fuse_dags

__all__ = [
    "alpha_order",
    "transform_to_alpha",
    "make_sink",
    "check_inputs",
    "apply_union",
    "apply_greedy_max_treewidth",
    "GeneticTreewidthUnion",
    "fuse_dags",
]
