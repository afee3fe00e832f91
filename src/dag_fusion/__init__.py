"""
DAG Fusion

Genetic fusion of several DAGs into one consensus DAG under a tree-width bound.
"""

__version__ = "1.0.0"

from .core import GeneticTreewidthUnion, fuse_dags, alpha_order, transform_to_alpha
from .config import Settings, load_config
from .operators import CrossoverStrategy
from .structures import Edge, EdgeCatalog, FusionResult, build_edge_catalog
from .evaluation import treewidth, smhd

__all__ = [
    "GeneticTreewidthUnion",
    "fuse_dags",
    "alpha_order",
    "transform_to_alpha",
    "Settings",
    "load_config",
    "CrossoverStrategy",
    "Edge",
    "EdgeCatalog",
    "FusionResult",
    "build_edge_catalog",
    "treewidth",
    "smhd",
]
