"""Data structures for DAG fusion."""

from .dag import (
    Edge,
    build_dag,
    dag_edges,
    check_dag,
    is_consistent_with_order,
    same_node_set,
    random_dag,
)
from .catalog import EdgeCatalog, build_edge_catalog
from .population import (
    Population,
    initialize_population,
    random_genome,
    genome_key,
    count_distinct,
)
from .metrics import FusionResult, FusionTimings
from .edgelist import read_edge_list, write_edge_list, align_node_sets

__all__ = [
    "Edge",
    "build_dag",
    "dag_edges",
    "check_dag",
    "is_consistent_with_order",
    "same_node_set",
    "random_dag",
    "EdgeCatalog",
    "build_edge_catalog",
    "Population",
    "initialize_population",
    "random_genome",
    "genome_key",
    "count_distinct",
    "FusionResult",
    "FusionTimings",
    "read_edge_list",
    "write_edge_list",
    "align_node_sets",
]
