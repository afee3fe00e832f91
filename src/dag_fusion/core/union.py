"""
Union builders over order-consistent DAGs.

- apply_union: unconstrained union, the reference the fitness measures
  distance to
- apply_greedy_max_treewidth: greedy union that never exceeds a tree-width
  bound, used to seed the genetic algorithm
"""

import logging
from typing import Callable, Hashable, Sequence

import networkx as nx
import numpy as np

from ..evaluation.treewidth import treewidth
from ..structures.catalog import EdgeCatalog
from ..structures.dag import build_dag, is_consistent_with_order

logger = logging.getLogger(__name__)


def apply_union(order: Sequence[Hashable], dags: Sequence[nx.DiGraph]) -> nx.DiGraph:
    """
    Union of the edge sets of order-consistent DAGs.

    Args:
        order: Common node order
        dags: DAGs consistent with the order

    Returns:
        DAG over the order's nodes with every input edge
    """
    union = build_dag(order)
    for G in dags:
        if not is_consistent_with_order(G, order):
            raise ValueError("Union requires DAGs consistent with the common order")
        union.add_edges_from(G.edges())
    return union


def apply_greedy_max_treewidth(order: Sequence[Hashable], catalog: EdgeCatalog,
                               max_treewidth: int,
                               treewidth_fn: Callable[[nx.DiGraph], int] = treewidth) -> nx.DiGraph:
    """
    Greedy union under a tree-width bound.

    Starting from the edgeless graph, catalog edges are visited by
    decreasing frequency (catalog position breaks ties) and kept only when
    the tree-width stays within the bound.

    Args:
        order: Common node order
        catalog: Edge catalog of the reconciled inputs
        max_treewidth: Tree-width bound (0 gives the edgeless graph)
        treewidth_fn: Tree-width function

    Returns:
        DAG whose tree-width is at most max(max_treewidth, 0)
    """
    G = build_dag(order)
    if max_treewidth < 1:
        return G

    # Stable sort keeps catalog order among equally frequent edges
    visit = np.argsort(-catalog.frequencies, kind="stable")
    for position in visit:
        edge = catalog.edges[position]
        G.add_edge(edge.tail, edge.head)
        if treewidth_fn(G) > max_treewidth:
            G.remove_edge(edge.tail, edge.head)

    logger.debug("Greedy union at tree-width %d keeps %d of %d edges",
                 max_treewidth, G.number_of_edges(), len(catalog))
    return G
