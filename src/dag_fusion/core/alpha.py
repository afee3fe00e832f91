"""
Common node ordering for a set of DAGs.

Fusion needs every input DAG to agree on one total order of the variables
(the alpha order) so that edges tail -> head from different inputs can be
merged without creating cycles.

Key algorithms:
- alpha_order: Greedy order built from the end, choosing at each step the
  node whose conversion into a sink inserts the fewest edges overall
- transform_to_alpha: Rewrites a DAG into an order-consistent I-map through
  covered-arc reversals
"""

import logging
from typing import Dict, Hashable, List, Optional, Sequence, Set

import networkx as nx

from ..structures.dag import check_dag, same_node_set

logger = logging.getLogger(__name__)


# =============================================================================
# Validation
# =============================================================================

def check_inputs(dags: Sequence[nx.DiGraph]) -> None:
    """
    Raise ValueError unless the inputs can be reconciled.

    Args:
        dags: Input DAGs
    """
    if len(dags) == 0:
        raise ValueError("At least one DAG is required")
    for i, G in enumerate(dags):
        try:
            check_dag(G)
        except ValueError as e:
            raise ValueError(f"Input DAG {i} is invalid: {e}") from e
    if not same_node_set(dags):
        raise ValueError("Input DAGs must share the same node set")


# =============================================================================
# Covered-Arc Reversals
# =============================================================================

def make_sink(G: nx.DiGraph, x: Hashable, remaining: Set[Hashable]) -> int:
    """
    Turn x into a sink with respect to the remaining nodes, in place.

    While x has a child z among the remaining nodes, the minimal such child
    is picked and the edge x -> z is covered (parents of x become parents of
    z, parents of z become parents of x) and then reversed. Every step keeps
    G acyclic and an I-map of the original graph.

    Args:
        G: DAG, modified in place
        x: Node to turn into a sink
        remaining: Nodes still to be ordered (children outside are ignored)

    Returns:
        Number of edges inserted to cover the reversed edges
    """
    added = 0
    position: Optional[Dict[Hashable, int]] = None
    while True:
        children = [c for c in G.successors(x) if c in remaining]
        if not children:
            return added
        if len(children) == 1:
            z = children[0]
        else:
            # Reversing a covered x -> z adds no path between two remaining
            # children of x, so the first topological order stays usable
            if position is None:
                position = {node: idx for idx, node in enumerate(nx.topological_sort(G))}
            z = min(children, key=position.__getitem__)

        for w in list(G.predecessors(x)):
            if not G.has_edge(w, z):
                G.add_edge(w, z)
                added += 1
        for w in list(G.predecessors(z)):
            if w != x and not G.has_edge(w, x):
                G.add_edge(w, x)
                added += 1

        G.remove_edge(x, z)
        G.add_edge(z, x)


# =============================================================================
# Alpha Order
# =============================================================================

def alpha_order(dags: Sequence[nx.DiGraph]) -> List[Hashable]:
    """
    Greedy common order for a set of DAGs.

    Works on copies of the inputs. At each step every remaining node is
    tried as the next sink (the order is filled from its end); the node
    that needs the fewest inserted edges summed over all DAGs wins, ties
    going to the node placed latest in a topological order of the first
    DAG, so a single input keeps one of its own topological orders. The
    winner is turned into a sink in every copy and removed.

    Args:
        dags: Input DAGs over the same node set

    Returns:
        Node order, sources first
    """
    check_inputs(dags)
    working = [G.copy() for G in dags]
    rank = {node: idx for idx, node in enumerate(nx.topological_sort(dags[0]))}
    reversed_order: List[Hashable] = []

    while working[0].number_of_nodes() > 0:
        candidates = sorted(working[0].nodes(), key=rank.__getitem__, reverse=True)
        best_node = None
        best_cost = None
        for node in candidates:
            cost = 0
            for G in working:
                if G.out_degree(node) == 0:
                    continue
                trial = G.copy()
                cost += make_sink(trial, node, set(trial.nodes()))
                if best_cost is not None and cost >= best_cost:
                    break
            if best_cost is None or cost < best_cost:
                best_node, best_cost = node, cost
                if cost == 0:
                    break

        for G in working:
            make_sink(G, best_node, set(G.nodes()))
            G.remove_node(best_node)
        reversed_order.append(best_node)

    order = reversed_order[::-1]
    logger.debug("Alpha order: %s", order)
    return order


def transform_to_alpha(G: nx.DiGraph, order: Sequence[Hashable]) -> nx.DiGraph:
    """
    Rewrite a DAG so that all its edges follow the given order.

    Nodes are processed from the end of the order; each is made a sink with
    respect to the nodes before it. The result is an I-map of G: every
    independence it encodes also holds in G.

    Args:
        G: DAG over exactly the nodes of the order
        order: Total node order

    Returns:
        New DAG with nodes in order and edges sorted by (tail, head) position
    """
    if set(G.nodes()) != set(order) or len(order) != G.number_of_nodes():
        raise ValueError("Order must list every node of the DAG exactly once")

    H = G.copy()
    remaining = set(order)
    for x in reversed(order):
        remaining.discard(x)
        make_sink(H, x, remaining)

    position = {node: idx for idx, node in enumerate(order)}
    result = nx.DiGraph()
    result.add_nodes_from(order)
    result.add_edges_from(sorted(H.edges(), key=lambda e: (position[e[0]], position[e[1]])))
    return result
