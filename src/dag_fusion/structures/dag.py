"""
DAG Utilities Module

Contains the DAG structure operations shared by every stage of the fusion:
- Edge value type with structural equality
- DAG construction and edge queries
- Validation against acyclicity and a total node order
- Random DAG generation
"""

from dataclasses import dataclass
from typing import Hashable, Iterable, List, Sequence, Tuple

import networkx as nx
import numpy as np


# =============================================================================
# Edge
# =============================================================================

@dataclass(frozen=True)
class Edge:
    """
    Directed edge tail -> head.

    Two edges are equal when their endpoints are equal, whatever graph they
    were read from, so edges can be used as dictionary keys across DAGs.
    """
    tail: Hashable
    head: Hashable

    @classmethod
    def of(cls, pair: Tuple[Hashable, Hashable]) -> 'Edge':
        """Build an edge from a (tail, head) tuple."""
        tail, head = pair
        return cls(tail, head)

    def as_tuple(self) -> Tuple[Hashable, Hashable]:
        return (self.tail, self.head)

    def reversed(self) -> 'Edge':
        return Edge(self.head, self.tail)

    def __str__(self):
        return f"{self.tail} --> {self.head}"


# =============================================================================
# Construction and Queries
# =============================================================================

def build_dag(nodes: Iterable[Hashable], edges: Iterable[Edge] = ()) -> nx.DiGraph:
    """
    Create a DAG over the given nodes containing exactly the given edges.

    Args:
        nodes: Node identifiers, inserted in the given order
        edges: Edges to add; endpoints must be among the nodes

    Returns:
        NetworkX DiGraph
    """
    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    for edge in edges:
        if edge.tail not in G or edge.head not in G:
            raise ValueError(f"Edge {edge} references a node outside the graph")
        G.add_edge(edge.tail, edge.head)
    return G


def dag_edges(G: nx.DiGraph) -> List[Edge]:
    """Edges of G in its (deterministic) insertion order."""
    return [Edge(u, v) for u, v in G.edges()]


def check_dag(G: nx.DiGraph) -> None:
    """
    Raise ValueError unless G is a directed acyclic graph.

    Args:
        G: Graph to check
    """
    if not G.is_directed():
        raise ValueError("Expected a directed graph")
    if not nx.is_directed_acyclic_graph(G):
        cycle = nx.find_cycle(G)
        raise ValueError(f"Graph contains a cycle: {cycle}")


def is_consistent_with_order(G: nx.DiGraph, order: Sequence[Hashable]) -> bool:
    """
    Check that every edge tail precedes its head in the order.

    Args:
        G: DAG to check
        order: Total order over (at least) the nodes of G

    Returns:
        True if all edges point forward in the order
    """
    position = {node: idx for idx, node in enumerate(order)}
    return all(position[u] < position[v] for u, v in G.edges())


def same_node_set(graphs: Sequence[nx.DiGraph]) -> bool:
    if not graphs:
        return True
    reference = set(graphs[0].nodes())
    return all(set(G.nodes()) == reference for G in graphs[1:])


# =============================================================================
# DAG Generation
# =============================================================================

def random_dag(nodes: Sequence[Hashable], edge_probability: float,
               rng: np.random.Generator) -> nx.DiGraph:
    """
    Generate a random DAG consistent with the given node order.

    Each forward pair (nodes[i], nodes[j]) with i < j becomes an edge with
    probability edge_probability.

    Args:
        nodes: Node identifiers in topological order
        edge_probability: Independent inclusion probability per pair
        rng: Random number generator

    Returns:
        NetworkX DiGraph
    """
    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    for i in range(len(nodes) - 1):
        draws = rng.random(len(nodes) - i - 1)
        for offset, draw in enumerate(draws):
            if draw < edge_probability:
                G.add_edge(nodes[i], nodes[i + 1 + offset])
    return G


def shuffled_dag(G: nx.DiGraph, rng: np.random.Generator) -> nx.DiGraph:
    """
    Copy of G whose node and edge insertion order is randomly permuted.

    Useful for producing inputs that describe the same structure but
    disagree on iteration order.
    """
    nodes = list(G.nodes())
    edges = list(G.edges())
    H = nx.DiGraph()
    H.add_nodes_from(nodes[i] for i in rng.permutation(len(nodes)))
    H.add_edges_from(edges[i] for i in rng.permutation(len(edges)))
    return H
