"""
Structural distances between DAGs over the same node set.
"""

import networkx as nx

from .treewidth import moral_graph


def _check_nodes(G1: nx.DiGraph, G2: nx.DiGraph) -> None:
    if set(G1.nodes()) != set(G2.nodes()):
        raise ValueError("Distances are only defined between graphs over the same nodes")


def _undirected_edges(G: nx.Graph) -> set:
    return {frozenset(edge) for edge in G.edges()}


def smhd(G1: nx.DiGraph, G2: nx.DiGraph) -> float:
    """
    Structural Moral Hamming Distance.

    Number of undirected edges present in exactly one of the two moral
    graphs. Two DAGs encoding the same moral structure are at distance 0.

    Args:
        G1: First DAG
        G2: Second DAG

    Returns:
        Non-negative distance
    """
    _check_nodes(G1, G2)
    edges1 = _undirected_edges(moral_graph(G1))
    edges2 = _undirected_edges(moral_graph(G2))
    return float(len(edges1 ^ edges2))


def shd(G1: nx.DiGraph, G2: nx.DiGraph) -> float:
    """
    Structural Hamming Distance on directed edges.

    Counts missing and extra adjacencies, plus adjacencies present in both
    graphs with opposite orientation (each such reversal counts once).

    Args:
        G1: First DAG
        G2: Second DAG

    Returns:
        Non-negative distance
    """
    _check_nodes(G1, G2)
    skeleton1 = _undirected_edges(G1)
    skeleton2 = _undirected_edges(G2)
    distance = len(skeleton1 ^ skeleton2)
    for u, v in G1.edges():
        if G2.has_edge(v, u) and not G2.has_edge(u, v):
            distance += 1
    return float(distance)


DISTANCES = {
    "smhd": smhd,
    "shd": shd,
}


def get_distance(name: str):
    """Look up a distance function by its configuration name."""
    try:
        return DISTANCES[name]
    except KeyError:
        raise ValueError(f"Unknown distance: {name}. Must be one of {sorted(DISTANCES)}") from None
