"""
Exact tree-width of DAGs.

The tree-width of a DAG is taken on its moral graph: parents of a common
child are married and directions dropped. Each connected component is
solved separately:

1. A minor-min-width lower bound and the min-degree / min-fill-in upper
   bounds from networkx are computed.
2. If they meet, the bound is the answer.
3. Otherwise the elimination-ordering dynamic programme over vertex subsets
   runs (exponential in the component size), pruned by the upper bound.
"""

import logging
from typing import Dict, List

import networkx as nx
from networkx.algorithms.approximation import treewidth_min_degree, treewidth_min_fill_in

logger = logging.getLogger(__name__)


def moral_graph(G: nx.DiGraph) -> nx.Graph:
    """Moralize a DAG: marry co-parents and drop edge directions."""
    return nx.moral_graph(G)


def treewidth(G: nx.DiGraph) -> int:
    """
    Exact tree-width of a DAG (of its moral graph).

    Args:
        G: DAG

    Returns:
        Non-negative tree-width; 0 for graphs without edges
    """
    return graph_treewidth(moral_graph(G))


def graph_treewidth(G: nx.Graph) -> int:
    """
    Exact tree-width of an undirected graph.

    Args:
        G: Undirected graph

    Returns:
        Non-negative tree-width; 0 for graphs without edges
    """
    if G.number_of_edges() == 0:
        return 0

    width = 0
    for component in nx.connected_components(G):
        if len(component) <= width + 1:
            # A component cannot have width above its size minus one
            continue
        width = max(width, _component_treewidth(G.subgraph(component)))
    return width


# =============================================================================
# Bounds
# =============================================================================

def minor_min_width(G: nx.Graph) -> int:
    """
    Minor-min-width lower bound on tree-width.

    Repeatedly takes a minimum-degree vertex, records its degree and
    contracts it into the neighbour sharing the fewest neighbours with it.
    """
    adjacency = {v: set(G.neighbors(v)) for v in G.nodes()}
    bound = 0
    while len(adjacency) > 1:
        v = min(adjacency, key=lambda x: len(adjacency[x]))
        neighbours = adjacency.pop(v)
        bound = max(bound, len(neighbours))
        if not neighbours:
            continue
        u = min(neighbours, key=lambda x: len(adjacency[x] & neighbours))
        for w in neighbours:
            adjacency[w].discard(v)
        for w in neighbours:
            if w != u:
                adjacency[u].add(w)
                adjacency[w].add(u)
    return bound


def heuristic_upper_bound(G: nx.Graph) -> int:
    """Best of the min-degree and min-fill-in elimination heuristics."""
    width_degree, _ = treewidth_min_degree(G)
    width_fill, _ = treewidth_min_fill_in(G)
    return min(width_degree, width_fill)


# =============================================================================
# Exact Dynamic Programme
# =============================================================================

def _component_treewidth(G: nx.Graph) -> int:
    lower = minor_min_width(G)
    upper = heuristic_upper_bound(G)
    if lower >= upper:
        return upper

    logger.debug("Exact tree-width search on %d vertices (bounds %d..%d)",
                 G.number_of_nodes(), lower, upper)
    return _treewidth_dp(G, lower, upper)


def _treewidth_dp(G: nx.Graph, lower: int, upper: int) -> int:
    """
    Subset dynamic programme over elimination prefixes.

    TW(S) = min over v in S of max(TW(S - v), |Q(S - v, v)|), where Q(S, v)
    holds the vertices outside S + v reachable from v through S. Only
    prefixes with TW(S) < upper are kept, so the result is min(tw, upper).
    """
    nodes = list(G.nodes())
    index = {v: i for i, v in enumerate(nodes)}
    n = len(nodes)
    adjacency: List[int] = [0] * n
    for u, v in G.edges():
        adjacency[index[u]] |= 1 << index[v]
        adjacency[index[v]] |= 1 << index[u]

    full = (1 << n) - 1
    best = upper
    level: Dict[int, int] = {0: -1}

    for size in range(n):
        following: Dict[int, int] = {}
        for prefix, width in level.items():
            # Eliminating the remaining vertices in any order costs at most
            # (remaining - 1), so this prefix can close the search early
            best = min(best, max(width, n - size - 1))
            remaining = full & ~prefix
            while remaining:
                bit = remaining & -remaining
                remaining ^= bit
                v = bit.bit_length() - 1
                step = max(width, _reach_outside(adjacency, prefix, v))
                if step >= best:
                    continue
                extended = prefix | bit
                if step < following.get(extended, best):
                    following[extended] = step
        if not following:
            break
        level = following
        if best <= lower:
            return lower

    if full in level:
        best = min(best, level[full])
    return max(best, lower)


def _reach_outside(adjacency: List[int], prefix: int, v: int) -> int:
    """|Q(prefix, v)|: vertices outside prefix + v reachable through prefix."""
    seen = 1 << v
    outside = 0
    stack = [v]
    while stack:
        x = stack.pop()
        fresh = adjacency[x] & ~seen
        seen |= fresh
        outside |= fresh & ~prefix
        inner = fresh & prefix
        while inner:
            bit = inner & -inner
            inner ^= bit
            stack.append(bit.bit_length() - 1)
    return bin(outside).count("1")
