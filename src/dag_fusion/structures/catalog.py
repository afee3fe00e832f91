"""
Edge catalog: the gene layout shared by every genome.

Each distinct edge across the order-consistent input DAGs gets a stable
position, and its frequency counts how many inputs contain it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import networkx as nx
import numpy as np

from .dag import Edge, dag_edges


@dataclass(frozen=True, eq=False)
class EdgeCatalog:
    """
    Ordered, immutable set of edges with occurrence frequencies.

    Attributes:
        edges: Distinct edges in first-seen order; index == gene position
        positions: Edge -> gene position
        frequencies: Number of input DAGs containing each edge (by position)
        num_dags: Number of input DAGs the catalog was built from
    """
    edges: Tuple[Edge, ...]
    positions: Dict[Edge, int] = field(repr=False)
    frequencies: np.ndarray = field(repr=False)
    num_dags: int = 0

    def __len__(self):
        return len(self.edges)

    @property
    def max_frequency(self) -> int:
        if len(self.edges) == 0:
            return 0
        return int(self.frequencies.max())

    @property
    def min_frequency_floor(self) -> int:
        """Lowest frequency minus one, so the rarest edge normalizes above 0."""
        if len(self.edges) == 0:
            return 0
        return int(self.frequencies.min()) - 1

    @property
    def uniform(self) -> bool:
        """True when every edge has the same frequency."""
        if len(self.edges) == 0:
            return True
        return int(self.frequencies.min()) == self.max_frequency

    def frequency(self, edge: Edge) -> int:
        return int(self.frequencies[self.positions[edge]])

    def normalized_frequencies(self) -> np.ndarray:
        """
        Frequencies rescaled to (0, 1].

        (f - floor) / (max - floor) with floor = min - 1, so the most
        frequent edge maps to 1 and no edge maps to 0.
        """
        floor = self.min_frequency_floor
        return (self.frequencies - floor) / float(self.max_frequency - floor)

    def genome_of(self, G: nx.DiGraph) -> np.ndarray:
        """Boolean genome with bit j set iff catalog edge j is in G."""
        return np.array([G.has_edge(e.tail, e.head) for e in self.edges], dtype=bool)

    def edges_of(self, genome: np.ndarray) -> List[Edge]:
        """Catalog edges whose bits are set in the genome, by position."""
        return [self.edges[j] for j in np.flatnonzero(genome)]


def build_edge_catalog(dags: Sequence[nx.DiGraph]) -> EdgeCatalog:
    """
    Collect the distinct edges of the input DAGs in one pass.

    An unseen edge is appended (position = current catalog size) with
    frequency 1; a seen edge has its frequency incremented. The catalog
    order therefore follows the DAGs' edge iteration order.

    Args:
        dags: Order-consistent input DAGs

    Returns:
        EdgeCatalog
    """
    edges: List[Edge] = []
    positions: Dict[Edge, int] = {}
    counts: List[int] = []

    for G in dags:
        for edge in dag_edges(G):
            position = positions.get(edge)
            if position is None:
                positions[edge] = len(edges)
                edges.append(edge)
                counts.append(1)
            else:
                counts[position] += 1

    return EdgeCatalog(
        edges=tuple(edges),
        positions=positions,
        frequencies=np.array(counts, dtype=np.int64),
        num_dags=len(dags),
    )
