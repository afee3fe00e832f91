"""Result and timing data structures for DAG fusion."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional

import networkx as nx
import numpy as np

from .catalog import EdgeCatalog


@dataclass
class FusionTimings:
    """Wall-clock timings of one fusion run, in seconds.

    Attributes:
        total: Whole run, reconciliation through the last generation
        union: Building the unconstrained union
        greedy: Building the greedy seed at the caller's bound
    """
    total: float = 0.0
    union: float = 0.0
    greedy: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"total": self.total, "union": self.union, "greedy": self.greedy}


@dataclass
class FusionResult:
    """Outcome of a fusion run.

    When no individual within the tree-width bound was ever evaluated,
    dag, genome and treewidth are None and fitness is infinite.

    Attributes:
        dag: Best feasible fused DAG, or None
        fitness: Its fitness (distance to the full union)
        treewidth: Its tree-width, or None
        genome: Its genome over the catalog, or None
        max_treewidth: Bound the run was asked to respect
        alpha: Common node order used for the fusion
        full_union: Unconstrained union of the reconciled inputs
        greedy_dag: Greedy bounded union at max_treewidth
        catalog: Edge catalog of the run
        history: Best fitness after each generation
        timings: Timing breakdown
    """
    dag: Optional[nx.DiGraph]
    fitness: float
    treewidth: Optional[int]
    genome: Optional[np.ndarray]
    max_treewidth: int
    alpha: List[Hashable] = field(default_factory=list)
    full_union: Optional[nx.DiGraph] = None
    greedy_dag: Optional[nx.DiGraph] = None
    catalog: Optional[EdgeCatalog] = None
    history: List[float] = field(default_factory=list)
    timings: FusionTimings = field(default_factory=FusionTimings)

    @property
    def feasible(self) -> bool:
        """True if a DAG within the tree-width bound was found."""
        return self.dag is not None

    def to_dict(self) -> Dict[str, Any]:
        """Summary suitable for JSON output."""
        return {
            "feasible": self.feasible,
            "fitness": self.fitness if math.isfinite(self.fitness) else None,
            "treewidth": self.treewidth,
            "max_treewidth": self.max_treewidth,
            "num_edges": self.dag.number_of_edges() if self.dag is not None else None,
            "union_edges": self.full_union.number_of_edges() if self.full_union is not None else None,
            "catalog_size": len(self.catalog) if self.catalog is not None else None,
            "alpha": [str(node) for node in self.alpha],
            "generations": len(self.history),
            "timings": self.timings.to_dict(),
        }
