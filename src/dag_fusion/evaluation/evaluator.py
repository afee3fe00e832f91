"""
Fitness evaluation for fusion genomes.

This module contains the evaluator that turns a genome into a DAG, scores
it against the full union and keeps track of the best feasible solution
seen so far, possibly from several worker threads at once.
"""

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from ..structures.catalog import EdgeCatalog
from ..structures.dag import build_dag
from ..structures.population import Population
from .distance import smhd
from .treewidth import treewidth

logger = logging.getLogger(__name__)

TreewidthFn = Callable[[nx.DiGraph], int]
DistanceFn = Callable[[nx.DiGraph, nx.DiGraph], float]


@dataclass
class Evaluation:
    """Score of one genome."""
    treewidth: int
    distance: float
    fitness: float
    dag: nx.DiGraph


def penalized_fitness(distance: float, width: int, max_treewidth: int) -> float:
    """
    Fitness of a DAG at the given distance from the full union.

    Feasible DAGs (width <= max_treewidth) score their raw distance;
    infeasible ones have it scaled by width / max_treewidth. The penalty is
    multiplicative, so an infeasible DAG at distance 0 (the full union
    itself) still scores 0 and wins every fitness-only comparison in
    selection; only best tracking rejects it.
    """
    if width > max_treewidth:
        return distance * (width / max_treewidth)
    return distance


# =============================================================================
# Best Solution Tracking
# =============================================================================

class BestSolution:
    """
    Lock-guarded slot holding the best feasible (genome, DAG, fitness).

    A candidate replaces the current one only if it is feasible and has a
    strictly lower fitness. Offers made during the same evaluation pass with
    equal fitness resolve to the lowest population slot, which is what a
    sequential sweep over the slots would keep.
    """

    def __init__(self, max_treewidth: int):
        self.max_treewidth = max_treewidth
        self.genome: Optional[np.ndarray] = None
        self.dag: Optional[nx.DiGraph] = None
        self.fitness: float = math.inf
        self.treewidth: Optional[int] = None
        self._pass_id: Optional[int] = None
        self._slot: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def found(self) -> bool:
        return self.genome is not None

    def offer(self, genome: np.ndarray, evaluation: Evaluation,
              pass_id: Optional[int] = None, slot: Optional[int] = None) -> bool:
        """
        Replace the best solution if the candidate improves on it.

        Args:
            genome: Candidate genome (copied on acceptance)
            evaluation: Its evaluation
            pass_id: Evaluation pass the offer belongs to
            slot: Population slot of the candidate

        Returns:
            True if the candidate became the best solution
        """
        if evaluation.treewidth > self.max_treewidth:
            return False

        with self._lock:
            if evaluation.fitness < self.fitness:
                accept = True
            else:
                accept = (evaluation.fitness == self.fitness
                          and pass_id is not None and pass_id == self._pass_id
                          and slot is not None and self._slot is not None
                          and slot < self._slot)
            if not accept:
                return False

            self.genome = np.array(genome, dtype=bool, copy=True)
            self.dag = evaluation.dag
            self.fitness = evaluation.fitness
            self.treewidth = evaluation.treewidth
            self._pass_id = pass_id
            self._slot = slot

        logger.debug("New best solution: fitness=%.4f treewidth=%d (pass %s, slot %s)",
                     evaluation.fitness, evaluation.treewidth, pass_id, slot)
        return True

    def snapshot(self) -> Tuple[Optional[np.ndarray], Optional[nx.DiGraph], float, Optional[int]]:
        """Consistent copy of (genome, dag, fitness, treewidth)."""
        with self._lock:
            genome = None if self.genome is None else self.genome.copy()
            return genome, self.dag, self.fitness, self.treewidth


# =============================================================================
# Evaluator
# =============================================================================

class FitnessEvaluator:
    """
    Scores genomes against the full union under a tree-width bound.

    Evaluating a population writes one fitness and one tree-width per slot
    and offers every genome to the shared best solution. With parallel
    evaluation enabled the slots are spread over a thread pool; the call
    returns only once every slot has been scored.

    Attributes:
        nodes: Node order every materialized DAG is built over
        catalog: Edge catalog (genome layout)
        reference: Full union DAG the distance is measured against
        max_treewidth: Tree-width bound
        best: Shared best solution
    """

    def __init__(self, nodes: Sequence[Hashable], catalog: EdgeCatalog,
                 reference: nx.DiGraph, max_treewidth: int,
                 best: Optional[BestSolution] = None,
                 treewidth_fn: TreewidthFn = treewidth,
                 distance_fn: DistanceFn = smhd,
                 parallel: bool = True, workers: int = 4):
        self.nodes = list(nodes)
        self.catalog = catalog
        self.reference = reference
        self.max_treewidth = max_treewidth
        self.best = best if best is not None else BestSolution(max_treewidth)
        self.treewidth_fn = treewidth_fn
        self.distance_fn = distance_fn
        self.parallel = parallel
        self.workers = workers
        self.passes = 0
        self._pool: Optional[ThreadPoolExecutor] = None

    def build_dag(self, genome: np.ndarray) -> nx.DiGraph:
        """DAG over the fixed node set with exactly the genome's edges."""
        return build_dag(self.nodes, self.catalog.edges_of(genome))

    def evaluate_genome(self, genome: np.ndarray) -> Evaluation:
        """Materialize and score a single genome (no best-tracking)."""
        dag = self.build_dag(genome)
        width = self.treewidth_fn(dag)
        distance = self.distance_fn(dag, self.reference)
        return Evaluation(
            treewidth=width,
            distance=distance,
            fitness=penalized_fitness(distance, width, self.max_treewidth),
            dag=dag,
        )

    def evaluate(self, population: Population) -> Tuple[np.ndarray, np.ndarray]:
        """
        Score every slot of the population.

        Args:
            population: Population to evaluate

        Returns:
            (fitness, treewidths) arrays indexed by slot
        """
        self.passes += 1
        pass_id = self.passes
        fitness = np.zeros(population.size, dtype=float)
        widths = np.zeros(population.size, dtype=int)

        def score(slot: int) -> None:
            genome = population[slot]
            evaluation = self.evaluate_genome(genome)
            fitness[slot] = evaluation.fitness
            widths[slot] = evaluation.treewidth
            self.best.offer(genome, evaluation, pass_id=pass_id, slot=slot)

        if self.parallel and self.workers > 1 and population.size > 1:
            # list() waits for every slot and re-raises worker exceptions
            list(self._executor().map(score, range(population.size)))
        else:
            for slot in range(population.size):
                score(slot)

        return fitness, widths

    def _executor(self) -> ThreadPoolExecutor:
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=self.workers,
                                            thread_name_prefix="fitness")
        return self._pool

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
