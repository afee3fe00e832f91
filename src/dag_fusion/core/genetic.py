"""
Genetic tree-width-bounded union of DAGs.

Fuses several DAGs into one consensus DAG whose tree-width does not exceed
a bound, searching subsets of the full union's edges for the one closest
to the full union.

Algorithm:
    1. Reconcile the inputs on a common alpha order
    2. Build the full union and the edge catalog
    3. Seed the population with greedy bounded unions (bound and bound - 1)
       and frequency-biased random genomes
    4. For each generation:
       a. Evaluate fitness
       b. Elitism + crossover
       c. Evaluate fitness
       d. Adaptive mutation
    5. Return the best feasible DAG seen during the run
"""

import logging
import time
from typing import Callable, Optional, Sequence

import networkx as nx
import numpy as np

from ..config.defaults import (
    DEFAULT_CROSSOVER,
    DEFAULT_DISTANCE,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_TREEWIDTH,
    DEFAULT_PARALLEL_ENABLED,
    DEFAULT_PARALLEL_WORKERS,
    DEFAULT_POPULATION_SIZE,
    DEFAULT_PROGRESS_EVERY,
    DEFAULT_RANDOM_SEED,
    DEFAULT_VERBOSE,
)
from ..config.settings import Settings
from ..evaluation.distance import get_distance
from ..evaluation.evaluator import BestSolution, FitnessEvaluator
from ..evaluation.treewidth import treewidth
from ..operators.crossover import CrossoverStrategy, crossover as next_generation
from ..operators.mutation import mutate_population
from ..structures.catalog import build_edge_catalog
from ..structures.metrics import FusionResult, FusionTimings
from ..structures.population import count_distinct, initialize_population
from .alpha import alpha_order, transform_to_alpha
from .union import apply_greedy_max_treewidth, apply_union

logger = logging.getLogger(__name__)


class GeneticTreewidthUnion:
    """
    Genetic algorithm for the tree-width-bounded union of DAGs.

    Each call to fusion_union is an independent run: the random generator,
    population and best solution are reset from the constructor arguments.

    Attributes:
        seed: Random seed
        max_treewidth: Tree-width bound
        population_size: Number of genomes (slots 0 and 1 are elite)
        iterations: Number of generations
        strategy: Crossover strategy for slots 2..end
        alpha: Common node order of the last run
        alpha_dags: Inputs rewritten to the alpha order
        full_union: Unconstrained union of alpha_dags
        catalog: Edge catalog (genome layout)
        greedy_dag: Greedy bounded union at max_treewidth
        population: Current population
        fitness: Fitness per slot from the latest evaluation
        treewidths: Tree-width per slot from the latest evaluation
        best: Best feasible solution seen so far
        history: Best fitness after each generation
        timings: Timing breakdown of the last run
    """

    def __init__(self, seed: int = DEFAULT_RANDOM_SEED,
                 max_treewidth: int = DEFAULT_MAX_TREEWIDTH,
                 population_size: int = DEFAULT_POPULATION_SIZE,
                 iterations: int = DEFAULT_ITERATIONS,
                 crossover: str = DEFAULT_CROSSOVER,
                 distance: str = DEFAULT_DISTANCE,
                 parallel: bool = DEFAULT_PARALLEL_ENABLED,
                 workers: int = DEFAULT_PARALLEL_WORKERS,
                 verbose: bool = DEFAULT_VERBOSE,
                 progress_every: int = DEFAULT_PROGRESS_EVERY,
                 treewidth_fn: Callable[[nx.DiGraph], int] = treewidth,
                 distance_fn: Optional[Callable[[nx.DiGraph, nx.DiGraph], float]] = None):
        settings = Settings()
        settings.random_seed = seed
        settings.genetic.max_treewidth = max_treewidth
        settings.genetic.population_size = population_size
        settings.genetic.iterations = iterations
        settings.genetic.crossover = crossover.value if isinstance(crossover, CrossoverStrategy) else crossover
        settings.evaluation.distance = distance
        settings.evaluation.parallel = parallel
        settings.evaluation.workers = workers
        settings.debug.verbose = verbose
        settings.debug.progress_every = progress_every
        settings.check()

        self.seed = seed
        self.max_treewidth = max_treewidth
        self.population_size = population_size
        self.iterations = iterations
        self.strategy = CrossoverStrategy.from_name(settings.genetic.crossover)
        self.parallel = parallel
        self.workers = workers
        self.verbose = verbose
        self.progress_every = progress_every
        self.treewidth_fn = treewidth_fn
        self.distance_fn = distance_fn if distance_fn is not None else get_distance(distance)

        self.random = np.random.default_rng(seed)
        self.alpha = []
        self.alpha_dags = []
        self.full_union = None
        self.catalog = None
        self.greedy_dag = None
        self.population = None
        self.fitness = None
        self.treewidths = None
        self.best = BestSolution(max_treewidth)
        self.evaluator = None
        self.history = []
        self.timings = FusionTimings()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> 'GeneticTreewidthUnion':
        """
        Build an optimizer from a Settings object.

        Args:
            settings: Validated or unvalidated settings
            **kwargs: Extra constructor arguments (e.g. treewidth_fn)

        Returns:
            GeneticTreewidthUnion
        """
        settings.check()
        return cls(
            seed=settings.random_seed,
            max_treewidth=settings.genetic.max_treewidth,
            population_size=settings.genetic.population_size,
            iterations=settings.genetic.iterations,
            crossover=settings.genetic.crossover,
            distance=settings.evaluation.distance,
            parallel=settings.evaluation.parallel,
            workers=settings.evaluation.workers,
            verbose=settings.debug.verbose,
            progress_every=settings.debug.progress_every,
            **kwargs,
        )

    # =========================================================================
    # Main Loop
    # =========================================================================

    def fusion_union(self, dags: Sequence[nx.DiGraph]) -> FusionResult:
        """
        Fuse the DAGs under the tree-width bound.

        Args:
            dags: Input DAGs over the same node set

        Returns:
            FusionResult; result.feasible is False if no DAG within the
            bound was ever evaluated
        """
        start_time = time.perf_counter()
        self.initialize_vars(dags)

        if self.verbose:
            print("=" * 80)
            print("Genetic Tree-width Union")
            print("=" * 80)
            print(f"Input DAGs      : {len(dags)}")
            print(f"Nodes / edges   : {len(self.alpha)} / {len(self.catalog)} distinct")
            print(f"Max tree-width  : {self.max_treewidth}")
            print(f"Population      : {self.population_size}")
            print(f"Generations     : {self.iterations}")
            print(f"Crossover       : {self.strategy.value}")
            print("=" * 80)

        try:
            self.initialize()
            for generation in range(1, self.iterations + 1):
                self.evaluate()
                self.crossover()
                self.evaluate()
                self.mutate()
                self.history.append(self.best.fitness)

                if self.verbose and generation % self.progress_every == 0:
                    elapsed = time.perf_counter() - start_time
                    print(f"  Gen {generation}: best fitness {self.best.fitness:.4f}, "
                          f"{count_distinct(self.population.genomes)} distinct genomes, "
                          f"{elapsed:.1f}s elapsed")
        finally:
            self.evaluator.close()

        self.timings.total = time.perf_counter() - start_time
        result = self.result()

        if self.verbose:
            print(f"\n✓ Fusion completed in {self.timings.total:.1f}s")
            if result.feasible:
                print(f"  Best fitness: {result.fitness:.4f}")
                print(f"  Tree-width: {result.treewidth} (bound {self.max_treewidth})")
                print(f"  Edges: {result.dag.number_of_edges()} of "
                      f"{self.full_union.number_of_edges()} in the full union")
            else:
                print("  No DAG within the tree-width bound was found")

        if not result.feasible:
            logger.warning("No individual within tree-width %d was found", self.max_treewidth)
        return result

    def initialize_vars(self, dags: Sequence[nx.DiGraph]) -> None:
        """
        Reconcile the inputs and reset the run state.

        Builds the alpha order, the order-consistent inputs, the full union
        and the edge catalog.
        """
        self.random = np.random.default_rng(self.seed)
        self.best = BestSolution(self.max_treewidth)
        self.history = []
        self.timings = FusionTimings()

        self.alpha = alpha_order(dags)
        self.alpha_dags = [transform_to_alpha(G, self.alpha) for G in dags]

        start_time = time.perf_counter()
        self.full_union = apply_union(self.alpha, self.alpha_dags)
        self.timings.union = time.perf_counter() - start_time

        self.catalog = build_edge_catalog(self.alpha_dags)
        self.fitness = np.zeros(self.population_size, dtype=float)
        self.treewidths = np.zeros(self.population_size, dtype=int)
        self.evaluator = FitnessEvaluator(
            self.alpha, self.catalog, self.full_union, self.max_treewidth,
            best=self.best,
            treewidth_fn=self.treewidth_fn,
            distance_fn=self.distance_fn,
            parallel=self.parallel,
            workers=self.workers,
        )
        logger.debug("Catalog: %d edges, frequencies %d..%d",
                     len(self.catalog), self.catalog.min_frequency_floor + 1,
                     self.catalog.max_frequency)

    def initialize(self) -> None:
        """Seed slots 0 and 1 with greedy unions, the rest at random."""
        start_time = time.perf_counter()
        self.greedy_dag = apply_greedy_max_treewidth(
            self.alpha, self.catalog, self.max_treewidth, self.treewidth_fn)
        self.timings.greedy = time.perf_counter() - start_time

        conservative = apply_greedy_max_treewidth(
            self.alpha, self.catalog, self.max_treewidth - 1, self.treewidth_fn)

        self.population = initialize_population(
            self.catalog, [self.greedy_dag, conservative], self.population_size, self.random)

    def evaluate(self) -> None:
        """Score every slot (in parallel when enabled)."""
        self.fitness, self.treewidths = self.evaluator.evaluate(self.population)

    def crossover(self) -> None:
        """Replace the population with elites and children."""
        best_genome, _, _, _ = self.best.snapshot()
        self.population = next_generation(self.population, self.fitness, best_genome,
                                          self.strategy, self.random)

    def mutate(self) -> None:
        """Mutate every slot using its latest tree-width."""
        mutate_population(self.population, self.treewidths, self.max_treewidth, self.random)

    def result(self) -> FusionResult:
        """Snapshot of the best solution and run diagnostics."""
        genome, dag, fitness, width = self.best.snapshot()
        return FusionResult(
            dag=dag,
            fitness=fitness,
            treewidth=width,
            genome=genome,
            max_treewidth=self.max_treewidth,
            alpha=list(self.alpha),
            full_union=self.full_union,
            greedy_dag=self.greedy_dag,
            catalog=self.catalog,
            history=list(self.history),
            timings=self.timings,
        )


def fuse_dags(dags: Sequence[nx.DiGraph], settings: Optional[Settings] = None,
              **kwargs) -> FusionResult:
    """
    Fuse DAGs under a tree-width bound with the genetic algorithm.

    Args:
        dags: Input DAGs over the same node set
        settings: Configuration (defaults when None)
        **kwargs: Extra constructor arguments (e.g. treewidth_fn)

    Returns:
        FusionResult
    """
    if settings is None:
        settings = Settings()
    return GeneticTreewidthUnion.from_settings(settings, **kwargs).fusion_union(dags)
