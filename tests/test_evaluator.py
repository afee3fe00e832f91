"""Tests for fitness evaluation and best-solution tracking."""

import math

import numpy as np
import pytest

from dag_fusion.core import apply_union
from dag_fusion.evaluation import BestSolution, Evaluation, FitnessEvaluator, penalized_fitness
from dag_fusion.operators import roulette_cdf
from dag_fusion.structures import Population, build_edge_catalog

GREEDY_GENOME = [True, True, True, True, True, False]


@pytest.fixture
def evaluator_parts(three_dags, nodes):
    catalog = build_edge_catalog(three_dags)
    reference = apply_union(nodes, three_dags)
    return nodes, catalog, reference


def evaluation(fitness, width=1):
    return Evaluation(treewidth=width, distance=fitness, fitness=fitness, dag=None)


def test_penalized_fitness():
    assert penalized_fitness(4.0, 2, 2) == 4.0
    assert penalized_fitness(4.0, 3, 2) == 6.0
    assert penalized_fitness(0.0, 5, 2) == 0.0


def test_evaluate_genome(evaluator_parts):
    evaluator = FitnessEvaluator(*evaluator_parts, max_treewidth=2, parallel=False)

    full = evaluator.evaluate_genome(np.ones(6, dtype=bool))
    assert (full.treewidth, full.distance, full.fitness) == (3, 0.0, 0.0)

    greedy = evaluator.evaluate_genome(np.array(GREEDY_GENOME))
    assert (greedy.treewidth, greedy.distance, greedy.fitness) == (2, 1.0, 1.0)
    assert greedy.dag.number_of_edges() == 5
    assert list(greedy.dag.nodes()) == ["A", "B", "C", "D"]

    empty = evaluator.evaluate_genome(np.zeros(6, dtype=bool))
    assert (empty.treewidth, empty.fitness) == (0, 6.0)


def test_injected_functions_and_penalty(evaluator_parts):
    evaluator = FitnessEvaluator(
        *evaluator_parts, max_treewidth=2, parallel=False,
        treewidth_fn=lambda G: G.number_of_edges(),
        distance_fn=lambda G, H: 10.0,
    )
    scored = evaluator.evaluate_genome(np.array([True, True, True, False, False, False]))
    assert scored.treewidth == 3
    assert scored.fitness == 15.0


def test_population_evaluation_tracks_feasible_best(evaluator_parts):
    evaluator = FitnessEvaluator(*evaluator_parts, max_treewidth=2, parallel=False)
    population = Population(np.array([
        [True] * 6,
        GREEDY_GENOME,
        [False] * 6,
    ]))

    fitness, widths = evaluator.evaluate(population)
    assert fitness.tolist() == [0.0, 1.0, 6.0]
    assert widths.tolist() == [3, 2, 0]
    assert evaluator.passes == 1

    best = evaluator.best
    assert best.found
    assert best.fitness == 1.0, "The infeasible full union is never kept"
    assert best.genome.tolist() == GREEDY_GENOME


def test_parallel_matches_sequential(evaluator_parts):
    rng = np.random.default_rng(31)
    population = Population(rng.random((16, 6)) < 0.5)

    sequential = FitnessEvaluator(*evaluator_parts, max_treewidth=2, parallel=False)
    fitness_seq, widths_seq = sequential.evaluate(population)

    with FitnessEvaluator(*evaluator_parts, max_treewidth=2, parallel=True, workers=4) as parallel:
        fitness_par, widths_par = parallel.evaluate(population)
        assert np.array_equal(fitness_seq, fitness_par)
        assert np.array_equal(widths_seq, widths_par)
        assert parallel.best.fitness == sequential.best.fitness
        assert np.array_equal(parallel.best.genome, sequential.best.genome)


def test_best_solution_rejects_infeasible():
    best = BestSolution(max_treewidth=2)
    assert not best.offer(np.zeros(3, dtype=bool), evaluation(0.0, width=3))
    assert not best.found
    assert math.isinf(best.fitness)


def test_best_solution_requires_strict_improvement():
    best = BestSolution(max_treewidth=2)
    assert best.offer(np.array([True, False]), evaluation(2.0), pass_id=1, slot=4)
    assert best.offer(np.array([False, True]), evaluation(1.0), pass_id=1, slot=5)
    assert not best.offer(np.array([True, True]), evaluation(1.0), pass_id=2, slot=0)
    assert not best.offer(np.array([True, True]), evaluation(1.5), pass_id=2, slot=0)
    assert best.genome.tolist() == [False, True]


def test_best_solution_ties_within_pass_go_to_lowest_slot():
    best = BestSolution(max_treewidth=2)
    assert best.offer(np.array([True, False]), evaluation(1.0), pass_id=3, slot=6)
    assert best.offer(np.array([False, True]), evaluation(1.0), pass_id=3, slot=2)
    assert not best.offer(np.array([True, True]), evaluation(1.0), pass_id=3, slot=4)
    assert best.genome.tolist() == [False, True]


def test_snapshot_is_a_copy():
    best = BestSolution(max_treewidth=2)
    genome = np.array([True, False])
    best.offer(genome, evaluation(1.0))
    genome[0] = False

    snapshot, _, fitness, width = best.snapshot()
    assert snapshot.tolist() == [True, False]
    snapshot[1] = True
    assert best.genome.tolist() == [True, False]
    assert (fitness, width) == (1.0, 1)


def test_infeasible_full_union_scores_zero(evaluator_parts):
    """
    The full union is at distance 0 from itself, so its penalized fitness
    stays 0 although it exceeds the bound; roulette selection then gives it
    all the mass while best tracking still ignores it.
    """
    evaluator = FitnessEvaluator(*evaluator_parts, max_treewidth=2, parallel=False)
    population = Population(np.array([[True] * 6, GREEDY_GENOME]))

    fitness, widths = evaluator.evaluate(population)
    assert widths.tolist() == [3, 2]
    assert fitness.tolist() == [0.0, 1.0]
    assert penalized_fitness(0.0, 3, 2) == 0.0

    assert np.allclose(roulette_cdf(fitness), [1.0, 1.0])
    assert evaluator.best.fitness == 1.0
    assert evaluator.best.genome.tolist() == GREEDY_GENOME
