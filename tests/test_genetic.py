"""
End-to-end tests for the genetic tree-width-bounded union.
"""

import math

import networkx as nx
import numpy as np
import pytest

from dag_fusion import GeneticTreewidthUnion, Settings, fuse_dags
from dag_fusion.evaluation import smhd, treewidth
from dag_fusion.structures import is_consistent_with_order, random_dag


def run(dags, **kwargs):
    options = dict(seed=7, max_treewidth=2, population_size=10, iterations=30, parallel=False)
    options.update(kwargs)
    return GeneticTreewidthUnion(**options).fusion_union(dags)


def assert_valid_result(result, bound):
    assert result.feasible
    assert result.treewidth <= bound
    assert treewidth(result.dag) == result.treewidth
    assert result.fitness == smhd(result.dag, result.full_union)
    assert is_consistent_with_order(result.dag, result.alpha)
    assert set(result.dag.edges()) <= set(result.full_union.edges())


def test_fusion_of_three_dags(three_dags):
    """
    The full union is complete on four nodes (tree-width 3); under bound 2
    the closest DAG misses exactly one moral edge.
    """
    result = run(three_dags, iterations=50)

    assert_valid_result(result, 2)
    assert result.fitness == 1.0
    assert result.alpha == ["A", "B", "C", "D"]
    assert len(result.catalog) == 6
    assert result.full_union.number_of_edges() == 6
    assert treewidth(result.greedy_dag) <= 2


def test_result_never_worse_than_greedy_seed():
    rng = np.random.default_rng(41)
    nodes = [f"X{i}" for i in range(8)]
    dags = []
    for _ in range(3):
        order = [nodes[i] for i in rng.permutation(len(nodes))]
        dags.append(random_dag(order, 0.4, rng))

    result = run(dags, iterations=15)
    assert_valid_result(result, 2)
    assert result.fitness <= smhd(result.greedy_dag, result.full_union)


def test_history_is_monotone(three_dags):
    result = run(three_dags, iterations=20)
    assert len(result.history) == 20
    assert all(b <= a for a, b in zip(result.history, result.history[1:]))
    assert result.history[-1] == result.fitness


def test_runs_are_reproducible(three_dags):
    first = run(three_dags, parallel=True, workers=4)
    second = run(three_dags, parallel=True, workers=4)
    sequential = run(three_dags)

    assert first.history == second.history == sequential.history
    assert np.array_equal(first.genome, second.genome)
    assert np.array_equal(first.genome, sequential.genome)


def test_engine_reset_between_runs(three_dags):
    engine = GeneticTreewidthUnion(seed=3, max_treewidth=2, population_size=6,
                                   iterations=10, parallel=False)
    first = engine.fusion_union(three_dags)
    second = engine.fusion_union(three_dags)
    assert first.history == second.history
    assert np.array_equal(first.genome, second.genome)


def test_minimum_population(three_dags):
    result = run(three_dags, population_size=2, iterations=5)
    assert_valid_result(result, 2)


def test_roulette_strategy(conflicting_dags):
    result = run(conflicting_dags, crossover="roulette", max_treewidth=1)
    assert_valid_result(result, 1)


def test_elites_survive_crossover(three_dags):
    """Slot 0 always holds the best genome right after crossover."""
    engine = GeneticTreewidthUnion(seed=5, max_treewidth=2, population_size=8,
                                   iterations=10, parallel=False)
    engine.initialize_vars(three_dags)
    engine.initialize()
    try:
        for _ in range(10):
            engine.evaluate()
            engine.crossover()
            assert np.array_equal(engine.population[0], engine.best.genome)
            engine.evaluate()
            engine.mutate()
    finally:
        engine.evaluator.close()


def test_no_feasible_individual(three_dags):
    result = run(three_dags, treewidth_fn=lambda G: 99)
    assert not result.feasible
    assert result.dag is None
    assert math.isinf(result.fitness)
    assert result.to_dict()["fitness"] is None
    assert result.greedy_dag.number_of_edges() == 0


def test_zero_iterations(three_dags):
    result = run(three_dags, iterations=0)
    assert not result.feasible
    assert result.history == []
    assert result.greedy_dag is not None


def test_fuse_dags_with_settings(three_dags):
    settings = Settings()
    settings.genetic.max_treewidth = 2
    settings.genetic.population_size = 4
    settings.genetic.iterations = 5
    settings.evaluation.parallel = False
    settings.evaluation.distance = "shd"

    result = fuse_dags(three_dags, settings)
    assert result.feasible
    assert result.treewidth <= 2

    summary = result.to_dict()
    assert summary["feasible"] is True
    assert summary["generations"] == 5
    assert summary["alpha"] == ["A", "B", "C", "D"]


def test_verbose_output(three_dags, capsys):
    run(three_dags, iterations=2, verbose=True, progress_every=1)
    out = capsys.readouterr().out
    assert "Genetic Tree-width Union" in out
    assert "Gen 2" in out
    assert "Fusion completed" in out


@pytest.mark.parametrize("kwargs", [
    {"population_size": 1},
    {"max_treewidth": 0},
    {"crossover": "uniform"},
    {"distance": "euclid"},
    {"iterations": -1},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        GeneticTreewidthUnion(**kwargs)


def test_invalid_inputs(three_dags):
    with pytest.raises(ValueError):
        run([])

    cyclic = nx.DiGraph([("A", "B"), ("B", "A")])
    with pytest.raises(ValueError):
        run([cyclic])

    partial = nx.DiGraph([("A", "B")])
    with pytest.raises(ValueError):
        run([three_dags[0], partial])
