"""
Selection operators for the fusion genetic algorithm.

Fitness is a penalty: lower values are better everywhere in this module.
Comparisons look at fitness only, so an infeasible individual with a low
penalized distance can beat a feasible one.
"""

import numpy as np


def fitter(fitness: np.ndarray, first: int, second: int) -> int:
    """Index of the fitter of two individuals; ties go to the second."""
    return first if fitness[first] < fitness[second] else second


def best_index(fitness: np.ndarray, start: int = 0) -> int:
    """Slot of the lowest fitness among slots start..end (first on ties)."""
    return start + int(np.argmin(fitness[start:]))


def roulette_cdf(fitness: np.ndarray) -> np.ndarray:
    """
    Cumulative selection distribution with weights 1 / fitness.

    Individuals at fitness 0 take all the probability mass, shared equally.

    Args:
        fitness: Fitness per slot

    Returns:
        Non-decreasing array ending at 1.0
    """
    fitness = np.asarray(fitness, dtype=float)
    zero = fitness == 0
    if zero.any():
        weights = zero.astype(float)
    else:
        weights = 1.0 / fitness
    total = weights.sum()
    if not np.isfinite(total) or total <= 0:
        weights = np.ones_like(fitness)
        total = weights.sum()
    return np.cumsum(weights) / total


def roulette_pick(cdf: np.ndarray, rng: np.random.Generator) -> int:
    """
    Inverse-CDF draw: first slot whose cumulative value reaches the draw.

    Falls back to the last slot when rounding leaves the draw above every
    cumulative value.
    """
    draw = rng.random()
    index = int(np.searchsorted(cdf, draw, side="left"))
    return min(index, len(cdf) - 1)
