"""
Adaptive mutation for the fusion genetic algorithm.

Rates depend on the genome's own relative tree-width x = width / bound
from its latest evaluation: below the bound edges are rarely dropped and
readily added, above it removals grow and additions fade.
"""

import math

import numpy as np

from ..structures.population import Population


def removal_probability(x: float) -> float:
    """Probability of dropping a present edge."""
    if x < 1:
        return (x / 10) ** 2
    return math.log10(x) / 3 + 0.01


def addition_probability(x: float) -> float:
    """Probability of adding an absent edge."""
    if x < 1:
        return ((x - 1) / 2) ** 2 + 0.01
    return 0.01 / (x + 0.01)


def mutate_genome(genome: np.ndarray, width: int, max_treewidth: int,
                  rng: np.random.Generator) -> None:
    """
    Flip bits of a genome in place.

    Each bit gets its own uniform draw, compared with the removal rate if
    the bit is set and with the addition rate otherwise.

    Args:
        genome: Boolean genome, modified in place
        width: Tree-width measured for this genome
        max_treewidth: Tree-width bound
        rng: Random number generator
    """
    x = width / max_treewidth
    draws = rng.random(genome.shape[0])
    remove = genome & (draws < removal_probability(x))
    add = ~genome & (draws < addition_probability(x))
    genome[remove] = False
    genome[add] = True


def mutate_population(population: Population, widths: np.ndarray,
                      max_treewidth: int, rng: np.random.Generator) -> None:
    """Mutate every slot in place, slot by slot."""
    for slot in range(population.size):
        mutate_genome(population[slot], int(widths[slot]), max_treewidth, rng)
