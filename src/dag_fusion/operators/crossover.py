"""
Crossover operators for the fusion genetic algorithm.

Every strategy builds the next population the same way: slot 0 receives
the best individual found so far, slot 1 the best individual of the
current generation among slots 1..end, and slots 2..end are children.
"""

from enum import Enum
from typing import Optional

import numpy as np

from ..structures.population import Population
from .selection import best_index, fitter, roulette_cdf, roulette_pick


class CrossoverStrategy(Enum):
    """How children in slots 2..end are produced."""
    TOURNAMENT = "tournament"
    ROULETTE = "roulette"

    @classmethod
    def from_name(cls, name) -> 'CrossoverStrategy':
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            valid = [s.value for s in cls]
            raise ValueError(f"Unknown crossover: {name}. Must be one of {valid}") from None


# =============================================================================
# Elitism
# =============================================================================

def elite_population(population: Population, fitness: np.ndarray,
                     best_genome: Optional[np.ndarray]) -> Population:
    """
    Start the next population with its two elite slots filled.

    Args:
        population: Current population
        fitness: Fitness of the current population
        best_genome: Best feasible genome found so far; when none has been
            found yet, the fittest individual of this generation is used

    Returns:
        New population; slots 2..end are still empty
    """
    elite = Population.empty(population.size, population.num_edges)
    if best_genome is None:
        best_genome = population[best_index(fitness)]
    elite[0] = best_genome
    elite[1] = population[best_index(fitness, start=1)]
    return elite


# =============================================================================
# Crossover Operators
# =============================================================================

def tournament_crossover(population: Population, fitness: np.ndarray,
                         offspring: Population, rng: np.random.Generator) -> None:
    """
    Single-point crossover between two binary-tournament winners.

    For each child four slots are drawn with replacement together with a
    crossover point c. The prefix [0, c) comes from the fitter of the
    first pair, the suffix [c, end) from the fitter of the second pair.

    Args:
        population: Parents
        fitness: Parents' fitness
        offspring: Population whose slots 2..end are overwritten
        rng: Random number generator
    """
    size = population.size
    num_edges = population.num_edges
    for slot in range(2, size):
        i1, i2, i3, i4 = rng.integers(0, size, size=4)
        point = int(rng.integers(0, num_edges)) if num_edges > 0 else 0

        head = fitter(fitness, i1, i2)
        tail = fitter(fitness, i3, i4)
        offspring[slot][:point] = population[head][:point]
        offspring[slot][point:] = population[tail][point:]


def roulette_crossover(population: Population, fitness: np.ndarray,
                       offspring: Population, rng: np.random.Generator) -> None:
    """
    Uniform crossover between two fitness-proportional picks.

    Parents are drawn by inverse-CDF sampling on weights 1 / fitness; each
    bit of the child is copied from either parent by a fair coin flip.

    Args:
        population: Parents
        fitness: Parents' fitness
        offspring: Population whose slots 2..end are overwritten
        rng: Random number generator
    """
    cdf = roulette_cdf(fitness)
    for slot in range(2, population.size):
        first = roulette_pick(cdf, rng)
        second = roulette_pick(cdf, rng)
        from_first = rng.random(population.num_edges) < 0.5
        offspring[slot] = np.where(from_first, population[first], population[second])


_OPERATORS = {
    CrossoverStrategy.TOURNAMENT: tournament_crossover,
    CrossoverStrategy.ROULETTE: roulette_crossover,
}


def crossover(population: Population, fitness: np.ndarray,
              best_genome: Optional[np.ndarray], strategy: CrossoverStrategy,
              rng: np.random.Generator) -> Population:
    """
    Produce the next population: elite slots, then children.

    Args:
        population: Current population
        fitness: Its fitness (from the evaluation preceding crossover)
        best_genome: Best feasible genome found so far
        strategy: Crossover strategy for slots 2..end
        rng: Random number generator

    Returns:
        New population
    """
    offspring = elite_population(population, fitness, best_genome)
    _OPERATORS[CrossoverStrategy.from_name(strategy)](population, fitness, offspring, rng)
    return offspring
