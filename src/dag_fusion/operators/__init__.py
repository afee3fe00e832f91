"""Genetic operators for the fusion algorithm."""

from .selection import fitter, best_index, roulette_cdf, roulette_pick
from .crossover import (
    CrossoverStrategy,
    crossover,
    elite_population,
    tournament_crossover,
    roulette_crossover,
)
from .mutation import (
    removal_probability,
    addition_probability,
    mutate_genome,
    mutate_population,
)

__all__ = [
    "fitter",
    "best_index",
    "roulette_cdf",
    "roulette_pick",
    "CrossoverStrategy",
    "crossover",
    "elite_population",
    "tournament_crossover",
    "roulette_crossover",
    "removal_probability",
    "addition_probability",
    "mutate_genome",
    "mutate_population",
]
