"""
Population Module

Defines the genome matrix and its initialization:
- Population representation (one boolean row per individual)
- Seeding from greedy bounded unions
- Frequency-biased random individuals
"""

from typing import Iterable, List, Sequence

import networkx as nx
import numpy as np

from .catalog import EdgeCatalog


class Population:
    """
    Fixed-size collection of fixed-length boolean genomes.

    Row i is the genome in population slot i; column j is catalog edge j.

    Attributes:
        genomes: (size, num_edges) boolean matrix
    """

    def __init__(self, genomes: np.ndarray):
        genomes = np.asarray(genomes, dtype=bool)
        if genomes.ndim != 2:
            raise ValueError(f"Genome matrix must be 2-D, got shape {genomes.shape}")
        self.genomes = genomes

    @classmethod
    def empty(cls, size: int, num_edges: int) -> 'Population':
        return cls(np.zeros((size, num_edges), dtype=bool))

    @property
    def size(self) -> int:
        return self.genomes.shape[0]

    @property
    def num_edges(self) -> int:
        return self.genomes.shape[1]

    def __len__(self):
        return self.size

    def __getitem__(self, index: int) -> np.ndarray:
        return self.genomes[index]

    def __setitem__(self, index: int, genome: np.ndarray):
        self.genomes[index] = genome


# =============================================================================
# Population Initialization
# =============================================================================

def random_genome(catalog: EdgeCatalog, rng: np.random.Generator) -> np.ndarray:
    """
    Draw one random genome biased toward frequent edges.

    With uniform frequencies every bit is a fair coin flip. Otherwise bit j
    is set with probability 1 / (1 - log(p_j)), p_j being the normalized
    frequency of edge j in (0, 1].

    Args:
        catalog: Edge catalog
        rng: Random number generator

    Returns:
        Boolean genome
    """
    draws = rng.random(len(catalog))
    if catalog.uniform:
        return draws < 0.5
    inclusion = 1.0 / (1.0 - np.log(catalog.normalized_frequencies()))
    return draws < inclusion


def initialize_population(catalog: EdgeCatalog, seeds: Sequence[nx.DiGraph],
                          size: int, rng: np.random.Generator) -> Population:
    """
    Initialize population with seed DAGs followed by random genomes.

    Args:
        catalog: Edge catalog defining the genome layout
        seeds: DAGs placed verbatim in the first slots (greedy unions)
        size: Population size
        rng: Random number generator

    Returns:
        Population object
    """
    if len(seeds) > size:
        raise ValueError(f"{len(seeds)} seeds do not fit a population of {size}")

    population = Population.empty(size, len(catalog))
    for slot, seed in enumerate(seeds):
        population[slot] = catalog.genome_of(seed)

    for slot in range(len(seeds), size):
        population[slot] = random_genome(catalog, rng)

    return population


def genome_key(genome: np.ndarray) -> bytes:
    """Hashable key for a genome (packed bits)."""
    return np.packbits(genome).tobytes() + len(genome).to_bytes(4, "little")


def count_distinct(genomes: Iterable[np.ndarray]) -> int:
    """Number of distinct genomes, a cheap diversity indicator."""
    return len({genome_key(g) for g in genomes})
