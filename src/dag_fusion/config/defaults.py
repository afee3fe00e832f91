"""
Default configuration values for DAG fusion.

Every field of the settings dataclasses reads its default from here so
that scripts and tests can refer to the same constants.
"""

# =============================================================================
# Genetic Algorithm
# =============================================================================

DEFAULT_POPULATION_SIZE = 20
DEFAULT_ITERATIONS = 1000
DEFAULT_MAX_TREEWIDTH = 5
DEFAULT_CROSSOVER = "tournament"

VALID_CROSSOVERS = ["tournament", "roulette"]

# =============================================================================
# Evaluation
# =============================================================================

DEFAULT_DISTANCE = "smhd"
DEFAULT_PARALLEL_ENABLED = True
DEFAULT_PARALLEL_WORKERS = 4

VALID_DISTANCES = ["smhd", "shd"]

# =============================================================================
# Output
# =============================================================================

DEFAULT_CSV_OUTPUT = True
DEFAULT_JSON_OUTPUT = True

# =============================================================================
# Debug
# =============================================================================

DEFAULT_VERBOSE = False
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PROGRESS_EVERY = 50

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# =============================================================================
# Reproducibility
# =============================================================================

DEFAULT_RANDOM_SEED = 42
