"""Configuration management for DAG fusion."""

from .settings import (
    Settings,
    GeneticConfig,
    EvaluationConfig,
    OutputConfig,
    OutputFormatsConfig,
    DebugConfig,
    load_config,
)
from .defaults import *

__all__ = [
    "Settings",
    "GeneticConfig",
    "EvaluationConfig",
    "OutputConfig",
    "OutputFormatsConfig",
    "DebugConfig",
    "load_config",
]
