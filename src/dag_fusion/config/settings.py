"""Configuration settings management for DAG fusion."""

import os
import yaml
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from .defaults import *


@dataclass
class GeneticConfig:
    """Genetic algorithm configuration."""
    population_size: int = DEFAULT_POPULATION_SIZE
    iterations: int = DEFAULT_ITERATIONS
    max_treewidth: int = DEFAULT_MAX_TREEWIDTH
    crossover: str = DEFAULT_CROSSOVER


@dataclass
class EvaluationConfig:
    """Fitness evaluation configuration."""
    distance: str = DEFAULT_DISTANCE
    parallel: bool = DEFAULT_PARALLEL_ENABLED
    workers: int = DEFAULT_PARALLEL_WORKERS


@dataclass
class OutputFormatsConfig:
    """Output formats configuration."""
    csv: bool = DEFAULT_CSV_OUTPUT
    json: bool = DEFAULT_JSON_OUTPUT


@dataclass
class OutputConfig:
    """Output configuration."""
    formats: OutputFormatsConfig = field(default_factory=OutputFormatsConfig)


@dataclass
class DebugConfig:
    """Debug configuration."""
    verbose: bool = DEFAULT_VERBOSE
    log_level: str = DEFAULT_LOG_LEVEL
    progress_every: int = DEFAULT_PROGRESS_EVERY


@dataclass
class Settings:
    """Main configuration settings class."""
    genetic: GeneticConfig = field(default_factory=GeneticConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)
    random_seed: int = DEFAULT_RANDOM_SEED

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'Settings':
        """Load settings from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Settings object
        """
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)

        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> 'Settings':
        """Create settings from dictionary.

        Unknown keys are ignored; missing keys keep their defaults.

        Args:
            config_dict: Configuration dictionary

        Returns:
            Settings object
        """
        def convert_nested(data, config_class):
            if data is None:
                return config_class()
            if isinstance(data, dict):
                kwargs = {}
                for field_name, field_type in config_class.__annotations__.items():
                    if field_name in data:
                        value = data[field_name]
                        # Nested dataclass fields carry their own annotations
                        if hasattr(field_type, '__annotations__'):
                            kwargs[field_name] = convert_nested(value, field_type)
                        else:
                            kwargs[field_name] = value
                return config_class(**kwargs)
            return data

        return convert_nested(config_dict, cls)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary.

        Returns:
            Configuration dictionary
        """
        def convert_to_dict(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    field: convert_to_dict(getattr(obj, field))
                    for field in obj.__dataclass_fields__
                }
            elif isinstance(obj, list):
                return [convert_to_dict(item) for item in obj]
            return obj

        return convert_to_dict(self)

    def to_yaml(self, output_path: str):
        """Save settings to YAML file.

        Args:
            output_path: Path to save YAML file
        """
        with open(output_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate configuration settings.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Two elite slots are reserved in every generation
        if self.genetic.population_size < 2:
            errors.append(f"Invalid population_size: {self.genetic.population_size}. Must be >= 2")

        if self.genetic.max_treewidth < 1:
            errors.append(f"Invalid max_treewidth: {self.genetic.max_treewidth}. Must be >= 1")

        if self.genetic.iterations < 0:
            errors.append(f"Invalid iterations: {self.genetic.iterations}. Must be >= 0")

        if self.genetic.crossover not in VALID_CROSSOVERS:
            errors.append(f"Invalid crossover: {self.genetic.crossover}. "
                          f"Must be one of {VALID_CROSSOVERS}")

        if self.evaluation.distance not in VALID_DISTANCES:
            errors.append(f"Invalid distance: {self.evaluation.distance}. "
                          f"Must be one of {VALID_DISTANCES}")

        if self.evaluation.workers < 1:
            errors.append(f"Invalid workers: {self.evaluation.workers}. Must be >= 1")

        if self.debug.progress_every < 1:
            errors.append(f"Invalid progress_every: {self.debug.progress_every}. Must be >= 1")

        if self.debug.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.debug.log_level}. "
                          f"Must be one of {VALID_LOG_LEVELS}")

        return errors

    def check(self) -> 'Settings':
        """Raise ValueError listing every validation error, if any.

        Returns:
            The settings object itself, for chaining
        """
        errors = self.validate()
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))
        return self


def load_config(config_path: Optional[str] = None) -> Settings:
    """Load configuration from file or use defaults.

    Args:
        config_path: Optional path to YAML config file

    Returns:
        Settings object
    """
    if config_path is None or not os.path.exists(config_path):
        return Settings()

    return Settings.from_yaml(config_path)
