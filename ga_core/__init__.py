"""
Genetic Algorithm Core

This package provides a generic genetic algorithm driver and its bindings
to the TSP and N-Queens problems.

Key Features:
- Fitness-proportional (roulette wheel) selection with distinct parents
- Elitism and fixed-size generational replacement
- Best-so-far tracking with per-generation statistics
- Explicit, seedable random source for reproducible runs

Modules:
- data_models: Core data structures (Individual, GAConfig, BestRecord, GenerationStats)
- genetic_algorithm: Generic driver and operator protocol
- crossover: Ordered and two-point crossover operators
- operators: TSP and N-Queens operator sets
- io_utils: Distance-matrix loading, result and history CSV output
- orchestration: TSP and N-Queens run workflows
- visualization_utils: Convergence and board plots
- cli: Run configuration loading, validation and dispatch
"""

__version__ = "0.1.0"

from .data_models import Individual, GAConfig, BestRecord, GenerationStats, ConfigurationError
from .genetic_algorithm import GeneticAlgorithm, GeneticOperators, DegeneratePopulationError
from .operators import TSPOperators, NQueensOperators

__all__ = [
    "Individual",
    "GAConfig",
    "BestRecord",
    "GenerationStats",
    "ConfigurationError",
    "GeneticAlgorithm",
    "GeneticOperators",
    "DegeneratePopulationError",
    "TSPOperators",
    "NQueensOperators",
]
