"""
Data models for the genetic algorithm.

Core data structures representing individuals, run configuration, the
best-so-far record and per-generation statistics.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, TypeVar


G = TypeVar("G")


class ConfigurationError(ValueError):
    """Raised when genetic algorithm parameters are out of range."""
    pass


@dataclass(frozen=True, eq=False)
class Individual(Generic[G]):
    """
    A chromosome paired with its precomputed fitness score.

    Individuals are immutable and compare by identity, so two members of a
    population holding equal chromosomes are still distinct. Ordering is by
    descending fitness: `a < b` means `a` is fitter than `b`.

    Attributes:
        chromosome: Problem-defined encoding of a candidate solution
        fitness_score: Fitness computed once at construction (higher is better)
    """
    chromosome: G
    fitness_score: float

    @classmethod
    def evaluate(cls, chromosome: G, fitness: Callable[[G], float]) -> "Individual[G]":
        """
        Build an individual, computing its fitness from the chromosome.

        Args:
            chromosome: Chromosome to wrap
            fitness: Fitness function of the owning problem

        Returns:
            New Individual
        """
        return cls(chromosome=chromosome, fitness_score=float(fitness(chromosome)))

    def __lt__(self, other: "Individual") -> bool:
        return self.fitness_score > other.fitness_score


def sort_population(population: Iterable[Individual]) -> List[Individual]:
    """
    Return a new list sorted by descending fitness.

    The sort is stable: individuals with equal fitness keep their relative order.
    """
    return sorted(population, key=lambda individual: individual.fitness_score, reverse=True)


@dataclass(frozen=True)
class GAConfig:
    """
    Fixed parameters of one genetic algorithm run.

    Attributes:
        max_generations: Number of generations to evolve (>= 1)
        mutation_rate: Probability that a child is mutated, in [0, 1]
        elitism_fraction: Fraction of the population carried over unchanged, in [0, 1]
    """
    max_generations: int
    mutation_rate: float
    elitism_fraction: float

    def __post_init__(self):
        """Validate parameter ranges."""
        if isinstance(self.max_generations, bool) or not isinstance(self.max_generations, int):
            raise ConfigurationError(
                f"max_generations must be an integer, got: {self.max_generations!r}"
            )
        if self.max_generations < 1:
            raise ConfigurationError(
                f"max_generations must be at least 1, got: {self.max_generations}"
            )

        for name in ("mutation_rate", "elitism_fraction"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got: {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got: {value}")

    def elite_count(self, population_size: int) -> int:
        """Number of elites kept for a population of the given size."""
        return int(math.floor(self.elitism_fraction * population_size))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GAConfig":
        """
        Create a configuration from a dictionary (e.g., a YAML `ga` section).

        Accepts `elitism` as an alias of `elitism_fraction`.

        Raises:
            ConfigurationError: If a parameter is missing or out of range
        """
        elitism = data.get('elitism_fraction', data.get('elitism'))
        missing = [
            key for key, value in (
                ('max_generations', data.get('max_generations')),
                ('mutation_rate', data.get('mutation_rate')),
                ('elitism', elitism),
            )
            if value is None
        ]
        if missing:
            raise ConfigurationError(f"Missing GA parameters: {', '.join(missing)}")

        return cls(
            max_generations=data['max_generations'],
            mutation_rate=data['mutation_rate'],
            elitism_fraction=elitism,
        )


@dataclass(frozen=True)
class BestRecord:
    """Best individual seen so far and the generation it appeared in."""
    individual: Individual
    generation: int


@dataclass(frozen=True)
class GenerationStats:
    """
    Summary of one generation.

    Attributes:
        generation: Generation index (0 = initial population)
        best_fitness: Fitness of the generation's top individual
        mean_fitness: Mean fitness of the generation
        best_so_far_fitness: Fitness of the best individual seen up to this generation
    """
    generation: int
    best_fitness: float
    mean_fitness: float
    best_so_far_fitness: float

    @classmethod
    def from_population(cls, generation: int, population: List[Individual],
                        best: BestRecord) -> "GenerationStats":
        """Summarize a population sorted by descending fitness."""
        return cls(
            generation=generation,
            best_fitness=population[0].fitness_score,
            mean_fitness=math.fsum(ind.fitness_score for ind in population) / len(population),
            best_so_far_fitness=best.individual.fitness_score,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for CSV export."""
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "mean_fitness": self.mean_fitness,
            "best_so_far_fitness": self.best_so_far_fitness,
        }
