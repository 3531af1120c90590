"""
Generic genetic algorithm driver.

Implements fitness-proportional selection, reproduction, elitism and
generational replacement over an arbitrary chromosome type. Everything
problem-specific (crossover, mutation, fitness) is supplied by an operator
object implementing `GeneticOperators`.
"""

from typing import Any, Callable, Generic, List, Mapping, Optional, Protocol, Union

import numpy as np

from .data_models import (
    G,
    BestRecord,
    GAConfig,
    GenerationStats,
    Individual,
    sort_population,
)


class DegeneratePopulationError(ValueError):
    """Raised when fitness-proportional selection is undefined for a population."""
    pass


class GeneticOperators(Protocol[G]):
    """
    Problem-specific operators used by the driver.

    Implementations must not modify parent chromosomes: parents may take part
    in further crossovers. Higher fitness is always better.
    """

    def crossover(self, parent1: Individual[G], parent2: Individual[G],
                  rng: np.random.Generator) -> Individual[G]:
        ...

    def mutate(self, individual: Individual[G], rng: np.random.Generator) -> Individual[G]:
        ...

    def fitness(self, chromosome: G) -> float:
        ...


class CancellationSignal(Protocol):
    def is_set(self) -> bool:
        ...


class _RouletteWheel:
    """Cumulative fitness table for one population."""

    def __init__(self, population: List[Individual]):
        if not population:
            raise DegeneratePopulationError("Cannot select from an empty population")

        scores = np.fromiter(
            (individual.fitness_score for individual in population),
            dtype=float,
            count=len(population),
        )
        if not np.all(np.isfinite(scores)):
            raise DegeneratePopulationError("Population contains non-finite fitness scores")
        if np.any(scores < 0):
            raise DegeneratePopulationError(
                f"Fitness-proportional selection requires non-negative fitness, "
                f"got minimum {scores.min()}"
            )

        self.population = population
        self.cumulative = np.cumsum(scores)
        self.total = float(self.cumulative[-1])

    def spin(self, rng: np.random.Generator) -> Individual:
        """Draw one individual with probability proportional to its fitness."""
        value = rng.random() * self.total
        # First index whose running sum reaches or exceeds the drawn value
        index = int(np.searchsorted(self.cumulative, value, side='left'))
        return self.population[min(index, len(self.population) - 1)]


class GeneticAlgorithm(Generic[G]):
    """
    Generational genetic algorithm with roulette-wheel selection and elitism.

    The driver only ever compares fitness scores; it never looks inside a
    chromosome.

    Attributes:
        config: Run parameters
        operators: Problem-specific crossover, mutation and fitness
        rng: Random source passed into every stochastic operation
        best: All-time best individual of the last `evolve` call
        history: Per-generation statistics of the last `evolve` call
    """

    def __init__(
        self,
        config: Union[GAConfig, Mapping[str, Any]],
        operators: GeneticOperators[G],
        rng: Optional[Union[np.random.Generator, int]] = None,
        max_select_attempts: int = 100
    ):
        """
        Args:
            config: GAConfig or a mapping accepted by GAConfig.from_dict
            operators: Problem-specific operators
            rng: numpy Generator, integer seed, or None for fresh entropy
            max_select_attempts: Redraws allowed before selection falls back
                to the best-ranked non-excluded individual

        Raises:
            ConfigurationError: If the GA parameters are out of range
        """
        if not isinstance(config, GAConfig):
            config = GAConfig.from_dict(config)
        if max_select_attempts < 1:
            raise ValueError(f"max_select_attempts must be positive, got: {max_select_attempts}")

        self.config = config
        self.operators = operators
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.max_select_attempts = max_select_attempts

        self.best: Optional[BestRecord] = None
        self.history: List[GenerationStats] = []

    @property
    def best_generation(self) -> Optional[int]:
        """Generation in which the all-time best individual first appeared."""
        return self.best.generation if self.best is not None else None

    def select(self, population: List[Individual[G]],
               exclude: Optional[Individual[G]] = None) -> Individual[G]:
        """
        Select an individual by fitness-proportional (roulette wheel) selection.

        Args:
            population: Individuals to choose from
            exclude: Individual that must not be returned (None for no exclusion)

        Returns:
            Selected individual

        Raises:
            DegeneratePopulationError: If the population is empty or has a
                negative or non-finite fitness score
        """
        return self._select(_RouletteWheel(population), exclude)

    def _select(self, wheel: _RouletteWheel,
                exclude: Optional[Individual[G]]) -> Individual[G]:
        population = wheel.population

        if wheel.total <= 0:
            # All fitness scores are zero: every individual is equally likely
            candidates = [ind for ind in population if ind is not exclude] or population
            return candidates[int(self.rng.integers(0, len(candidates)))]

        for _ in range(self.max_select_attempts):
            candidate = wheel.spin(self.rng)
            if candidate is not exclude:
                return candidate

        # Redraws exhausted: take the best-ranked individual that is allowed
        for candidate in population:
            if candidate is not exclude:
                return candidate
        return exclude

    def produce_next_generation(self, population: List[Individual[G]]) -> List[Individual[G]]:
        """
        Produce exactly `len(population)` offspring.

        For each slot: select a parent, select a second parent distinct from
        the first, cross them over, then mutate the child with probability
        `mutation_rate`.

        Args:
            population: Current population

        Returns:
            New list of offspring (unsorted)
        """
        wheel = _RouletteWheel(population)
        mutation_rate = self.config.mutation_rate

        offspring = []
        for _ in range(len(population)):
            parent1 = self._select(wheel, None)
            parent2 = self._select(wheel, parent1)
            child = self.operators.crossover(parent1, parent2, self.rng)
            if self.rng.random() < mutation_rate:
                child = self.operators.mutate(child, self.rng)
            offspring.append(child)

        return offspring

    def apply_elitism(self, population: List[Individual[G]],
                      offspring: List[Individual[G]]) -> List[Individual[G]]:
        """
        Build the next population from elites and offspring.

        Args:
            population: Previous population, sorted by descending fitness
            offspring: Offspring, sorted by descending fitness

        Returns:
            Top elites of `population` plus the best offspring filling the
            remaining slots, sorted by descending fitness
        """
        size = len(population)
        elite_count = self.config.elite_count(size)
        return sort_population(population[:elite_count] + offspring[:size - elite_count])

    def evolve(
        self,
        initial_population: List[Individual[G]],
        cancel_event: Optional[CancellationSignal] = None,
        on_generation: Optional[Callable[[int, List[Individual[G]]], None]] = None
    ) -> Individual[G]:
        """
        Run the genetic algorithm for `max_generations` generations.

        Args:
            initial_population: Starting individuals (the list is not modified)
            cancel_event: Optional object with `is_set()`, checked once per
                generation; when set, the current best individual is returned
            on_generation: Optional callback receiving (generation, population)
                after each generation

        Returns:
            Top individual of the final population. The all-time best is kept
            in `self.best`.

        Raises:
            DegeneratePopulationError: If the population is empty or selection
                is undefined for it
        """
        population = sort_population(initial_population)
        if not population:
            raise DegeneratePopulationError("Cannot evolve an empty population")

        self.best = BestRecord(individual=population[0], generation=0)
        self.history = [GenerationStats.from_population(0, population, self.best)]

        for generation in range(1, self.config.max_generations + 1):
            if cancel_event is not None and cancel_event.is_set():
                break

            offspring = sort_population(self.produce_next_generation(population))
            population = self.apply_elitism(population, offspring)

            if population[0].fitness_score > self.best.individual.fitness_score:
                self.best = BestRecord(individual=population[0], generation=generation)

            self.history.append(GenerationStats.from_population(generation, population, self.best))

            if on_generation is not None:
                on_generation(generation, population)

        return population[0]
