"""
Genetic operators binding the driver to concrete problems.

Each operator set wraps one problem instance and supplies crossover,
mutation, fitness and initial-population generation. Mutation reuses the
problem's neighbor generation.
"""

from typing import List, Tuple

import numpy as np

from local_search.nqueens import NQueens
from local_search.tsp import TSP

from .crossover import ordered_crossover, two_point_crossover
from .data_models import Individual


Tour = Tuple[int, ...]


class TSPOperators:
    """Operators for TSP tours (permutation chromosomes)."""

    def __init__(self, problem: TSP):
        self.problem = problem

    def crossover(self, parent1: Individual[Tour], parent2: Individual[Tour],
                  rng: np.random.Generator) -> Individual[Tour]:
        """Ordered crossover: the child is always a valid tour."""
        chromosome = ordered_crossover(parent1.chromosome, parent2.chromosome, rng)
        return Individual.evaluate(chromosome, self.fitness)

    def mutate(self, individual: Individual[Tour], rng: np.random.Generator) -> Individual[Tour]:
        """Swap mutation via the problem's neighbor generation."""
        chromosome = self.problem.generate_neighbor(individual.chromosome, rng)
        return Individual.evaluate(chromosome, self.fitness)

    def fitness(self, chromosome: Tour) -> float:
        """
        Inverse tour length, so shorter tours are fitter.

        A zero-length tour is scored as length 1.
        """
        return 1.0 / max(self.problem.cost(chromosome), 1)

    def generate_initial_population(self, pop_size: int,
                                    rng: np.random.Generator) -> List[Individual[Tour]]:
        """
        Generate random tours.

        Args:
            pop_size: Number of individuals
            rng: Random number generator

        Returns:
            List of individuals, each a uniformly random permutation of the cities
        """
        population = []
        for _ in range(pop_size):
            chromosome = tuple(int(city) for city in rng.permutation(self.problem.size))
            population.append(Individual.evaluate(chromosome, self.fitness))
        return population


class NQueensOperators:
    """Operators for N-Queens placements (row-per-column arrays)."""

    def __init__(self, problem: NQueens):
        self.problem = problem

    def crossover(self, parent1: Individual[np.ndarray], parent2: Individual[np.ndarray],
                  rng: np.random.Generator) -> Individual[np.ndarray]:
        """Two-point positional crossover; duplicate rows are legal."""
        chromosome = two_point_crossover(parent1.chromosome, parent2.chromosome, rng)
        return Individual.evaluate(chromosome, self.fitness)

    def mutate(self, individual: Individual[np.ndarray],
               rng: np.random.Generator) -> Individual[np.ndarray]:
        """Move one queen to another row of its column."""
        chromosome = self.problem.generate_neighbor(individual.chromosome, rng)
        return Individual.evaluate(chromosome, self.fitness)

    def fitness(self, chromosome: np.ndarray) -> float:
        # Non-attacking pairs: all pairs minus attacking pairs
        return float(self.problem.max_pairs - self.problem.cost(chromosome))

    def generate_initial_population(self, pop_size: int,
                                    rng: np.random.Generator) -> List[Individual[np.ndarray]]:
        """
        Generate random placements.

        Args:
            pop_size: Number of individuals
            rng: Random number generator

        Returns:
            List of individuals with one uniformly random row per column
        """
        population = []
        for _ in range(pop_size):
            chromosome = self.problem.initial_state(rng)
            population.append(Individual.evaluate(chromosome, self.fitness))
        return population
