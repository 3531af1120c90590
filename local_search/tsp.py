"""
Traveling Salesperson Problem.

A state is a tour: a tuple holding every city id exactly once, in visiting
order. The return leg from the last city to the first is implicit.
"""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .problem import Problem


Tour = Tuple[int, ...]


class TSP(Problem):
    """
    TSP over an externally supplied distance matrix.

    Row `i`, column `j` of the matrix is the distance from city `i` to city
    `j`. The matrix may be asymmetric.
    """

    def __init__(self, distance_matrix: Union[np.ndarray, Sequence[Sequence[int]]]):
        matrix = np.asarray(distance_matrix)

        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(
                f"Distance matrix must be square, got shape {matrix.shape}"
            )
        if matrix.shape[0] == 0:
            raise ValueError("Distance matrix must contain at least one city")
        if not np.issubdtype(matrix.dtype, np.integer):
            raise ValueError(f"Distance matrix must hold integers, got {matrix.dtype}")
        if matrix.min() < 0:
            raise ValueError(f"Distances must be non-negative, got minimum {matrix.min()}")

        self.distance_matrix = matrix
        self._num_cities = matrix.shape[0]

    @property
    def size(self) -> int:
        return self._num_cities

    def generate_neighbor(self, state: Tour, rng: np.random.Generator) -> Tour:
        """
        Swap two distinct, uniformly chosen positions of the tour.

        Args:
            state: Current tour
            rng: Random number generator

        Returns:
            New tour with two cities exchanged
        """
        n = len(state)
        if n < 2:
            return tuple(state)

        pos1 = int(rng.integers(0, n))
        # Offset in [1, n) picks uniformly among the other positions
        pos2 = (pos1 + int(rng.integers(1, n))) % n

        neighbor = list(state)
        neighbor[pos1], neighbor[pos2] = neighbor[pos2], neighbor[pos1]
        return tuple(neighbor)

    def cost(self, state: Tour) -> int:
        """
        Total travel distance, including the return to the starting city.

        Args:
            state: Tour to evaluate

        Returns:
            Tour length
        """
        tour = np.asarray(state, dtype=int)
        return int(self.distance_matrix[tour, np.roll(tour, -1)].sum())

    def initial_state(self, rng: Optional[np.random.Generator] = None) -> Tour:
        """Identity tour (0, 1, ..., N-1)."""
        return tuple(range(self._num_cities))

    def format_state(self, state: Tour) -> str:
        return str([int(city) for city in state])

    def is_valid_tour(self, state: Sequence[int]) -> bool:
        """Return True iff `state` visits every city exactly once."""
        return len(state) == self._num_cities and set(state) == set(range(self._num_cities))
