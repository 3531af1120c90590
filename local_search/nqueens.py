"""
N-Queens problem.

A state is an integer array of length N: index = column, value = row of the
queen in that column. One queen per column holds by construction, so only
row and diagonal conflicts can occur.
"""

from typing import Optional, Sequence

import numpy as np

from .problem import Problem


def freeze(rows: Sequence[int]) -> np.ndarray:
    """Copy `rows` into a read-only integer array."""
    state = np.array(rows, dtype=int)
    state.setflags(write=False)
    return state


class NQueens(Problem):
    """N-Queens with conflict count as cost."""

    def __init__(self, n: int):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise ValueError(f"Number of queens must be a positive integer, got: {n}")
        self.n = int(n)

        # Column pairs (i, j) with i < j, reused by every cost evaluation
        self._cols_i, self._cols_j = np.triu_indices(self.n, k=1)

    @property
    def size(self) -> int:
        return self.n

    @property
    def max_pairs(self) -> int:
        """Number of queen pairs, N choose 2."""
        return self.n * (self.n - 1) // 2

    def generate_neighbor(self, state: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """
        Move the queen of one random column to a different row.

        Args:
            state: Current placement
            rng: Random number generator

        Returns:
            New placement differing in exactly one column (N > 1)
        """
        neighbor = np.array(state, dtype=int)
        if self.n > 1:
            column = int(rng.integers(0, self.n))
            # Offset in [1, n) picks uniformly among the other rows
            neighbor[column] = (neighbor[column] + int(rng.integers(1, self.n))) % self.n
        neighbor.setflags(write=False)
        return neighbor

    def cost(self, state: np.ndarray) -> int:
        """
        Number of attacking pairs.

        A pair sharing a row counts once, a pair sharing a diagonal counts
        once. The two cannot both hold for the same pair.

        Args:
            state: Placement to evaluate

        Returns:
            Conflict count
        """
        rows = np.asarray(state, dtype=int)
        row_i = rows[self._cols_i]
        row_j = rows[self._cols_j]

        same_row = row_i == row_j
        same_diagonal = np.abs(row_i - row_j) == (self._cols_j - self._cols_i)
        return int(np.count_nonzero(same_row) + np.count_nonzero(same_diagonal))

    def initial_state(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Place each queen in a uniformly random row of its column."""
        if rng is None:
            rng = np.random.default_rng()
        return freeze(rng.integers(0, self.n, size=self.n))

    def format_state(self, state: np.ndarray) -> str:
        lines = []
        for row in range(self.n):
            lines.append("".join(" Q " if state[col] == row else " . " for col in range(self.n)))
        return "\n".join(lines)
