"""
Problem abstraction for local search and genetic algorithm drivers.

A problem knows how to build, perturb, score and display its own states.
It knows nothing about populations or selection.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np


class Problem(ABC):
    """
    Capability set every problem encoding must provide.

    States are treated as values: no method may modify the state it is given.
    """

    @property
    @abstractmethod
    def size(self) -> int:
        """Problem dimension (number of cities, number of queens, ...)."""

    @abstractmethod
    def generate_neighbor(self, state: Any, rng: np.random.Generator) -> Any:
        """
        Produce a new state one small perturbation away from `state`.

        Args:
            state: Current state (left unchanged)
            rng: Random number generator

        Returns:
            New neighboring state
        """

    @abstractmethod
    def cost(self, state: Any) -> int:
        """
        Evaluate a state.

        Args:
            state: State to evaluate

        Returns:
            Non-negative cost (lower is better)
        """

    @abstractmethod
    def initial_state(self, rng: Optional[np.random.Generator] = None) -> Any:
        """
        Provide a valid starting state.

        Args:
            rng: Random number generator (ignored by deterministic problems)

        Returns:
            Initial state
        """

    @abstractmethod
    def format_state(self, state: Any) -> str:
        """Human-readable representation of a state."""

    def render(self, state: Any) -> None:
        """Print the given state in a human-readable format."""
        print(self.format_state(state))
