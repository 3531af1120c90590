"""
Local Search Problems

Problem encodings shared by local search and genetic algorithm drivers.
"""

__version__ = "1.0.0"

from .problem import Problem
from .tsp import TSP
from .nqueens import NQueens

__all__ = [
    'Problem',
    'TSP',
    'NQueens',
]
