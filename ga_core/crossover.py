"""
Crossover operators for the genetic algorithm.

Implements ordered crossover for permutation chromosomes and two-point
positional crossover for fixed-length arrays. Both keep one contiguous
segment of the first parent and take the rest from the second parent.
Parents are never modified.
"""

from typing import Optional, Sequence, Tuple

import numpy as np


def random_cut_points(length: int, rng: np.random.Generator) -> Tuple[int, int]:
    """
    Draw two cut points uniformly in [0, length), ordered so start <= end.

    Args:
        length: Chromosome length
        rng: Random number generator

    Returns:
        Tuple of (start, end), both inclusive
    """
    start = int(rng.integers(0, length))
    end = int(rng.integers(0, length))
    if start > end:
        start, end = end, start
    return start, end


def ordered_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    rng: np.random.Generator,
    cut_points: Optional[Tuple[int, int]] = None
) -> Tuple[int, ...]:
    """
    Combine two permutations using ordered crossover.

    The segment [start, end] of parent A is copied into the child at the
    same positions. The remaining positions are filled, left to right, with
    the genes of parent B that are not in the segment, in parent B's order.
    The child is a valid permutation whenever both parents are.

    Args:
        parent_a: First parent (segment donor)
        parent_b: Second parent (order donor)
        rng: Random number generator
        cut_points: Optional fixed (start, end); drawn from `rng` when omitted

    Returns:
        Child permutation as a tuple

    Example:
        parent_a = (0, 1, 2, 3, 4), parent_b = (4, 3, 2, 1, 0), cut (1, 2)
        segment = (1, 2), remainder from B = (4, 3, 0)
        child = (4, 1, 2, 3, 0)
    """
    start, end = cut_points if cut_points is not None else random_cut_points(len(parent_a), rng)

    segment = [int(gene) for gene in parent_a[start:end + 1]]
    kept = set(segment)
    remainder = [int(gene) for gene in parent_b if int(gene) not in kept]

    # The remainder has exactly `start` genes before the segment's slot
    return tuple(remainder[:start] + segment + remainder[start:])


def two_point_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    rng: np.random.Generator,
    cut_points: Optional[Tuple[int, int]] = None
) -> np.ndarray:
    """
    Combine two fixed-length arrays position by position.

    The child takes parent A's values inside [start, end] and parent B's
    values everywhere else. Duplicate values are allowed.

    Args:
        parent_a: First parent (segment donor)
        parent_b: Second parent (donor outside the segment)
        rng: Random number generator
        cut_points: Optional fixed (start, end); drawn from `rng` when omitted

    Returns:
        Child as a new read-only integer array
    """
    if len(parent_a) != len(parent_b):
        raise ValueError(
            f"Parents must have equal length, got {len(parent_a)} and {len(parent_b)}"
        )

    start, end = cut_points if cut_points is not None else random_cut_points(len(parent_a), rng)

    child = np.array(parent_b, dtype=int)
    child[start:end + 1] = np.asarray(parent_a, dtype=int)[start:end + 1]
    child.setflags(write=False)
    return child
