"""
I/O utilities for the genetic algorithm.

Handles distance-matrix parsing, test-case loading and CSV result/history serialization.
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import numpy as np

from .data_models import GenerationStats


DEFAULT_COMMENT_LINES = 3
DEFAULT_FILE_PATTERN = "TSP_{size}.txt"

RESULT_FIELDS = [
    'case', 'size', 'cost', 'fitness', 'best_generation',
    'generations', 'population_size', 'seed', 'solution',
]


def load_distance_matrix(
    matrix_path: Union[str, Path],
    comment_lines: int = DEFAULT_COMMENT_LINES
) -> np.ndarray:
    """
    Load a TSP distance matrix from a plain-text file.

    File format:
        # three comment lines (any content)
        #
        #
        0 2 9
        1 0 6
        15 7 0

    Leading comment lines are skipped unconditionally, blank lines are
    ignored, and each remaining line is one whitespace-separated matrix row.

    Args:
        matrix_path: Path to matrix file
        comment_lines: Number of leading lines to skip

    Returns:
        Square integer matrix; entry [i, j] is the distance from city i to city j

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a row holds a non-integer token or the matrix is not square
    """
    matrix_path = Path(matrix_path)

    if not matrix_path.exists():
        raise FileNotFoundError(f"Distance matrix file not found: {matrix_path}")

    rows = []
    with open(matrix_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            if line_number <= comment_lines:
                continue

            tokens = line.split()
            if not tokens:
                continue

            try:
                rows.append([int(token) for token in tokens])
            except ValueError:
                raise ValueError(
                    f"Invalid distance value on line {line_number} of {matrix_path}: {line.strip()!r}"
                )

    if not rows:
        raise ValueError(f"No matrix rows found in {matrix_path}")

    size = len(rows)
    for i, row in enumerate(rows):
        if len(row) != size:
            raise ValueError(
                f"Distance matrix in {matrix_path} is not square: "
                f"row {i} has {len(row)} entries, expected {size}"
            )

    return np.array(rows, dtype=int)


def load_test_cases(
    folder: Union[str, Path],
    sizes: Sequence[int],
    file_pattern: str = DEFAULT_FILE_PATTERN,
    comment_lines: int = DEFAULT_COMMENT_LINES
) -> List[np.ndarray]:
    """
    Load one distance matrix per requested problem size.

    Args:
        folder: Directory holding the test-case files
        sizes: City counts to load, in order
        file_pattern: Filename pattern with a `{size}` placeholder
        comment_lines: Number of leading comment lines per file

    Returns:
        List of distance matrices, in the order of `sizes`

    Raises:
        FileNotFoundError: If the folder or a test-case file doesn't exist
    """
    folder = Path(folder)

    if not folder.is_dir():
        raise FileNotFoundError(f"Test case folder not found: {folder}")

    return [
        load_distance_matrix(folder / file_pattern.format(size=size), comment_lines)
        for size in sizes
    ]


def save_results(
    results: List[Dict[str, Any]],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-case results to a CSV file.

    Args:
        results: One dictionary per solved case (keys from RESULT_FIELDS)
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Results file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS, extrasaction='ignore')
        writer.writeheader()
        for row in results:
            writer.writerow(row)

    return output_path


def save_history(
    history: List[GenerationStats],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation statistics to a CSV file.

    Args:
        history: GenerationStats records in generation order
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"History file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        fieldnames = ['generation', 'best_fitness', 'mean_fitness', 'best_so_far_fitness']
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for stats in history:
            writer.writerow(stats.to_dict())

    return output_path


def format_solution(chromosome: Sequence[int]) -> str:
    """Space-separated gene values, as stored in the results file."""
    return " ".join(str(int(gene)) for gene in chromosome)
