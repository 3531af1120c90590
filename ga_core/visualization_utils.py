"""
Visualization utilities for the genetic algorithm.

Plots fitness convergence over generations and N-Queens boards.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .data_models import GenerationStats


def plot_convergence(
    history: List[GenerationStats],
    save_path: Union[str, Path],
    title: str = "Fitness convergence",
    best_generation: Optional[int] = None,
    figsize: Tuple[int, int] = (10, 6)
) -> Path:
    """
    Plot best, mean and best-so-far fitness per generation.

    Args:
        history: GenerationStats records from GeneticAlgorithm.history
        save_path: Output image path
        title: Figure title
        best_generation: Optional generation to mark with a vertical line
        figsize: Figure size (width, height)

    Returns:
        Path to saved image
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    generations = [stats.generation for stats in history]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, [s.best_fitness for s in history], label="generation best", color="tab:blue")
    ax.plot(generations, [s.mean_fitness for s in history], label="generation mean", color="tab:gray", alpha=0.7)
    ax.plot(generations, [s.best_so_far_fitness for s in history], label="best so far",
            color="tab:red", linestyle="--")

    if best_generation is not None:
        ax.axvline(best_generation, color="tab:green", linestyle=":", label=f"best found (gen {best_generation})")

    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return save_path


def plot_board(
    state: Sequence[int],
    save_path: Union[str, Path],
    title: Optional[str] = None
) -> Path:
    """
    Draw an N-Queens placement as a checkerboard.

    Args:
        state: Row of the queen in each column
        save_path: Output image path
        title: Optional figure title

    Returns:
        Path to saved image
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    n = len(state)
    size = max(4, n * 0.6)
    fig, ax = plt.subplots(figsize=(size, size))

    for row in range(n):
        for col in range(n):
            shade = "#f0d9b5" if (row + col) % 2 == 0 else "#b58863"
            ax.add_patch(plt.Rectangle((col, row), 1, 1, color=shade))

    for col, row in enumerate(state):
        ax.text(col + 0.5, int(row) + 0.5, "Q", ha="center", va="center", fontweight="bold", fontsize=max(8, 240 // n))

    ax.set_xlim(0, n)
    ax.set_ylim(n, 0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title)

    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return save_path
