"""Heuristic functions for exit search."""

from typing import Callable

import numpy as np

from .types import Position

# Heuristics take (position, rows, cols) since the goal is any border exit
Heuristic = Callable[[Position, int, int], int]


def border_distance(pos: Position, rows: int, cols: int) -> int:
    """
    Distance to the nearest grid border.
    Admissible and consistent: every exit lies on the border and each
    orthogonal move changes this value by at most one.
    """
    r, c = pos
    return min(r, c, rows - 1 - r, cols - 1 - c)


def zero_heuristic(pos: Position, rows: int, cols: int) -> int:
    """No estimate. Turns best-first search into Dijkstra."""
    return 0


def heuristic_grid(rows: int, cols: int, heuristic: Heuristic = border_distance) -> np.ndarray:
    """Evaluate a heuristic for every cell of a rows x cols grid."""
    scores = np.empty((rows, cols), dtype=float)
    for r in range(rows):
        for c in range(cols):
            scores[r, c] = heuristic(Position(r, c), rows, cols)
    return scores
