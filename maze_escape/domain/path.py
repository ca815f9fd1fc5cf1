"""Predecessor bookkeeping and path reconstruction for exit solvers."""

from typing import List, Sequence

import numpy as np

from .types import Maze, Position
from .neighbors import can_exit, can_move_between, is_adjacent

# Predecessor markers stored in place of a linear index
NO_PARENT = -1  # the search origin
UNSEEN = -2  # not discovered yet


def encode_index(pos: Position, cols: int) -> int:
    """Encode a position as its row-major linear index."""
    return pos[0] * cols + pos[1]


def decode_index(index: int, cols: int) -> Position:
    """Decode a row-major linear index back to a position."""
    return Position(index // cols, index % cols)


def new_parent_grid(maze: Maze) -> np.ndarray:
    """Create a predecessor grid with every cell marked as unseen."""
    return np.full((maze.rows, maze.cols), UNSEEN, dtype=np.int64)


def reconstruct_path(parents: np.ndarray, end: Position) -> List[Position]:
    """
    Walk predecessor links back from ``end`` to the search origin.
    Returns the path from origin to ``end``.
    """
    cols = parents.shape[1]
    path = []
    current = Position(*end)

    while True:
        path.append(current)
        parent = int(parents[current.r, current.c])
        if parent < 0:
            break
        current = decode_index(parent, cols)

    path.reverse()
    return path


def is_valid_path(maze: Maze, path: Sequence[Position]) -> bool:
    """
    Check that a path starts at the maze start, only takes permitted
    single steps and ends on a cell the maze can be left from.
    """
    if not path or tuple(path[0]) != tuple(maze.start):
        return False

    for i in range(1, len(path)):
        from_pos, to_pos = path[i - 1], path[i]
        if not maze.in_bounds(to_pos) or not is_adjacent(from_pos, to_pos):
            return False
        if not can_move_between(maze, from_pos, to_pos):
            return False

    return can_exit(maze, path[-1])
