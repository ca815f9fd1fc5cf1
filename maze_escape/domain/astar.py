"""A* exit search guided by the distance to the nearest border."""

import logging
from typing import Optional

import numpy as np

from .types import Maze, ScoreGrids, Solution, StepRecord
from .heuristics import Heuristic, border_distance, heuristic_grid
from .neighbors import can_exit, get_neighbors
from .path import NO_PARENT, encode_index, new_parent_grid, reconstruct_path
from .priority_queue import LinearPriorityQueue

logger = logging.getLogger(__name__)


def solve_astar(maze: Maze, heuristic: Heuristic = border_distance) -> Optional[Solution]:
    """
    Find the nearest exit with A*.

    Every step costs 1. The open set is scanned linearly for the lowest
    f-score with ties going to the earliest discovered cell, which keeps the
    exploration order (and so the step trace) deterministic.

    Args:
        maze: Maze to search
        heuristic: Admissible estimate of the remaining steps to an exit

    Returns:
        Solution carrying the g/h/f score grids at termination, or None if
        no exit is reachable
    """
    rows, cols = maze.rows, maze.cols
    start = maze.start

    g_score = np.full((rows, cols), np.inf)
    f_score = np.full((rows, cols), np.inf)
    closed = np.zeros((rows, cols), dtype=bool)
    parents = new_parent_grid(maze)

    g_score[start.r, start.c] = 0
    f_score[start.r, start.c] = heuristic(start, rows, cols)
    parents[start.r, start.c] = NO_PARENT

    open_set = LinearPriorityQueue()
    open_set.put(start)
    visited_cells = []
    trace = []

    while not open_set.is_empty():
        current = open_set.get(f_score)
        closed[current.r, current.c] = True
        visited_cells.append(current)

        current_g = g_score[current.r, current.c]
        trace.append(StepRecord(current, len(trace), {
            "g": int(current_g),
            "h": heuristic(current, rows, cols),
            "f": int(f_score[current.r, current.c]),
            "open_set_size": open_set.size(),
        }))

        if can_exit(maze, current):
            path = reconstruct_path(parents, current)
            logger.debug("A* reached exit %s in %d steps after expanding %d cells",
                         tuple(current), len(path) - 1, len(visited_cells))
            return Solution(
                distance=len(path) - 1,
                path=path,
                visited_cells=visited_cells,
                algorithm="A*",
                step_trace=trace,
                scores=ScoreGrids(
                    g=g_score.copy(),
                    h=heuristic_grid(rows, cols, heuristic),
                    f=f_score.copy(),
                ),
            )

        for neighbor in get_neighbors(maze, current):
            if closed[neighbor.r, neighbor.c]:
                continue

            tentative_g = current_g + 1
            if tentative_g < g_score[neighbor.r, neighbor.c]:
                parents[neighbor.r, neighbor.c] = encode_index(current, cols)
                g_score[neighbor.r, neighbor.c] = tentative_g
                f_score[neighbor.r, neighbor.c] = tentative_g + heuristic(neighbor, rows, cols)
                open_set.put(neighbor)

    logger.debug("A* exhausted %d reachable cells without finding an exit", len(visited_cells))
    return None
