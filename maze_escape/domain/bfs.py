"""Breadth-first exit search."""

import logging
from collections import deque
from typing import Optional

import numpy as np

from .types import Maze, Solution, StepRecord
from .neighbors import can_exit, get_neighbors
from .path import NO_PARENT, UNSEEN, encode_index, new_parent_grid, reconstruct_path

logger = logging.getLogger(__name__)


def solve_bfs(maze: Maze) -> Optional[Solution]:
    """
    Find the nearest exit with a FIFO queue.

    The returned distance is the minimum number of steps from the start to
    any cell the maze can be left from. Returns None if no such cell is
    reachable.
    """
    start = maze.start
    parents = new_parent_grid(maze)
    levels = np.zeros((maze.rows, maze.cols), dtype=np.int64)
    parents[start.r, start.c] = NO_PARENT

    queue = deque([start])
    visited_cells = []
    trace = []

    while queue:
        current = queue.popleft()
        visited_cells.append(current)
        level = int(levels[current.r, current.c])

        if can_exit(maze, current):
            trace.append(StepRecord(current, len(trace), {
                "queue_size": len(queue),
                "level": level,
                "neighbors_added": 0,
            }))
            path = reconstruct_path(parents, current)
            logger.debug("BFS reached exit %s in %d steps after expanding %d cells",
                         tuple(current), len(path) - 1, len(visited_cells))
            return Solution(
                distance=len(path) - 1,
                path=path,
                visited_cells=visited_cells,
                algorithm="BFS",
                step_trace=trace,
            )

        neighbors_added = 0
        for nxt in get_neighbors(maze, current):
            if parents[nxt.r, nxt.c] != UNSEEN:
                continue
            parents[nxt.r, nxt.c] = encode_index(current, maze.cols)
            levels[nxt.r, nxt.c] = level + 1
            queue.append(nxt)
            neighbors_added += 1

        trace.append(StepRecord(current, len(trace), {
            "queue_size": len(queue),
            "level": level,
            "neighbors_added": neighbors_added,
        }))

    logger.debug("BFS exhausted %d reachable cells without finding an exit", len(visited_cells))
    return None
