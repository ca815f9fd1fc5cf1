"""Dijkstra exit search over unit-cost steps."""

import logging
from typing import Optional

import numpy as np

from .types import Maze, Solution, StepRecord
from .neighbors import can_exit, get_neighbors
from .path import NO_PARENT, encode_index, new_parent_grid, reconstruct_path
from .priority_queue import LinearPriorityQueue

logger = logging.getLogger(__name__)


def solve_dijkstra(maze: Maze) -> Optional[Solution]:
    """
    Find the nearest exit by settling cells in order of distance.
    Distances always agree with breadth-first search on these unit-cost grids.
    """
    start = maze.start
    distance = np.full((maze.rows, maze.cols), np.inf)
    settled = np.zeros((maze.rows, maze.cols), dtype=bool)
    parents = new_parent_grid(maze)

    distance[start.r, start.c] = 0
    parents[start.r, start.c] = NO_PARENT

    frontier = LinearPriorityQueue()
    frontier.put(start)
    visited_cells = []
    trace = []

    while not frontier.is_empty():
        current = frontier.get(distance)
        settled[current.r, current.c] = True
        visited_cells.append(current)
        current_distance = distance[current.r, current.c]

        if can_exit(maze, current):
            trace.append(StepRecord(current, len(trace), {
                "distance": int(current_distance),
                "relaxation_count": 0,
                "frontier_size": frontier.size(),
            }))
            path = reconstruct_path(parents, current)
            logger.debug("Dijkstra reached exit %s in %d steps after settling %d cells",
                         tuple(current), len(path) - 1, len(visited_cells))
            return Solution(
                distance=len(path) - 1,
                path=path,
                visited_cells=visited_cells,
                algorithm="Dijkstra",
                step_trace=trace,
            )

        relaxation_count = 0
        for neighbor in get_neighbors(maze, current):
            if settled[neighbor.r, neighbor.c]:
                continue

            new_distance = current_distance + 1
            if new_distance < distance[neighbor.r, neighbor.c]:
                distance[neighbor.r, neighbor.c] = new_distance
                parents[neighbor.r, neighbor.c] = encode_index(current, maze.cols)
                relaxation_count += 1
                frontier.put(neighbor)

        trace.append(StepRecord(current, len(trace), {
            "distance": int(current_distance),
            "relaxation_count": relaxation_count,
            "frontier_size": frontier.size(),
        }))

    logger.debug("Dijkstra exhausted %d reachable cells without finding an exit", len(visited_cells))
    return None
