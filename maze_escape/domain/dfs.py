"""Depth-first exit search."""

import logging
from typing import List, Optional

import numpy as np

from .types import Maze, Position, Solution, StepRecord
from .neighbors import can_exit, get_neighbors, is_adjacent
from .path import NO_PARENT, encode_index, new_parent_grid, reconstruct_path

logger = logging.getLogger(__name__)


class _Frame:
    """A stack entry: a cell and how far its neighbor list has been tried."""
    __slots__ = ("pos", "neighbors", "next_index")

    def __init__(self, pos: Position, neighbors: List[Position]):
        self.pos = pos
        self.neighbors = neighbors
        self.next_index = 0


def solve_dfs(maze: Maze) -> Optional[Solution]:
    """
    Find an exit by descending into the first open neighbor (up, down,
    left, right) before any sibling.

    Uses an explicit stack so large mazes do not hit the recursion limit.
    The path found is not necessarily the shortest one.
    """
    visited = np.zeros((maze.rows, maze.cols), dtype=bool)
    parents = new_parent_grid(maze)
    parents[maze.start.r, maze.start.c] = NO_PARENT

    stack: List[_Frame] = []
    visited_cells: List[Position] = []
    trace: List[StepRecord] = []

    def visit(pos: Position) -> bool:
        """Expand a cell; returns True if it is an exit."""
        previous = visited_cells[-1] if visited_cells else None
        visited[pos.r, pos.c] = True
        visited_cells.append(pos)

        neighbors = get_neighbors(maze, pos)
        stack.append(_Frame(pos, neighbors))
        unvisited = [n for n in neighbors if not visited[n.r, n.c]]

        trace.append(StepRecord(pos, len(trace), {
            "stack_depth": len(stack) - 1,
            "dead_end": not unvisited,
            "backtracking": previous is not None and not is_adjacent(previous, pos),
        }))
        return can_exit(maze, pos)

    exit_pos = maze.start if visit(maze.start) else None

    while stack and exit_pos is None:
        frame = stack[-1]
        nxt = None
        while frame.next_index < len(frame.neighbors):
            candidate = frame.neighbors[frame.next_index]
            frame.next_index += 1
            if not visited[candidate.r, candidate.c]:
                nxt = candidate
                break

        if nxt is None:
            stack.pop()
            continue

        parents[nxt.r, nxt.c] = encode_index(frame.pos, maze.cols)
        if visit(nxt):
            exit_pos = nxt

    if exit_pos is None:
        logger.debug("DFS exhausted %d reachable cells without finding an exit", len(visited_cells))
        return None

    path = reconstruct_path(parents, exit_pos)
    logger.debug("DFS reached exit %s in %d steps after expanding %d cells",
                 tuple(exit_pos), len(path) - 1, len(visited_cells))
    return Solution(
        distance=len(path) - 1,
        path=path,
        visited_cells=visited_cells,
        algorithm="DFS",
        step_trace=trace,
    )
