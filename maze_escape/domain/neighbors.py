"""Neighbor generation and movement rules shared by all exit solvers."""

from typing import Dict, List, Tuple

from .types import Maze, Position, Side

# 4-directional moves in exploration order: up, down, left, right
DIRECTIONS: List[Tuple[Tuple[int, int], Side]] = [
    ((-1, 0), "top"),
    ((1, 0), "bottom"),
    ((0, -1), "left"),
    ((0, 1), "right"),
]

OPPOSITE_SIDE: Dict[Side, Side] = {
    "top": "bottom",
    "bottom": "top",
    "left": "right",
    "right": "left",
}


def side_towards(from_pos: Position, to_pos: Position) -> Side:
    """
    Get the wall side of ``from_pos`` that faces ``to_pos``.

    Raises:
        ValueError: If the positions are not one orthogonal step apart
    """
    delta = (to_pos[0] - from_pos[0], to_pos[1] - from_pos[1])
    for direction, side in DIRECTIONS:
        if direction == delta:
            return side
    raise ValueError(f"Invalid movement from {tuple(from_pos)} to {tuple(to_pos)}")


def can_move_between(maze: Maze, from_pos: Position, to_pos: Position) -> bool:
    """
    Check if a single orthogonal step is permitted.

    With wall data the wall of ``from_pos`` facing ``to_pos`` must be open.
    Without it only the destination's binary value matters. Steps that
    start or end off the grid are never permitted.
    """
    if not maze.in_bounds(from_pos) or not maze.in_bounds(to_pos):
        return False
    if maze.has_walls:
        try:
            side = side_towards(from_pos, to_pos)
        except ValueError:
            return False
        return maze.cell(from_pos).walls.is_open(side)
    return int(maze.grid[to_pos[0], to_pos[1]]) == 0


def can_exit(maze: Maze, pos: Position) -> bool:
    """Check if the maze can be left from this cell through its border."""
    r, c = pos
    if not maze.in_bounds(pos) or not maze.is_border(pos):
        return False

    if not maze.has_walls:
        return int(maze.grid[r, c]) == 0

    walls = maze.cell(pos).walls
    return ((r == 0 and not walls.top) or
            (r == maze.rows - 1 and not walls.bottom) or
            (c == 0 and not walls.left) or
            (c == maze.cols - 1 and not walls.right))


def get_neighbors(maze: Maze, pos: Position) -> List[Position]:
    """Get in-bounds neighbors reachable in one step, in exploration order."""
    r, c = pos
    neighbors = []
    for (dr, dc), _ in DIRECTIONS:
        nxt = Position(r + dr, c + dc)
        if not maze.in_bounds(nxt):
            continue
        if not can_move_between(maze, pos, nxt):
            continue
        neighbors.append(nxt)
    return neighbors


def find_exits(maze: Maze) -> List[Position]:
    """List every border cell that satisfies the exit predicate, row-major."""
    return [
        Position(r, c)
        for r in range(maze.rows)
        for c in range(maze.cols)
        if maze.is_border((r, c)) and can_exit(maze, Position(r, c))
    ]


def is_adjacent(a: Position, b: Position) -> bool:
    """Check if two positions are one orthogonal step apart."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
