"""Maze factory for generating and assembling wall mazes."""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..domain.types import DIFFICULTIES, Difficulty, Maze, MazeCell, Position, Side
from ..domain.neighbors import DIRECTIONS, OPPOSITE_SIDE, side_towards
from .rng import SeededRNG, default_rng

logger = logging.getLogger(__name__)

# Probability of taking the difficulty-biased neighbor subset while carving
EASY_EDGE_BIAS = 0.7
HARD_CENTER_BIAS = 0.3


def create_closed_cells(rows: int, cols: int) -> List[List[MazeCell]]:
    """
    Create a rows x cols matrix of cells with every wall present.

    Raises:
        ValueError: If rows or cols <= 0
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Maze dimensions must be positive, got {cols}x{rows}")
    return [[MazeCell() for _ in range(cols)] for _ in range(rows)]


def create_open_cells(rows: int, cols: int) -> List[List[MazeCell]]:
    """Create a room with every interior wall removed and the outer boundary intact."""
    cells = create_closed_cells(rows, cols)
    for r in range(rows):
        for c in range(cols):
            if c + 1 < cols:
                carve_passage(cells, Position(r, c), Position(r, c + 1))
            if r + 1 < rows:
                carve_passage(cells, Position(r, c), Position(r + 1, c))
    return cells


def carve_passage(cells: List[List[MazeCell]], a: Position, b: Position) -> None:
    """
    Remove the wall pair between two adjacent cells.

    Raises:
        ValueError: If the cells are not one orthogonal step apart
    """
    side = side_towards(a, b)
    setattr(cells[a[0]][a[1]].walls, side, False)
    setattr(cells[b[0]][b[1]].walls, OPPOSITE_SIDE[side], False)


def open_border(cells: List[List[MazeCell]], pos: Position, side: Side) -> None:
    """
    Open the outward-facing wall of a border cell.

    Raises:
        ValueError: If that side of the cell does not face outside the grid
    """
    rows, cols = len(cells), len(cells[0])
    r, c = pos
    faces_outside = {
        "top": r == 0,
        "bottom": r == rows - 1,
        "left": c == 0,
        "right": c == cols - 1,
    }
    if not faces_outside[side]:
        raise ValueError(f"The {side} wall of {tuple(pos)} does not face outside the maze")
    setattr(cells[r][c].walls, side, False)


def maze_from_cells(cells: List[List[MazeCell]], start: Position) -> Maze:
    """Wrap wall data in a validated maze; every cell counts as passable."""
    rows = len(cells)
    cols = len(cells[0]) if rows else 0
    return Maze(grid=np.zeros((rows, cols), dtype=np.int8), start=Position(*start), cells=cells)


def maze_from_binary(grid: Sequence[Sequence[int]], start: Position) -> Maze:
    """Build a maze without wall data from a binary grid (0 = passable, 1 = blocked)."""
    return Maze(grid=grid, start=Position(*start))


def generate_maze(width: int, height: int, difficulty: Difficulty = "normal",
                  rng: Optional[SeededRNG] = None) -> Maze:
    """
    Generate a maze using randomized depth-first carving (recursive backtracking).

    Args:
        width: Number of columns
        height: Number of rows
        difficulty: "easy", "normal" or "hard"; biases carving and start placement
        rng: Random number generator to use (uses default if None)

    Returns:
        Maze with wall data, a single border exit and a reachable start

    Raises:
        ValueError: If the dimensions are not positive or the difficulty is unknown
    """
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {difficulty}")
    if rng is None:
        rng = default_rng

    cells = create_closed_cells(height, width)

    if difficulty == "easy":
        # Corner seed gives more direct paths
        seed_cell = Position(min(1, height - 1), min(1, width - 1))
    else:
        seed_cell = Position(height // 2, width // 2)

    cells[seed_cell.r][seed_cell.c].visited = True
    stack = [seed_cell]

    while stack:
        current = stack[-1]
        neighbors = []
        for (dr, dc), _ in DIRECTIONS:
            nxt = Position(current.r + dr, current.c + dc)
            if 0 <= nxt.r < height and 0 <= nxt.c < width and not cells[nxt.r][nxt.c].visited:
                neighbors.append(nxt)

        if not neighbors:
            stack.pop()
            continue

        nxt = _choose_neighbor(neighbors, width, height, difficulty, rng)
        carve_passage(cells, current, nxt)
        cells[nxt.r][nxt.c].visited = True
        stack.append(nxt)

    # Single exit through the top wall next to the corner
    open_border(cells, Position(0, min(1, width - 1)), "top")

    grid = np.array(
        [[0 if cell.visited else 1 for cell in row] for row in cells],
        dtype=np.int8,
    )
    start = _choose_start(cells, width, height, difficulty, rng)

    logger.debug("Generated %dx%d %s maze, start at %s", width, height, difficulty, tuple(start))
    return Maze(grid=grid, start=start, cells=cells)


def _choose_neighbor(neighbors: List[Position], width: int, height: int,
                     difficulty: Difficulty, rng: SeededRNG) -> Position:
    """Pick the next cell to carve into, biased by difficulty."""
    if difficulty == "easy":
        # Prefer the outer third of either axis
        edge_neighbors = [
            n for n in neighbors
            if n.r < height / 3 or n.r > 2 * height / 3 or
            n.c < width / 3 or n.c > 2 * width / 3
        ]
        if edge_neighbors and rng.random() < EASY_EDGE_BIAS:
            return rng.choice(edge_neighbors)
    elif difficulty == "hard":
        # Sometimes prefer the inner half of both axes for longer routes
        if rng.random() < HARD_CENTER_BIAS:
            center_neighbors = [
                n for n in neighbors
                if height / 4 < n.r < 3 * height / 4 and
                width / 4 < n.c < 3 * width / 4
            ]
            if center_neighbors:
                return rng.choice(center_neighbors)

    return rng.choice(neighbors)


def _choose_start(cells: List[List[MazeCell]], width: int, height: int,
                  difficulty: Difficulty, rng: SeededRNG) -> Position:
    """Pick a start among carved cells; easy starts near the exit, hard far from it."""
    candidates = [
        Position(r, c)
        for r in range(height)
        for c in range(width)
        if cells[r][c].visited
    ]

    if difficulty == "easy":
        top_half = [p for p in candidates if p.r < height / 2]
        if top_half:
            return rng.choice(top_half)
    elif difficulty == "hard":
        bottom_half = [p for p in candidates if p.r >= height / 2]
        if bottom_half:
            return rng.choice(bottom_half)

    return rng.choice(candidates)
