"""Core type definitions for maze generation and exit search."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, NamedTuple, Optional

import numpy as np

# Generator difficulty identifiers
Difficulty = Literal["easy", "normal", "hard"]

# Solver algorithm identifiers
AlgorithmId = Literal["bfs", "dfs", "astar", "dijkstra"]

DIFFICULTIES = ("easy", "normal", "hard")
ALGORITHMS = ("bfs", "dfs", "astar", "dijkstra")

# Wall sides in the order they are stored on a cell
Side = Literal["top", "right", "bottom", "left"]


class InvalidMazeError(ValueError):
    """Raised when a maze is structurally unusable for search."""


class Position(NamedTuple):
    """Row/column position of a cell."""
    r: int
    c: int


@dataclass
class Walls:
    """Wall flags of a single cell. A cleared flag is an open side."""
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    def is_open(self, side: Side) -> bool:
        return not getattr(self, side)


@dataclass
class MazeCell:
    """A grid unit: four walls plus the generator's scratch visited flag."""
    walls: Walls = field(default_factory=Walls)
    visited: bool = False


@dataclass(eq=False)
class Maze:
    """
    The grid model handed to the solvers.

    ``grid`` is the binary form (0 = passable, 1 = blocked). ``cells`` holds
    the wall data; when it is None the solvers fall back to the binary form.
    Construction validates shape, start bounds and wall symmetry, and takes
    its own copy of ``cells`` so later edits to the caller's lists cannot
    break that check.
    """
    grid: np.ndarray
    start: Position
    cells: Optional[List[List[MazeCell]]] = None

    def __post_init__(self):
        self.grid = _as_binary_grid(self.grid)
        self.start = Position(*self.start)
        if self.cells is not None:
            self.cells = copy.deepcopy(self.cells)
        self.validate()
        self.grid.setflags(write=False)

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    @property
    def has_walls(self) -> bool:
        """Whether wall data is present (as opposed to the degraded binary form)."""
        return self.cells is not None

    def in_bounds(self, pos: Position) -> bool:
        """Check if a position lies inside the grid."""
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_border(self, pos: Position) -> bool:
        r, c = pos
        return r == 0 or c == 0 or r == self.rows - 1 or c == self.cols - 1

    def cell(self, pos: Position) -> MazeCell:
        if self.cells is None:
            raise InvalidMazeError("Maze has no wall data")
        return self.cells[pos[0]][pos[1]]

    def validate(self):
        """Fail fast on mazes the solvers cannot search."""
        if self.rows == 0 or self.cols == 0:
            raise InvalidMazeError(f"Maze dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.in_bounds(self.start):
            raise InvalidMazeError(
                f"Start position {tuple(self.start)} is out of bounds for {self.rows}x{self.cols} maze"
            )
        if self.cells is None:
            return

        if len(self.cells) != self.rows:
            raise InvalidMazeError(
                f"Wall data has {len(self.cells)} rows, binary grid has {self.rows}"
            )
        for r, row in enumerate(self.cells):
            if len(row) != self.cols:
                raise InvalidMazeError(
                    f"Wall row {r} has {len(row)} cells, expected {self.cols}"
                )

        # Every passage must be open from both sides
        for r in range(self.rows):
            for c in range(self.cols):
                walls = self.cells[r][c].walls
                if c + 1 < self.cols and walls.right != self.cells[r][c + 1].walls.left:
                    raise InvalidMazeError(
                        f"Asymmetric wall between ({r}, {c}) and ({r}, {c + 1})"
                    )
                if r + 1 < self.rows and walls.bottom != self.cells[r + 1][c].walls.top:
                    raise InvalidMazeError(
                        f"Asymmetric wall between ({r}, {c}) and ({r + 1}, {c})"
                    )


def _as_binary_grid(grid) -> np.ndarray:
    """Convert nested rows or an array into a 2D integer grid."""
    if isinstance(grid, np.ndarray):
        array = np.array(grid, dtype=np.int8)
    else:
        rows = [list(row) for row in grid]
        if not rows:
            raise InvalidMazeError("Maze dimensions must be positive, got 0 rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidMazeError(f"Maze rows are not rectangular (row widths {sorted(widths)})")
        array = np.array(rows, dtype=np.int8)

    if array.ndim != 2:
        raise InvalidMazeError(f"Maze grid must be two-dimensional, got {array.ndim} dimensions")
    return array


@dataclass
class StepRecord:
    """One step trace entry, recorded when a cell is expanded."""
    position: Position
    step: int
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": [self.position.r, self.position.c],
            "step": self.step,
            "data": {key: _json_number(value) for key, value in self.data.items()},
        }


@dataclass(eq=False)
class ScoreGrids:
    """A* g/h/f score matrices snapshotted when the search stopped."""
    g: np.ndarray
    h: np.ndarray
    f: np.ndarray

    def to_dict(self) -> Dict[str, Any]:
        return {
            "g": _json_matrix(self.g),
            "h": _json_matrix(self.h),
            "f": _json_matrix(self.f),
        }


@dataclass
class Solution:
    """Result of a successful exit search."""
    distance: int
    path: List[Position]
    visited_cells: List[Position]
    algorithm: str
    step_trace: List[StepRecord] = field(default_factory=list)
    scores: Optional[ScoreGrids] = None

    @property
    def cells_explored(self) -> int:
        return len(self.visited_cells)

    def exploration_ratio(self, total_cells: int) -> float:
        """Fraction of the maze expanded before the exit was found."""
        return self.cells_explored / total_cells if total_cells > 0 else 0.0

    def summary(self, total_cells: Optional[int] = None) -> Dict[str, Any]:
        """Short report of the run, as shown when a replay finishes."""
        report = {
            "algorithm": self.algorithm,
            "distance": self.distance,
            "path_length": len(self.path),
            "cells_explored": self.cells_explored,
        }
        if total_cells:
            report["exploration_percentage"] = round(self.exploration_ratio(total_cells) * 100)
        return report

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "algorithm": self.algorithm,
            "distance": self.distance,
            "path": [[p.r, p.c] for p in self.path],
            "visited_cells": [[p.r, p.c] for p in self.visited_cells],
            "step_trace": [record.to_dict() for record in self.step_trace],
        }
        if self.scores is not None:
            result["scores"] = self.scores.to_dict()
        return result


@dataclass
class MazeConfig:
    """Configuration for generating, solving and replaying a maze."""
    width: int = 21
    height: int = 21
    difficulty: Difficulty = "normal"
    algorithm: AlgorithmId = "bfs"
    seed: Optional[int] = None
    step_delay_ms: int = 25  # delay between revealed cells during replay
    final_delay_ms: int = 500  # pause before the path is shown

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Maze dimensions must be positive, got {self.width}x{self.height}")
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {self.difficulty}")
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")
        if self.step_delay_ms < 0 or self.final_delay_ms < 0:
            raise ValueError("Replay delays must not be negative")


def _json_number(value):
    if isinstance(value, (float, np.floating)):
        return None if np.isinf(value) else float(value)
    if isinstance(value, np.integer):
        return int(value)
    return value


def _json_matrix(matrix: np.ndarray) -> List[List[Optional[float]]]:
    return [[_json_number(value) for value in row] for row in matrix]
