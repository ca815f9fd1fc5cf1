import json
import unittest

import numpy as np

from maze_escape.domain.types import (
    InvalidMazeError, Maze, MazeConfig, Position, ScoreGrids, Solution, StepRecord,
)
from maze_escape.utils.maze_factory import create_closed_cells, create_open_cells, maze_from_cells


class MazeValidationTests(unittest.TestCase):
    def test_accepts_nested_lists(self) -> None:
        maze = Maze(grid=[[0, 1], [0, 0]], start=(1, 0))
        self.assertEqual((maze.rows, maze.cols), (2, 2))
        self.assertEqual(maze.start, Position(1, 0))
        self.assertFalse(maze.has_walls)

    def test_invalid_maze_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidMazeError, ValueError))

    def test_rejects_empty_grid(self) -> None:
        with self.assertRaises(InvalidMazeError):
            Maze(grid=[], start=(0, 0))
        with self.assertRaises(InvalidMazeError):
            Maze(grid=np.zeros((0, 3)), start=(0, 0))

    def test_rejects_ragged_rows(self) -> None:
        with self.assertRaises(InvalidMazeError):
            Maze(grid=[[0, 0, 0], [0, 0]], start=(0, 0))

    def test_rejects_start_out_of_bounds(self) -> None:
        with self.assertRaises(InvalidMazeError):
            Maze(grid=[[0, 0], [0, 0]], start=(2, 0))
        with self.assertRaises(InvalidMazeError):
            Maze(grid=[[0, 0], [0, 0]], start=(0, -1))

    def test_rejects_wall_shape_mismatch(self) -> None:
        with self.assertRaises(InvalidMazeError):
            Maze(grid=np.zeros((2, 3)), start=(0, 0), cells=create_closed_cells(2, 2))

    def test_rejects_asymmetric_horizontal_wall(self) -> None:
        cells = create_closed_cells(2, 2)
        cells[0][0].walls.right = False
        with self.assertRaises(InvalidMazeError):
            maze_from_cells(cells, (0, 0))

    def test_rejects_asymmetric_vertical_wall(self) -> None:
        cells = create_open_cells(3, 3)
        cells[2][1].walls.top = True
        with self.assertRaises(InvalidMazeError):
            maze_from_cells(cells, (0, 0))

    def test_grid_is_read_only(self) -> None:
        maze = Maze(grid=[[0, 0], [0, 0]], start=(0, 0))
        with self.assertRaises(ValueError):
            maze.grid[0, 0] = 1

    def test_wall_data_is_copied_on_construction(self) -> None:
        cells = create_open_cells(2, 2)
        maze = maze_from_cells(cells, (0, 0))
        cells[0][0].walls.right = True
        self.assertIsNot(maze.cells, cells)
        self.assertFalse(maze.cell(Position(0, 0)).walls.right)
        maze.validate()

    def test_border_detection(self) -> None:
        maze = Maze(grid=np.zeros((3, 4)), start=(1, 1))
        self.assertTrue(maze.is_border((0, 2)))
        self.assertTrue(maze.is_border((1, 3)))
        self.assertFalse(maze.is_border((1, 2)))


class MazeConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = MazeConfig()
        self.assertEqual((config.width, config.height), (21, 21))
        self.assertEqual(config.difficulty, "normal")
        self.assertEqual(config.algorithm, "bfs")

    def test_rejects_bad_values(self) -> None:
        with self.assertRaises(ValueError):
            MazeConfig(width=0)
        with self.assertRaises(ValueError):
            MazeConfig(difficulty="extreme")
        with self.assertRaises(ValueError):
            MazeConfig(algorithm="greedy")
        with self.assertRaises(ValueError):
            MazeConfig(step_delay_ms=-1)


class SolutionTests(unittest.TestCase):
    def _solution(self) -> Solution:
        return Solution(
            distance=1,
            path=[Position(1, 1), Position(0, 1)],
            visited_cells=[Position(1, 1), Position(0, 1)],
            algorithm="A*",
            step_trace=[
                StepRecord(Position(1, 1), 0, {"g": 0, "h": 1, "f": 1, "open_set_size": 0}),
                StepRecord(Position(0, 1), 1, {"g": 1, "h": 0, "f": 1, "open_set_size": 3}),
            ],
            scores=ScoreGrids(
                g=np.array([[np.inf, 1.0], [np.inf, 0.0]]),
                h=np.zeros((2, 2)),
                f=np.array([[np.inf, 1.0], [np.inf, 1.0]]),
            ),
        )

    def test_summary_reports_exploration(self) -> None:
        summary = self._solution().summary(total_cells=8)
        self.assertEqual(summary["distance"], 1)
        self.assertEqual(summary["path_length"], 2)
        self.assertEqual(summary["cells_explored"], 2)
        self.assertEqual(summary["exploration_percentage"], 25)

    def test_exploration_ratio_handles_empty_maze_size(self) -> None:
        self.assertEqual(self._solution().exploration_ratio(0), 0.0)

    def test_to_dict_is_json_compatible(self) -> None:
        data = self._solution().to_dict()
        encoded = json.loads(json.dumps(data))
        self.assertEqual(encoded["path"], [[1, 1], [0, 1]])
        self.assertIsNone(encoded["scores"]["g"][0][0])
        self.assertEqual(encoded["scores"]["f"][1][1], 1.0)
        self.assertEqual(encoded["step_trace"][1]["data"]["open_set_size"], 3)


if __name__ == "__main__":
    unittest.main()
