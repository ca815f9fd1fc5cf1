import unittest

try:
    from PySide6.QtCore import QCoreApplication
    HAS_QT = True
except ImportError:
    HAS_QT = False

from maze_escape.app.fsm import ReplayState
from maze_escape.domain.types import MazeConfig, Position
from maze_escape.utils.maze_factory import create_open_cells, maze_from_cells, open_border

if HAS_QT:
    from maze_escape.app.controller import ReplayController


def single_exit_maze():
    cells = create_open_cells(3, 3)
    open_border(cells, Position(0, 1), "top")
    return maze_from_cells(cells, Position(2, 2))


@unittest.skipUnless(HAS_QT, "PySide6 is not available")
class ReplayControllerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def setUp(self) -> None:
        self.controller = ReplayController(MazeConfig(width=9, height=9, seed=11, algorithm="astar"))
        self.revealed = []
        self.states = []
        self.paths = []
        self.errors = []
        self.controller.cell_revealed.connect(lambda index, record: self.revealed.append((index, record)))
        self.controller.state_changed.connect(self.states.append)
        self.controller.path_ready.connect(self.paths.append)
        self.controller.error_occurred.connect(self.errors.append)

    def test_manual_replay_reveals_trace_in_order(self) -> None:
        self.controller.set_maze(single_exit_maze())
        self.assertTrue(self.controller.start_replay("bfs", auto_advance=False))
        self.assertEqual(self.controller.current_state, ReplayState.RUNNING)

        while self.controller.step_replay():
            pass

        solution = self.controller.solution
        self.assertEqual([index for index, _ in self.revealed], list(range(solution.cells_explored)))
        self.assertEqual([record.position for _, record in self.revealed], solution.visited_cells)
        self.assertEqual(self.controller.current_state, ReplayState.COMPLETE)
        self.assertEqual(self.paths, [solution])
        self.assertEqual(solution.path[-1], Position(0, 1))
        self.assertIn(ReplayState.COMPLETE, self.states)

    def test_cancel_records_progress(self) -> None:
        self.controller.set_maze(single_exit_maze())
        self.controller.start_replay("bfs", auto_advance=False)
        self.controller.step_replay()
        self.controller.step_replay()
        self.assertTrue(self.controller.cancel())
        self.assertEqual(self.controller.cancelled_at, 2)
        self.assertEqual(self.controller.current_state, ReplayState.CANCELLED)
        self.assertFalse(self.controller.step_replay())
        self.assertEqual(self.paths, [])

    def test_pause_and_resume(self) -> None:
        self.controller.set_maze(single_exit_maze())
        self.controller.start_replay(auto_advance=False)
        self.assertTrue(self.controller.pause())
        self.assertFalse(self.controller.pause())
        self.assertTrue(self.controller.resume())
        self.assertEqual(self.controller.current_state, ReplayState.RUNNING)
        self.controller.cancel()

    def test_resume_requires_pause(self) -> None:
        self.assertFalse(self.controller.resume())

    def test_no_exit_reports_no_path(self) -> None:
        self.controller.set_maze(maze_from_cells(create_open_cells(3, 3), Position(1, 1)))
        self.assertFalse(self.controller.start_replay())
        self.assertEqual(self.controller.current_state, ReplayState.NO_PATH)
        self.assertIsNone(self.controller.solution)

    def test_unknown_algorithm_reports_error(self) -> None:
        self.controller.set_maze(single_exit_maze())
        self.assertFalse(self.controller.start_replay("greedy"))
        self.assertEqual(self.controller.current_state, ReplayState.ERROR)
        self.assertEqual(len(self.errors), 1)

    def test_generates_maze_from_config(self) -> None:
        self.assertTrue(self.controller.start_replay(auto_advance=False))
        maze = self.controller.maze
        self.assertEqual((maze.rows, maze.cols), (9, 9))
        self.assertEqual(self.controller.solution.algorithm, "A*")
        self.controller.cancel()

    def test_invalid_generation_reports_error(self) -> None:
        self.assertFalse(self.controller.generate_maze(width=0))
        self.assertEqual(self.controller.current_state, ReplayState.ERROR)
        self.assertTrue(self.errors[0].startswith("Failed to generate maze"))

    def test_new_maze_returns_to_idle(self) -> None:
        self.controller.set_maze(single_exit_maze())
        self.controller.start_replay(auto_advance=False)
        self.assertTrue(self.controller.generate_maze())
        self.assertEqual(self.controller.current_state, ReplayState.IDLE)
        self.assertEqual(self.controller.revealed_count, 0)


if __name__ == "__main__":
    unittest.main()
