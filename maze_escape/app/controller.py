"""Controller that generates a maze, solves it and replays the step trace on a timer."""

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ..domain.types import AlgorithmId, Difficulty, Maze, MazeConfig, Solution
from ..domain.solver import solve
from ..utils.maze_factory import generate_maze
from ..utils.rng import SeededRNG, default_rng
from .fsm import ReplayState, ReplayStateMachine

logger = logging.getLogger(__name__)


class ReplayController(QObject):
    """
    Replays a finished search one expanded cell at a time.

    The solver always runs to completion first; pausing or cancelling only
    affects how much of the precomputed trace has been revealed.

    Signals:
        state_changed: Emitted when the replay state changes
        maze_generated: Emitted with the new Maze
        cell_revealed: Emitted with (index, StepRecord) for each revealed cell
        path_ready: Emitted with the Solution once every cell has been revealed
        error_occurred: Emitted when generation or solving fails
    """

    state_changed = Signal(object)  # ReplayState
    maze_generated = Signal(object)  # Maze
    cell_revealed = Signal(int, object)  # index, StepRecord
    path_ready = Signal(object)  # Solution
    error_occurred = Signal(str)

    def __init__(self, config: Optional[MazeConfig] = None):
        super().__init__()

        self._config = config or MazeConfig()
        self._rng = SeededRNG(self._config.seed) if self._config.seed is not None else default_rng
        self._state_machine = ReplayStateMachine()
        self._maze: Optional[Maze] = None
        self._solution: Optional[Solution] = None
        self._revealed = 0
        self._cancelled_at: Optional[int] = None

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timer_tick)

        self._setup_state_callbacks()

    def _setup_state_callbacks(self):
        """Setup callbacks for state machine transitions."""
        self._state_machine.on_state_enter(ReplayState.RUNNING, self._on_running_entered)
        self._state_machine.on_state_enter(ReplayState.PAUSED, self._on_stopped_entered)
        self._state_machine.on_state_enter(ReplayState.IDLE, self._on_stopped_entered)
        self._state_machine.on_state_enter(ReplayState.COMPLETE, self._on_complete_entered)
        self._state_machine.on_state_enter(ReplayState.NO_PATH, self._on_stopped_entered)
        self._state_machine.on_state_enter(ReplayState.CANCELLED, self._on_stopped_entered)
        self._state_machine.on_state_enter(ReplayState.ERROR, self._on_stopped_entered)

    # Properties

    @property
    def config(self) -> MazeConfig:
        return self._config

    @property
    def maze(self) -> Optional[Maze]:
        return self._maze

    @property
    def solution(self) -> Optional[Solution]:
        return self._solution

    @property
    def current_state(self) -> ReplayState:
        return self._state_machine.current_state

    @property
    def revealed_count(self) -> int:
        """Number of explored cells revealed so far."""
        return self._revealed

    @property
    def cancelled_at(self) -> Optional[int]:
        """Index of the first unrevealed cell when the replay was cancelled."""
        return self._cancelled_at

    @property
    def speed(self) -> int:
        """Get the delay between revealed cells in ms."""
        return self._config.step_delay_ms

    @speed.setter
    def speed(self, interval_ms: int):
        self._config.step_delay_ms = max(0, interval_ms)
        if self._timer.isActive():
            self._timer.setInterval(self._config.step_delay_ms)

    # Maze management

    def generate_maze(self, width: Optional[int] = None, height: Optional[int] = None,
                      difficulty: Optional[Difficulty] = None) -> bool:
        """Generate a new maze, discarding any previous solution."""
        width = width if width is not None else self._config.width
        height = height if height is not None else self._config.height
        difficulty = difficulty or self._config.difficulty

        self._return_to_idle()
        try:
            self._maze = generate_maze(width, height, difficulty, rng=self._rng)
        except ValueError as e:
            self._fail(f"Failed to generate maze: {e}")
            return False

        self.maze_generated.emit(self._maze)
        return True

    def set_maze(self, maze: Maze):
        """Use an externally built maze for the next replay."""
        self._return_to_idle()
        self._maze = maze
        self.maze_generated.emit(maze)

    # Replay control

    def start_replay(self, algorithm: Optional[AlgorithmId] = None, auto_advance: bool = True) -> bool:
        """
        Solve the current maze and begin revealing its exploration order.

        Args:
            algorithm: Solver to use (config default if None)
            auto_advance: Reveal cells on the timer; otherwise call step_replay()

        Returns:
            True if a replay started
        """
        if self._maze is None and not self.generate_maze():
            return False
        algorithm = algorithm or self._config.algorithm
        self._return_to_idle()
        try:
            self._solution = solve(self._maze, algorithm)
        except ValueError as e:
            self._fail(f"Failed to solve maze: {e}")
            return False

        if self._solution is None:
            logger.info("No exit reachable from %s", tuple(self._maze.start))
            self._state_machine.transition_to(ReplayState.NO_PATH)
            return False

        return self._state_machine.transition_to(ReplayState.RUNNING, {"auto_advance": auto_advance})

    def step_replay(self) -> bool:
        """
        Reveal the next explored cell.
        Returns False when there is nothing left to reveal.
        """
        if self._solution is None or self._state_machine.is_finished():
            return False

        visited = self._solution.visited_cells
        if self._revealed >= len(visited):
            self._finish()
            return False

        index = self._revealed
        self._revealed += 1
        self.cell_revealed.emit(index, self._solution.step_trace[index])

        if self._revealed == len(visited):
            if self._timer.isActive():
                self._timer.stop()
                QTimer.singleShot(self._config.final_delay_ms, self._finish)
            else:
                self._finish()
        return True

    def pause(self) -> bool:
        return self._state_machine.transition_to(ReplayState.PAUSED)

    def resume(self) -> bool:
        if not self._state_machine.is_paused():
            return False
        return self._state_machine.transition_to(ReplayState.RUNNING, {"auto_advance": True})

    def cancel(self) -> bool:
        """Stop the replay, remembering how far it got."""
        if not self._state_machine.can_transition_to(ReplayState.CANCELLED):
            return False
        self._cancelled_at = self._revealed
        total = len(self._solution.visited_cells) if self._solution else 0
        logger.info("Replay cancelled at step %d/%d", self._revealed, total)
        return self._state_machine.transition_to(ReplayState.CANCELLED)

    def reset(self) -> bool:
        """Return to IDLE, keeping the current maze."""
        self._return_to_idle()
        return True

    # State machine callbacks

    def _on_running_entered(self, context):
        if context and context.get("auto_advance"):
            self._timer.start(self._config.step_delay_ms)
        self.state_changed.emit(ReplayState.RUNNING)

    def _on_stopped_entered(self, context):
        self._timer.stop()
        self.state_changed.emit(self._state_machine.current_state)

    def _on_complete_entered(self, context):
        self._timer.stop()
        if self._solution is not None:
            total_cells = self._maze.rows * self._maze.cols
            logger.info("Replay complete: %s", self._solution.summary(total_cells))
            self.path_ready.emit(self._solution)
        self.state_changed.emit(ReplayState.COMPLETE)

    def _on_timer_tick(self):
        if self._state_machine.is_running():
            self.step_replay()

    # Helpers

    def _finish(self):
        if self._solution is None or self._revealed < len(self._solution.visited_cells):
            return
        self._state_machine.transition_to(ReplayState.COMPLETE)

    def _fail(self, message: str):
        logger.error(message)
        if self._state_machine.current_state != ReplayState.IDLE:
            self._state_machine.reset()
        self._state_machine.transition_to(ReplayState.ERROR, {"error": message})
        self.error_occurred.emit(message)

    def _return_to_idle(self):
        self._reset_replay()
        if self._state_machine.current_state != ReplayState.IDLE:
            self._state_machine.reset()
            self.state_changed.emit(ReplayState.IDLE)

    def _reset_replay(self):
        self._timer.stop()
        self._solution = None
        self._revealed = 0
        self._cancelled_at = None
