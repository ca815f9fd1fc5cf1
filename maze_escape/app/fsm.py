"""Finite State Machine for step trace replay."""

from enum import Enum
from typing import Callable, Optional, Set


class ReplayState(Enum):
    """States of a trace replay."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"
    ERROR = "error"


class ReplayStateMachine:
    """
    Finite State Machine for managing replay states.

    State Transitions:
    IDLE -> RUNNING (replay started)
    IDLE -> NO_PATH (solver found no exit, nothing to replay)
    IDLE -> ERROR (generation or solving failed)
    RUNNING -> PAUSED, COMPLETE, CANCELLED, ERROR
    PAUSED -> RUNNING (resume), CANCELLED, IDLE
    COMPLETE, NO_PATH, CANCELLED, ERROR -> IDLE (reset)
    """

    def __init__(self):
        self._current_state = ReplayState.IDLE
        self._state_callbacks = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> dict[ReplayState, Set[ReplayState]]:
        """Build the valid state transition map."""
        return {
            ReplayState.IDLE: {ReplayState.RUNNING, ReplayState.NO_PATH, ReplayState.ERROR},
            ReplayState.RUNNING: {ReplayState.PAUSED, ReplayState.COMPLETE,
                                  ReplayState.CANCELLED, ReplayState.ERROR},
            ReplayState.PAUSED: {ReplayState.RUNNING, ReplayState.CANCELLED, ReplayState.IDLE},
            ReplayState.COMPLETE: {ReplayState.IDLE},
            ReplayState.NO_PATH: {ReplayState.IDLE},
            ReplayState.CANCELLED: {ReplayState.IDLE},
            ReplayState.ERROR: {ReplayState.IDLE},
        }

    @property
    def current_state(self) -> ReplayState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: ReplayState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: ReplayState, context: dict = None) -> bool:
        """
        Attempt to transition to the target state.

        Args:
            target_state: The state to transition to
            context: Optional context data passed to the entry callback

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(target_state):
            return False

        self._current_state = target_state
        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)
        return True

    def on_state_enter(self, state: ReplayState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def reset(self):
        """Reset the state machine to IDLE without firing callbacks."""
        self._current_state = ReplayState.IDLE

    def is_running(self) -> bool:
        return self._current_state == ReplayState.RUNNING

    def is_paused(self) -> bool:
        return self._current_state == ReplayState.PAUSED

    def is_finished(self) -> bool:
        """Check if the replay has ended (complete, no path, cancelled or error)."""
        return self._current_state in [ReplayState.COMPLETE, ReplayState.NO_PATH,
                                       ReplayState.CANCELLED, ReplayState.ERROR]

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            ReplayState.IDLE: "Ready to replay",
            ReplayState.RUNNING: "Replaying exploration",
            ReplayState.PAUSED: "Replay paused",
            ReplayState.COMPLETE: "Exit found",
            ReplayState.NO_PATH: "No exit reachable",
            ReplayState.CANCELLED: "Replay cancelled",
            ReplayState.ERROR: "Error occurred",
        }
        return descriptions.get(self._current_state, "Unknown state")
