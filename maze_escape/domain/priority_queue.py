"""Linear-scan priority queue used by A* and Dijkstra."""

from typing import List, Optional, Set

import numpy as np

from .types import Position


class LinearPriorityQueue:
    """
    Open set kept as a plain list in discovery order.

    Each ``get`` scans the whole list for the lowest score and takes the first
    one found among equals, so exploration order is reproducible. Scores are
    not stored here; they are read from the caller's score matrix at scan
    time, which keeps decreased keys visible without re-inserting.
    """

    def __init__(self):
        self._items: List[Position] = []
        self._members: Set[Position] = set()

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return not self._items

    def size(self) -> int:
        """Get the number of items in the queue."""
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def put(self, pos: Position) -> bool:
        """
        Append a position unless it is already queued.
        Returns True if the position was added.
        """
        if pos in self._members:
            return False
        self._items.append(pos)
        self._members.add(pos)
        return True

    def contains(self, pos: Position) -> bool:
        """Check if a position is in the queue."""
        return pos in self._members

    def get(self, scores: np.ndarray) -> Optional[Position]:
        """
        Remove and return the position with the lowest score.
        Returns None if queue is empty.
        """
        if not self._items:
            return None

        best_index = 0
        first = self._items[0]
        best_score = scores[first[0], first[1]]
        for index in range(1, len(self._items)):
            pos = self._items[index]
            score = scores[pos[0], pos[1]]
            if score < best_score:
                best_index = index
                best_score = score

        pos = self._items.pop(best_index)
        self._members.discard(pos)
        return pos

    def get_all_items(self) -> List[Position]:
        """Get queued positions in discovery order without removing them."""
        return list(self._items)
