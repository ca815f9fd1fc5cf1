"""Algorithm dispatch for exit search."""

from typing import Callable, Dict, Iterable, Optional

from .types import ALGORITHMS, AlgorithmId, Maze, Solution
from .astar import solve_astar
from .bfs import solve_bfs
from .dfs import solve_dfs
from .dijkstra import solve_dijkstra

# Mapping from algorithm IDs to solver functions
SOLVERS: Dict[str, Callable[[Maze], Optional[Solution]]] = {
    "bfs": solve_bfs,
    "dfs": solve_dfs,
    "astar": solve_astar,
    "dijkstra": solve_dijkstra,
}


def get_solver(algorithm: AlgorithmId) -> Callable[[Maze], Optional[Solution]]:
    """Get solver function by ID."""
    try:
        return SOLVERS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def solve(maze: Maze, algorithm: AlgorithmId = "bfs") -> Optional[Solution]:
    """
    Search the maze for a way out from its start position.

    Args:
        maze: Maze to search
        algorithm: One of "bfs", "dfs", "astar", "dijkstra"

    Returns:
        Solution with path and step trace, or None if no exit is reachable

    Raises:
        ValueError: If the algorithm is unknown
    """
    return get_solver(algorithm)(maze)


def compare_algorithms(maze: Maze,
                       algorithms: Iterable[AlgorithmId] = ALGORITHMS) -> Dict[str, Optional[Solution]]:
    """Run several solvers on the same maze, keyed by algorithm ID in the given order."""
    return {algorithm: solve(maze, algorithm) for algorithm in algorithms}
