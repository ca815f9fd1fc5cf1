"""Command line entry point: generate a maze, search for its exit and print the result as JSON."""

import argparse
import json
import logging
import sys

from .domain.types import ALGORITHMS, DIFFICULTIES, MazeConfig
from .domain.neighbors import find_exits
from .domain.solver import compare_algorithms
from .utils.maze_factory import generate_maze
from .utils.rng import SeededRNG

logger = logging.getLogger("maze_escape")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a maze and search for its exit")
    parser.add_argument("--width", type=int, default=21, help="Number of maze columns")
    parser.add_argument("--height", type=int, default=21, help="Number of maze rows")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default="normal", help="Generator difficulty")
    parser.add_argument("--algorithm", choices=ALGORITHMS + ("all",), default="bfs",
                        help="Search algorithm, or 'all' to compare every solver")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible mazes")
    parser.add_argument("--trace", action="store_true", help="Include visited cells and the step trace")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        config = MazeConfig(
            width=args.width,
            height=args.height,
            difficulty=args.difficulty,
            algorithm="bfs" if args.algorithm == "all" else args.algorithm,
            seed=args.seed,
        )
        maze = generate_maze(config.width, config.height, config.difficulty, rng=SeededRNG(config.seed))
    except ValueError as e:
        logger.error("Invalid maze parameters: %s", e)
        return 2

    algorithms = ALGORITHMS if args.algorithm == "all" else (config.algorithm,)
    total_cells = maze.rows * maze.cols
    results = {}
    for algorithm, solution in compare_algorithms(maze, algorithms).items():
        if solution is None:
            logger.warning("%s found no exit", algorithm)
            results[algorithm] = None
            continue
        if args.trace:
            entry = solution.to_dict()
            entry["summary"] = solution.summary(total_cells)
        else:
            entry = solution.summary(total_cells)
            entry["path"] = [[p.r, p.c] for p in solution.path]
        results[algorithm] = entry

    report = {
        "width": maze.cols,
        "height": maze.rows,
        "difficulty": config.difficulty,
        "seed": config.seed,
        "start": [maze.start.r, maze.start.c],
        "exits": [[p.r, p.c] for p in find_exits(maze)],
        "solutions": results,
    }
    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if all(result is not None for result in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
