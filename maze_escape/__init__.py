"""Maze Escape - randomized maze generation with instrumented exit search.

Generates wall mazes by randomized depth-first carving and finds a way out
with breadth-first, depth-first, A* or Dijkstra search, recording a step
trace of every expanded cell for replay.
"""

__version__ = "1.0.0"
__author__ = "Maze Escape"
