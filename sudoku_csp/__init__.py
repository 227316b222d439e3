"""Sudoku constraint-satisfaction solvers: backtracking family and simulated annealing."""

from .core import SudokuBoard, consistent, is_goal, initiate, update_domain
from .solvers import ALGORITHMS, SearchMetrics, get_solver, solve

__version__ = "1.0.0"
