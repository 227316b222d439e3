"""Core module for Sudoku board representation, domains and validation."""

from .board import SudokuBoard
from .problem import SudokuProblem, initiate
from .domains import update_domain, has_empty_domain
from .validator import consistent, is_goal, is_valid_solution

__all__ = [
    "SudokuBoard",
    "SudokuProblem",
    "initiate",
    "update_domain",
    "has_empty_domain",
    "consistent",
    "is_goal",
    "is_valid_solution",
]
