"""Solvers module for Sudoku puzzles."""

from typing import Dict, Optional, Tuple, Type

from .base_solver import BaseSolver, SearchMetrics
from .backtracking_solver import (
    SearchNode,
    BacktrackingSolver,
    ForwardCheckingSolver,
    MRVLCVSolver,
)
from .annealing_solver import AnnealingSolver
from ..core.board import SudokuBoard

# One entry point per algorithm; "dfs" is plain backtracking under another name
SOLVERS: Dict[str, Type[BaseSolver]] = {
    "backtracking": BacktrackingSolver,
    "dfs": BacktrackingSolver,
    "forward_checking": ForwardCheckingSolver,
    "mrv_lcv": MRVLCVSolver,
    "annealing": AnnealingSolver,
}

ALGORITHMS = ["backtracking", "forward_checking", "mrv_lcv", "annealing"]


def get_solver(algorithm: str, **kwargs) -> BaseSolver:
    """
    Instantiate a solver by algorithm name.

    Raises:
        ValueError: If the name is not one of SOLVERS.
    """
    try:
        solver_cls = SOLVERS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm {algorithm!r}, expected one of {sorted(SOLVERS)}"
        ) from None
    return solver_cls(**kwargs)


def solve(grid, algorithm: str = "backtracking", **kwargs) -> Tuple[Optional[SudokuBoard], SearchMetrics]:
    """
    Solve a puzzle with the named algorithm.

    Args:
        grid: A SudokuBoard, 81-character string or 9x9 nested list.
        algorithm: One of SOLVERS.
        **kwargs: Passed to the solver constructor.

    Returns:
        Tuple of (solution or None, metrics of this run).
    """
    board = SudokuBoard.coerce(grid)
    return get_solver(algorithm, **kwargs).solve(board)


__all__ = [
    "BaseSolver",
    "SearchMetrics",
    "SearchNode",
    "BacktrackingSolver",
    "ForwardCheckingSolver",
    "MRVLCVSolver",
    "AnnealingSolver",
    "SOLVERS",
    "ALGORITHMS",
    "get_solver",
    "solve",
]
