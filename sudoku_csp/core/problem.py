"""Search problem: a grid snapshot with its candidate domains and given cells."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .board import SudokuBoard
from .domains import full_domains, update_domain


@dataclass(frozen=True, eq=False)
class SudokuProblem:
    """
    One snapshot of a puzzle under search.

    Attributes:
        board: Current cell values.
        domains: (9, 9, 9) candidate matrix kept in step with `board`.
        fixed: (9, 9) mask of the cells given in the original puzzle.
            Shared by every snapshot derived from the same puzzle.
    """
    board: SudokuBoard
    domains: np.ndarray
    fixed: np.ndarray

    def assign(self, position: Tuple[int, int], value: int) -> SudokuProblem:
        """Return a new problem with `value` placed at `position`."""
        board = self.board.copy()
        board.set(position[0], position[1], value)
        return SudokuProblem(
            board=board,
            domains=update_domain(self.domains, position, value),
            fixed=self.fixed,
        )


def initiate(board: SudokuBoard) -> SudokuProblem:
    """
    Build the starting problem for a puzzle.

    Filled cells become fixed with an empty domain; empty cells are free
    with the full domain 1-9.
    """
    board = board.copy()
    fixed = board.grid != 0
    fixed.setflags(write=False)
    return SudokuProblem(board=board, domains=full_domains(board), fixed=fixed)
