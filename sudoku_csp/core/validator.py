"""Constraint checks for Sudoku grids."""

from __future__ import annotations
from typing import Union, TYPE_CHECKING

from .board import SIZE, BOX_SIZE, SudokuBoard

if TYPE_CHECKING:
    from .problem import SudokuProblem


def _board_of(state: Union[SudokuBoard, SudokuProblem]) -> SudokuBoard:
    return state if isinstance(state, SudokuBoard) else state.board


def consistent(state: Union[SudokuBoard, SudokuProblem]) -> bool:
    """
    Check that no row, column or box holds the same digit twice.

    Empty cells are ignored, so a partially filled grid can be consistent.
    Domains play no part in the check.

    Args:
        state: A board or a problem wrapping one.

    Returns:
        False at the first duplicate found, True otherwise.
    """
    grid = _board_of(state).grid.tolist()
    rows = [set() for _ in range(SIZE)]
    cols = [set() for _ in range(SIZE)]
    boxes = [set() for _ in range(SIZE)]

    for r in range(SIZE):
        for c in range(SIZE):
            value = grid[r][c]
            if value == 0:
                continue
            b = (r // BOX_SIZE) * BOX_SIZE + c // BOX_SIZE
            if value in rows[r] or value in cols[c] or value in boxes[b]:
                return False
            rows[r].add(value)
            cols[c].add(value)
            boxes[b].add(value)

    return True


def is_goal(state: Union[SudokuBoard, SudokuProblem]) -> bool:
    """True if every cell is filled and the grid is consistent."""
    board = _board_of(state)
    return board.is_complete() and consistent(board)


def is_valid_solution(board: SudokuBoard) -> bool:
    """Check that every row, column and box contains exactly the digits 1-9."""
    digits = set(range(1, SIZE + 1))

    for i in range(SIZE):
        if set(board.get_row(i).tolist()) != digits:
            return False
        if set(board.get_col(i).tolist()) != digits:
            return False

    for box_row in range(0, SIZE, BOX_SIZE):
        for box_col in range(0, SIZE, BOX_SIZE):
            if set(board.get_box(box_row, box_col).tolist()) != digits:
                return False

    return True


def respects_clues(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """Check that a solution keeps every given digit of the puzzle."""
    given = puzzle.grid != 0
    return bool((puzzle.grid[given] == solution.grid[given]).all())
