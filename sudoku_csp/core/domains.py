"""Candidate-domain bookkeeping and single-step propagation.

A domain matrix is a boolean array of shape (9, 9, 9) where
``domains[row, col, value - 1]`` is True while ``value`` may still be
assigned to cell (row, col).
"""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, TYPE_CHECKING

from .board import SIZE, BOX_SIZE

if TYPE_CHECKING:
    from .board import SudokuBoard

Position = Tuple[int, int]


def full_domains(board: SudokuBoard) -> np.ndarray:
    """
    Build the starting domain matrix for a board.

    Empty cells get every digit 1-9, filled cells get nothing. Given
    cells are not propagated into their peers.
    """
    domains = np.zeros((SIZE, SIZE, SIZE), dtype=bool)
    domains[board.grid == 0] = True
    return domains


def peer_mask(position: Position) -> np.ndarray:
    """Boolean (9, 9) mask of the cells sharing a row, column or box with position."""
    row, col = position
    mask = np.zeros((SIZE, SIZE), dtype=bool)
    mask[row, :] = True
    mask[:, col] = True
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    mask[box_row:box_row + BOX_SIZE, box_col:box_col + BOX_SIZE] = True
    mask[row, col] = False
    return mask


def update_domain(domains: np.ndarray, position: Position, value: int) -> np.ndarray:
    """
    Propagate the assignment of `value` at `position`.

    Removes `value` from every peer's domain and empties the domain of
    `position` itself. Only direct peers are touched; emptied or reduced
    domains are not propagated further.

    Args:
        domains: Current domain matrix. Not modified.
        position: (row, col) of the assigned cell.
        value: Digit 1-9 being assigned.

    Returns:
        A new domain matrix.
    """
    row, col = position
    new_domains = domains.copy()
    new_domains[peer_mask(position), value - 1] = False
    new_domains[row, col, :] = False
    return new_domains


def candidates(domains: np.ndarray, position: Position) -> List[int]:
    """Remaining candidates of a cell in ascending order."""
    row, col = position
    return [int(v) + 1 for v in np.flatnonzero(domains[row, col])]


def domain_sizes(domains: np.ndarray) -> np.ndarray:
    """Number of remaining candidates per cell, shape (9, 9)."""
    return domains.sum(axis=2)


def has_empty_domain(domains: np.ndarray, board: SudokuBoard) -> bool:
    """True if some unassigned cell has no candidate left."""
    unassigned = board.grid == 0
    return bool(np.any(unassigned & ~domains.any(axis=2)))


def eliminations(domains: np.ndarray, board: SudokuBoard, position: Position, value: int) -> int:
    """
    Count how many unassigned peers would lose `value` if it were placed
    at `position`.
    """
    affected = peer_mask(position) & (board.grid == 0)
    return int(np.count_nonzero(domains[affected, value - 1]))
