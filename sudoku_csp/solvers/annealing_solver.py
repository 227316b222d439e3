"""Simulated Annealing solver for Sudoku (local search over complete grids)."""

from __future__ import annotations
import random
import math
from typing import Optional, List, Tuple

import numpy as np

from .base_solver import BaseSolver
from ..core.board import SIZE, SudokuBoard
from ..core.validator import consistent

Position = Tuple[int, int]


def line_conflicts(line: np.ndarray) -> int:
    """Number of equal-value pairs in a row or column, ignoring empty cells."""
    counts = np.bincount(line, minlength=SIZE + 1)[1:]
    return int((counts * (counts - 1) // 2).sum())


def count_conflicts(board: SudokuBoard) -> int:
    """
    Energy of a grid: duplicate pairs summed over all rows and columns.

    Boxes are not counted; the annealer keeps every box a permutation.
    """
    grid = board.grid
    return (
        sum(line_conflicts(grid[r, :]) for r in range(SIZE)) +
        sum(line_conflicts(grid[:, c]) for c in range(SIZE))
    )


class AnnealingSolver(BaseSolver):
    """
    Simulated Annealing solver for Sudoku.

    Works on complete grids: every box is filled with a permutation of 1-9
    and the search swaps free cells inside a box, so only row and column
    duplicates remain to be removed.

    - Energy = number of duplicate pairs in rows and columns
    - Metropolis acceptance: worse moves pass with probability exp(-delta/T)
    - Geometric cooling, floored at `min_temp`

    This is a probabilistic approach and may not find a solution within its
    step budget even when one exists.
    """

    name = "Simulated Annealing"

    def __init__(
        self,
        initial_temp: float = 3.0,
        cooling_rate: float = 0.999,
        min_temp: float = 0.25,
        max_steps: int = 100000,
        seed: Optional[int] = None,
        track_memory: bool = False
    ):
        """
        Initialize the annealing solver.

        Args:
            initial_temp: Starting temperature.
            cooling_rate: Temperature multiplier per step (e.g., 0.999).
            min_temp: Temperature floor. Kept high enough that uphill
                moves still pass once the schedule bottoms out.
            max_steps: Number of steps before giving up.
            seed: Seed for the random generator, None for a fresh one.
            track_memory: Record peak memory use in the metrics.
        """
        super().__init__(track_memory=track_memory)
        self.initial_temp = initial_temp
        self.cooling_rate = cooling_rate
        self.min_temp = min_temp
        self.max_steps = max_steps
        self.seed = seed

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """Solve using simulated annealing."""
        fixed = board.grid != 0

        if fixed.all():
            return board if consistent(board) else None

        rng = random.Random(self.seed)
        work_board = self.initialize_board(board, rng)
        free_cells = self._free_cells_by_box(work_board, fixed)

        temperature = self.initial_temp
        energy = count_conflicts(work_board)

        for _ in range(self.max_steps):
            if energy == 0:
                break

            # Swap two free cells of a random box
            free = free_cells[rng.randrange(SIZE)]
            if len(free) < 2:
                continue

            self.stats.iterations += 1
            cell1, cell2 = rng.sample(free, 2)
            delta = self._swap(work_board, cell1, cell2)

            if delta <= 0 or rng.random() < math.exp(-delta / temperature):
                energy += delta
            else:
                self._swap(work_board, cell1, cell2)

            temperature = max(temperature * self.cooling_rate, self.min_temp)

        self.stats.extra["final_conflicts"] = energy
        self.stats.extra["final_temperature"] = temperature

        if energy == 0:
            return work_board
        return None

    def initialize_board(
        self,
        board: SudokuBoard,
        rng: Optional[random.Random] = None
    ) -> SudokuBoard:
        """
        Fill every empty cell with a random assignment.

        Each box gets the digits missing from its given cells, shuffled over
        its empty cells. This ensures no conflicts within boxes (only row/col
        conflicts).
        """
        rng = rng or random.Random(self.seed)
        work_board = board.copy()

        for box in range(SIZE):
            used_values = set()
            empty_in_box = []

            for r, c in board.get_box_cells(box):
                if board.is_empty(r, c):
                    empty_in_box.append((r, c))
                else:
                    used_values.add(board.get(r, c))

            remaining = sorted(set(range(1, SIZE + 1)) - used_values)
            rng.shuffle(remaining)

            for (r, c), val in zip(empty_in_box, remaining):
                work_board.set(r, c, val)

        return work_board

    @staticmethod
    def _free_cells_by_box(board: SudokuBoard, fixed: np.ndarray) -> List[List[Position]]:
        """Non-given cells of each box."""
        return [
            [cell for cell in board.get_box_cells(box) if not fixed[cell]]
            for box in range(SIZE)
        ]

    @staticmethod
    def _swap(board: SudokuBoard, cell1: Position, cell2: Position) -> int:
        """
        Swap two cells in place.

        Returns:
            Change in energy caused by the swap.
        """
        grid = board.grid
        (r1, c1), (r2, c2) = cell1, cell2
        rows = {r1, r2}
        cols = {c1, c2}

        before = (
            sum(line_conflicts(grid[r, :]) for r in rows) +
            sum(line_conflicts(grid[:, c]) for c in cols)
        )
        grid[r1, c1], grid[r2, c2] = grid[r2, c2], grid[r1, c1]
        after = (
            sum(line_conflicts(grid[r, :]) for r in rows) +
            sum(line_conflicts(grid[:, c]) for c in cols)
        )

        return after - before
