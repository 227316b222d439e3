"""Sudoku board representation for the standard 9x9 grid."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Sequence

SIZE = 9
BOX_SIZE = 3


class SudokuBoard:
    """
    Represents a 9x9 Sudoku grid with 3x3 boxes.

    Cells hold 0 for "empty" or a digit 1-9. The grid is stored row-major
    as a numpy int32 array.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates an empty board.

        Raises:
            ValueError: If the grid is not 9x9 or holds values outside 0-9.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                        box_col:box_col + BOX_SIZE].flatten()

    def get_box_cells(self, box_index: int) -> List[Tuple[int, int]]:
        """Get the positions of box 0-8, numbered row-major."""
        box_row = (box_index // BOX_SIZE) * BOX_SIZE
        box_col = (box_index % BOX_SIZE) * BOX_SIZE
        return [
            (box_row + i, box_col + j)
            for i in range(BOX_SIZE)
            for j in range(BOX_SIZE)
        ]

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        rows, cols = np.nonzero(self.grid == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def next_empty(self, after: Optional[Tuple[int, int]] = None) -> Optional[Tuple[int, int]]:
        """
        Find the first empty cell strictly after `after` in row-major order.

        With `after=None` the scan starts at (0, 0). Returns None when no
        empty cell remains past that point.
        """
        flat = self.grid.ravel()
        start = 0 if after is None else after[0] * SIZE + after[1] + 1
        empties = np.flatnonzero(flat[start:] == 0)
        if empties.size == 0:
            return None
        index = start + int(empties[0])
        return divmod(index, SIZE)

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def to_string(self) -> str:
        """Convert board to an 81-character string, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.ravel())

    def to_2d_list(self) -> List[List[Optional[int]]]:
        """Convert board to nested lists, None for empty cells."""
        return [[int(v) if v else None for v in row] for row in self.grid]

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of 81 characters, 0 or . for empty, 1-9 for values.
               Whitespace is ignored.
        """
        s = ''.join(s.split())
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        values = []
        for c in s:
            if c == '0' or c == '.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise ValueError(f"Invalid character in puzzle string: {c!r}")

        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[Optional[int]]]) -> SudokuBoard:
        """Create a board from a 2D list, None or 0 marking empty cells."""
        if len(data) != SIZE or any(len(row) != SIZE for row in data):
            raise ValueError(f"Grid must be {SIZE} rows of {SIZE} cells")
        arr = np.array(
            [[0 if v is None else v for v in row] for row in data],
            dtype=np.int32
        )
        return cls(arr)

    @classmethod
    def coerce(cls, grid) -> SudokuBoard:
        """Build a board from a SudokuBoard, puzzle string or nested list."""
        if isinstance(grid, SudokuBoard):
            return grid.copy()
        if isinstance(grid, str):
            return cls.from_string(grid)
        if isinstance(grid, np.ndarray):
            return cls(grid)
        return cls.from_2d_list(grid)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
