"""Base solver interface and search metrics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.validator import is_goal, respects_clues


@dataclass
class SearchMetrics:
    """Effort spent by a single solver run."""
    # Outcome
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search effort
    nodes_expanded: int = 0
    children_generated: int = 0
    max_depth: int = 0
    iterations: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "nodes_expanded": self.nodes_expanded,
            "children_generated": self.children_generated,
            "max_depth": self.max_depth,
            "iterations": self.iterations,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        """
        Args:
            track_memory: Record peak allocation with tracemalloc. Slows the
                search down noticeably, so it is off unless asked for.
        """
        self.track_memory = track_memory
        self.stats = SearchMetrics(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SearchMetrics]:
        """
        Solve a Sudoku puzzle with timing and optional memory tracking.

        Metrics are reset at the start of every call.

        Args:
            board: The puzzle to solve. Not modified.

        Returns:
            Tuple of (solution or None, metrics).
        """
        self.stats = SearchMetrics(algorithm=self.name)

        # Leave tracing that someone else started running
        owns_trace = self.track_memory and not tracemalloc.is_tracing()
        if owns_trace:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            solution = self._solve(board.copy())
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                if owns_trace:
                    tracemalloc.stop()
                self.stats.memory_bytes = peak

        self.stats.solved = (
            solution is not None and is_goal(solution) and respects_clues(board, solution)
        )
        if not self.stats.solved:
            solution = None
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution found.
        """
        pass
