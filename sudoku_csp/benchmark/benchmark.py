"""Benchmarking framework for comparing the Sudoku search strategies."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..solvers import ALGORITHMS, BaseSolver, get_solver
from .puzzles import SAMPLE_PUZZLES


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    puzzle_set: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    nodes_expanded: int
    children_generated: int
    max_depth: int
    iterations: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle_set": self.puzzle_set,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "nodes_expanded": self.nodes_expanded,
            "children_generated": self.children_generated,
            "max_depth": self.max_depth,
            "iterations": self.iterations,
            **self.extra
        }

    @property
    def effort(self) -> int:
        """Nodes expanded for tree search, iterations for local search."""
        return self.nodes_expanded or self.iterations


class Benchmark:
    """
    Benchmark framework for comparing Sudoku solving algorithms.

    Runs every selected solver on every puzzle and collects the search
    metrics of each run.
    """

    def __init__(
        self,
        puzzles: Optional[Dict[str, List[str]]] = None,
        algorithms: Optional[List[str]] = None,
        solver_options: Optional[Dict[str, Dict[str, Any]]] = None,
        track_memory: bool = False
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles: Puzzle set name -> list of 81-char puzzle strings
                (default: the built-in sample puzzles).
            algorithms: Algorithm names to run (default: all four).
            solver_options: Algorithm name -> extra constructor kwargs.
            track_memory: Record peak memory per run.
        """
        puzzles = puzzles if puzzles is not None else SAMPLE_PUZZLES
        self.puzzles: Dict[str, List[SudokuBoard]] = {
            name: [SudokuBoard.from_string(p) for p in items]
            for name, items in puzzles.items()
        }
        self.algorithms = list(algorithms or ALGORITHMS)
        solver_options = solver_options or {}

        self.solvers: Dict[str, BaseSolver] = {
            algo: get_solver(algo, track_memory=track_memory, **solver_options.get(algo, {}))
            for algo in self.algorithms
        }
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for set_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for algo, solver in self.solvers.items():
                    self.results.append(self._run_single(puzzle, puzzle_id, set_name, algo, solver))
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: SudokuBoard,
        puzzle_id: int,
        set_name: str,
        algorithm: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        _, stats = solver.solve(puzzle)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            puzzle_set=set_name,
            algorithm=algorithm,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            nodes_expanded=stats.nodes_expanded,
            children_generated=stats.children_generated,
            max_depth=stats.max_depth,
            iterations=stats.iterations,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": sum(len(p) for p in self.puzzles.values()),
            "algorithms": self.algorithms,
            "puzzle_sets": list(self.puzzles),
            "results_by_algorithm": {},
            "results_by_puzzle_set": {}
        }

        for algo in self.algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]
            if algo_results:
                solved = [r for r in algo_results if r.solved]
                times = [r.time_seconds for r in algo_results]

                summary["results_by_algorithm"][algo] = {
                    "accuracy": len(solved) / len(algo_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_nodes_expanded": sum(r.nodes_expanded for r in algo_results) / len(algo_results),
                    "avg_iterations": sum(r.iterations for r in algo_results) / len(algo_results),
                    "total_solved": len(solved),
                    "total_tested": len(algo_results)
                }

        for set_name in self.puzzles:
            set_results = [r for r in self.results if r.puzzle_set == set_name]
            if not set_results:
                continue
            summary["results_by_puzzle_set"][set_name] = {}

            for algo in self.algorithms:
                algo_results = [r for r in set_results if r.algorithm == algo]
                if algo_results:
                    solved = [r for r in algo_results if r.solved]
                    times = [r.time_seconds for r in algo_results]

                    summary["results_by_puzzle_set"][set_name][algo] = {
                        "accuracy": len(solved) / len(algo_results) * 100,
                        "avg_time_seconds": sum(times) / len(times),
                        "solved": len(solved),
                        "tested": len(algo_results)
                    }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        print(f"Results saved to {output_dir}")
