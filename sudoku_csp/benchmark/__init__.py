"""Benchmark module for comparing Sudoku solvers."""

from .benchmark import Benchmark, BenchmarkResult
from .puzzles import SAMPLE_PUZZLES
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "SAMPLE_PUZZLES", "Visualizer"]
