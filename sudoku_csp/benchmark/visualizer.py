"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for Sudoku solver benchmark results.

    Creates charts comparing algorithm performance across puzzle sets.
    """

    # Color palette for algorithms
    COLORS = {
        "backtracking": "#2ecc71",      # Green
        "forward_checking": "#3498db",  # Blue
        "mrv_lcv": "#9b59b6",           # Purple
        "annealing": "#e74c3c",         # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    @property
    def algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    @property
    def puzzle_sets(self) -> List[str]:
        return sorted(set(r.puzzle_set for r in self.results))

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_accuracy_comparison(),
            self.plot_effort_comparison(),
            self.plot_time_distribution(),
        ]

    def _save(self, filename: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.algorithm == algo])
            for algo in algorithms
        ]
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                       xy=(bar.get_x() + bar.get_width() / 2, height),
                       xytext=(0, 3),
                       textcoords="offset points",
                       ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def _grouped_bars(self, ax, values_for) -> None:
        """Draw one bar group per puzzle set, one bar per algorithm."""
        algorithms = self.algorithms
        puzzle_sets = self.puzzle_sets

        x = np.arange(len(puzzle_sets))
        width = 0.8 / len(algorithms)

        for i, algo in enumerate(algorithms):
            values = [values_for(algo, name) for name in puzzle_sets]
            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, values, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xticks(x)
        ax.set_xticklabels([name.replace('_', ' ').capitalize() for name in puzzle_sets])
        ax.legend(title='Algorithm', bbox_to_anchor=(1.05, 1), loc='upper left')

    def plot_accuracy_comparison(self) -> str:
        """Create grouped bar chart comparing solve accuracy by puzzle set."""
        fig, ax = plt.subplots(figsize=(12, 6))

        def accuracy(algo, name):
            runs = [r for r in self.results if r.algorithm == algo and r.puzzle_set == name]
            return sum(r.solved for r in runs) / len(runs) * 100 if runs else 0

        self._grouped_bars(ax, accuracy)

        ax.set_xlabel('Puzzle Set', fontsize=12)
        ax.set_ylabel('Accuracy (%)', fontsize=12)
        ax.set_title('Solve Accuracy by Puzzle Set and Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)

        return self._save("accuracy_comparison.png")

    def plot_effort_comparison(self) -> str:
        """Create grouped bar chart of nodes expanded (or annealing steps)."""
        fig, ax = plt.subplots(figsize=(12, 6))

        def effort(algo, name):
            runs = [r.effort for r in self.results if r.algorithm == algo and r.puzzle_set == name]
            return np.mean(runs) if runs else 0

        self._grouped_bars(ax, effort)

        ax.set_xlabel('Puzzle Set', fontsize=12)
        ax.set_ylabel('Nodes Expanded / Iterations (Log Scale)', fontsize=12)
        ax.set_title('Search Effort by Puzzle Set and Algorithm', fontsize=14, fontweight='bold')

        # Effort varies by several orders of magnitude between strategies
        ax.set_yscale('log')

        return self._save("effort_comparison.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = self.algorithms
        data = [[r.time_seconds for r in self.results if r.algorithm == algo] for algo in algorithms]

        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(algorithms) + 1))
        ax.set_xticklabels(algorithms)

        for patch, algo in zip(bp['boxes'], algorithms):
            patch.set_facecolor(self.COLORS.get(algo, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Algorithm', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Algorithm | Accuracy | Avg Time | Avg Nodes Expanded | Avg Iterations |",
            "|-----------|----------|----------|--------------------|----------------|"
        ]

        for algo in self.algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100 if algo_results else 0

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_nodes = np.mean([r.nodes_expanded for r in algo_results])
            avg_iters = np.mean([r.iterations for r in algo_results])

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {int(avg_nodes):,} | {int(avg_iters):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
