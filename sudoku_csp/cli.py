"""Command-line interface for the Sudoku CSP solvers."""

import argparse
import sys

from .solvers import ALGORITHMS, get_solver
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.board import SudokuBoard


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sudoku-csp",
        description="Sudoku solver: backtracking, forward checking, MRV+LCV and simulated annealing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle with forward checking
  sudoku-csp solve --algorithm forward_checking --puzzle "5300700006001950..."

  # Compare every algorithm on the same puzzle
  sudoku-csp solve --algorithm all --puzzle "5300700006001950..." --verbose

  # Run the benchmark on the built-in puzzles
  sudoku-csp benchmark --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--algorithm", "-a",
        choices=ALGORITHMS + ["all"],
        default="backtracking",
        help="Solving algorithm to use (default: backtracking)"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--max-steps", type=int, default=100000,
        help="Step budget for simulated annealing (default: 100000)"
    )
    solve_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for simulated annealing"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed search statistics"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Compare solvers on the built-in puzzles")
    bench_parser.add_argument(
        "--algorithms", nargs="+", choices=ALGORITHMS, default=ALGORITHMS,
        help="Algorithms to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--max-steps", type=int, default=100000,
        help="Step budget for simulated annealing (default: 100000)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for simulated annealing (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _solver_options(algorithm, args):
    if algorithm == "annealing":
        return {"max_steps": args.max_steps, "seed": args.seed}
    return {}


def cmd_solve(args):
    """Handle the solve command."""
    try:
        board = SudokuBoard.from_string(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(board)
    print()

    algorithms = ALGORITHMS if args.algorithm == "all" else [args.algorithm]

    for algorithm in algorithms:
        solver = get_solver(algorithm, **_solver_options(algorithm, args))
        print(f"Solving with {solver.name}...")
        solution, stats = solver.solve(board)

        if stats.solved:
            print(f"✓ Solved in {stats.time_seconds * 1000:.2f} ms")
        else:
            print("✗ No solution found. The puzzle might be impossible to solve "
                  "or too complex for the algorithm.")
            print(f"  Time: {stats.time_seconds * 1000:.2f} ms")

        if args.verbose:
            print(f"  Nodes expanded: {stats.nodes_expanded:,}")
            print(f"  Children generated: {stats.children_generated:,}")
            print(f"  Max depth: {stats.max_depth:,}")
            print(f"  Iterations: {stats.iterations:,}")

        if solution is not None:
            print(solution)
        print()


def cmd_benchmark(args):
    """Handle the benchmark command."""
    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)

    benchmark = Benchmark(
        algorithms=args.algorithms,
        solver_options={"annealing": {"max_steps": args.max_steps, "seed": args.seed}},
    )

    print(f"Puzzle sets: {', '.join(benchmark.puzzles)}")
    print(f"Algorithms: {', '.join(benchmark.algorithms)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Nodes Expanded: {stats['avg_nodes_expanded']:,.0f}")
        print(f"  Avg Iterations: {stats['avg_iterations']:,.0f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
