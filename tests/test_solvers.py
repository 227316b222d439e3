"""Unit tests for the backtracking solvers and the solver entry points."""

import tracemalloc

import pytest
from sudoku_csp.core.board import SudokuBoard
from sudoku_csp.core.problem import initiate
from sudoku_csp.core.domains import has_empty_domain
from sudoku_csp.core.validator import consistent, is_valid_solution, respects_clues
from sudoku_csp.solvers import (
    ALGORITHMS,
    BaseSolver,
    BacktrackingSolver,
    ForwardCheckingSolver,
    MRVLCVSolver,
    SearchNode,
    get_solver,
    solve,
)
from sudoku_csp.benchmark.puzzles import CLASSIC_SOLUTION, SAMPLE_PUZZLES


BACKTRACKING_SOLVERS = [BacktrackingSolver, ForwardCheckingSolver, MRVLCVSolver]

NEAR_COMPLETE = SAMPLE_PUZZLES["near_complete"]

# Two 5s in the first row, otherwise empty
CONTRADICTORY = "55" + "0" * 79

# The solution with its centre cell removed; only 5 fits
ONE_EMPTY = CLASSIC_SOLUTION[:40] + "0" + CLASSIC_SOLUTION[41:]


def _broken_solution():
    """A full grid with two cells of the first row swapped."""
    chars = list(CLASSIC_SOLUTION)
    chars[0], chars[1] = chars[1], chars[0]
    return "".join(chars)


@pytest.mark.parametrize("solver_cls", BACKTRACKING_SOLVERS)
class TestBacktrackingFamily:
    """Behaviour shared by all three backtracking policies."""

    @pytest.mark.parametrize("puzzle", NEAR_COMPLETE)
    def test_solves_near_complete(self, solver_cls, puzzle):
        board = SudokuBoard.from_string(puzzle)
        solution, stats = solver_cls().solve(board)

        assert stats.solved
        assert is_valid_solution(solution)
        assert respects_clues(board, solution)
        assert solution.to_string() == CLASSIC_SOLUTION
        assert stats.nodes_expanded > 0

    def test_empty_grid(self, solver_cls):
        """An empty grid yields a fully valid Sudoku."""
        solution, stats = solver_cls().solve(SudokuBoard())

        assert stats.solved
        assert is_valid_solution(solution)
        assert stats.nodes_expanded > 0
        assert stats.max_depth == 81

    def test_contradictory_givens(self, solver_cls):
        board = SudokuBoard.from_string(CONTRADICTORY)
        assert not consistent(board)

        solution, stats = solver_cls().solve(board)

        assert solution is None
        assert not stats.solved
        assert stats.nodes_expanded == 1
        assert stats.children_generated == 0

    def test_one_empty_cell(self, solver_cls):
        board = SudokuBoard.from_string(ONE_EMPTY)
        solution, stats = solver_cls().solve(board)

        assert solution.to_string() == CLASSIC_SOLUTION
        assert stats.children_generated <= 9
        assert stats.max_depth == 1

    def test_complete_valid_grid_returned_immediately(self, solver_cls):
        board = SudokuBoard.from_string(CLASSIC_SOLUTION)
        solution, stats = solver_cls().solve(board)

        assert solution == board
        assert stats.nodes_expanded == 0
        assert stats.children_generated == 0

    def test_complete_invalid_grid_fails_immediately(self, solver_cls):
        solution, stats = solver_cls().solve(SudokuBoard.from_string(_broken_solution()))

        assert solution is None
        assert stats.nodes_expanded == 0

    def test_input_not_modified(self, solver_cls):
        board = SudokuBoard.from_string(NEAR_COMPLETE[1])
        before = board.to_string()
        solver_cls().solve(board)
        assert board.to_string() == before

    def test_metrics_reset_between_calls(self, solver_cls):
        solver = solver_cls()
        _, first = solver.solve(SudokuBoard.from_string(NEAR_COMPLETE[0]))
        expanded = first.nodes_expanded

        _, second = solver.solve(SudokuBoard.from_string(ONE_EMPTY))

        assert second is not first
        assert first.nodes_expanded == expanded
        assert second.max_depth == 1


class TestPlainBacktracking:
    """Tests specific to plain backtracking."""

    def test_root_generates_every_value(self):
        """No pruning: all nine values spawn a child at the only empty cell."""
        _, stats = BacktrackingSolver().solve(SudokuBoard.from_string(ONE_EMPTY))
        assert stats.children_generated == 9

    def test_static_order(self):
        solver = BacktrackingSolver()
        problem = initiate(SudokuBoard.from_string(NEAR_COMPLETE[1]))
        root = solver.root_node(problem)

        assert root.position == problem.board.next_empty()
        child = solver.expand(root)[0]
        assert child.position == problem.board.next_empty(root.position)
        assert child.parent is root
        assert child.depth == 1
        assert [node is root for node in child.ancestors()] == [True]

    def test_keeps_children_with_empty_domains(self):
        problem, position = _dead_end_problem()
        node = SearchNode(problem=problem, parent=None, position=position)

        children = BacktrackingSolver().expand(node)

        assert len(children) == 1
        assert has_empty_domain(children[0].problem.domains, children[0].problem.board)


class TestExplorationOrder:
    """The most recently generated child is explored first."""

    @pytest.mark.parametrize("solver_cls", [BacktrackingSolver, ForwardCheckingSolver])
    def test_highest_value_tried_first(self, solver_cls):
        solution, _ = solver_cls().solve(SudokuBoard())
        assert solution.get_row(0).tolist() == [9, 8, 7, 6, 5, 4, 3, 2, 1]

    def test_values_popped_downwards(self):
        """9, 8, 7 and 6 are rejected at the centre before 5 fits."""
        _, stats = BacktrackingSolver().solve(SudokuBoard.from_string(ONE_EMPTY))

        # Root plus five popped children
        assert stats.nodes_expanded == 6

    def test_children_in_ascending_generation_order(self):
        solver = BacktrackingSolver()
        root = solver.root_node(initiate(SudokuBoard()))

        values = [child.problem.board.get(0, 0) for child in solver.expand(root)]
        assert values == list(range(1, 10))

    def test_least_constraining_generated_last(self):
        solver = MRVLCVSolver()
        problem = initiate(SudokuBoard()).assign((4, 4), 5)
        root = SearchNode(problem=problem, parent=None, position=(0, 0))

        values = [child.problem.board.get(0, 0) for child in solver.expand(root)]
        assert values[-1] == 5


def _dead_end_problem():
    """
    A problem where the only value left for (0, 7) wipes out (0, 8).

    Row 0 holds 1-7 and (1, 8) holds 9, so (0, 7) and (0, 8) can only take 8.
    """
    problem = initiate(SudokuBoard())
    for col in range(7):
        problem = problem.assign((0, col), col + 1)
    problem = problem.assign((1, 8), 9)
    return problem, (0, 7)


def _checking(solver_cls):
    """Subclass a solver so that every expansion is checked for empty domains."""

    class Checking(solver_cls):
        checked = 0

        def expand(self, node):
            children = super().expand(node)
            for child in children:
                assert not has_empty_domain(child.problem.domains, child.problem.board)
            self.checked += len(children)
            return children

    return Checking


class TestForwardChecking:
    """Tests for forward checking pruning."""

    @pytest.mark.parametrize("solver_cls", [ForwardCheckingSolver, MRVLCVSolver])
    def test_prunes_empty_domain_children(self, solver_cls):
        problem, position = _dead_end_problem()
        node = SearchNode(problem=problem, parent=None, position=position)

        assert solver_cls().expand(node) == []

    @pytest.mark.parametrize("puzzle", NEAR_COMPLETE + ["0" * 81])
    @pytest.mark.parametrize("solver_cls", [ForwardCheckingSolver, MRVLCVSolver])
    def test_children_never_have_empty_domains(self, solver_cls, puzzle):
        """Every child generated during a full solve keeps all domains open."""
        solver = _checking(solver_cls)()
        solution, stats = solver.solve(SudokuBoard.from_string(puzzle))

        assert stats.solved
        assert is_valid_solution(solution)
        assert solver.checked == stats.children_generated > 0

    def test_fewer_children_than_plain(self):
        board = SudokuBoard()
        _, plain = BacktrackingSolver().solve(board)
        _, forward = ForwardCheckingSolver().solve(board)
        assert forward.children_generated <= plain.children_generated


class TestMRVLCV:
    """Tests for MRV cell selection and LCV value ordering."""

    def test_mrv_picks_smallest_domain(self):
        solver = MRVLCVSolver()
        problem = initiate(SudokuBoard()).assign((4, 4), 5)

        # Every peer of (4, 4) has 8 candidates; (0, 4) is the first of them
        assert solver.select_position(problem, (4, 4)) == (0, 4)

    def test_mrv_tie_broken_by_scan_order(self):
        solver = MRVLCVSolver()
        problem = initiate(SudokuBoard())
        assert solver.select_position(problem, None) == (0, 0)

    def test_lcv_orders_least_constraining_first(self):
        solver = MRVLCVSolver()
        problem = initiate(SudokuBoard()).assign((4, 4), 5)

        assert solver.least_constraining(problem, (0, 0)) == [5, 1, 2, 3, 4, 6, 7, 8, 9]
        assert solver.order_values(problem, (0, 0)) == [9, 8, 7, 6, 4, 3, 2, 1, 5]

    def test_first_child_explored_first(self):
        """The least constraining value is the first child expanded."""
        solution, _ = MRVLCVSolver().solve(SudokuBoard())
        assert solution.get(0, 0) == 1


class TestEntryPoints:
    """Tests for the solver registry and solve()."""

    def test_algorithms_listed(self):
        assert ALGORITHMS == ["backtracking", "forward_checking", "mrv_lcv", "annealing"]

    def test_dfs_alias(self):
        assert isinstance(get_solver("dfs"), BacktrackingSolver)
        assert type(get_solver("backtracking")) is BacktrackingSolver

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            get_solver("genetic")

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_solve_accepts_string(self, algorithm):
        solution, stats = solve(ONE_EMPTY, algorithm=algorithm)

        assert stats.solved
        assert solution.to_string() == CLASSIC_SOLUTION

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_solve_complete_grid(self, algorithm):
        solution, stats = solve(CLASSIC_SOLUTION, algorithm=algorithm)

        assert solution.to_string() == CLASSIC_SOLUTION
        assert stats.nodes_expanded == 0
        assert stats.iterations == 0

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_solve_complete_invalid_grid(self, algorithm):
        solution, stats = solve(_broken_solution(), algorithm=algorithm)

        assert solution is None
        assert not stats.solved

    def test_solve_accepts_nested_list(self):
        data = SudokuBoard.from_string(ONE_EMPTY).to_2d_list()
        solution, _ = solve(data, algorithm="forward_checking")
        assert solution.get(4, 4) == 5

    def test_solver_kwargs_passed(self):
        _, stats = solve(ONE_EMPTY, algorithm="backtracking", track_memory=True)
        assert stats.memory_bytes > 0
        assert stats.algorithm == "Backtracking"


class FixedAnswerSolver(BaseSolver):
    """Answers every puzzle with the same complete grid."""

    name = "Fixed Answer"

    def _solve(self, board):
        return SudokuBoard.from_string(CLASSIC_SOLUTION)


class TestBaseSolver:
    """Tests for the shared solve() wrapper."""

    def test_answer_must_keep_the_givens(self):
        """A valid grid that overwrites a given digit is not a solution."""
        puzzle = SudokuBoard()
        puzzle.set(0, 0, 1)
        assert CLASSIC_SOLUTION[0] != "1"

        solution, stats = FixedAnswerSolver().solve(puzzle)

        assert solution is None
        assert not stats.solved

    def test_answer_matching_the_givens_accepted(self):
        solution, stats = FixedAnswerSolver().solve(SudokuBoard.from_string(NEAR_COMPLETE[0]))

        assert stats.solved
        assert solution.to_string() == CLASSIC_SOLUTION

    def test_memory_tracking_stops_its_own_trace(self):
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc already enabled for this interpreter")

        _, stats = BacktrackingSolver(track_memory=True).solve(SudokuBoard.from_string(ONE_EMPTY))

        assert stats.memory_bytes > 0
        assert not tracemalloc.is_tracing()

    def test_memory_tracking_leaves_running_trace(self):
        """Tracing started by the caller is still on after solve()."""
        started = not tracemalloc.is_tracing()
        if started:
            tracemalloc.start()
        try:
            _, stats = BacktrackingSolver(track_memory=True).solve(
                SudokuBoard.from_string(ONE_EMPTY)
            )

            assert tracemalloc.is_tracing()
            assert stats.memory_bytes > 0
        finally:
            if started:
                tracemalloc.stop()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
