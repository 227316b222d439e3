"""Tests for candidate domains and single-step propagation."""

import pytest
import numpy as np
from sudoku_csp.core.board import SudokuBoard
from sudoku_csp.core.problem import initiate
from sudoku_csp.core.domains import (
    full_domains,
    update_domain,
    candidates,
    has_empty_domain,
    eliminations,
    peer_mask,
)


class TestUpdateDomain:
    """Tests for update_domain."""

    def test_removes_value_from_peers(self):
        domains = full_domains(SudokuBoard())
        updated = update_domain(domains, (4, 4), 5)

        # Row, column and box peers lose 5
        assert not updated[4, 0, 4]
        assert not updated[0, 4, 4]
        assert not updated[3, 5, 4]

        # Other values stay
        assert updated[4, 0, 0]

        # Unrelated cells keep 5
        assert updated[0, 0, 4]
        assert updated[8, 7, 4]

    def test_assigned_cell_domain_emptied(self):
        domains = full_domains(SudokuBoard())
        updated = update_domain(domains, (2, 6), 1)
        assert not updated[2, 6].any()

    def test_does_not_mutate_input(self):
        """Calling twice gives equal results and leaves the input alone."""
        domains = full_domains(SudokuBoard())
        original = domains.copy()

        first = update_domain(domains, (0, 0), 3)
        second = update_domain(domains, (0, 0), 3)

        assert np.array_equal(domains, original)
        assert np.array_equal(first, second)
        assert first is not second

    def test_single_hop_only(self):
        """Emptying a peer's domain does not cascade further."""
        domains = full_domains(SudokuBoard())
        # Leave (0, 1) with only the value 2
        domains[0, 1] = False
        domains[0, 1, 1] = True

        updated = update_domain(domains, (0, 0), 2)

        assert not updated[0, 1].any()
        # Cells around (0, 1) are untouched apart from the direct removal
        assert updated[8, 1].all()


class TestDomainHelpers:
    """Tests for domain queries."""

    def test_full_domains_respects_givens(self):
        board = SudokuBoard()
        board.set(1, 1, 7)
        domains = full_domains(board)

        assert not domains[1, 1].any()
        # No propagation from the given
        assert domains[1, 2].all()

    def test_candidates_ascending(self):
        domains = full_domains(SudokuBoard())
        domains = update_domain(domains, (0, 1), 4)
        domains = update_domain(domains, (1, 0), 9)
        assert candidates(domains, (0, 0)) == [1, 2, 3, 5, 6, 7, 8]

    def test_has_empty_domain(self):
        problem = initiate(SudokuBoard())
        assert not has_empty_domain(problem.domains, problem.board)

        domains = problem.domains.copy()
        domains[5, 5] = False
        assert has_empty_domain(domains, problem.board)

    def test_assigned_cells_ignored_by_empty_domain_check(self):
        problem = initiate(SudokuBoard()).assign((0, 0), 1)
        assert not problem.domains[0, 0].any()
        assert not has_empty_domain(problem.domains, problem.board)

    def test_peer_mask(self):
        mask = peer_mask((4, 4))
        assert mask.sum() == 20
        assert not mask[4, 4]
        assert mask[3, 3]
        assert not mask[0, 0]

    def test_eliminations(self):
        problem = initiate(SudokuBoard()).assign((4, 4), 5)

        # (0, 4) and (4, 0) already lost 5
        assert eliminations(problem.domains, problem.board, (0, 0), 5) == 18
        assert eliminations(problem.domains, problem.board, (0, 0), 1) == 20


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
