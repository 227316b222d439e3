"""Depth-first backtracking solvers over copy-on-write search nodes."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .base_solver import BaseSolver
from ..core.board import SIZE, SudokuBoard
from ..core.domains import candidates, domain_sizes, eliminations, has_empty_domain
from ..core.problem import SudokuProblem, initiate
from ..core.validator import consistent, is_goal

Position = Tuple[int, int]


@dataclass(eq=False)
class SearchNode:
    """
    A node of the backtracking tree.

    Each node owns its own problem snapshot and points back at its parent.
    Parents never reference their children, so a node is released as soon
    as the frontier and its descendants drop it.

    Attributes:
        problem: Grid and domains at this node.
        parent: The node this one was expanded from, None for the root.
        position: Cell to assign when this node is expanded, None once no
            empty cell is left to choose.
        depth: Length of the ancestor chain (root is 0).
    """
    problem: SudokuProblem
    parent: Optional[SearchNode]
    position: Optional[Position]
    depth: int = 0

    def ancestors(self) -> Iterator[SearchNode]:
        """Walk the parent chain up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


class BacktrackingSolver(BaseSolver):
    """
    Plain chronological backtracking.

    Cells are filled in row-major order and every value left in a cell's
    domain spawns a child. Inconsistent nodes are discarded when popped
    from the frontier; no other pruning takes place.

    The search is iterative: a LIFO frontier of nodes replaces recursion,
    and since every node carries its own snapshot there is nothing to undo
    when a branch fails.
    """

    name = "Backtracking"

    # Drop children that leave an unassigned cell without candidates
    prune_empty_domains = False

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """Solve using frontier-based depth-first search."""
        problem = initiate(board)

        # Nothing to assign: the grid stands or falls on its own
        if problem.board.is_complete():
            return problem.board if consistent(problem) else None

        frontier = [self.root_node(problem)]

        while frontier:
            node = frontier.pop()
            self.stats.nodes_expanded += 1

            if not consistent(node.problem):
                continue

            if is_goal(node.problem):
                self.stats.extra["solution_depth"] = node.depth
                return node.problem.board

            # The last child generated is popped first
            frontier.extend(self.expand(node))

        return None

    def root_node(self, problem: SudokuProblem) -> SearchNode:
        """Create the root node of the search tree for a problem."""
        return SearchNode(
            problem=problem,
            parent=None,
            position=self.select_position(problem, None),
        )

    def expand(self, node: SearchNode) -> List[SearchNode]:
        """
        Generate the children of a node, one per value tried at its position.

        Children come back in generation order; the frontier explores the
        last one first.
        """
        if node.position is None:
            return []

        children = []
        for value in self.order_values(node.problem, node.position):
            child_problem = node.problem.assign(node.position, value)

            if self.prune_empty_domains and has_empty_domain(
                child_problem.domains, child_problem.board
            ):
                continue

            children.append(SearchNode(
                problem=child_problem,
                parent=node,
                position=self.select_position(child_problem, node.position),
                depth=node.depth + 1,
            ))

        self.stats.children_generated += len(children)
        if children:
            self.stats.max_depth = max(self.stats.max_depth, node.depth + 1)

        return children

    def select_position(
        self,
        problem: SudokuProblem,
        last: Optional[Position]
    ) -> Optional[Position]:
        """Next empty cell after the one just assigned, row-major."""
        return problem.board.next_empty(last)

    def order_values(self, problem: SudokuProblem, position: Position) -> List[int]:
        """Values to try at a cell: its domain in ascending order."""
        return candidates(problem.domains, position)


class ForwardCheckingSolver(BacktrackingSolver):
    """
    Backtracking with forward checking.

    After each assignment the value is struck from the domains of the
    cell's peers. A child that leaves any unassigned cell with an empty
    domain is never generated.
    """

    name = "Forward Checking"
    prune_empty_domains = True


class MRVLCVSolver(ForwardCheckingSolver):
    """
    Forward checking with dynamic variable and value ordering.

    - Minimum Remaining Values: expand the unassigned cell with the fewest
      candidates, first one in row-major order on ties.
    - Least Constraining Value: explore first the values that remove the
      fewest candidates from unassigned peers.
    """

    name = "MRV+LCV"

    def select_position(
        self,
        problem: SudokuProblem,
        last: Optional[Position]
    ) -> Optional[Position]:
        """Select the unassigned cell with the smallest non-empty domain."""
        sizes = domain_sizes(problem.domains)
        open_cells = (problem.board.grid == 0) & (sizes > 0)
        if not open_cells.any():
            return None

        masked = np.where(open_cells, sizes, SIZE + 1)
        row, col = divmod(int(np.argmin(masked)), SIZE)
        return row, col

    def least_constraining(self, problem: SudokuProblem, position: Position) -> List[int]:
        """Candidates sorted by how many peer candidates they would eliminate."""
        return sorted(
            candidates(problem.domains, position),
            key=lambda value: eliminations(problem.domains, problem.board, position, value)
        )

    def order_values(self, problem: SudokuProblem, position: Position) -> List[int]:
        """Generate the least constraining value last so it is popped first."""
        return list(reversed(self.least_constraining(problem, position)))
