"""
Arbitrary gap functions after Waterman, Smith and Beyer.

Every gap run is a single jump of length k costing ``g(k)``, so each cell
looks back along its whole row and column. Runs in O(n * m * max(n, m)).
"""

from __future__ import annotations

from typing import List

from .costs import approx_equal
from .matrices import AlignmentContext, Cell, Matrices
from .strategy import AlignmentStrategy


class GeneralGap(AlignmentStrategy):

    name = "waterman_smith_beyer"
    local = False

    def init_boundary(self, ctx: AlignmentContext, matrices: Matrices) -> None:
        d = matrices.default
        costs = ctx.costs
        d[0, 0] = 0.0
        for i in range(1, ctx.height):
            d[i, 0] = costs.gap(i)
        for j in range(1, ctx.width):
            d[0, j] = costs.gap(j)

    def fill_cell(self, ctx: AlignmentContext, matrices: Matrices, i: int, j: int) -> None:
        d = matrices.default
        costs = ctx.costs
        candidates = [d[i - 1, j - 1] + ctx.substitution(i, j)]
        candidates.extend(d[i, j - k] + costs.gap(k) for k in range(1, j + 1))
        candidates.extend(d[i - k, j] + costs.gap(k) for k in range(1, i + 1))
        d[i, j] = costs.optimum(candidates)

    def predecessors(self, ctx: AlignmentContext, matrices: Matrices, cell: Cell) -> List[Cell]:
        d = matrices.default
        costs = ctx.costs
        i, j = cell.i, cell.j
        value = d[i, j]
        found = []
        if i > 0 and j > 0 and approx_equal(d[i - 1, j - 1] + ctx.substitution(i, j), value):
            found.append(Cell(i - 1, j - 1))
        for k in range(1, j + 1):
            if approx_equal(d[i, j - k] + costs.gap(k), value):
                found.append(Cell(i, j - k))
        for k in range(1, i + 1):
            if approx_equal(d[i - k, j] + costs.gap(k), value):
                found.append(Cell(i - k, j))
        return found
