"""
Linear gap costs: Needleman-Wunsch (global) and Smith-Waterman (local).
"""

from __future__ import annotations

from typing import List

import numpy as np

from .costs import approx_equal
from .matrices import AlignmentContext, Cell, Matrices
from .strategy import AlignmentStrategy


class LinearGap(AlignmentStrategy):

    def __init__(self, local: bool = False):
        self.local = local
        self.name = "smith_waterman" if local else "needleman_wunsch"

    def init_boundary(self, ctx: AlignmentContext, matrices: Matrices) -> None:
        d = matrices.default
        costs = ctx.costs
        d[0, 0] = 0.0
        for i in range(1, ctx.height):
            d[i, 0] = 0.0 if self.local else i * costs.insertion
        for j in range(1, ctx.width):
            d[0, j] = 0.0 if self.local else j * costs.deletion

    def fill_cell(self, ctx: AlignmentContext, matrices: Matrices, i: int, j: int) -> None:
        d = matrices.default
        costs = ctx.costs
        candidates = [
            d[i - 1, j - 1] + ctx.substitution(i, j),
            d[i - 1, j] + costs.insertion,
            d[i, j - 1] + costs.deletion,
        ]
        if self.local:
            candidates.append(0.0)
        d[i, j] = costs.optimum(candidates)

    def predecessors(self, ctx: AlignmentContext, matrices: Matrices, cell: Cell) -> List[Cell]:
        d = matrices.default
        costs = ctx.costs
        i, j = cell.i, cell.j
        value = d[i, j]
        found = []
        if i > 0 and j > 0 and d[i - 1, j - 1] is not None:
            if approx_equal(d[i - 1, j - 1] + ctx.substitution(i, j), value):
                found.append(Cell(i - 1, j - 1))
        if i > 0 and d[i - 1, j] is not None:
            if approx_equal(d[i - 1, j] + costs.insertion, value):
                found.append(Cell(i - 1, j))
        if j > 0 and d[i, j - 1] is not None:
            if approx_equal(d[i, j - 1] + costs.deletion, value):
                found.append(Cell(i, j - 1))
        return found


def last_row(ctx: AlignmentContext) -> np.ndarray:
    """
    Last row of the global linear-gap matrix, kept in linear space.

    Only two rows of length ``len(A) + 1`` are alive at any time; the origin
    is a positive zero whatever the sign of the gap cost.
    """
    costs = ctx.costs
    pick = min if costs.is_distance else max
    previous = np.arange(ctx.width, dtype=np.float64) * costs.deletion
    previous[0] = 0.0
    for i in range(1, ctx.height):
        current = np.empty(ctx.width, dtype=np.float64)
        current[0] = i * costs.insertion
        for j in range(1, ctx.width):
            current[j] = pick(
                previous[j - 1] + ctx.substitution(i, j),
                previous[j] + costs.insertion,
                current[j - 1] + costs.deletion,
            )
        previous = current
    return previous
