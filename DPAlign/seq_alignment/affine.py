"""
Affine gap costs after Gotoh, with the three grids D, P and Q.

P holds the best score of alignments ending with a vertical gap run
(character of B against a gap), Q those ending with a horizontal run.
"""

from __future__ import annotations

from typing import List

from .costs import approx_equal
from .matrices import AlignmentContext, Cell, Matrices, MatrixLabel, ScoreMatrix
from .strategy import AlignmentStrategy


class AffineGap(AlignmentStrategy):

    def __init__(self, local: bool = False):
        self.local = local
        self.name = "gotoh_local" if local else "gotoh"

    def create_matrices(self, ctx: AlignmentContext) -> Matrices:
        return Matrices(
            default=ScoreMatrix(ctx.height, ctx.width, MatrixLabel.DEFAULT),
            vertical=ScoreMatrix(ctx.height, ctx.width, MatrixLabel.VERTICAL),
            horizontal=ScoreMatrix(ctx.height, ctx.width, MatrixLabel.HORIZONTAL),
        )

    def init_boundary(self, ctx: AlignmentContext, matrices: Matrices) -> None:
        d, p, q = matrices.default, matrices.vertical, matrices.horizontal
        costs = ctx.costs
        d[0, 0] = 0.0
        for i in range(1, ctx.height):
            if self.local:
                d[i, 0] = 0.0
            else:
                d[i, 0] = p[i, 0] = costs.base_cost + i * costs.enlargement
        for j in range(1, ctx.width):
            if self.local:
                d[0, j] = 0.0
            else:
                d[0, j] = q[0, j] = costs.base_cost + j * costs.enlargement

    def fill_cell(self, ctx: AlignmentContext, matrices: Matrices, i: int, j: int) -> None:
        d, p, q = matrices.default, matrices.vertical, matrices.horizontal
        costs = ctx.costs
        p[i, j] = costs.optimum([
            _plus(d[i - 1, j], costs.gap_open),
            _plus(p[i - 1, j], costs.gap_extend),
        ])
        q[i, j] = costs.optimum([
            _plus(d[i, j - 1], costs.gap_open),
            _plus(q[i, j - 1], costs.gap_extend),
        ])
        candidates = [_plus(d[i - 1, j - 1], ctx.substitution(i, j)), p[i, j], q[i, j]]
        if self.local:
            candidates.append(0.0)
        d[i, j] = costs.optimum(candidates)

    def predecessors(self, ctx: AlignmentContext, matrices: Matrices, cell: Cell) -> List[Cell]:
        d, p, q = matrices.default, matrices.vertical, matrices.horizontal
        costs = ctx.costs
        i, j = cell.i, cell.j
        value = matrices.value(cell)
        found = []

        if cell.label is MatrixLabel.DEFAULT:
            if i > 0 and j > 0 and approx_equal(_plus(d[i - 1, j - 1], ctx.substitution(i, j)), value):
                found.append(Cell(i - 1, j - 1))
            if approx_equal(p[i, j], value):
                found.append(Cell(i, j, MatrixLabel.VERTICAL))
            if approx_equal(q[i, j], value):
                found.append(Cell(i, j, MatrixLabel.HORIZONTAL))

        elif cell.label is MatrixLabel.VERTICAL and i > 0:
            if approx_equal(_plus(p[i - 1, j], costs.gap_extend), value):
                found.append(Cell(i - 1, j, MatrixLabel.VERTICAL))
            if approx_equal(_plus(d[i - 1, j], costs.gap_open), value):
                found.append(Cell(i - 1, j))

        elif cell.label is MatrixLabel.HORIZONTAL and j > 0:
            if approx_equal(_plus(q[i, j - 1], costs.gap_extend), value):
                found.append(Cell(i, j - 1, MatrixLabel.HORIZONTAL))
            if approx_equal(_plus(d[i, j - 1], costs.gap_open), value):
                found.append(Cell(i, j - 1))

        return found


def _plus(value, cost):
    return None if value is None else value + cost
