"""
Common driver for the matrix-building strategies.

A strategy knows how to create its grids, initialise their borders, fill a
single cell and list the predecessors of a cell. ``build`` runs the usual
row-major fill and freezes the result.
"""

from __future__ import annotations

import logging
from typing import List

import numpy as np

from .costs import EPSILON, approx_equal
from .matrices import AlignmentContext, Cell, Matrices, MatrixLabel, ScoreMatrix

logger = logging.getLogger(__name__)


class AlignmentStrategy:
    """Base class of the linear, affine and general-gap builders."""

    name = "strategy"
    local = False

    def create_matrices(self, ctx: AlignmentContext) -> Matrices:
        return Matrices(default=ScoreMatrix(ctx.height, ctx.width))

    def init_boundary(self, ctx: AlignmentContext, matrices: Matrices) -> None:
        raise NotImplementedError

    def fill_cell(self, ctx: AlignmentContext, matrices: Matrices, i: int, j: int) -> None:
        raise NotImplementedError

    def predecessors(self, ctx: AlignmentContext, matrices: Matrices, cell: Cell) -> List[Cell]:
        raise NotImplementedError

    def build(self, ctx: AlignmentContext) -> Matrices:
        matrices = self.create_matrices(ctx)
        self.init_boundary(ctx, matrices)
        for i in range(1, ctx.height):
            for j in range(1, ctx.width):
                self.fill_cell(ctx, matrices, i, j)
        logger.debug(
            "%s filled %d x %d grid(s): %s",
            self.name, ctx.height, ctx.width, ", ".join(label.value for label in matrices.grids()),
        )
        return matrices.freeze()

    def score(self, ctx: AlignmentContext, matrices: Matrices) -> float:
        if self.local:
            best = self._local_optimum(ctx, matrices)
            if best is None or not ctx.costs.is_better(best, 0.0):
                return 0.0
            return best
        value = matrices.default[ctx.height - 1, ctx.width - 1]
        if value is None:
            raise AssertionError("bottom-right cell of a global matrix is unreachable")
        return value

    def terminal_cells(self, ctx: AlignmentContext, matrices: Matrices) -> List[Cell]:
        """Cells a traceback starts from; row-major order for local alignments."""
        if not self.local:
            return [Cell(ctx.height - 1, ctx.width - 1)]
        best = self._local_optimum(ctx, matrices)
        if best is None or not ctx.costs.is_better(best, 0.0):
            return []
        values = matrices.default.as_array()
        with np.errstate(invalid="ignore"):
            hits = np.argwhere(np.abs(values - best) < EPSILON)
        return [Cell(int(i), int(j)) for i, j in hits]

    def is_origin(self, ctx: AlignmentContext, matrices: Matrices, cell: Cell) -> bool:
        if cell.label is not MatrixLabel.DEFAULT:
            return False
        if not self.local:
            return cell.i == 0 and cell.j == 0
        return approx_equal(matrices.default[cell.i, cell.j], 0.0)

    def _local_optimum(self, ctx: AlignmentContext, matrices: Matrices):
        values = matrices.default.as_array()
        values = values[~np.isnan(values)]
        if values.size == 0:
            return None
        best = values.min() if ctx.costs.is_distance else values.max()
        return float(best)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(local={self.local})"
