"""
Linear-space global alignment (Hirschberg).

The longer of the two sequences is halved at every level (A on a tie). The
last rows of the forward problem on the first half and of the reversed
problem on the second half run along the shorter sequence, and meet where
an optimal path crosses the middle; both halves are then solved
independently. Only rows over the shorter sequence are kept, so memory is
O(min(n, m)). Only one optimal alignment is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .costs import EPSILON, CostModel
from .linear import LinearGap, last_row
from .matrices import GAP, AlignmentContext, Cell
from .reconstruct import Alignment, make_alignment, reconstruct_alignment
from .traceback import enumerate_tracebacks

logger = logging.getLogger(__name__)

Columns = List[Tuple[str, str]]


@dataclass
class HirschbergRound:
    """One split: the sub-problem, the two linear-space rows and the result."""

    seq_a: str
    seq_b: str
    offset_a: int
    offset_b: int
    middle: int
    forward_row: List[float]
    mirrored_backward_row: List[float]
    sum_row: List[float]
    split: int
    halved: str = "A"

    @property
    def cell(self) -> Cell:
        """Cell of the full matrix the optimal path passes through."""
        if self.halved == "B":
            return Cell(self.offset_b + self.middle, self.offset_a + self.split)
        return Cell(self.offset_b + self.split, self.offset_a + self.middle)


@dataclass
class HirschbergResult:
    score: float
    alignment: Alignment
    rounds: List[HirschbergRound] = field(default_factory=list)
    truncated: bool = False

    @property
    def trace_cells(self) -> List[Cell]:
        return sorted((r.cell for r in self.rounds), key=lambda c: (c.j, c.i))


def compute_hirschberg(seq_a: str, seq_b: str, costs: CostModel) -> HirschbergResult:
    ctx = AlignmentContext(seq_a, seq_b, costs)
    rounds: List[HirschbergRound] = []
    columns = _divide(ctx.seq_a, ctx.seq_b, 0, 0, costs, rounds)
    alignment = make_alignment(
        columns, start_a=0, end_a=len(ctx.seq_a), start_b=0, end_b=len(ctx.seq_b),
    )
    if len(ctx.seq_a) > len(ctx.seq_b):
        ctx = AlignmentContext(ctx.seq_b, ctx.seq_a, costs.swapped())
    score = float(last_row(ctx)[-1])
    logger.debug("hirschberg: %d round(s), score %s", len(rounds), score)
    return HirschbergResult(score=score, alignment=alignment, rounds=rounds)


def _divide(
    a: str,
    b: str,
    offset_a: int,
    offset_b: int,
    costs: CostModel,
    rounds: List[HirschbergRound],
) -> Columns:
    if not a:
        return [(GAP, ch) for ch in b]
    if not b:
        return [(ch, GAP) for ch in a]
    if len(a) == 1 or len(b) == 1:
        return _solve_small(a, b, costs)

    if len(a) >= len(b):
        middle = len(a) // 2
        # A runs down the rows here, so its gaps are charged as insertions.
        row_costs = costs.swapped()
        forward = last_row(AlignmentContext(b, a[:middle], row_costs))
        backward = last_row(AlignmentContext(b[::-1], a[middle:][::-1], row_costs))
        halved = "A"
    else:
        middle = len(b) // 2
        forward = last_row(AlignmentContext(a, b[:middle], costs))
        backward = last_row(AlignmentContext(a[::-1], b[middle:][::-1], costs))
        halved = "B"
    mirrored = backward[::-1]
    sums = forward + mirrored
    split = _first_optimum(sums, costs)

    rounds.append(HirschbergRound(
        seq_a=a,
        seq_b=b,
        offset_a=offset_a,
        offset_b=offset_b,
        middle=middle,
        forward_row=forward.tolist(),
        mirrored_backward_row=mirrored.tolist(),
        sum_row=sums.tolist(),
        split=split,
        halved=halved,
    ))

    if halved == "A":
        left = _divide(a[:middle], b[:split], offset_a, offset_b, costs, rounds)
        right = _divide(a[middle:], b[split:], offset_a + middle, offset_b + split, costs, rounds)
    else:
        left = _divide(a[:split], b[:middle], offset_a, offset_b, costs, rounds)
        right = _divide(a[split:], b[middle:], offset_a + split, offset_b + middle, costs, rounds)
    return left + right


def _first_optimum(values: np.ndarray, costs: CostModel) -> int:
    best = values.min() if costs.is_distance else values.max()
    return int(np.flatnonzero(np.abs(values - best) < EPSILON)[0])


def _solve_small(a: str, b: str, costs: CostModel) -> Columns:
    ctx = AlignmentContext(a, b, costs)
    strategy = LinearGap(local=False)
    matrices = strategy.build(ctx)
    path = enumerate_tracebacks(strategy, ctx, matrices, limit=1).paths[0]
    return reconstruct_alignment(ctx, path).columns()
