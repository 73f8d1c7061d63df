"""
Length-normalized local alignment (Arslan, Egecioglu and Pevzner).

Maximises ``S / (l + L)`` where S is the local score, l the number of
aligned characters of both sequences and L a fixed length bonus. Solved by
Dinkelbach iteration: each round runs Smith-Waterman with the scores
shifted by the current ratio until the ratio stops changing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .costs import EPSILON, CostModel
from .linear import LinearGap
from .matrices import AlignmentContext, Matrices
from .reconstruct import Alignment, reconstruct_alignment, score_alignment
from .traceback import enumerate_tracebacks

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 5.0
MAX_NUMBER_ITERATIONS = 10


@dataclass
class NormalizedIteration:
    ratio: float
    shifted_score: float
    alignment: Alignment
    score: float
    next_ratio: float


@dataclass
class NormalizedResult:
    score: float
    raw_score: float
    alignment: Optional[Alignment]
    iterations: List[NormalizedIteration] = field(default_factory=list)
    matrices: Optional[Matrices] = None

    @property
    def converged(self) -> bool:
        return bool(self.iterations) and abs(
            self.iterations[-1].next_ratio - self.iterations[-1].ratio
        ) < EPSILON


def shifted_costs(costs: CostModel, ratio: float) -> CostModel:
    """Costs of the Dinkelbach sub-problem for ``ratio``."""
    substitution = None
    if costs.substitution is not None:
        base = costs.substitution

        def substitution(a, b):
            return base(a, b) - 2 * ratio

    return costs.with_changes(
        match=costs.match - 2 * ratio,
        mismatch=costs.mismatch - 2 * ratio,
        deletion=costs.deletion - ratio,
        insertion=costs.insertion - ratio,
        substitution=substitution,
    )


def compute_normalized(
    seq_a: str,
    seq_b: str,
    costs: CostModel,
    length: float = DEFAULT_LENGTH,
    max_iterations: int = MAX_NUMBER_ITERATIONS,
) -> NormalizedResult:
    if costs.is_distance:
        raise ValueError("normalized local alignment needs similarity scores")
    if length <= 0:
        raise ValueError("length must be positive")

    strategy = LinearGap(local=True)
    ratio = 0.0
    result = NormalizedResult(score=0.0, raw_score=0.0, alignment=None)

    for _ in range(max_iterations):
        ctx = AlignmentContext(seq_a, seq_b, shifted_costs(costs, ratio))
        matrices = strategy.build(ctx)
        paths = enumerate_tracebacks(strategy, ctx, matrices, limit=1).paths
        if not paths:
            break

        alignment = reconstruct_alignment(ctx, paths[0])
        score = score_alignment(alignment, costs)
        characters = len(alignment.ungapped_a) + len(alignment.ungapped_b)
        next_ratio = score / (characters + length)
        result.iterations.append(NormalizedIteration(
            ratio=ratio,
            shifted_score=strategy.score(ctx, matrices),
            alignment=alignment,
            score=score,
            next_ratio=next_ratio,
        ))
        result.score, result.raw_score = next_ratio, score
        result.alignment, result.matrices = alignment, matrices
        logger.debug("normalized: ratio %.6f -> %.6f", ratio, next_ratio)

        if abs(next_ratio - ratio) < EPSILON:
            break
        ratio = next_ratio

    return result
