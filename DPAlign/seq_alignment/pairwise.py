"""
Pairwise Sequence Alignment Module
Dynamic programming alignment with all co-optimal tracebacks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .affine import AffineGap
from .costs import CalculationMode, CostModel, EvaluationKind
from .general_gap import GeneralGap
from .hirschberg import compute_hirschberg
from .linear import LinearGap
from .matrices import AlignmentContext, Matrices
from .normalized import DEFAULT_LENGTH, compute_normalized
from .reconstruct import Alignment, reconstruct_alignments
from .strategy import AlignmentStrategy
from .substitution import get_substitution
from .traceback import MAX_NUMBER_TRACEBACKS, TracebackPath, TracebackResult, enumerate_tracebacks

logger = logging.getLogger(__name__)

STRATEGIES: Dict[EvaluationKind, AlignmentStrategy] = {
    EvaluationKind.NEEDLEMAN_WUNSCH: LinearGap(local=False),
    EvaluationKind.SMITH_WATERMAN: LinearGap(local=True),
    EvaluationKind.GOTOH: AffineGap(local=False),
    EvaluationKind.GOTOH_LOCAL: AffineGap(local=True),
    EvaluationKind.WATERMAN_SMITH_BEYER: GeneralGap(),
}


def get_strategy(kind: Union[str, EvaluationKind]) -> AlignmentStrategy:
    kind = EvaluationKind.parse(kind)
    try:
        return STRATEGIES[kind]
    except KeyError as exc:
        raise ValueError(f"{kind.value} does not build a full score matrix") from exc


@dataclass
class AlignmentResult:
    """Store alignment results and metadata"""
    seq_a: str
    seq_b: str
    kind: EvaluationKind
    score: float
    alignments: List[Alignment] = field(default_factory=list)
    truncated: bool = False
    matrices: Optional[Matrices] = None
    paths: List[TracebackPath] = field(default_factory=list)
    details: Any = None

    @property
    def best(self) -> Optional[Alignment]:
        return self.alignments[0] if self.alignments else None

    def nmatch(self) -> int:
        """Number of matching positions of the first alignment"""
        return self.best.match_count if self.best else 0

    def __str__(self) -> str:
        lines = [
            f"Alignment Score: {self.score}",
            f"Type: {self.kind.value}",
            f"Alignments: {len(self.alignments)}{' (truncated)' if self.truncated else ''}",
        ]
        if self.best is not None:
            lines.append(f"Identity: {self.best.identity:.2%}")
            lines.append(f"Gaps: {self.best.gap_count}")
            lines.append(f"Length: {self.best.length}")
        return "\n".join(lines) + "\n"

    def plot(self, width: int = 80) -> None:
        """Print every alignment in blocks of ``width`` columns"""
        lines = [
            "",
            f"Sequence A: {self.seq_a}",
            f"Sequence B: {self.seq_b}",
            "",
            str(self),
        ]
        for number, alignment in enumerate(self.alignments, start=1):
            lines.append(f"# {number}")
            lines.append(alignment.format(width))
            lines.append("")
        for line in lines:
            print(line)

    def view(self, width: int = 80) -> None:
        """Alias for plot method"""
        self.plot(width)


class PairwiseAligner:
    """Pairwise aligner for one cost model and one algorithm"""

    def __init__(
        self,
        costs: Optional[CostModel] = None,
        kind: Union[str, EvaluationKind] = EvaluationKind.NEEDLEMAN_WUNSCH,
        max_tracebacks: int = MAX_NUMBER_TRACEBACKS,
        normalization_length: float = DEFAULT_LENGTH,
    ):
        """
        Parameters:
        -----------
        costs : CostModel, optional
            Scores and calculation mode (default CostModel())
        kind : str or EvaluationKind
            Algorithm to run (default Needleman-Wunsch)
        max_tracebacks : int
            Maximum number of co-optimal alignments reported (default 10)
        normalization_length : float
            Length bonus L of the normalized local alignment
        """
        if max_tracebacks < 1:
            raise ValueError("max_tracebacks must be positive")
        self.costs = costs if costs is not None else CostModel()
        self.kind = EvaluationKind.parse(kind)
        self.max_tracebacks = max_tracebacks
        self.normalization_length = normalization_length

    @property
    def strategy(self) -> AlignmentStrategy:
        return get_strategy(self.kind)

    def context(self, seq_a: str, seq_b: str) -> AlignmentContext:
        return AlignmentContext(seq_a, seq_b, self.costs)

    def build_matrices(self, ctx: AlignmentContext) -> Matrices:
        return self.strategy.build(ctx)

    def enumerate_tracebacks(self, ctx: AlignmentContext, matrices: Matrices) -> TracebackResult:
        return enumerate_tracebacks(self.strategy, ctx, matrices, limit=self.max_tracebacks)

    def reconstruct_alignments(self, ctx: AlignmentContext, paths: List[TracebackPath]) -> List[Alignment]:
        return reconstruct_alignments(ctx, paths)

    def align(
        self,
        seq_a: str,
        seq_b: str,
        score_only: bool = False,
        verbose: bool = False
    ) -> Union[AlignmentResult, float]:
        """
        Perform pairwise sequence alignment

        Parameters:
        -----------
        seq_a : str
            First sequence (matrix columns)
        seq_b : str
            Second sequence (matrix rows)
        score_only : bool
            If True, return only the alignment score
        verbose : bool
            If True, print the result

        Returns:
        --------
        AlignmentResult or float
            Alignment result object or score if score_only=True
        """
        logger.info("aligning %d x %d residues with %s", len(seq_a), len(seq_b), self.kind.value)

        if self.kind is EvaluationKind.HIRSCHBERG:
            result = self._align_linear_space(seq_a, seq_b)
        elif self.kind is EvaluationKind.ARSLAN_EGECIOGLU_PEVZNER:
            result = self._align_normalized(seq_a, seq_b)
        else:
            ctx = self.context(seq_a, seq_b)
            matrices = self.build_matrices(ctx)
            score = self.strategy.score(ctx, matrices)
            if score_only:
                return score
            traceback = self.enumerate_tracebacks(ctx, matrices)
            result = AlignmentResult(
                seq_a=seq_a,
                seq_b=seq_b,
                kind=self.kind,
                score=score,
                alignments=self.reconstruct_alignments(ctx, traceback.paths),
                truncated=traceback.truncated,
                matrices=matrices,
                paths=traceback.paths,
            )

        if score_only:
            return result.score
        if verbose:
            result.view()
        return result

    def _align_linear_space(self, seq_a: str, seq_b: str) -> AlignmentResult:
        hirschberg = compute_hirschberg(seq_a, seq_b, self.costs)
        return AlignmentResult(
            seq_a=seq_a,
            seq_b=seq_b,
            kind=self.kind,
            score=hirschberg.score,
            alignments=[hirschberg.alignment],
            details=hirschberg,
        )

    def _align_normalized(self, seq_a: str, seq_b: str) -> AlignmentResult:
        normalized = compute_normalized(seq_a, seq_b, self.costs, length=self.normalization_length)
        return AlignmentResult(
            seq_a=seq_a,
            seq_b=seq_b,
            kind=self.kind,
            score=normalized.score,
            alignments=[normalized.alignment] if normalized.alignment is not None else [],
            matrices=normalized.matrices,
            details=normalized,
        )


# MAIN CONVENIENCE FUNCTION
def pairwise(
    seq_a: str,
    seq_b: str,
    mode: Union[str, EvaluationKind] = "global",
    costs: Optional[CostModel] = None,
    calculation: Union[str, CalculationMode, None] = None,
    substitution_matrix: Optional[str] = None,
    max_tracebacks: int = MAX_NUMBER_TRACEBACKS,
    verbose: bool = False
) -> AlignmentResult:
    """
    Pairwise sequence alignment

    Parameters:
    -----------
    seq_a, seq_b : str
        Sequences to align
    mode : str or EvaluationKind
        Algorithm name or alias: "global", "local", "affine",
        "affine_local", "general", "linear_space", "normalized"
    costs : CostModel, optional
        Scores (default CostModel())
    calculation : str, optional
        "similarity" or "distance"; overrides the mode of ``costs``
    substitution_matrix : str, optional
        e.g. "BLOSUM62"; replaces match/mismatch scores
    max_tracebacks : int
        Maximum number of co-optimal alignments (default 10)
    verbose : bool
        Print the result (default False)

    Returns:
    --------
    AlignmentResult
        Alignment result with .view() method

    Examples:
    ---------
    >>> result = pairwise("AGTC", "ATC", mode="global")
    >>> result.score
    1.0
    >>> result.best.aligned_b
    'A_TC'
    """
    costs = costs if costs is not None else CostModel()
    if calculation is not None:
        costs = costs.with_changes(mode=CalculationMode.parse(calculation))
    if substitution_matrix is not None:
        costs = costs.with_changes(substitution=get_substitution(substitution_matrix))

    aligner = PairwiseAligner(costs=costs, kind=mode, max_tracebacks=max_tracebacks)
    return aligner.align(seq_a, seq_b, verbose=verbose)


def score_pairs(
    sequences: Dict[str, str],
    costs: Optional[CostModel] = None,
    kind: Union[str, EvaluationKind] = EvaluationKind.NEEDLEMAN_WUNSCH,
) -> Tuple[np.ndarray, List[str]]:
    """
    Align every pair of sequences and collect the optimal scores.

    Parameters
    ----------
    sequences : dict
        {name: sequence}
    costs : CostModel, optional
        Scores shared by all pairs
    kind : str or EvaluationKind
        Algorithm building the full matrix (not linear-space or normalized)

    Returns
    -------
    (S, names) : (np.ndarray, list)
        S score matrix (n, n) with S[x, y] aligning names[x] against
        names[y], names its label order.
    """
    aligner = PairwiseAligner(costs=costs, kind=kind, max_tracebacks=1)
    strategy = aligner.strategy
    names = list(sequences.keys())
    n = len(names)
    scores = np.zeros((n, n), dtype=np.float64)

    for x in range(n):
        for y in range(n):
            ctx = aligner.context(sequences[names[x]], sequences[names[y]])
            scores[x, y] = strategy.score(ctx, strategy.build(ctx))

    logger.debug("scored %d pair(s) with %s", n * n, aligner.kind.value)
    return scores, names
