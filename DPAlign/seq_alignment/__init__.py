"""
Sequence Alignment Module
Provides dynamic programming tools for pairwise alignment
"""

from .costs import (
    EPSILON,
    CalculationMode,
    CostModel,
    EvaluationKind
)
from .matrices import (
    GAP,
    AlignmentContext,
    Cell,
    Matrices,
    MatrixLabel,
    ScoreMatrix
)
from .linear import LinearGap, last_row
from .affine import AffineGap
from .general_gap import GeneralGap
from .traceback import (
    MAX_NUMBER_TRACEBACKS,
    TracebackResult,
    enumerate_tracebacks
)
from .reconstruct import (
    Alignment,
    reconstruct_alignment,
    reconstruct_alignments,
    score_alignment
)
from .hirschberg import HirschbergResult, HirschbergRound, compute_hirschberg
from .normalized import NormalizedResult, compute_normalized
from .substitution import BLOSUM62, blosum62
from .pairwise import (
    STRATEGIES,
    PairwiseAligner,
    AlignmentResult,
    get_strategy,
    pairwise,
    score_pairs
)

__all__ = [
    "EPSILON",
    "CalculationMode",
    "CostModel",
    "EvaluationKind",
    "GAP",
    "AlignmentContext",
    "Cell",
    "Matrices",
    "MatrixLabel",
    "ScoreMatrix",
    "LinearGap",
    "last_row",
    "AffineGap",
    "GeneralGap",
    "MAX_NUMBER_TRACEBACKS",
    "TracebackResult",
    "enumerate_tracebacks",
    "Alignment",
    "reconstruct_alignment",
    "reconstruct_alignments",
    "score_alignment",
    "HirschbergResult",
    "HirschbergRound",
    "compute_hirschberg",
    "NormalizedResult",
    "compute_normalized",
    "BLOSUM62",
    "blosum62",
    "STRATEGIES",
    "PairwiseAligner",
    "AlignmentResult",
    "get_strategy",
    "pairwise",
    "score_pairs"
]
