"""
Cost model shared by every alignment algorithm.

The calculation mode decides the direction of optimisation: in DISTANCE
mode smaller is better (``min``), in SIMILARITY mode larger is better
(``max``). Builders never hard-code an operator, they ask the cost model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

EPSILON = 1e-9

DEFAULT_MATCH = 1.0
DEFAULT_MISMATCH = -1.0
DEFAULT_DELETION = -2.0
DEFAULT_INSERTION = -2.0
DEFAULT_BASE_COST = -3.0
DEFAULT_ENLARGEMENT = -1.0

GAP_SHAPES = ("affine", "logarithmic", "quadratic")


class CalculationMode(Enum):
    DISTANCE = "distance"
    SIMILARITY = "similarity"

    @classmethod
    def parse(cls, value: Any) -> "CalculationMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown calculation mode: {value!r}") from exc


class EvaluationKind(Enum):
    """Algorithms the engine can run."""

    NEEDLEMAN_WUNSCH = "needleman_wunsch"
    SMITH_WATERMAN = "smith_waterman"
    GOTOH = "gotoh"
    GOTOH_LOCAL = "gotoh_local"
    WATERMAN_SMITH_BEYER = "waterman_smith_beyer"
    HIRSCHBERG = "hirschberg"
    ARSLAN_EGECIOGLU_PEVZNER = "arslan_egecioglu_pevzner"

    @classmethod
    def parse(cls, value: Any) -> "EvaluationKind":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        key = KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"unknown alignment kind: {value!r}") from exc


KIND_ALIASES = {
    "global": "needleman_wunsch",
    "local": "smith_waterman",
    "affine": "gotoh",
    "affine_local": "gotoh_local",
    "general": "waterman_smith_beyer",
    "linear_space": "hirschberg",
    "normalized": "arslan_egecioglu_pevzner",
}


@dataclass(frozen=True)
class CostModel:
    """
    Scores for a pairwise alignment.

    Parameters:
    -----------
    match, mismatch : float
        Score of a column pairing two equal / two different characters
    deletion : float
        Cost of a column pairing a character of sequence A with a gap
    insertion : float
        Cost of a column pairing a character of sequence B with a gap
    base_cost, enlargement : float
        Affine gap of length k costs ``base_cost + k * enlargement``
    gap_shape : str
        Named gap function for the general-gap model
        ("affine", "logarithmic" or "quadratic")
    gap_function : callable, optional
        Custom gap function g(k); overrides ``gap_shape``
    mode : CalculationMode
        DISTANCE minimises, SIMILARITY maximises
    substitution : callable, optional
        Custom substitution score s(a, b); overrides match/mismatch
    """

    match: float = DEFAULT_MATCH
    mismatch: float = DEFAULT_MISMATCH
    deletion: float = DEFAULT_DELETION
    insertion: float = DEFAULT_INSERTION
    base_cost: float = DEFAULT_BASE_COST
    enlargement: float = DEFAULT_ENLARGEMENT
    gap_shape: str = "affine"
    gap_function: Optional[Callable[[int], float]] = None
    mode: CalculationMode = CalculationMode.SIMILARITY
    substitution: Optional[Callable[[str, str], float]] = None

    def __post_init__(self):
        if self.gap_shape not in GAP_SHAPES:
            raise ValueError(f"gap_shape must be one of {', '.join(GAP_SHAPES)}")
        object.__setattr__(self, "mode", CalculationMode.parse(self.mode))

    @classmethod
    def linear(
        cls,
        match: float = DEFAULT_MATCH,
        mismatch: float = DEFAULT_MISMATCH,
        gap: float = DEFAULT_DELETION,
        mode: CalculationMode = CalculationMode.SIMILARITY,
    ) -> "CostModel":
        return cls(match=match, mismatch=mismatch, deletion=gap, insertion=gap, mode=mode)

    @classmethod
    def affine(
        cls,
        match: float = DEFAULT_MATCH,
        mismatch: float = DEFAULT_MISMATCH,
        base_cost: float = DEFAULT_BASE_COST,
        enlargement: float = DEFAULT_ENLARGEMENT,
        mode: CalculationMode = CalculationMode.SIMILARITY,
    ) -> "CostModel":
        return cls(
            match=match,
            mismatch=mismatch,
            base_cost=base_cost,
            enlargement=enlargement,
            mode=mode,
        )

    @classmethod
    def general(
        cls,
        match: float = DEFAULT_MATCH,
        mismatch: float = DEFAULT_MISMATCH,
        base_cost: float = DEFAULT_BASE_COST,
        enlargement: float = DEFAULT_ENLARGEMENT,
        gap_shape: str = "affine",
        gap_function: Optional[Callable[[int], float]] = None,
        mode: CalculationMode = CalculationMode.SIMILARITY,
    ) -> "CostModel":
        return cls(
            match=match,
            mismatch=mismatch,
            base_cost=base_cost,
            enlargement=enlargement,
            gap_shape=gap_shape,
            gap_function=gap_function,
            mode=mode,
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CostModel":
        """Build a cost model from loosely typed input (e.g. form fields)."""

        def value(name: str, default: Any) -> Any:
            return payload.get(name, default)

        return cls(
            match=to_float(value("match", DEFAULT_MATCH), name="match"),
            mismatch=to_float(value("mismatch", DEFAULT_MISMATCH), name="mismatch"),
            deletion=to_float(value("deletion", DEFAULT_DELETION), name="deletion"),
            insertion=to_float(value("insertion", DEFAULT_INSERTION), name="insertion"),
            base_cost=to_float(value("base_cost", DEFAULT_BASE_COST), name="base_cost"),
            enlargement=to_float(value("enlargement", DEFAULT_ENLARGEMENT), name="enlargement"),
            gap_shape=str(value("gap_shape", "affine")).strip().lower(),
            mode=CalculationMode.parse(value("mode", CalculationMode.SIMILARITY)),
        )

    @property
    def is_distance(self) -> bool:
        return self.mode is CalculationMode.DISTANCE

    @property
    def gap_open(self) -> float:
        """Cost of the first column of an affine gap run."""
        return self.base_cost + self.enlargement

    @property
    def gap_extend(self) -> float:
        return self.enlargement

    def optimum(self, values: Iterable[Optional[float]]) -> Optional[float]:
        """Best of ``values`` in this mode; unreachable (None) entries are skipped."""
        candidates = [v for v in values if v is not None]
        if not candidates:
            return None
        return min(candidates) if self.is_distance else max(candidates)

    def is_better(self, a: float, b: float) -> bool:
        """True if ``a`` is strictly better than ``b``."""
        return a < b if self.is_distance else a > b

    def score(self, a: str, b: str) -> float:
        if self.substitution is not None:
            return float(self.substitution(a, b))
        return self.match if a == b else self.mismatch

    def gap(self, k: int) -> float:
        """General gap cost g(k) for a run of ``k`` gap columns."""
        if self.gap_function is not None:
            return float(self.gap_function(k))
        if self.gap_shape == "logarithmic":
            return self.base_cost + self.enlargement * math.log(k)
        if self.gap_shape == "quadratic":
            return self.base_cost + self.enlargement * k * k
        return self.base_cost + self.enlargement * k

    def swapped(self) -> "CostModel":
        """Same model with sequence roles exchanged (insertion <-> deletion)."""
        return replace(self, deletion=self.insertion, insertion=self.deletion)

    def with_changes(self, **changes: Any) -> "CostModel":
        return replace(self, **changes)


def to_float(value: Any, *, name: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a floating-point number") from exc
    if math.isnan(parsed) or math.isinf(parsed):
        raise ValueError(f"{name} must be finite")
    return parsed


def approx_equal(a: Optional[float], b: Optional[float]) -> bool:
    if a is None or b is None:
        return False
    return abs(a - b) < EPSILON
