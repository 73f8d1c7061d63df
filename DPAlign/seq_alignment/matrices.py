"""
Score matrices, cells and the per-call alignment context.

Rows index sequence B (``i``), columns index sequence A (``j``); a grid for
sequences of length n (A) and m (B) therefore has shape ``(m + 1, n + 1)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from .costs import CostModel

GAP = "_"


class MatrixLabel(Enum):
    DEFAULT = "D"
    VERTICAL = "P"
    HORIZONTAL = "Q"


@dataclass(frozen=True)
class Cell:
    i: int
    j: int
    label: MatrixLabel = MatrixLabel.DEFAULT

    def __repr__(self) -> str:
        return f"Cell({self.i}, {self.j}, {self.label.value})"


class ScoreMatrix:
    """
    A DP grid whose cells are either a number or unreachable.

    Values live in a float64 array; a boolean mask marks the cells that were
    ever written. Reading an unwritten cell yields ``None``.
    """

    def __init__(self, rows: int, cols: int, label: MatrixLabel = MatrixLabel.DEFAULT):
        self.label = label
        self._values = np.zeros((rows, cols), dtype=np.float64)
        self._defined = np.zeros((rows, cols), dtype=bool)

    @property
    def shape(self):
        return self._values.shape

    def __getitem__(self, index) -> Optional[float]:
        i, j = index
        if i < 0 or j < 0 or not self._defined[i, j]:
            return None
        return float(self._values[i, j])

    def __setitem__(self, index, value: Optional[float]) -> None:
        i, j = index
        if value is None:
            self._defined[i, j] = False
            self._values[i, j] = 0.0
        else:
            self._defined[i, j] = True
            self._values[i, j] = value

    def freeze(self) -> "ScoreMatrix":
        self._values.setflags(write=False)
        self._defined.setflags(write=False)
        return self

    @property
    def frozen(self) -> bool:
        return not self._values.flags.writeable

    def as_array(self) -> np.ndarray:
        """Copy of the values with unreachable cells as NaN."""
        out = self._values.copy()
        out[~self._defined] = np.nan
        return out

    def row(self, i: int) -> List[Optional[float]]:
        return [self[i, j] for j in range(self.shape[1])]

    def to_list(self) -> List[List[Optional[float]]]:
        return [self.row(i) for i in range(self.shape[0])]

    def __repr__(self) -> str:
        return f"ScoreMatrix({self.label.value}, shape={self.shape})"


@dataclass
class Matrices:
    """The grids of one alignment; gap grids exist only for the affine model."""

    default: ScoreMatrix
    vertical: Optional[ScoreMatrix] = None
    horizontal: Optional[ScoreMatrix] = None

    def get(self, label: MatrixLabel) -> ScoreMatrix:
        grid = {
            MatrixLabel.DEFAULT: self.default,
            MatrixLabel.VERTICAL: self.vertical,
            MatrixLabel.HORIZONTAL: self.horizontal,
        }[label]
        if grid is None:
            raise KeyError(f"no {label.value} matrix in this alignment")
        return grid

    def value(self, cell: Cell) -> Optional[float]:
        return self.get(cell.label)[cell.i, cell.j]

    def freeze(self) -> "Matrices":
        for grid in self.grids().values():
            grid.freeze()
        return self

    def grids(self) -> Dict[MatrixLabel, ScoreMatrix]:
        out = {MatrixLabel.DEFAULT: self.default}
        if self.vertical is not None:
            out[MatrixLabel.VERTICAL] = self.vertical
        if self.horizontal is not None:
            out[MatrixLabel.HORIZONTAL] = self.horizontal
        return out


@dataclass(frozen=True)
class AlignmentContext:
    """Everything one alignment call needs; passed explicitly, never shared."""

    seq_a: str
    seq_b: str
    costs: CostModel = field(default_factory=CostModel)

    def __post_init__(self):
        object.__setattr__(self, "seq_a", self.seq_a.upper())
        object.__setattr__(self, "seq_b", self.seq_b.upper())

    @property
    def height(self) -> int:
        """Number of rows (len(B) + 1)."""
        return len(self.seq_b) + 1

    @property
    def width(self) -> int:
        """Number of columns (len(A) + 1)."""
        return len(self.seq_a) + 1

    def char_a(self, j: int) -> str:
        return self.seq_a[j - 1]

    def char_b(self, i: int) -> str:
        return self.seq_b[i - 1]

    def substitution(self, i: int, j: int) -> float:
        """Score of pairing column ``j`` of A with row ``i`` of B."""
        return self.costs.score(self.char_a(j), self.char_b(i))
