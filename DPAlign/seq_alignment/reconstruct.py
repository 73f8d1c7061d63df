"""
Turning traceback paths into aligned strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .costs import CostModel
from .matrices import GAP, AlignmentContext, Cell

MATCH_SYMBOL = "*"
MISMATCH_SYMBOL = "|"
GAP_MARKER = " "

GAP_MODELS = ("linear", "affine", "general")


@dataclass(frozen=True)
class Alignment:
    """
    One alignment as three equally long rows.

    ``start_*``/``end_*`` are the aligned half-open ranges of the inputs;
    they only differ from the full sequences for local alignments.
    """

    aligned_a: str
    markers: str
    aligned_b: str
    start_a: int = 0
    end_a: int = 0
    start_b: int = 0
    end_b: int = 0

    def __post_init__(self):
        if not (len(self.aligned_a) == len(self.markers) == len(self.aligned_b)):
            raise AssertionError("alignment rows differ in length")

    def __len__(self) -> int:
        return len(self.aligned_a)

    @property
    def length(self) -> int:
        return len(self.aligned_a)

    @property
    def gap_count(self) -> int:
        return self.aligned_a.count(GAP) + self.aligned_b.count(GAP)

    @property
    def match_count(self) -> int:
        return self.markers.count(MATCH_SYMBOL)

    @property
    def mismatch_count(self) -> int:
        return self.markers.count(MISMATCH_SYMBOL)

    @property
    def identity(self) -> float:
        return self.match_count / self.length if self.length else 0.0

    @property
    def ungapped_a(self) -> str:
        return self.aligned_a.replace(GAP, "")

    @property
    def ungapped_b(self) -> str:
        return self.aligned_b.replace(GAP, "")

    def columns(self) -> List[Tuple[str, str]]:
        return list(zip(self.aligned_a, self.aligned_b))

    def gap_runs(self) -> List[Tuple[str, int]]:
        """Maximal gap runs as (row, length); row is "a" or "b"."""
        return _collapse(self.aligned_a, self.aligned_b)

    def format(self, width: int = 60) -> str:
        lines = []
        for start in range(0, max(self.length, 1), width):
            end = start + width
            lines.append(self.aligned_a[start:end])
            lines.append(self.markers[start:end])
            lines.append(self.aligned_b[start:end])
            lines.append("")
        return "\n".join(lines).rstrip("\n")

    def __str__(self) -> str:
        return f"{self.aligned_a}\n{self.markers}\n{self.aligned_b}"


def _collapse(aligned_a: str, aligned_b: str) -> List[Tuple[str, int]]:
    runs: List[Tuple[str, int]] = []
    previous = None
    for a, b in zip(aligned_a, aligned_b):
        row = "a" if a == GAP else "b" if b == GAP else None
        if row is not None and row == previous:
            runs[-1] = (row, runs[-1][1] + 1)
        elif row is not None:
            runs.append((row, 1))
        previous = row
    return runs


def marker(a: str, b: str) -> str:
    if a == GAP or b == GAP:
        return GAP_MARKER
    return MATCH_SYMBOL if a == b else MISMATCH_SYMBOL


def make_alignment(columns: Sequence[Tuple[str, str]], **ranges: int) -> Alignment:
    aligned_a = "".join(a for a, _ in columns).upper()
    aligned_b = "".join(b for _, b in columns).upper()
    markers = "".join(marker(a, b) for a, b in zip(aligned_a, aligned_b))
    return Alignment(aligned_a, markers, aligned_b, **ranges)


def reconstruct_alignment(ctx: AlignmentContext, path: Sequence[Cell]) -> Alignment:
    """Replay a traceback path (terminal cell first) into an alignment."""
    if not path:
        raise AssertionError("empty traceback path")
    steps = list(reversed(path))
    columns: List[Tuple[str, str]] = []

    for previous, cell in zip(steps, steps[1:]):
        di, dj = cell.i - previous.i, cell.j - previous.j
        if di == 0 and dj == 0:
            continue
        if di == 1 and dj == 1:
            columns.append((ctx.char_a(cell.j), ctx.char_b(cell.i)))
        elif di == 0 and dj > 0:
            columns.extend((ctx.char_a(j), GAP) for j in range(previous.j + 1, cell.j + 1))
        elif dj == 0 and di > 0:
            columns.extend((GAP, ctx.char_b(i)) for i in range(previous.i + 1, cell.i + 1))
        else:
            raise AssertionError(f"illegal traceback step {previous!r} -> {cell!r}")

    origin, terminal = steps[0], steps[-1]
    return make_alignment(
        columns,
        start_a=origin.j, end_a=terminal.j,
        start_b=origin.i, end_b=terminal.i,
    )


def reconstruct_alignments(ctx: AlignmentContext, paths: Iterable[Sequence[Cell]]) -> List[Alignment]:
    return [reconstruct_alignment(ctx, path) for path in paths]


def score_alignment(alignment: Alignment, costs: CostModel, gap_model: str = "linear") -> float:
    """
    Score an alignment column by column.

    ``gap_model`` selects how gap runs are charged: "linear" uses
    deletion/insertion per column, "affine" ``base_cost + k * enlargement``
    per run and "general" ``costs.gap(k)`` per run.
    """
    if gap_model not in GAP_MODELS:
        raise ValueError(f"gap_model must be one of {', '.join(GAP_MODELS)}")

    total = 0.0
    for a, b in alignment.columns():
        if a != GAP and b != GAP:
            total += costs.score(a, b)
        elif gap_model == "linear":
            total += costs.deletion if b == GAP else costs.insertion

    if gap_model != "linear":
        for _, length in alignment.gap_runs():
            if gap_model == "affine":
                total += costs.base_cost + length * costs.enlargement
            else:
                total += costs.gap(length)
    return total
