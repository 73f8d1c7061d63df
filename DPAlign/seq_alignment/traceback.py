"""
Enumeration of co-optimal traceback paths.

Paths are collected by a depth-first search over the predecessor relation
of a strategy, starting from each terminal cell in turn. At most ``limit``
complete paths are kept; if a further complete path is found the search
stops and the result is flagged as truncated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .matrices import AlignmentContext, Cell, Matrices
from .strategy import AlignmentStrategy

logger = logging.getLogger(__name__)

MAX_NUMBER_TRACEBACKS = 10

TracebackPath = List[Cell]


@dataclass
class TracebackResult:
    paths: List[TracebackPath] = field(default_factory=list)
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.paths)


class _Collector:

    def __init__(self, limit: int):
        self.limit = limit
        self.result = TracebackResult()

    @property
    def done(self) -> bool:
        return self.result.truncated

    def add(self, path: TracebackPath) -> None:
        if len(self.result.paths) >= self.limit:
            self.result.truncated = True
            return
        self.result.paths.append(list(path))


def enumerate_tracebacks(
    strategy: AlignmentStrategy,
    ctx: AlignmentContext,
    matrices: Matrices,
    starts: Optional[Iterable[Cell]] = None,
    limit: int = MAX_NUMBER_TRACEBACKS,
) -> TracebackResult:
    """
    Find every optimal path from the terminal cells back to an origin.

    Parameters:
    -----------
    strategy : AlignmentStrategy
        Strategy that built ``matrices``
    ctx : AlignmentContext
        Sequences and cost model of the alignment
    matrices : Matrices
        Filled (frozen) grids
    starts : iterable of Cell, optional
        Cells to start from; defaults to ``strategy.terminal_cells``
    limit : int
        Maximum number of paths to keep

    Returns:
    --------
    TracebackResult
        Paths ordered terminal cell first, plus the truncation flag
    """
    if starts is None:
        starts = strategy.terminal_cells(ctx, matrices)
    collector = _Collector(limit)

    for start in starts:
        _search(strategy, ctx, matrices, start, collector)
        if collector.done:
            break

    logger.debug(
        "%s: %d traceback(s)%s", strategy.name, len(collector.result.paths),
        " (truncated)" if collector.result.truncated else "",
    )
    return collector.result


def _search(strategy, ctx, matrices, start: Cell, collector: _Collector) -> None:
    if strategy.is_origin(ctx, matrices, start):
        collector.add([start])
        return
    first = _expand(strategy, ctx, matrices, start)
    if first is None:
        collector.add([start])
        return

    path = [start]
    stack = [iter(first)]
    while stack:
        cell = next(stack[-1], None)
        if cell is None:
            stack.pop()
            path.pop()
            continue

        path.append(cell)
        if strategy.is_origin(ctx, matrices, cell):
            collector.add(path)
            if collector.done:
                return
            path.pop()
            continue

        following = _expand(strategy, ctx, matrices, cell)
        if following is None:
            collector.add(path)
            if collector.done:
                return
            path.pop()
            continue
        stack.append(iter(following))


def _expand(strategy, ctx, matrices, cell: Cell) -> Optional[List[Cell]]:
    """Predecessors of ``cell``; None marks a local dead end that ends a path."""
    found = strategy.predecessors(ctx, matrices, cell)
    if found:
        return found
    if strategy.local:
        return None
    raise AssertionError(f"no predecessor for {cell!r} in a global matrix")
