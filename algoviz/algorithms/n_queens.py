"""
n_queens.py - N-Queens (all solutions)
=======================================
Column-by-column backtracking.  Rows are tried top to bottom; a queen is
safe when no earlier column holds a queen on the same row or diagonal.

Records a Snapshot per placement attempt (ATTEMPT), per unsafe square
(CONFLICT), per placed queen (PLACE), per complete board
(SOLUTION_FOUND) and per removed queen (BACKTRACK).  The search explores
the whole tree, so every solution is reported.
"""

from typing import Callable, List, Optional

from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError

MAX_N = 8


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Solve(col):",                          # 0
    "    if col == n: record solution; return", # 1
    "    for row in 0 .. n-1:",                 # 2
    "        if safe(row, col):",               # 3
    "            board[row][col] ← Q",          # 4
    "            Solve(col + 1)",               # 5
    "            board[row][col] ← .   # backtrack",  # 6
    "        else: conflict",                   # 7
    "    return",                               # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def n_queens(n: int) -> Trace:
    if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= MAX_N:
        raise ConfigurationError(f"Board size must be an integer between 1 and {MAX_N}, got {n!r}")

    tb = TraceBuilder("n_queens")
    queens: List[Optional[int]] = [None] * n        # queens[col] = row
    solutions: List[List[int]] = []
    counters = {"backtracks": 0}

    def emit(kind: Kind, narration: str, line: int, row: Optional[int] = None, col: Optional[int] = None) -> None:
        tb.emit(
            kind, narration, line=line,
            n=n,
            board=_board(queens, n),
            queens=queens,
            row=row,
            col=col,
            solutions=solutions,
            solution_count=len(solutions),
            backtracks=counters["backtracks"],
        )

    emit(Kind.INITIALIZE, f"Place {n} queens on a {n}×{n} board, one per column.", line=0)
    _solve(0, n, queens, solutions, emit, counters)

    if solutions:
        emit(
            Kind.COMPLETE,
            f"Search finished: {len(solutions)} solution(s) for n = {n}.",
            line=8,
        )
    else:
        emit(Kind.NO_SOLUTION, f"Search finished: no way to place {n} queens.", line=8)
    return tb.build()


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def _solve(
    col: int,
    n: int,
    queens: List[Optional[int]],
    solutions: List[List[int]],
    emit: Callable[..., None],
    counters: dict,
) -> None:
    if col == n:
        solutions.append(list(queens))
        emit(
            Kind.SOLUTION_FOUND,
            f"Solution {len(solutions)}: queens at rows {queens}.",
            line=1,
        )
        return

    for row in range(n):
        emit(Kind.ATTEMPT, f"Try a queen at row {row}, column {col}.", line=3, row=row, col=col)
        clash = _conflict(queens, row, col)
        if clash is not None:
            emit(
                Kind.CONFLICT,
                f"Row {row}, column {col} is attacked by the queen at row {queens[clash]}, column {clash}.",
                line=7, row=row, col=col,
            )
            continue

        queens[col] = row
        emit(Kind.PLACE, f"Place a queen at row {row}, column {col}.", line=4, row=row, col=col)
        _solve(col + 1, n, queens, solutions, emit, counters)
        queens[col] = None
        counters["backtracks"] += 1
        emit(
            Kind.BACKTRACK,
            f"Remove the queen from row {row}, column {col} and try the next row.",
            line=6, row=row, col=col,
        )


def _conflict(queens: List[Optional[int]], row: int, col: int) -> Optional[int]:
    """Column of the first earlier queen attacking (row, col), or None."""
    for c in range(col):
        r = queens[c]
        if r == row or abs(r - row) == col - c:
            return c
    return None


def _board(queens: List[Optional[int]], n: int) -> List[List[int]]:
    return [[1 if queens[c] == r else 0 for c in range(n)] for r in range(n)]
