"""
sudoku.py - Sudoku Solver (backtracking)
=========================================
Works on any (base²)×(base²) grid; 0 marks an empty cell.

The solver takes the first empty cell in row-major order, lists its
candidates (digits 1..N absent from its row, column and box), tries them
in ascending order and undoes the placement when the recursion below it
fails.  The first complete board is reported as SOLUTION_FOUND, then the
trace closes with COMPLETE; an exhausted search ends with NO_SOLUTION.
"""

import math
from typing import Callable, List, Optional, Sequence, Tuple

from algoviz.engine.snapshot import Kind, Trace, TraceBuilder
from algoviz.errors import ConfigurationError

Grid = List[List[int]]

DEFAULT_PUZZLE: Grid = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Solve(board):",                                    # 0
    "    cell ← first empty cell (row-major)",              # 1
    "    if no empty cell: return true",                    # 2
    "    for d in candidates(cell):   # not in row/col/box",  # 3
    "        try d",                                        # 4
    "        board[cell] ← d",                              # 5
    "        if Solve(board): return true",                 # 6
    "        board[cell] ← 0          # backtrack",         # 7
    "    return false",                                     # 8
]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def validate_grid(grid: Sequence[Sequence[int]]) -> Tuple[Grid, int]:
    """Copy and check a puzzle.  Returns (board, base)."""
    board = [list(row) for row in grid]
    size = len(board)
    base = math.isqrt(size)
    if size == 0 or base * base != size:
        raise ConfigurationError(f"Grid must be N×N with N a perfect square, got {size} rows")
    for r, row in enumerate(board):
        if len(row) != size:
            raise ConfigurationError(f"Row {r + 1} has {len(row)} cells, expected {size}")
        for c, v in enumerate(row):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= size:
                raise ConfigurationError(
                    f"Cell ({r + 1}, {c + 1}) must be an integer 0..{size}, got {v!r}"
                )

    for r in range(size):
        for c in range(size):
            v = board[r][c]
            if v == 0:
                continue
            board[r][c] = 0
            ok = _allowed(board, r, c, v, base)
            board[r][c] = v
            if not ok:
                raise ConfigurationError(
                    f"Given {v} at ({r + 1}, {c + 1}) conflicts with its row, column or box"
                )
    return board, base


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def sudoku(grid: Sequence[Sequence[int]]) -> Trace:
    board, base = validate_grid(grid)
    size = base * base
    tb = TraceBuilder("sudoku")
    givens = [[v != 0 for v in row] for row in board]
    counters = {"attempts": 0, "backtracks": 0}

    def emit(kind: Kind, narration: str, line: int, cell: Optional[Tuple[int, int]] = None,
             digit: Optional[int] = None, candidates: Sequence[int] = ()) -> None:
        tb.emit(
            kind, narration, line=line,
            board=board,
            givens=givens,
            size=size,
            cell=cell,
            digit=digit,
            candidates=list(candidates),
            **counters,
        )

    empties = sum(row.count(0) for row in board)
    emit(Kind.INITIALIZE, f"Solve a {size}×{size} Sudoku with {empties} empty cells.", line=0)

    if _solve(board, base, emit, counters):
        emit(
            Kind.COMPLETE,
            f"Puzzle solved with {counters['attempts']} attempts and {counters['backtracks']} backtracks.",
            line=2,
        )
    else:
        emit(
            Kind.NO_SOLUTION,
            f"Every candidate failed: the puzzle has no solution "
            f"({counters['attempts']} attempts, {counters['backtracks']} backtracks).",
            line=8,
        )
    return tb.build()


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------
def _solve(board: Grid, base: int, emit: Callable[..., None], counters: dict) -> bool:
    cell = _first_empty(board)
    if cell is None:
        emit(Kind.SOLUTION_FOUND, "No empty cell left: the board is solved.", line=2)
        return True

    r, c = cell
    emit(Kind.SELECT_CELL, f"Next empty cell is row {r + 1}, column {c + 1}.", line=1, cell=cell)

    size = base * base
    candidates = [d for d in range(1, size + 1) if _allowed(board, r, c, d, base)]
    if candidates:
        text = f"Candidates for ({r + 1}, {c + 1}): {candidates}."
    else:
        text = f"No digit fits ({r + 1}, {c + 1}): this branch is a dead end."
    emit(Kind.CANDIDATES, text, line=3, cell=cell, candidates=candidates)

    for d in candidates:
        counters["attempts"] += 1
        emit(Kind.ATTEMPT, f"Try {d} at ({r + 1}, {c + 1}).", line=4, cell=cell, digit=d, candidates=candidates)
        board[r][c] = d
        emit(Kind.PLACE, f"Place {d} at ({r + 1}, {c + 1}).", line=5, cell=cell, digit=d, candidates=candidates)
        if _solve(board, base, emit, counters):
            return True
        board[r][c] = 0
        counters["backtracks"] += 1
        emit(
            Kind.BACKTRACK,
            f"{d} at ({r + 1}, {c + 1}) leads nowhere: clear the cell.",
            line=7, cell=cell, digit=d, candidates=candidates,
        )
    return False


def _first_empty(board: Grid) -> Optional[Tuple[int, int]]:
    for r, row in enumerate(board):
        for c, v in enumerate(row):
            if v == 0:
                return (r, c)
    return None


def _allowed(board: Grid, r: int, c: int, d: int, base: int) -> bool:
    size = base * base
    if any(board[r][k] == d for k in range(size)):
        return False
    if any(board[k][c] == d for k in range(size)):
        return False
    br, bc = (r // base) * base, (c // base) * base
    for i in range(br, br + base):
        for j in range(bc, bc + base):
            if board[i][j] == d:
                return False
    return True
