import pytest

from algoviz.algorithms.n_queens import MAX_N, n_queens
from algoviz.algorithms.sudoku import DEFAULT_PUZZLE, sudoku, validate_grid
from algoviz.engine import DEFAULT_MAX_STEPS, Kind, step_budget
from algoviz.errors import ConfigurationError, TraceTooLongError
from algoviz.inputs import parse_grid


# ---------------------------------------------------------------------------
# N-Queens
# ---------------------------------------------------------------------------
def test_four_queens_has_two_solutions() -> None:
    trace = n_queens(4)
    final = trace.last.state
    assert trace.terminal_kind is Kind.COMPLETE
    assert final["solution_count"] == 2
    assert [list(s) for s in final["solutions"]] == [[1, 3, 0, 2], [2, 0, 3, 1]]
    assert len(trace.of_kind(Kind.SOLUTION_FOUND)) == 2


def test_board_matches_queens() -> None:
    trace = n_queens(4)
    snap = trace.of_kind(Kind.SOLUTION_FOUND)[0]
    board = [list(row) for row in snap.state["board"]]
    assert board == [
        [0, 0, 1, 0],
        [1, 0, 0, 0],
        [0, 0, 0, 1],
        [0, 1, 0, 0],
    ]


@pytest.mark.parametrize("n", [2, 3])
def test_no_solution_is_a_terminal_outcome(n) -> None:
    trace = n_queens(n)
    assert trace.terminal_kind is Kind.NO_SOLUTION
    assert trace.of_kind(Kind.CONFLICT)


@pytest.mark.parametrize("n", [0, MAX_N + 1, "4", True])
def test_board_size_is_validated(n) -> None:
    with pytest.raises(ConfigurationError):
        n_queens(n)


# ---------------------------------------------------------------------------
# Sudoku
# ---------------------------------------------------------------------------
def _valid_solution(board, size, base) -> bool:
    want = set(range(1, size + 1))
    rows = all(set(r) == want for r in board)
    cols = all({board[r][c] for r in range(size)} == want for c in range(size))
    boxes = all(
        {board[br + i][bc + j] for i in range(base) for j in range(base)} == want
        for br in range(0, size, base)
        for bc in range(0, size, base)
    )
    return rows and cols and boxes


def test_default_puzzle_is_solved() -> None:
    trace = sudoku(DEFAULT_PUZZLE)
    board = [list(row) for row in trace.last.state["board"]]

    assert trace.terminal_kind is Kind.COMPLETE
    assert len(trace.of_kind(Kind.SOLUTION_FOUND)) == 1
    assert _valid_solution(board, 9, 3)
    assert board[0] == [5, 3, 4, 6, 7, 8, 9, 1, 2]
    for r in range(9):
        for c in range(9):
            if DEFAULT_PUZZLE[r][c]:
                assert board[r][c] == DEFAULT_PUZZLE[r][c]
    # the input grid is copied, never filled in place
    assert DEFAULT_PUZZLE[0][2] == 0


def test_four_by_four() -> None:
    grid = [
        [1, 0, 0, 0],
        [0, 0, 3, 0],
        [0, 4, 0, 0],
        [0, 0, 0, 2],
    ]
    trace = sudoku(grid)
    assert trace.terminal_kind is Kind.COMPLETE
    assert _valid_solution([list(r) for r in trace.last.state["board"]], 4, 2)


def test_unsatisfiable_puzzle_ends_in_no_solution() -> None:
    grid = [
        [1, 2, 0, 0],
        [0, 0, 0, 4],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    trace = sudoku(grid)
    assert trace.terminal_kind is Kind.NO_SOLUTION
    assert trace.of_kind(Kind.BACKTRACK)


def test_consistent_but_impossible_grid_hits_the_step_budget() -> None:
    # the only home for 9 in the last row is blocked by the 9 above it
    grid = parse_grid("\n".join(
        ["0 0 0 0 0 0 0 0 9"] + ["0 0 0 0 0 0 0 0 0"] * 7 + ["1 2 3 4 5 6 7 8 0"]
    ))
    with step_budget(5000):
        with pytest.raises(TraceTooLongError):
            sudoku(grid)


def test_default_puzzle_fits_the_default_budget() -> None:
    assert len(sudoku(DEFAULT_PUZZLE)) < DEFAULT_MAX_STEPS


@pytest.mark.parametrize(
    "grid",
    [
        [[1, 2, 3]],                                        # not square
        [[0] * 4] * 3,                                      # 3 rows
        [[1, 1, 0, 0], [0] * 4, [0] * 4, [0] * 4],          # duplicate in row
        [[5, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4],          # digit out of range
        [[1, 0, 0, 0], [0, 1, 0, 0], [0] * 4, [0] * 4],     # duplicate in box
    ],
)
def test_invalid_grids(grid) -> None:
    with pytest.raises(ConfigurationError):
        validate_grid(grid)
