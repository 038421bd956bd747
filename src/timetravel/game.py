"""Core rules for classic 3x3 tic-tac-toe."""

from __future__ import annotations

from typing import Optional, Tuple

Player = str  # "X" or "O"
Cell = Optional[Player]  # None for an empty square
Board = Tuple[Cell, ...]

BOARD_SIZE = 9
PLAYERS: Tuple[Player, Player] = ("X", "O")

EMPTY_BOARD: Board = (None,) * BOARD_SIZE

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # diagonals
    (0, 4, 8),
    (2, 4, 6),
)


def _check_cell(cell: int) -> None:
    if not 0 <= cell < BOARD_SIZE:
        raise ValueError(f"Cell index {cell} is outside 0..{BOARD_SIZE - 1}")


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    """Return the first fully owned triple, scanning rows, columns, diagonals."""
    for a, b, c in WINNING_LINES:
        v = board[a]
        if v is not None and v == board[b] == board[c]:
            return (a, b, c)
    return None


def check_winner(board: Board) -> Optional[Player]:
    line = winning_line(board)
    if line is None:
        return None
    return board[line[0]]


def is_legal_move(board: Board, cell: int) -> bool:
    """True if the game on ``board`` is undecided and ``cell`` is empty."""
    _check_cell(cell)
    return check_winner(board) is None and board[cell] is None


def apply_move(board: Board, cell: int, player: Player) -> Board:
    """Return a new board with ``player`` marked at ``cell``.

    Legality is the caller's job; this only builds the next snapshot.
    """
    _check_cell(cell)
    if player not in PLAYERS:
        raise ValueError(f"Unknown player {player!r}")
    cells = list(board)
    cells[cell] = player
    return tuple(cells)
