"""Core rules for Noughts (3x3 tic-tac-toe)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

Player = str  # "X" or "O"
Line = Tuple[int, int, int]

EMPTY = " "
PLAYERS: Tuple[Player, Player] = ("X", "O")

# Rows, then columns, then diagonals. evaluate() reports the first match.
WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class InvalidBoard(ValueError):
    """Raised when a board is not nine valid cells."""


class InvalidMoveIndex(ValueError):
    """Raised when a move targets a missing or occupied cell."""


@dataclass(frozen=True)
class Outcome:
    winner: Optional[Player] = None
    line: Optional[Line] = None
    drawn: bool = False

    @property
    def is_win(self) -> bool:
        return self.winner is not None

    @property
    def is_draw(self) -> bool:
        return self.drawn

    @property
    def is_terminal(self) -> bool:
        return self.is_win or self.drawn


IN_PROGRESS = Outcome()
DRAW = Outcome(drawn=True)


def new_board() -> List[str]:
    return [EMPTY] * 9


def other(mark: Player) -> Player:
    if mark not in PLAYERS:
        raise ValueError(f"Unknown mark {mark!r}")
    return "O" if mark == "X" else "X"


def check_board(board: Sequence[str]) -> None:
    if len(board) != 9:
        raise InvalidBoard(f"Board must have 9 cells, got {len(board)}")
    for cell in board:
        if cell != EMPTY and cell not in PLAYERS:
            raise InvalidBoard(f"Unknown cell value {cell!r}")


def evaluate(board: Sequence[str]) -> Outcome:
    """Return the outcome of ``board``: a win with its line, a draw, or in progress."""
    check_board(board)
    for a, b, c in WINNING_LINES:
        v = board[a]
        if v != EMPTY and v == board[b] == board[c]:
            return Outcome(winner=v, line=(a, b, c))
    if all(cell != EMPTY for cell in board):
        return DRAW
    return IN_PROGRESS


def empty_indices(board: Sequence[str]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell == EMPTY]


def place(board: List[str], index: int, mark: Player) -> None:
    """Put ``mark`` on ``board`` in place, refusing anything illegal."""
    if mark not in PLAYERS:
        raise ValueError(f"Unknown mark {mark!r}")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidMoveIndex(f"Cell index must be an integer, got {index!r}")
    if not 0 <= index < 9:
        raise InvalidMoveIndex(f"Cell index {index} is outside the board")
    if evaluate(board).is_terminal:
        raise InvalidMoveIndex("Board already resolved")
    if board[index] != EMPTY:
        raise InvalidMoveIndex("Cell already occupied")
    board[index] = mark


# Names used by presentation code.
evaluate_board = evaluate
legal_moves = empty_indices
