"""Alpha-beta minimax and the tiered computer opponent for Noughts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence
import logging
import math
import random

from .game import EMPTY, Player, check_board, empty_indices, evaluate, other

logger = logging.getLogger(__name__)

WIN_SCORE = 10
EASY_RANDOM_RATE = 0.8
MEDIUM_RANDOM_RATE = 0.5


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PrecallViolation(RuntimeError):
    """The computer was asked to move on a board that is already decided."""


# ---- search ----


def minimax_score(
    board: List[str],
    maximizing: bool,
    alpha: float,
    beta: float,
    depth: int,
    maximizer: Player = "O",
) -> int:
    """Score ``board`` for ``maximizer`` assuming perfect play from both sides.

    Wins are worth ``WIN_SCORE - depth`` so faster wins and slower losses are
    preferred. Trial marks are written into ``board`` and always taken back
    before returning.
    """
    res = evaluate(board)
    if res.is_win:
        return WIN_SCORE - depth if res.winner == maximizer else depth - WIN_SCORE
    if res.drawn:
        return 0

    minimizer = other(maximizer)
    moves = empty_indices(board)

    if maximizing:
        best = -math.inf
        for i in moves:
            board[i] = maximizer
            try:
                best = max(
                    best, minimax_score(board, False, alpha, beta, depth + 1, maximizer)
                )
            finally:
                board[i] = EMPTY
            alpha = max(alpha, best)
            if beta <= alpha:
                break
    else:
        best = math.inf
        for i in moves:
            board[i] = minimizer
            try:
                best = min(
                    best, minimax_score(board, True, alpha, beta, depth + 1, maximizer)
                )
            finally:
                board[i] = EMPTY
            beta = min(beta, best)
            if beta <= alpha:
                break
    return int(best)


def best_move(board: Sequence[str], mark: Player) -> Optional[int]:
    """Optimal cell for ``mark``; the lowest index wins ties. ``None`` if full."""
    cells = list(board)
    check_board(cells)
    best, move = -math.inf, None
    for i in empty_indices(cells):
        cells[i] = mark
        try:
            score = minimax_score(cells, False, -math.inf, math.inf, 0, maximizer=mark)
        finally:
            cells[i] = EMPTY
        if score > best:
            best, move = score, i
    return move


# ---- difficulty policy ----


def winning_move(board: Sequence[str], mark: Player) -> Optional[int]:
    """First empty cell where ``mark`` completes a line, if any."""
    cells = list(board)
    for i in empty_indices(cells):
        cells[i] = mark
        won = evaluate(cells).winner == mark
        cells[i] = EMPTY
        if won:
            return i
    return None


def _tactical_move(cells: List[str], mark: Player, rng: Any) -> int:
    # Win if possible, else block, else anything.
    for player in (mark, other(mark)):
        move = winning_move(cells, player)
        if move is not None:
            return move
    return rng.choice(empty_indices(cells))


def select_computer_move(
    board: Sequence[str],
    difficulty: Difficulty,
    mark: Player = "O",
    rng: Any = None,
) -> Optional[int]:
    """Pick the computer's cell for ``difficulty``.

    ``rng`` needs ``random()`` and ``choice(seq)``; a fresh ``random.Random``
    is used when omitted. Returns ``None`` on a full board and raises
    :class:`PrecallViolation` if the board already has a winner.
    """
    difficulty = Difficulty(difficulty)
    cells = list(board)
    if evaluate(cells).is_win:
        raise PrecallViolation("Cannot select a move on a finished board")
    empty = empty_indices(cells)
    if not empty:
        return None
    if rng is None:
        rng = random.Random()

    if difficulty is Difficulty.HARD:
        move = best_move(cells, mark)
    elif difficulty is Difficulty.EASY and rng.random() < EASY_RANDOM_RATE:
        move = rng.choice(empty)
    elif difficulty is Difficulty.MEDIUM and rng.random() < MEDIUM_RANDOM_RATE:
        move = rng.choice(empty)
    else:
        move = _tactical_move(cells, mark, rng)

    logger.debug("%s move for %s: %s", difficulty.value, mark, move)
    return move


@dataclass
class ComputerPlayer:
    """Computer opponent bound to one mark and difficulty tier."""

    player: Player = "O"
    difficulty: Difficulty = Difficulty.EASY
    rng: Any = field(default_factory=random.Random, repr=False)

    def choose(self, board: Sequence[str]) -> Optional[int]:
        return select_computer_move(board, self.difficulty, self.player, self.rng)
