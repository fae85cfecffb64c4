"""Turn alternation, computer turns and score keeping for a Noughts game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
import logging

from .ai import ComputerPlayer, Difficulty
from .game import (
    EMPTY,
    IN_PROGRESS,
    InvalidMoveIndex,
    Outcome,
    Player,
    evaluate,
    new_board,
    other,
    place,
)

logger = logging.getLogger(__name__)

STARTING_MARK: Player = "X"
COMPUTER_MARK: Player = "O"


class GameMode(str, Enum):
    HUMAN_VS_HUMAN = "pvp"
    HUMAN_VS_COMPUTER = "bot"


# ---------- States ----------


@dataclass(frozen=True)
class AwaitingMove:
    active_mark: Player


@dataclass(frozen=True)
class ComputerThinking:
    pass


@dataclass(frozen=True)
class Terminal:
    outcome: Outcome


SessionState = Union[AwaitingMove, ComputerThinking, Terminal]


# ---------- Events ----------


@dataclass(frozen=True)
class Accepted:
    next_state: SessionState


@dataclass(frozen=True)
class Rejected:
    reason: str


@dataclass(frozen=True)
class GameEnded:
    outcome: Outcome


SessionEvent = Union[Accepted, Rejected, GameEnded]


# ---------- Scores ----------


@dataclass
class Scoreboard:
    x: int = 0
    o: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome.winner == "X":
            self.x += 1
        elif outcome.winner == "O":
            self.o += 1
        elif outcome.drawn:
            self.draws += 1

    def reset(self) -> None:
        self.x = self.o = self.draws = 0

    def as_dict(self) -> Dict[str, int]:
        return {"X": self.x, "O": self.o, "D": self.draws}


# ---------- Session ----------


@dataclass
class GameSession:
    """One player's table: the live board, whose turn it is, and the scores.

    ``apply_move`` and ``play_computer_turn`` never raise for bad moves; they
    return :class:`Rejected` and leave the board untouched.
    """

    mode: GameMode = GameMode.HUMAN_VS_COMPUTER
    difficulty: Difficulty = Difficulty.EASY
    rng: Any = field(default=None, repr=False)
    on_game_end: Optional[Callable[[Outcome], None]] = field(default=None, repr=False)

    board: List[str] = field(default_factory=new_board, init=False)
    current_player: Player = field(default=STARTING_MARK, init=False)
    state: SessionState = field(default=AwaitingMove(STARTING_MARK), init=False)
    outcome: Outcome = field(default=IN_PROGRESS, init=False)
    scores: Scoreboard = field(default_factory=Scoreboard, init=False)
    games_started: int = field(default=0, init=False)
    last_move: Optional[int] = field(default=None, init=False)
    _computer: Optional[ComputerPlayer] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.start_new_game()

    # ---- API used by presentation code ----

    def start_new_game(
        self,
        mode: Optional[GameMode] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> None:
        self.mode = GameMode(mode if mode is not None else self.mode)
        self.difficulty = Difficulty(
            difficulty if difficulty is not None else self.difficulty
        )

        self.board = new_board()
        self.current_player = STARTING_MARK
        self.state = AwaitingMove(STARTING_MARK)
        self.outcome = IN_PROGRESS
        self.last_move = None
        self.games_started += 1
        self._computer = None
        if self.mode is GameMode.HUMAN_VS_COMPUTER:
            kwargs = {} if self.rng is None else {"rng": self.rng}
            self._computer = ComputerPlayer(
                player=COMPUTER_MARK, difficulty=self.difficulty, **kwargs
            )

    def reset_scores(self) -> None:
        self.scores.reset()

    def is_computer(self, mark: Player) -> bool:
        return self._computer is not None and self._computer.player == mark

    def apply_move(self, index: int) -> SessionEvent:
        if not isinstance(self.state, AwaitingMove):
            return self._reject(f"Cannot move while {_state_name(self.state)}")
        return self._play(index)

    def play_computer_turn(self) -> SessionEvent:
        """Let the computer pick and play its move right away."""
        if not isinstance(self.state, ComputerThinking) or self._computer is None:
            return self._reject("Computer is not due to move")
        move = self._computer.choose(list(self.board))
        if move is None:
            return self._reject("No cells left for the computer")
        return self._play(move)

    def snapshot(self) -> Dict[str, object]:
        return {
            "board": ["" if c == EMPTY else c for c in self.board],
            "currentPlayer": self.current_player,
            "state": _state_name(self.state),
            "winner": self.outcome.winner,
            "winningLine": list(self.outcome.line) if self.outcome.line else None,
            "drawn": self.outcome.drawn,
            "mode": self.mode.value,
            "difficulty": self.difficulty.value,
            "scores": self.scores.as_dict(),
        }

    # ---- helpers ----

    def _play(self, index: int) -> SessionEvent:
        try:
            place(self.board, index, self.current_player)
        except InvalidMoveIndex as exc:
            return self._reject(str(exc))
        self.last_move = index

        outcome = evaluate(self.board)
        if outcome.is_terminal:
            self.outcome = outcome
            self.state = Terminal(outcome)
            self.scores.record(outcome)
            logger.info(
                "Game %d ended: %s",
                self.games_started,
                f"{outcome.winner} wins" if outcome.winner else "draw",
            )
            if self.on_game_end is not None:
                self.on_game_end(outcome)
            return GameEnded(outcome)

        self.current_player = other(self.current_player)
        if self.is_computer(self.current_player):
            self.state = ComputerThinking()
        else:
            self.state = AwaitingMove(self.current_player)
        return Accepted(self.state)

    def _reject(self, reason: str) -> Rejected:
        logger.debug("Rejected move: %s", reason)
        return Rejected(reason)


def _state_name(state: SessionState) -> str:
    if isinstance(state, Terminal):
        return "terminal"
    if isinstance(state, ComputerThinking):
        return "thinking"
    return "awaiting"


def apply_move_to_session(session: GameSession, index: int) -> SessionEvent:
    return session.apply_move(index)
