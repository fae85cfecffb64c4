"""Noughts package exposing the rules engine, computer opponent, and web API."""

from .ai import ComputerPlayer, Difficulty, PrecallViolation, select_computer_move
from .game import Outcome, evaluate_board, legal_moves
from .session import GameMode, GameSession, apply_move_to_session
from .ui import app

__all__ = [
    "ComputerPlayer",
    "Difficulty",
    "GameMode",
    "GameSession",
    "Outcome",
    "PrecallViolation",
    "app",
    "apply_move_to_session",
    "evaluate_board",
    "legal_moves",
    "select_computer_move",
]
