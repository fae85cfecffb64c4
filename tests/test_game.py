"""Unit tests for Noughts board rules."""

import itertools

import pytest
from hypothesis import assume, given, strategies as st

from noughts.game import (
    EMPTY,
    IN_PROGRESS,
    WINNING_LINES,
    InvalidBoard,
    InvalidMoveIndex,
    empty_indices,
    evaluate,
    new_board,
    other,
    place,
)


def board_from(text):
    return [EMPTY if c == "." else c for c in text]


def complete_lines(board):
    return [
        line
        for line in WINNING_LINES
        if board[line[0]] != EMPTY and len({board[i] for i in line}) == 1
    ]


@pytest.mark.parametrize("line", WINNING_LINES)
def test_single_line_is_reported_as_win(line):
    board = new_board()
    for i in line:
        board[i] = "O"
    outcome = evaluate(board)
    assert outcome.winner == "O"
    assert outcome.line == line
    assert outcome.is_terminal


def test_win_alongside_other_marks():
    outcome = evaluate(board_from("XXXOO...."))
    assert outcome.winner == "X"
    assert outcome.line == (0, 1, 2)


def test_first_line_in_order_wins_on_degenerate_board():
    outcome = evaluate(board_from("XXXXXXOOO"))
    assert outcome.line == (0, 1, 2)


def test_full_board_without_line_is_draw():
    outcome = evaluate(board_from("XOXOXOOXO"))
    assert outcome.drawn
    assert outcome.winner is None
    assert outcome.is_terminal


def test_full_board_with_line_is_not_draw():
    outcome = evaluate(board_from("XXXOOXXOO"))
    assert outcome.winner == "X"
    assert not outcome.drawn


def test_open_board_in_progress():
    assert evaluate(new_board()) == IN_PROGRESS
    assert evaluate(board_from("XO.......")) == IN_PROGRESS


def test_empty_indices_ascending():
    assert empty_indices(board_from("X...O...X")) == [1, 2, 3, 5, 6, 7]
    assert empty_indices(new_board()) == list(range(9))
    assert empty_indices(board_from("XOXOXOOXO")) == []


def test_completing_a_row_wins():
    board = board_from("XX.......")
    place(board, 2, "X")
    assert evaluate(board).winner == "X"
    assert evaluate(board).line == (0, 1, 2)


def test_place_rejects_occupied_and_out_of_range():
    board = board_from("X........")
    with pytest.raises(InvalidMoveIndex):
        place(board, 0, "O")
    with pytest.raises(InvalidMoveIndex):
        place(board, 9, "O")
    with pytest.raises(InvalidMoveIndex):
        place(board, -1, "O")
    assert board == board_from("X........")


def test_place_rejects_move_after_win():
    board = board_from("XXXOO....")
    with pytest.raises(InvalidMoveIndex):
        place(board, 8, "O")


def test_malformed_board_rejected():
    with pytest.raises(InvalidBoard):
        evaluate([EMPTY] * 8)
    with pytest.raises(InvalidBoard):
        evaluate(["Z"] + [EMPTY] * 8)


def test_other_mark():
    assert other("X") == "O"
    assert other("O") == "X"


cells = st.lists(st.sampled_from([EMPTY, "X", "O"]), min_size=9, max_size=9)


@given(cells, st.sampled_from(WINNING_LINES), st.sampled_from(["X", "O"]))
def test_one_complete_line_wins_whatever_else_is_on_the_board(board, line, mark):
    for i in line:
        board[i] = mark
    assume(complete_lines(board) == [line])
    outcome = evaluate(board)
    assert outcome.winner == mark
    assert outcome.line == line
    assert not outcome.drawn


def test_evaluate_matches_line_scan_on_every_board():
    for board in itertools.product([EMPTY, "X", "O"], repeat=9):
        lines = complete_lines(board)
        outcome = evaluate(board)
        if lines:
            assert outcome.line == lines[0]
            assert outcome.winner == board[lines[0][0]]
            assert not outcome.drawn
        else:
            assert outcome.winner is None
            assert outcome.drawn == (EMPTY not in board)
