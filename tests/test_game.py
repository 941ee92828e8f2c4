from __future__ import annotations

import pytest

from checkers import Game, InvariantViolation, Move, MoveError, Piece, Side
from checkers.game import apply_move

from conftest import make_board


def game_with(pieces, turn=Side.RED, selected=None) -> Game:
    game = Game()
    game.board = make_board(pieces, turn=turn, selected=selected)
    return game


def test_simple_move_flips_turn():
    game = Game()
    switched = game.apply_move(2, 5, 1, 4, Move(1, 4))
    assert switched is True
    assert game.board.get(2, 5) == Piece.EMPTY
    assert game.board.get(1, 4) == Piece.RED
    assert game.turn is Side.BLACK
    assert game.selected is None


def test_single_capture_removes_piece_and_flips_turn():
    game = game_with({(2, 5): Piece.RED, (1, 4): Piece.BLACK, (7, 0): Piece.BLACK})
    capture = next(m for m in game.get_legal_moves(2, 5) if m.capture)
    assert (capture.x, capture.y, capture.captured) == (0, 3, (1, 4))

    assert game.apply_move(2, 5, 0, 3, capture) is True
    assert game.board.get(1, 4) == Piece.EMPTY
    assert game.board.get(0, 3) == Piece.RED
    assert game.turn is Side.BLACK


def test_capture_continuation_keeps_turn_and_selects_landing():
    game = game_with({(2, 5): Piece.RED, (3, 4): Piece.BLACK, (5, 2): Piece.BLACK})
    move = Move(4, 3, capture=True, captured=(3, 4))

    assert game.apply_move(2, 5, 4, 3, move) is False
    assert game.turn is Side.RED
    assert game.selected == (4, 3)

    second = Move(6, 1, capture=True, captured=(5, 2))
    assert game.apply_move(4, 3, 6, 1, second) is True
    assert game.turn is Side.BLACK
    assert game.selected is None
    assert game.board.count(Side.BLACK) == 0


def test_men_promote_on_far_rank():
    game = game_with({(1, 1): Piece.RED, (6, 6): Piece.BLACK})
    game.apply_move(1, 1, 0, 0, Move(0, 0))
    assert game.board.get(0, 0) == Piece.RED_KING
    game.apply_move(6, 6, 7, 7, Move(7, 7))
    assert game.board.get(7, 7) == Piece.BLACK_KING


def test_capture_without_captured_square_is_rejected():
    board = make_board({(2, 5): Piece.RED, (1, 4): Piece.BLACK})
    with pytest.raises(InvariantViolation):
        apply_move(board, 2, 5, 0, 3, Move(0, 3, capture=True))
    assert board.get(2, 5) == Piece.RED


def test_click_select_then_move():
    game = Game()
    assert game.handle_input(2, 5) is True
    assert game.selected == (2, 5)
    assert game.handle_input(1, 4) is True
    assert game.board.get(1, 4) == Piece.RED
    assert game.turn is Side.BLACK


def test_click_without_selection_ignores_empty_and_enemy():
    game = Game()
    assert game.handle_input(3, 4) is False
    assert game.handle_input(1, 2) is False
    assert game.handle_input(-1, 9) is False
    assert game.selected is None


def test_click_other_own_piece_changes_selection():
    game = Game()
    game.handle_input(2, 5)
    assert game.handle_input(4, 5) is True
    assert game.selected == (4, 5)


def test_click_elsewhere_clears_selection():
    game = Game()
    game.handle_input(2, 5)
    assert game.handle_input(4, 3) is True
    assert game.selected is None
    assert game.turn is Side.RED


def test_forced_capture_blocks_non_capturing_piece():
    game = game_with({(2, 5): Piece.RED, (1, 4): Piece.BLACK, (6, 5): Piece.RED})
    assert game.handle_input(6, 5) is False
    assert game.selected is None

    assert game.handle_input(2, 5) is True
    # simple move is not allowed while a capture exists
    assert game.handle_input(3, 4) is True
    assert game.selected is None
    assert game.board.get(2, 5) == Piece.RED

    game.handle_input(2, 5)
    assert game.handle_input(6, 5) is False
    assert game.selected == (2, 5)

    assert game.handle_input(0, 3) is True
    assert game.board.get(1, 4) == Piece.EMPTY
    assert game.turn is Side.BLACK


def test_click_through_multi_jump():
    game = game_with({(2, 5): Piece.RED, (3, 4): Piece.BLACK, (5, 2): Piece.BLACK})
    game.handle_input(2, 5)
    game.handle_input(4, 3)
    assert game.selected == (4, 3)
    assert game.turn is Side.RED
    game.handle_input(6, 1)
    assert game.turn is Side.BLACK


def test_push_validates_moves():
    game = Game()
    assert game.push(2, 5, 3, 4) is True
    with pytest.raises(MoveError):
        game.push(2, 5, 3, 4)
    with pytest.raises(MoveError):
        # red piece on black's turn
        game.push(0, 5, 1, 4)


def test_push_rejects_simple_move_when_capture_exists():
    game = game_with({(2, 5): Piece.RED, (1, 4): Piece.BLACK, (6, 5): Piece.RED})
    with pytest.raises(MoveError):
        game.push(6, 5, 5, 4)
    game.push(2, 5, 0, 3)
    assert game.board.get(0, 3) == Piece.RED


def test_winner_when_side_has_no_pieces_or_moves():
    game = Game()
    assert game.winner() is None
    assert not game.is_game_over()

    game = game_with({(0, 7): Piece.RED})
    assert game.winner() is Side.RED

    # black man on the last rank cannot move
    game = game_with({(2, 5): Piece.RED, (0, 7): Piece.BLACK})
    assert game.winner() is Side.RED


def test_generation_bumps_on_mutation():
    game = Game()
    start = game.generation
    game.handle_input(3, 4)
    assert game.generation == start
    game.handle_input(2, 5)
    assert game.generation == start + 1
    game.reset()
    assert game.generation == start + 2


def test_snapshot_shape():
    game = Game()
    game.handle_input(2, 5)
    snap = game.snapshot()
    assert snap["turn"] == "red"
    assert snap["selected"] == [2, 5]
    assert sorted(snap["targets"]) == [[1, 4], [3, 4]]
    assert snap["must_capture"] == []
    assert snap["game_over"] is False
    assert snap["board"][5][2] == int(Piece.RED)


def test_capture_onto_last_rank_continues_as_king():
    game = game_with({(3, 2): Piece.RED, (2, 1): Piece.BLACK, (4, 3): Piece.BLACK})
    move = Move(1, 0, capture=True, captured=(2, 1))

    assert game.apply_move(3, 2, 1, 0, move) is False
    assert game.board.get(1, 0) == Piece.RED_KING
    assert game.selected == (1, 0)
    assert game.turn is Side.RED
    captures = [m for m in game.get_legal_moves(1, 0) if m.capture]
    assert {(m.x, m.y) for m in captures} == {(5, 4), (6, 5), (7, 6)}
    assert all(m.captured == (4, 3) for m in captures)
