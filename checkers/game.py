from __future__ import annotations

from typing import Dict, List, Optional

from .board import BOARD_SIZE, DEFAULT_START_ROWS, BoardState, Move, Piece, PlannedMove, Side
from .moves import (
    capturing_pieces,
    collect_moves,
    get_legal_moves,
    has_any_capture_moves,
    has_capture_moves,
)


class MoveError(ValueError):
    pass


class InvariantViolation(RuntimeError):
    pass


def apply_move(board: BoardState, sx: int, sy: int, tx: int, ty: int, move: Optional[Move]) -> bool:
    """Play a move on `board`. Returns True iff the turn passed to the other side.

    After a capture the turn is kept while the landing square has another
    capture; the landing square then becomes the selection.
    """
    is_capture = move is not None and move.capture
    if is_capture and move.captured is None:
        raise InvariantViolation(f"Capture to ({tx}, {ty}) has no captured square")

    piece = board.get(sx, sy)
    board.set(sx, sy, Piece.EMPTY)

    if is_capture:
        cx, cy = move.captured
        board.set(cx, cy, Piece.EMPTY)

    if piece == Piece.RED and ty == 0:
        piece = Piece.RED_KING
    elif piece == Piece.BLACK and ty == board.size - 1:
        piece = Piece.BLACK_KING

    board.set(tx, ty, piece)

    if is_capture and has_capture_moves(board, tx, ty):
        board.selected = (tx, ty)
        return False

    board.selected = None
    board.turn = board.turn.opponent
    return True


class Game:
    """Owns the live board and is the only place it is mutated.

    Pointer input goes through `handle_input`, automated moves through
    `apply_move`. Every mutation bumps `generation`, which lets callers tell
    whether a result computed from an earlier position is stale.
    """

    def __init__(self, size: int = BOARD_SIZE, start_rows: int = DEFAULT_START_ROWS) -> None:
        self.board = BoardState(size, start_rows)
        self.generation = 0
        self.last_move: Optional[PlannedMove] = None

    @property
    def turn(self) -> Side:
        return self.board.turn

    @property
    def selected(self):
        return self.board.selected

    def reset(self, rows: Optional[int] = None) -> None:
        self.board.reset(rows)
        self.last_move = None
        self.generation += 1

    def get_legal_moves(self, x: int, y: int) -> List[Move]:
        return get_legal_moves(self.board, x, y)

    def allowed_moves(self, x: int, y: int) -> List[Move]:
        """Moves of the piece at (x, y) that the forced-capture rule permits."""
        moves = get_legal_moves(self.board, x, y)
        if has_any_capture_moves(self.board, self.turn):
            return [m for m in moves if m.capture]
        return moves

    def apply_move(self, sx: int, sy: int, tx: int, ty: int, move: Optional[Move]) -> bool:
        switched = apply_move(self.board, sx, sy, tx, ty, move)
        self.last_move = PlannedMove(sx, sy, move or Move(tx, ty))
        self.generation += 1
        return switched

    def push(self, sx: int, sy: int, tx: int, ty: int) -> bool:
        for planned in collect_moves(self.board, self.turn):
            if (planned.sx, planned.sy, planned.tx, planned.ty) == (sx, sy, tx, ty):
                return self.apply_move(sx, sy, tx, ty, planned.move)
        raise MoveError(f"Illegal move: ({sx}, {sy}) -> ({tx}, {ty})")

    def _owns(self, x: int, y: int) -> bool:
        return self.board.belongs_to(self.board.get(x, y), self.turn)

    def _select(self, square) -> None:
        self.board.selected = square
        self.generation += 1

    def handle_input(self, x: int, y: int) -> bool:
        """Process a click on (x, y). Returns True iff anything changed."""
        if not self.board.in_bounds(x, y):
            return False

        any_capture = has_any_capture_moves(self.board, self.turn)

        if self.board.selected is not None:
            sx, sy = self.board.selected
            for move in self.allowed_moves(sx, sy):
                if (move.x, move.y) == (x, y):
                    self.apply_move(sx, sy, x, y, move)
                    return True

            if self._owns(x, y):
                if any_capture and not has_capture_moves(self.board, x, y):
                    return False
                self._select((x, y))
                return True

            self._select(None)
            return True

        if self._owns(x, y):
            if any_capture and not has_capture_moves(self.board, x, y):
                return False
            self._select((x, y))
            return True

        return False

    def winner(self) -> Optional[Side]:
        """Side that has won, if any: the opponent of a side with no pieces or no moves."""
        for side in (Side.RED, Side.BLACK):
            can_move = any(
                get_legal_moves(self.board, x, y) for x, y, _ in self.board.pieces(side)
            )
            if not can_move:
                return side.opponent
        return None

    def is_game_over(self) -> bool:
        return self.winner() is not None

    def snapshot(self) -> Dict[str, object]:
        selected = self.board.selected
        targets: List[List[int]] = []
        if selected is not None:
            targets = [[m.x, m.y] for m in self.allowed_moves(*selected)]

        winner = self.winner()
        return {
            "board": self.board.rows(),
            "size": self.board.size,
            "turn": self.turn.value,
            "selected": list(selected) if selected is not None else None,
            "targets": targets,
            "must_capture": [list(sq) for sq in capturing_pieces(self.board, self.turn)],
            "game_over": winner is not None,
            "winner": winner.value if winner is not None else None,
            "last_move": self.last_move.as_dict() if self.last_move else None,
            "last_move_capture": bool(self.last_move and self.last_move.capture),
            "generation": self.generation,
        }
