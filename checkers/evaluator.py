from __future__ import annotations

from typing import Dict

from .board import BoardState, Piece, Side
from .moves import collect_moves


class Evaluator:
    """Static evaluation of a position from one side's point of view.

    Material (man 100, king 300) counts positive for `side` and negative for
    its opponent, plus a mobility bonus of 5 per move of difference.
    """

    MATERIAL_VALUES: Dict[Piece, int] = {
        Piece.RED: 100,
        Piece.BLACK: 100,
        Piece.RED_KING: 300,
        Piece.BLACK_KING: 300,
    }

    MOBILITY_WEIGHT = 5

    WIN_SCORE = 100000

    @classmethod
    def material(cls, board: BoardState, side: Side) -> int:
        score = 0
        for x, y, kind in board.pieces(side):
            score += cls.MATERIAL_VALUES[kind]
        for x, y, kind in board.pieces(side.opponent):
            score -= cls.MATERIAL_VALUES[kind]
        return score

    @staticmethod
    def move_count(board: BoardState, side: Side) -> int:
        # a capture chain in progress leaves the other side with no moves
        if board.selected is not None and not board.belongs_to(board.get(*board.selected), side):
            return 0
        return len(collect_moves(board, side))

    @classmethod
    def mobility(cls, board: BoardState, side: Side) -> int:
        own = cls.move_count(board, side)
        other = cls.move_count(board, side.opponent)
        return cls.MOBILITY_WEIGHT * (own - other)

    @classmethod
    def evaluate(cls, board: BoardState, side: Side) -> int:
        return cls.material(board, side) + cls.mobility(board, side)
