from __future__ import annotations

from typing import Iterator, List

from .board import BoardState, Move, Piece, PlannedMove, Side, Square

DIRECTIONS = ((-1, -1), (1, -1), (-1, 1), (1, 1))


def _is_opponent(board: BoardState, side: Side, x: int, y: int) -> bool:
    return board.belongs_to(board.get(x, y), side.opponent)


def _is_empty(board: BoardState, x: int, y: int) -> bool:
    return board.in_bounds(x, y) and board.get(x, y) == Piece.EMPTY


def _walk_king_ray(
    board: BoardState, x: int, y: int, dx: int, dy: int, side: Side
) -> Iterator[Move]:
    target = None
    nx, ny = x + dx, y + dy
    while board.in_bounds(nx, ny):
        if _is_empty(board, nx, ny):
            if target is None:
                yield Move(nx, ny)
            else:
                yield Move(nx, ny, capture=True, captured=target)
        elif target is None and _is_opponent(board, side, nx, ny):
            target = (nx, ny)
        else:
            # own piece before a target, or any piece after one
            return
        nx, ny = nx + dx, ny + dy


def _man_capture(board: BoardState, x: int, y: int, dx: int, dy: int, side: Side):
    nx, ny = x + dx, y + dy
    jx, jy = nx + dx, ny + dy
    if _is_opponent(board, side, nx, ny) and _is_empty(board, jx, jy):
        return Move(jx, jy, capture=True, captured=(nx, ny))
    return None


def iter_moves(board: BoardState, x: int, y: int) -> Iterator[Move]:
    kind = board.get(x, y)
    side = board.side_of(kind)
    if side is None:
        return

    if board.is_king(kind):
        for dx, dy in DIRECTIONS:
            yield from _walk_king_ray(board, x, y, dx, dy, side)
        return

    for dx, dy in DIRECTIONS:
        if dy == side.forward and _is_empty(board, x + dx, y + dy):
            yield Move(x + dx, y + dy)
            continue
        jump = _man_capture(board, x, y, dx, dy, side)
        if jump is not None:
            yield jump


def get_legal_moves(board: BoardState, x: int, y: int) -> List[Move]:
    """Return the moves of the piece at (x, y), in direction order.

    Forced capture is not applied here; see `collect_moves`.
    """
    return list(iter_moves(board, x, y))


def has_capture_moves(board: BoardState, x: int, y: int) -> bool:
    kind = board.get(x, y)
    side = board.side_of(kind)
    if side is None:
        return False

    if board.is_king(kind):
        for dx, dy in DIRECTIONS:
            if any(m.capture for m in _walk_king_ray(board, x, y, dx, dy, side)):
                return True
        return False

    return any(_man_capture(board, x, y, dx, dy, side) for dx, dy in DIRECTIONS)


def has_any_capture_moves(board: BoardState, side: Side) -> bool:
    return any(has_capture_moves(board, x, y) for x, y, _ in board.pieces(side))


def capturing_pieces(board: BoardState, side: Side) -> List[Square]:
    return [(x, y) for x, y, _ in board.pieces(side) if has_capture_moves(board, x, y)]


def collect_moves(board: BoardState, side: Side) -> List[PlannedMove]:
    """All moves `side` may play right now.

    Only captures are returned when any capture exists for `side`. While a
    capture chain is in progress (`board.selected` holds a piece of `side`)
    only that piece may move.
    """
    any_capture = has_any_capture_moves(board, side)

    if board.selected is not None:
        sx, sy = board.selected
        if board.belongs_to(board.get(sx, sy), side):
            return [
                PlannedMove(sx, sy, m)
                for m in iter_moves(board, sx, sy)
                if m.capture or not any_capture
            ]

    moves: List[PlannedMove] = []
    for x, y, _ in board.pieces(side):
        for m in iter_moves(board, x, y):
            if m.capture or not any_capture:
                moves.append(PlannedMove(x, y, m))
    return moves
