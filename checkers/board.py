from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Tuple

BOARD_SIZE = 8
DEFAULT_START_ROWS = 3

Square = Tuple[int, int]


class Piece(IntEnum):
    EMPTY = 0
    RED = 1
    BLACK = 2
    RED_KING = 3
    BLACK_KING = 4


class Side(Enum):
    """Side to move. RED starts at the bottom and moves first."""

    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.RED else Side.RED

    @property
    def forward(self) -> int:
        # Row delta of a man's simple move.
        return -1 if self is Side.RED else 1


@dataclass(frozen=True)
class Move:
    """A candidate destination for a piece, optionally jumping over `captured`."""

    x: int
    y: int
    capture: bool = False
    captured: Optional[Square] = None


@dataclass(frozen=True)
class PlannedMove:
    """A move together with the square it starts from."""

    sx: int
    sy: int
    move: Move

    @property
    def tx(self) -> int:
        return self.move.x

    @property
    def ty(self) -> int:
        return self.move.y

    @property
    def capture(self) -> bool:
        return self.move.capture

    def as_dict(self) -> dict:
        return {
            "from": [self.sx, self.sy],
            "to": [self.tx, self.ty],
            "capture": self.capture,
            "captured": list(self.move.captured) if self.move.captured else None,
        }


class BoardState:
    """Grid of pieces plus the side to move and the in-progress capture selection.

    Cells are addressed as (x, y) with x the column. Reads outside the board
    return Piece.EMPTY and writes outside the board are ignored.
    """

    def __init__(self, size: int = BOARD_SIZE, start_rows: int = DEFAULT_START_ROWS) -> None:
        if size < 4:
            raise ValueError(f"Board size must be at least 4, got {size}")
        self.size = size
        self.start_rows = start_rows
        self.grid: List[List[Piece]] = [[Piece.EMPTY] * size for _ in range(size)]
        self.turn: Side = Side.RED
        self.selected: Optional[Square] = None
        self.reset()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Piece:
        if not self.in_bounds(x, y):
            return Piece.EMPTY
        return self.grid[y][x]

    def set(self, x: int, y: int, kind: Piece) -> None:
        if not self.in_bounds(x, y):
            return
        self.grid[y][x] = Piece(kind)

    def clear(self) -> None:
        for row in self.grid:
            for x in range(self.size):
                row[x] = Piece.EMPTY
        self.selected = None

    def reset(self, rows: Optional[int] = None) -> None:
        rows = self.start_rows if rows is None else rows
        if rows < 1 or 2 * rows >= self.size:
            raise ValueError(
                f"Starting rows must be between 1 and {(self.size - 1) // 2}, got {rows}"
            )

        self.clear()
        for y in range(rows):
            for x in range(self.size):
                if (x + y) % 2 == 1:
                    self.grid[y][x] = Piece.BLACK
        for y in range(self.size - rows, self.size):
            for x in range(self.size):
                if (x + y) % 2 == 1:
                    self.grid[y][x] = Piece.RED

        self.turn = Side.RED
        self.selected = None

    def clone(self) -> "BoardState":
        other = BoardState.__new__(BoardState)
        other.size = self.size
        other.start_rows = self.start_rows
        other.grid = [row[:] for row in self.grid]
        other.turn = self.turn
        other.selected = self.selected
        return other

    # Classifiers

    @staticmethod
    def is_red(kind: Piece) -> bool:
        return kind == Piece.RED or kind == Piece.RED_KING

    @staticmethod
    def is_black(kind: Piece) -> bool:
        return kind == Piece.BLACK or kind == Piece.BLACK_KING

    @staticmethod
    def is_king(kind: Piece) -> bool:
        return kind == Piece.RED_KING or kind == Piece.BLACK_KING

    @classmethod
    def side_of(cls, kind: Piece) -> Optional[Side]:
        if cls.is_red(kind):
            return Side.RED
        if cls.is_black(kind):
            return Side.BLACK
        return None

    @classmethod
    def belongs_to(cls, kind: Piece, side: Side) -> bool:
        return cls.side_of(kind) is side

    def pieces(self, side: Side) -> Iterator[Tuple[int, int, Piece]]:
        for y in range(self.size):
            for x in range(self.size):
                kind = self.grid[y][x]
                if self.belongs_to(kind, side):
                    yield x, y, kind

    def count(self, side: Side) -> int:
        return sum(1 for _ in self.pieces(side))

    def rows(self) -> List[List[int]]:
        return [[int(kind) for kind in row] for row in self.grid]

    def __str__(self) -> str:
        symbols = {
            Piece.EMPTY: ".",
            Piece.RED: "r",
            Piece.BLACK: "b",
            Piece.RED_KING: "R",
            Piece.BLACK_KING: "B",
        }
        lines = [" ".join(symbols[kind] for kind in row) for row in self.grid]
        return "\n".join(lines)
