from __future__ import annotations

import pytest

from checkers import BoardState, Side


def make_board(pieces, turn: Side = Side.RED, selected=None) -> BoardState:
    """Empty 8x8 board with `pieces` ({(x, y): Piece}) placed on it."""
    board = BoardState()
    board.clear()
    for (x, y), kind in pieces.items():
        board.set(x, y, kind)
    board.turn = turn
    board.selected = selected
    return board


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    created = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


@pytest.fixture
def fake_timer():
    FakeTimer.created = []
    yield FakeTimer
    FakeTimer.created = []

