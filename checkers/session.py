from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional, Union

from .ai import AIPlayer, Difficulty, tier_for
from .board import Side
from .config import Config
from .game import Game, MoveError
from .scheduler import MoveScheduler

logger = logging.getLogger(__name__)


class GameSession:
    """One game against an optional automated opponent.

    Ties the game, the AI and the scheduler to a single lock and forwards
    changes to the listeners a renderer or UI registers.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        on_board_changed: Optional[Callable[[], None]] = None,
        on_turn_changed: Optional[Callable[[], None]] = None,
        on_game_over: Optional[Callable[[Side], None]] = None,
        timer_factory=threading.Timer,
    ) -> None:
        self.config = config or Config()
        self.lock = threading.RLock()
        self.game = Game(self.config.game.board_size, self.config.game.start_rows)
        self.ai = AIPlayer(seed=self.config.ai.seed)
        self.difficulty = Difficulty(self.config.ai.difficulty)
        self.winner: Optional[Side] = None

        self.on_board_changed = on_board_changed
        self.on_turn_changed = on_turn_changed
        self.on_game_over = on_game_over

        self.scheduler = MoveScheduler(
            self.game,
            self.ai,
            self.config.ai.side,
            tier=tier_for(self.difficulty, self.config.ai),
            enabled=self.difficulty is not Difficulty.OFF,
            first_delay=self.config.scheduler.first_delay,
            follow_up_delay=self.config.scheduler.follow_up_delay,
            on_board_changed=self._board_changed,
            on_turn_changed=self._turn_changed,
            on_game_over_check=self.check_game_over,
            lock=self.lock,
            timer_factory=timer_factory,
        )

    @property
    def ai_side(self) -> Side:
        return self.scheduler.ai_side

    def _board_changed(self) -> None:
        if self.on_board_changed is not None:
            self.on_board_changed()

    def _turn_changed(self) -> None:
        if self.on_turn_changed is not None:
            self.on_turn_changed()

    def check_game_over(self) -> Optional[Side]:
        with self.lock:
            winner = self.game.winner()
            if winner is not None and self.winner is None:
                self.winner = winner
                logger.info("Game over: %s wins", winner.value)
                if self.on_game_over is not None:
                    self.on_game_over(winner)
            return winner

    def _refresh(self) -> None:
        self._board_changed()
        self._turn_changed()

    def click(self, x: int, y: int) -> bool:
        with self.lock:
            if self.winner is not None:
                return False
            changed = self.game.handle_input(x, y)
            if not changed:
                return False
            self._refresh()
            self.check_game_over()
            if self.winner is None:
                self.scheduler.maybe_act_now()
            return True

    def move(self, sx: int, sy: int, tx: int, ty: int) -> bool:
        """Play an explicit move for the side to move. Raises MoveError if illegal."""
        with self.lock:
            if self.winner is not None:
                raise MoveError(f"Game is over: {self.winner.value} won")
            switched = self.game.push(sx, sy, tx, ty)
            self._refresh()
            self.check_game_over()
            if self.winner is None:
                self.scheduler.maybe_act_now()
            return switched

    def reset(self, rows: Optional[int] = None) -> None:
        with self.lock:
            self.scheduler.cancel()
            self.game.reset(rows)
            self.winner = None
            self._refresh()
            self.scheduler.maybe_act_now()

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        difficulty = Difficulty(difficulty)
        with self.lock:
            self.difficulty = difficulty
            enabled = difficulty is not Difficulty.OFF
            self.scheduler.set_enabled(enabled)
            self.scheduler.set_tier(tier_for(difficulty, self.config.ai))
            self.reset()

    def close(self) -> None:
        self.scheduler.cancel()

    def state(self) -> Dict[str, object]:
        with self.lock:
            snap = self.game.snapshot()
            snap["difficulty"] = self.difficulty.value
            snap["ai_side"] = self.ai_side.value
            snap["ai_pending"] = self.scheduler.pending
            return snap
