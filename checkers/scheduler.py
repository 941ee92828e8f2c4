from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .ai import AIPlayer, Tier
from .board import Side
from .game import Game

logger = logging.getLogger(__name__)

Callback = Optional[Callable[[], None]]


class MoveScheduler:
    """Plays the automated side on a one-shot timer.

    The search runs on a clone in the timer thread without holding the lock.
    Its move is applied only if neither the scheduler token nor
    `Game.generation` changed meanwhile.
    """

    def __init__(
        self,
        game: Game,
        ai: AIPlayer,
        ai_side: Side = Side.BLACK,
        *,
        tier: Optional[Tier] = None,
        enabled: bool = False,
        first_delay: float = 0.25,
        follow_up_delay: float = 0.2,
        on_board_changed: Callback = None,
        on_turn_changed: Callback = None,
        on_game_over_check: Callback = None,
        lock: Optional[threading.RLock] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.game = game
        self.ai = ai
        self.ai_side = ai_side
        self.tier = tier
        self.enabled = enabled
        self.first_delay = first_delay
        self.follow_up_delay = follow_up_delay
        self.on_board_changed = on_board_changed
        self.on_turn_changed = on_turn_changed
        self.on_game_over_check = on_game_over_check
        self.lock = lock or threading.RLock()
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def set_enabled(self, enabled: bool) -> None:
        with self.lock:
            self.enabled = bool(enabled)
            if not self.enabled:
                self.cancel()

    def set_tier(self, tier: Optional[Tier]) -> None:
        with self.lock:
            self.tier = tier

    def cancel(self) -> None:
        with self.lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def maybe_act_now(self) -> None:
        with self.lock:
            if self.enabled and self.tier is not None and self.game.turn is self.ai_side:
                self.schedule_move(self.first_delay)

    def schedule_move(self, delay: Optional[float] = None) -> None:
        delay = self.first_delay if delay is None else delay
        with self.lock:
            self.cancel()
            token = self._generation
            timer = self._timer_factory(delay, self._fire, args=(token,))
            timer.daemon = True
            self._timer = timer
            logger.debug("AI move armed in %.3fs (token %d)", delay, token)
            timer.start()

    def _fire(self, token: int) -> None:
        try:
            self._run(token)
        except Exception:
            logger.exception("Automated move failed")

    def _run(self, token: int) -> None:
        with self.lock:
            if token != self._generation:
                return
            self._timer = None
            if not self.enabled or self.tier is None or self.game.turn is not self.ai_side:
                return
            board = self.game.board.clone()
            game_generation = self.game.generation
            tier = self.tier

        chosen = self.ai.choose_move(board, self.ai_side, tier)

        with self.lock:
            if token != self._generation or game_generation != self.game.generation:
                logger.debug("Discarding stale AI move (token %d)", token)
                return
            if chosen is None:
                logger.debug("%s has no move", self.ai_side.value)
                return

            self.game.apply_move(chosen.sx, chosen.sy, chosen.tx, chosen.ty, chosen.move)
            for callback in (self.on_board_changed, self.on_turn_changed, self.on_game_over_check):
                if callback is not None:
                    callback()

            if self.enabled and self.game.turn is self.ai_side:
                self.schedule_move(self.follow_up_delay)
