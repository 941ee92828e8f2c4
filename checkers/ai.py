from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from .board import BoardState, PlannedMove, Side
from .evaluator import Evaluator
from .game import apply_move
from .moves import collect_moves

if TYPE_CHECKING:
    from .config import AIConfig

logger = logging.getLogger(__name__)

INF = 10**9


@dataclass(frozen=True)
class RandomTier:
    name: str = "random"


@dataclass(frozen=True)
class AlphaBetaTier:
    depth: int = 4
    name: str = "alphabeta"

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {self.depth}")


Tier = Union[RandomTier, AlphaBetaTier]


class Difficulty(str, Enum):
    OFF = "off"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def tier_for(difficulty: Union[Difficulty, str], config: Optional["AIConfig"] = None) -> Optional[Tier]:
    """Map a difficulty level onto a search tier. `off` has no tier."""
    difficulty = Difficulty(difficulty)
    medium_depth = config.medium_depth if config else 4
    hard_depth = config.hard_depth if config else 7

    if difficulty is Difficulty.OFF:
        return None
    if difficulty is Difficulty.EASY:
        return RandomTier()
    if difficulty is Difficulty.MEDIUM:
        return AlphaBetaTier(medium_depth)
    return AlphaBetaTier(hard_depth)


@dataclass
class SearchResult:
    best_moves: List[PlannedMove]
    score: int
    nodes: int
    scored_moves: List[Tuple[PlannedMove, int]] = field(default_factory=list)


class AIPlayer:
    """Chooses moves for one side, either at random or by fixed-depth minimax
    with alpha-beta pruning.

    Every hypothetical line is played on a clone of the board; the board passed
    in is never modified.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self.rng = rng or random.Random(seed)

    def choose_move(self, board: BoardState, side: Side, tier: Tier) -> Optional[PlannedMove]:
        if isinstance(tier, RandomTier):
            return self._choose_random(board, side)

        result = self.search(board, side, tier.depth)
        if not result.best_moves:
            return None
        chosen = self.rng.choice(result.best_moves)
        logger.debug(
            "depth %d: %s plays %s (score %d, %d nodes, %d tied)",
            tier.depth, side.value, chosen.as_dict(), result.score, result.nodes, len(result.best_moves),
        )
        return chosen

    def _choose_random(self, board: BoardState, side: Side) -> Optional[PlannedMove]:
        moves = collect_moves(board, side)
        if not moves:
            return None
        captures = [m for m in moves if m.capture]
        return self.rng.choice(captures or moves)

    def search(self, board: BoardState, side: Side, depth: int) -> SearchResult:
        """Score every candidate move of `side` to `depth` plies.

        Each root candidate gets its own full window so its value is exact;
        all candidates sharing the best value are returned.
        """
        best_score = -INF
        best_moves: List[PlannedMove] = []
        scored_moves: List[Tuple[PlannedMove, int]] = []
        nodes = 0

        for planned in collect_moves(board, side):
            child = board.clone()
            apply_move(child, planned.sx, planned.sy, planned.tx, planned.ty, planned.move)
            score, child_nodes = self._alphabeta(child, depth - 1, -INF, INF, side)
            nodes += child_nodes + 1
            scored_moves.append((planned, score))
            if score > best_score:
                best_score = score
                best_moves = [planned]
            elif score == best_score:
                best_moves.append(planned)

        if not best_moves:
            best_score = -Evaluator.WIN_SCORE

        return SearchResult(best_moves=best_moves, score=best_score, nodes=nodes, scored_moves=scored_moves)

    def _alphabeta(
        self,
        board: BoardState,
        depth: int,
        alpha: int,
        beta: int,
        root_side: Side,
    ) -> Tuple[int, int]:
        to_move = board.turn
        moves = collect_moves(board, to_move)
        if not moves:
            # the side to move has lost
            score = -Evaluator.WIN_SCORE if to_move is root_side else Evaluator.WIN_SCORE
            return score, 1

        if depth <= 0:
            return Evaluator.evaluate(board, root_side), 1

        nodes = 0
        if to_move is root_side:
            value = -INF
            for planned in moves:
                child = board.clone()
                apply_move(child, planned.sx, planned.sy, planned.tx, planned.ty, planned.move)
                score, child_nodes = self._alphabeta(child, depth - 1, alpha, beta, root_side)
                nodes += child_nodes + 1
                value = max(value, score)
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value, nodes
        else:
            value = INF
            for planned in moves:
                child = board.clone()
                apply_move(child, planned.sx, planned.sy, planned.tx, planned.ty, planned.move)
                score, child_nodes = self._alphabeta(child, depth - 1, alpha, beta, root_side)
                nodes += child_nodes + 1
                value = min(value, score)
                beta = min(beta, value)
                if alpha >= beta:
                    break
            return value, nodes
