"""Checkers engine package: rules, move generation, AI search and move scheduling.

Modules:
- board: BoardState, piece kinds, sides and move records
- moves: Legal move generation with flying kings and forced capture
- game: Applying moves, the click state machine and game outcome
- evaluator: Material and mobility evaluation
- ai: Random and minimax/alpha-beta move selection by difficulty tier
- scheduler: Timer-driven automated moves that cooperate with human input
- session: A game wired to an AI opponent and UI callbacks
"""

from .board import BoardState, Move, Piece, PlannedMove, Side
from .game import Game, InvariantViolation, MoveError
from .ai import AIPlayer, AlphaBetaTier, Difficulty, RandomTier, tier_for
from .evaluator import Evaluator
from .scheduler import MoveScheduler
from .session import GameSession

__all__ = [
    "BoardState",
    "Move",
    "Piece",
    "PlannedMove",
    "Side",
    "Game",
    "InvariantViolation",
    "MoveError",
    "AIPlayer",
    "AlphaBetaTier",
    "Difficulty",
    "RandomTier",
    "tier_for",
    "Evaluator",
    "MoveScheduler",
    "GameSession",
]
