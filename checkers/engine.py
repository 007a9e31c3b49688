"""
Flat facade over the engine modules, the in-process API a presentation layer
talks to. This allows importing via ``from checkers.engine import legal_moves``.
"""
from __future__ import annotations

from typing import List, Optional

from .board import Board, count_pieces
from .eval import WIN_SCORE, evaluate
from .moves import apply_move, capture_chains, execute_move, find_move, legal_moves, moves_for_square
from .projection import Precog, describe_score
from .search import SearchEngine, find_best_move, get_engine
from .types import Future, Player

__all__ = [
    "Board",
    "WIN_SCORE",
    "initial_board",
    "empty_board",
    "legal_moves",
    "moves_for_square",
    "capture_chains",
    "apply_move",
    "execute_move",
    "find_move",
    "is_terminal",
    "evaluate",
    "count_pieces",
    "find_best_move",
    "get_engine",
    "SearchEngine",
    "futures",
    "describe_score",
]


def initial_board() -> Board:
    """Initial position: Red on rows 0..2, Black on rows 5..7."""
    return Board()


def empty_board() -> Board:
    return Board.empty()


def is_terminal(board: Board, player: Player) -> bool:
    """True when ``player`` has no piece or no legal move."""
    return len(legal_moves(board, player)) == 0


def futures(board: Board, player: Player, num_visions: int = 3, depth: int = 4,
            engine: Optional[SearchEngine] = None) -> List[Future]:
    """Ranked projections for ``player``; read-only on ``board``."""
    return Precog(engine).get_futures(board, player, num_visions, depth)
