"""
Depth-limited minimax search with alpha-beta pruning, plus the strategy
interface used by the game session.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .board import Board
from .eval import WIN_SCORE, evaluate
from .moves import MoveValidator, execute_move
from .types import PieceMove, Player, PositionEvaluatorProtocol, SearchResult, SearchStats

logger = logging.getLogger(__name__)

INF = 10**9


class SearchEngine:
    """Alpha-beta minimax over board copies.

    The engine keeps no state between calls, so one instance can serve
    several threads as long as each works on its own Board.
    """

    def __init__(self, evaluator: Optional[PositionEvaluatorProtocol] = None) -> None:
        self.evaluator: PositionEvaluatorProtocol = evaluator or evaluate

    def search(self, board: Board, player: Player, depth: int,
               stats: Optional[SearchStats] = None) -> Optional[SearchResult]:
        """Best move for ``player``; ``None`` when ``player`` has no legal move."""
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        if stats is None:
            stats = SearchStats()

        moves: List[PieceMove] = MoveValidator.all_moves_for(board, player)
        if not moves:
            return None

        best: Optional[SearchResult] = None
        alpha: int = -INF
        beta: int = INF
        for pm in moves:
            child = board.copy()
            execute_move(child, pm.from_row, pm.from_col, pm.move)
            score = self.minimax(child, depth - 1, alpha, beta, False, player, stats)
            if best is None or score > best.score:
                best = SearchResult(pm.from_row, pm.from_col, pm.move, score)
            alpha = max(alpha, score)

        logger.debug("search player=%s depth=%d best=%s nodes=%d cutoffs=%d",
                     player.name, depth, best, stats.nodes, stats.cutoffs)
        return best

    def minimax(self, board: Board, depth: int, alpha: int, beta: int,
                maximizing: bool, player: Player,
                stats: Optional[SearchStats] = None) -> int:
        """Minimax value of ``board`` seen from ``player`` at every leaf."""
        if stats is not None:
            stats.nodes += 1
        if depth == 0:
            if stats is not None:
                stats.leaves += 1
            return self.evaluator(board, player)

        side = player if maximizing else player.opponent
        moves = MoveValidator.all_moves_for(board, side)
        if not moves:
            # The side to move is stuck and has lost.
            return -WIN_SCORE if maximizing else WIN_SCORE

        if maximizing:
            val = -INF
            for pm in moves:
                child = board.copy()
                execute_move(child, pm.from_row, pm.from_col, pm.move)
                val = max(val, self.minimax(child, depth - 1, alpha, beta, False, player, stats))
                alpha = max(alpha, val)
                if beta <= alpha:
                    if stats is not None:
                        stats.cutoffs += 1
                    break
            return val

        val = INF
        for pm in moves:
            child = board.copy()
            execute_move(child, pm.from_row, pm.from_col, pm.move)
            val = min(val, self.minimax(child, depth - 1, alpha, beta, True, player, stats))
            beta = min(beta, val)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return val

    def best_continuation(self, board: Board, row: int, col: int, player: Player,
                          depth: int) -> Optional[SearchResult]:
        """Pick the next jump of a multi-jump for the piece at (row, col).

        Each capture is scored with the opponent to move one ply shallower
        (never below 1); ties keep the first capture generated.
        """
        captures = MoveValidator.captures_for_square(board, row, col)
        best: Optional[SearchResult] = None
        for mv in captures:
            child = board.copy()
            execute_move(child, row, col, mv)
            score = self.minimax(child, max(1, depth - 1), -INF, INF, False, player)
            if best is None or score > best.score:
                best = SearchResult(row, col, mv, score)
        return best


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, board: Board, player: Player, depth: int) -> Optional[SearchResult]:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaSearchStrategy(SearchStrategy):
    """Adapter around SearchEngine implementing the interface."""

    def __init__(self, engine: Optional[SearchEngine] = None) -> None:
        self._engine = engine or SearchEngine()

    @property
    def engine(self) -> SearchEngine:
        return self._engine

    def search(self, board: Board, player: Player, depth: int) -> Optional[SearchResult]:
        return self._engine.search(board, player, depth)


def get_engine() -> SearchEngine:
    """Get a new search engine instance."""
    return SearchEngine()


def get_search_strategy() -> SearchStrategy:
    """Factory for a default search strategy (alpha-beta)."""
    return AlphaBetaSearchStrategy()


def find_best_move(board: Board, player: Player, depth: int) -> Optional[SearchResult]:
    return get_engine().search(board, player, depth)


__all__ = [
    "INF",
    "SearchEngine",
    "SearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_engine",
    "get_search_strategy",
    "find_best_move",
]
