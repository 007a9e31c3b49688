"""Checkers package: board, rules, evaluation, search and game session.

Usage examples:
    from checkers import Board, Player, legal_moves
    from checkers import SearchEngine, find_best_move
    from checkers import GameSession
"""
from __future__ import annotations

from .types import (
    Player,
    PieceType,
    Piece,
    MoveKind,
    Move,
    PieceMove,
    SearchResult,
    SearchStats,
    Future,
)
from .board import Board, count_pieces

# Engine API
from .engine import (
    initial_board,
    empty_board,
    legal_moves,
    moves_for_square,
    capture_chains,
    apply_move,
    execute_move,
    is_terminal,
    evaluate,
    find_best_move,
    get_engine,
    futures,
    WIN_SCORE,
)
from .moves import MoveValidator
from .eval import Evaluator, HeuristicEvaluator, get_evaluator
from .search import SearchEngine, SearchStrategy, AlphaBetaSearchStrategy, get_search_strategy
from .projection import Precog, describe_score

# Session
from .game import GameSession, GameStatus, MoveRecord
