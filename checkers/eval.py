"""
Static position evaluation.

Scores are integers from the evaluated player's point of view: material plus
center control, plus an advancement bonus for pieces that are not yet kings.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .board import Board
from .types import BOARD_SIZE, Player

WIN_SCORE = 10000
PIECE_VALUE = 100
KING_VALUE = 180
CENTER_BONUS = 5
ADVANCE_BONUS = 2

_rows, _cols = np.indices((BOARD_SIZE, BOARD_SIZE))

# Distance |3.5-r| + |3.5-c| is integral on every dark square.
CENTER_TABLE: np.ndarray = ((7 - (np.abs(3.5 - _rows) + np.abs(3.5 - _cols))) * CENTER_BONUS).astype(np.int64)

# Rows advanced from the home back rank.
ADVANCE_RED: np.ndarray = (_rows * ADVANCE_BONUS).astype(np.int64)
ADVANCE_BLACK: np.ndarray = ((BOARD_SIZE - 1 - _rows) * ADVANCE_BONUS).astype(np.int64)


def piece_values(arr: np.ndarray) -> np.ndarray:
    """Per-square value of whatever piece stands there (0 for empty squares)."""
    kings = np.abs(arr) == 2
    values = np.where(kings, KING_VALUE, PIECE_VALUE) + CENTER_TABLE
    values = values + np.where(arr == int(Player.RED), ADVANCE_RED, 0)
    values = values + np.where(arr == int(Player.BLACK), ADVANCE_BLACK, 0)
    return np.where(arr != 0, values, 0)


def evaluate(board: Board, player: Player) -> int:
    """Evaluate ``board`` for ``player``; positive favors ``player``."""
    arr = board.to_array()
    own = arr * int(player) > 0
    theirs = arr * int(player) < 0
    if not theirs.any():
        return WIN_SCORE
    if not own.any():
        return -WIN_SCORE
    values = piece_values(arr)
    return int(values[own].sum() - values[theirs].sum())


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, player: Player) -> int:  # pragma: no cover
        """Evaluate a single board position for the given player."""
        raise NotImplementedError

    def __call__(self, board: Board, player: Player) -> int:
        return self.evaluate_position(board, player)


class HeuristicEvaluator(Evaluator):
    """Material, center control and advancement."""

    def evaluate_position(self, board: Board, player: Player) -> int:
        return evaluate(board, player)


def get_evaluator() -> Evaluator:
    return HeuristicEvaluator()


__all__ = [
    "WIN_SCORE",
    "PIECE_VALUE",
    "KING_VALUE",
    "CENTER_BONUS",
    "ADVANCE_BONUS",
    "Evaluator",
    "HeuristicEvaluator",
    "get_evaluator",
    "evaluate",
    "piece_values",
]
