"""
Type definitions and protocols for the Checkers engine.

This module provides:
- Enumerations for players, piece ranks and move kinds
- Dataclass implementations for pieces, moves and search results
- Protocol definitions for the pluggable search/evaluation seams
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .board import Board

# Basic type aliases
Position = Tuple[int, int]  # (row, col) coordinates
Chain = List["Move"]        # consecutive captures by one piece

BOARD_SIZE = 8


class Player(IntEnum):
    """Side identities. The sign convention makes ``-player`` the opponent."""

    RED = -1
    BLACK = 1

    @property
    def opponent(self) -> "Player":
        return Player(-self.value)

    @property
    def forward(self) -> int:
        """Row delta of a regular piece's advance."""
        return 1 if self is Player.RED else -1

    @property
    def promotion_row(self) -> int:
        return BOARD_SIZE - 1 if self is Player.RED else 0


class PieceType(Enum):
    REGULAR = "regular"
    KING = "king"


class MoveKind(Enum):
    STEP = "step"
    CAPTURE = "capture"


@dataclass
class Piece:
    """A piece owned by a board cell. Promotion mutates ``kind`` in place."""

    player: Player
    kind: PieceType = PieceType.REGULAR

    @property
    def is_king(self) -> bool:
        return self.kind is PieceType.KING

    def copy(self) -> "Piece":
        return Piece(self.player, self.kind)


@dataclass(frozen=True)
class Move:
    """A candidate transition for one piece; not yet applied."""

    to_row: int
    to_col: int
    kind: MoveKind = MoveKind.STEP
    captured_row: Optional[int] = None
    captured_col: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is MoveKind.CAPTURE and (self.captured_row is None or self.captured_col is None):
            raise ValueError("Capture moves must record the jumped square")

    @property
    def is_capture(self) -> bool:
        return self.kind is MoveKind.CAPTURE

    @property
    def captured(self) -> Optional[Position]:
        if self.captured_row is None or self.captured_col is None:
            return None
        return (self.captured_row, self.captured_col)


@dataclass(frozen=True)
class PieceMove:
    """A Move paired with the square of the piece that makes it."""

    from_row: int
    from_col: int
    move: Move


@dataclass(frozen=True)
class SearchResult:
    """Best move found by the search, with its minimax score."""

    from_row: int
    from_col: int
    move: Move
    score: int

    def as_piece_move(self) -> PieceMove:
        return PieceMove(self.from_row, self.from_col, self.move)


@dataclass
class SearchStats:
    """Per-call search counters."""

    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0


@dataclass
class Future:
    """A projected continuation used for display only."""

    moves: List[PieceMove]
    final_board: "Board"
    evaluation: int
    description: str = ""


class PositionEvaluatorProtocol(Protocol):
    """Protocol for position evaluation functions."""

    def __call__(self, board: "Board", player: Player) -> int:
        """Evaluate a position and return a score."""
        ...


class SearchEngineProtocol(Protocol):
    """Protocol for search engine implementations."""

    def search(self, board: "Board", player: Player, depth: int) -> Optional[SearchResult]:
        """Perform search to find the best move."""
        ...
