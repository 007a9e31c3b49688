from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .types import BOARD_SIZE, Piece, PieceType, Player

Grid = List[List[Optional[Piece]]]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_dark(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


def _empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


class Board:
    """Fixed 8x8 grid of optional pieces.

    Red starts on rows 0..2, Black on rows 5..7, one piece per dark square.
    Writes outside the grid are ignored and reads outside it return ``None``.
    """

    size: int = BOARD_SIZE

    def __init__(self) -> None:
        self._grid: Grid = _empty_grid()
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if not is_dark(r, c):
                    continue
                if r <= 2:
                    self._grid[r][c] = Piece(Player.RED)
                elif r >= 5:
                    self._grid[r][c] = Piece(Player.BLACK)

    @classmethod
    def empty(cls) -> "Board":
        """Board with no pieces, for constructed positions."""
        board = cls.__new__(cls)
        board._grid = _empty_grid()
        return board

    def piece_at(self, row: int, col: int) -> Optional[Piece]:
        if not in_bounds(row, col):
            return None
        return self._grid[row][col]

    def place(self, row: int, col: int, piece: Optional[Piece]) -> None:
        if in_bounds(row, col):
            self._grid[row][col] = piece

    def pieces_of(self, player: Player) -> List[Tuple[Piece, int, int]]:
        """Pieces of ``player`` in row-major order."""
        found: List[Tuple[Piece, int, int]] = []
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                piece = self._grid[r][c]
                if piece is not None and piece.player == player:
                    found.append((piece, r, c))
        return found

    def move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        """Relocate a piece and promote it on the far rank.

        Captured pieces are not removed here; see ``moves.execute_move``.
        """
        piece = self.piece_at(from_row, from_col)
        if piece is None or not in_bounds(to_row, to_col):
            return
        self._grid[from_row][from_col] = None
        self._grid[to_row][to_col] = piece
        if piece.kind is PieceType.REGULAR and to_row == piece.player.promotion_row:
            piece.kind = PieceType.KING

    def remove(self, row: int, col: int) -> None:
        if in_bounds(row, col):
            self._grid[row][col] = None

    def copy(self) -> "Board":
        """Deep copy: new grid and new Piece values."""
        board = Board.empty()
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                piece = self._grid[r][c]
                if piece is not None:
                    board._grid[r][c] = piece.copy()
        return board

    def to_array(self) -> np.ndarray:
        """Signed int8 encoding: +-1 regular, +-2 king, sign is the player."""
        arr = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                piece = self._grid[r][c]
                if piece is not None:
                    arr[r, c] = int(piece.player) * (2 if piece.is_king else 1)
        return arr

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __str__(self) -> str:
        rows: List[str] = []
        for r in range(BOARD_SIZE):
            cells: List[str] = []
            for c in range(BOARD_SIZE):
                piece = self._grid[r][c]
                if piece is None:
                    cells.append("." if is_dark(r, c) else " ")
                else:
                    ch = "r" if piece.player is Player.RED else "b"
                    cells.append(ch.upper() if piece.is_king else ch)
            rows.append(f"{r} " + " ".join(cells))
        rows.append("  " + " ".join(str(c) for c in range(BOARD_SIZE)))
        return "\n".join(rows)


def count_pieces(board: Board) -> Tuple[int, int, int, int]:
    """Count pieces of each type on the board.

    Returns:
        Tuple of (black_pieces, red_pieces, black_kings, red_kings)
    """
    arr = board.to_array()
    blacks = int(np.count_nonzero(arr > 0))
    reds = int(np.count_nonzero(arr < 0))
    bk = int(np.count_nonzero(arr == 2))
    rk = int(np.count_nonzero(arr == -2))
    return blacks, reds, bk, rk
