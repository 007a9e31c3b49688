from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board, in_bounds
from .types import Chain, Move, MoveKind, PieceMove, PieceType, Player

Direction = Tuple[int, int]

_DIRS: List[Direction] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


def directions(player: Player, kind: PieceType) -> List[Direction]:
    """Diagonals a piece may step or jump along."""
    if kind is PieceType.KING:
        return _DIRS
    dr = player.forward
    return [(dr, -1), (dr, 1)]


def execute_move(board: Board, from_row: int, from_col: int, move: Move) -> None:
    """Apply ``move`` to ``board`` in place.

    The move must have been generated against this same board state.
    """
    if move.kind is MoveKind.CAPTURE and move.captured_row is not None and move.captured_col is not None:
        board.remove(move.captured_row, move.captured_col)
    board.move(from_row, from_col, move.to_row, move.to_col)


class MoveValidator:
    """Generates legal moves for a given board.

    Captures are mandatory across the whole side: if any piece of the side to
    move can jump, only jumps are legal for that side.
    """

    @staticmethod
    def _step_moves(board: Board, row: int, col: int, player: Player, kind: PieceType) -> List[Move]:
        moves: List[Move] = []
        for dr, dc in directions(player, kind):
            nr, nc = row + dr, col + dc
            if in_bounds(nr, nc) and board.piece_at(nr, nc) is None:
                moves.append(Move(nr, nc, MoveKind.STEP))
        return moves

    @staticmethod
    def _capture_moves(board: Board, row: int, col: int, player: Player, kind: PieceType) -> List[Move]:
        moves: List[Move] = []
        for dr, dc in directions(player, kind):
            mr, mc = row + dr, col + dc
            lr, lc = row + 2 * dr, col + 2 * dc
            if not in_bounds(lr, lc):
                continue
            jumped = board.piece_at(mr, mc)
            if jumped is not None and jumped.player != player and board.piece_at(lr, lc) is None:
                moves.append(Move(lr, lc, MoveKind.CAPTURE, mr, mc))
        return moves

    @classmethod
    def moves_for_square(cls, board: Board, row: int, col: int) -> List[Move]:
        """Single-jump captures for the piece if it has any, otherwise its steps."""
        piece = board.piece_at(row, col)
        if piece is None:
            return []
        captures = cls._capture_moves(board, row, col, piece.player, piece.kind)
        if captures:
            return captures
        return cls._step_moves(board, row, col, piece.player, piece.kind)

    @classmethod
    def captures_for_square(cls, board: Board, row: int, col: int) -> List[Move]:
        piece = board.piece_at(row, col)
        if piece is None:
            return []
        return cls._capture_moves(board, row, col, piece.player, piece.kind)

    @classmethod
    def all_moves_for(cls, board: Board, player: Player) -> List[PieceMove]:
        pieces = board.pieces_of(player)

        # First pass over every piece: any capture forces captures for the side.
        captures: List[PieceMove] = []
        for piece, r, c in pieces:
            for mv in cls._capture_moves(board, r, c, piece.player, piece.kind):
                captures.append(PieceMove(r, c, mv))
        if captures:
            return captures

        quiets: List[PieceMove] = []
        for piece, r, c in pieces:
            for mv in cls._step_moves(board, r, c, piece.player, piece.kind):
                quiets.append(PieceMove(r, c, mv))
        return quiets

    @classmethod
    def capture_chains(cls, board: Board, row: int, col: int) -> List[Chain]:
        """Every maximal capture sequence for the piece at (row, col).

        Each jump is explored on its own board copy so a promotion mid-chain
        changes the directions available to the following jumps.
        """
        if board.piece_at(row, col) is None:
            return []
        chains: List[Chain] = []
        cls._extend_chains(board.copy(), row, col, [], chains)
        return chains

    @classmethod
    def _extend_chains(cls, board: Board, row: int, col: int, current: Chain, out: List[Chain]) -> None:
        piece = board.piece_at(row, col)
        captures = cls._capture_moves(board, row, col, piece.player, piece.kind) if piece else []
        if not captures:
            if current:
                out.append(list(current))
            return
        for capture in captures:
            child = board.copy()
            execute_move(child, row, col, capture)
            cls._extend_chains(child, capture.to_row, capture.to_col, current + [capture], out)

    @classmethod
    def is_legal(cls, board: Board, player: Player, piece_move: PieceMove) -> bool:
        return piece_move in cls.all_moves_for(board, player)

    @staticmethod
    def has_any_move(board: Board, player: Player) -> bool:
        return bool(MoveValidator.all_moves_for(board, player))


# Convenience functional API

def legal_moves(board: Board, player: Player) -> List[PieceMove]:
    return MoveValidator.all_moves_for(board, player)


def moves_for_square(board: Board, row: int, col: int) -> List[Move]:
    return MoveValidator.moves_for_square(board, row, col)


def capture_chains(board: Board, row: int, col: int) -> List[Chain]:
    return MoveValidator.capture_chains(board, row, col)


def apply_move(board: Board, piece_move: PieceMove) -> Board:
    """Return a new board with ``piece_move`` applied; ``board`` is unchanged."""
    nb = board.copy()
    execute_move(nb, piece_move.from_row, piece_move.from_col, piece_move.move)
    return nb


def find_move(moves: List[PieceMove], from_row: int, from_col: int,
              to_row: int, to_col: int) -> Optional[PieceMove]:
    """First move in ``moves`` matching the given source and destination."""
    for pm in moves:
        if (pm.from_row, pm.from_col, pm.move.to_row, pm.move.to_col) == (from_row, from_col, to_row, to_col):
            return pm
    return None
