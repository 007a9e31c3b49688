"""
Display-only lookahead: short simulated continuations, scored and described
in plain words. Nothing here touches the real game board.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .board import Board
from .eval import WIN_SCORE, evaluate
from .moves import MoveValidator, execute_move
from .search import SearchEngine
from .types import Future, PieceMove, Player, SearchEngineProtocol

logger = logging.getLogger(__name__)

CONTINUATION_DEPTH = 2
MAX_MOVES = 6


def describe_score(score: int) -> str:
    """Map an evaluation to a short description for display."""
    if score >= WIN_SCORE:
        return "Victory is certain"
    if score <= -WIN_SCORE:
        return "Defeat looms"
    if score > 200:
        return "A promising future"
    if score > 50:
        return "Slight advantage ahead"
    if score < -200:
        return "Danger approaches"
    if score < -50:
        return "Caution advised"
    return "The future is unclear"


class Precog:
    """Ranks a side's candidate moves by how a quick self-play from each ends."""

    def __init__(self, engine: Optional[SearchEngineProtocol] = None,
                 continuation_depth: int = CONTINUATION_DEPTH,
                 max_moves: int = MAX_MOVES) -> None:
        self.engine: SearchEngineProtocol = engine or SearchEngine()
        self.continuation_depth = continuation_depth
        self.max_moves = max_moves

    def get_futures(self, board: Board, player: Player, num_visions: int = 3,
                    depth: int = 4) -> List[Future]:
        """Top ``num_visions`` projections for ``player``, best first."""
        moves = MoveValidator.all_moves_for(board, player)
        if not moves:
            return []
        visions = [self.simulate_future(board, player, pm, depth) for pm in moves]
        # sorted() is stable, so equal scores stay in move-generation order.
        visions = sorted(visions, key=lambda v: v.evaluation, reverse=True)
        logger.debug("projected %d futures for %s", len(visions), player.name)
        return visions[:num_visions]

    def simulate_future(self, board: Board, player: Player, initial: PieceMove,
                        depth: int) -> Future:
        """Play ``initial`` then let both sides answer with shallow searches."""
        moves: List[PieceMove] = [initial]
        current = board.copy()
        execute_move(current, initial.from_row, initial.from_col, initial.move)

        side = player.opponent
        for _ in range(depth):
            if len(moves) >= self.max_moves:
                break
            result = self.engine.search(current, side, self.continuation_depth)
            if result is None:
                break
            moves.append(result.as_piece_move())
            execute_move(current, result.from_row, result.from_col, result.move)
            side = side.opponent

        score = evaluate(current, player)
        return Future(moves=moves, final_board=current, evaluation=score,
                      description=describe_score(score))

    def predicted_response(self, board: Board, player_move: PieceMove, ai_player: Player,
                           depth: int = 4) -> Optional[Future]:
        """What ``ai_player`` would answer to ``player_move``."""
        after = board.copy()
        execute_move(after, player_move.from_row, player_move.from_col, player_move.move)
        response = self.engine.search(after, ai_player, depth)
        if response is None:
            return None
        execute_move(after, response.from_row, response.from_col, response.move)
        return Future(moves=[player_move, response.as_piece_move()], final_board=after,
                      evaluation=response.score, description=describe_score(response.score))

