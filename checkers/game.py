"""
Headless game session: turn sequencing, multi-jump continuation, history,
undo and background AI moves, for a presentation layer to drive.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from config import get_engine_settings, get_game_settings, get_projection_settings

from .board import Board
from .moves import MoveValidator, execute_move
from .projection import Precog
from .search import SearchEngine
from .types import Future, Move, Player, Position, SearchResult

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    ACTIVE = "active"
    RED_WINS = "red_wins"
    BLACK_WINS = "black_wins"
    # Nothing transitions into DRAW yet; kept for presentation layers.
    DRAW = "draw"


@dataclass
class MoveRecord:
    """One jump or step as it happened."""

    player: Player
    from_pos: Position
    to_pos: Position
    captured: Optional[Position] = None
    was_promotion: bool = False


# (board, current player, history length, last AI landing square)
Snapshot = Tuple[Board, Player, int, Optional[Position]]


def _winner(player: Player) -> GameStatus:
    return GameStatus.RED_WINS if player is Player.RED else GameStatus.BLACK_WINS


class GameSession:
    """Manages the board, turns and AI replies for one game."""

    def __init__(self, human_player: Optional[Player] = None, ai_depth: Optional[int] = None,
                 engine: Optional[SearchEngine] = None, auto_ai: bool = True,
                 background_ai: bool = False) -> None:
        game_settings = get_game_settings()
        if human_player is None:
            human_player = Player.RED if game_settings.human_player == "red" else Player.BLACK
        self.human_player: Player = human_player
        self.ai_player: Player = human_player.opponent
        self.ai_depth: int = ai_depth if ai_depth is not None else get_engine_settings().default_depth
        self.engine: SearchEngine = engine or SearchEngine()
        self.precog = Precog(self.engine,
                             continuation_depth=get_projection_settings().search_depth,
                             max_moves=get_projection_settings().max_moves)
        self.auto_ai = auto_ai
        self.background_ai = background_ai
        self.allow_undo = game_settings.allow_undo
        self.visions_enabled: bool = game_settings.visions_enabled

        self.is_thinking = False
        self._lock = threading.RLock()
        self._generation = 0
        self._on_update: Optional[Callable[[], None]] = None
        self._on_thinking: Optional[Callable[[bool], None]] = None
        self._reset_state()

    def _reset_state(self) -> None:
        self.board = Board()
        self.current_player: Player = Player.RED
        self.status = GameStatus.ACTIVE
        self.selected: Optional[Position] = None
        self.valid_moves: List[Move] = []
        self.history: List[MoveRecord] = []
        self.current_visions: List[Future] = []
        self.last_ai_move: Optional[Position] = None
        self._chain_piece: Optional[Position] = None
        self._snapshots: List[Snapshot] = []

    # ---- callbacks ----

    def set_update_callback(self, callback: Callable[[], None]) -> None:
        self._on_update = callback

    def set_thinking_callback(self, callback: Callable[[bool], None]) -> None:
        self._on_thinking = callback

    def _trigger_update(self) -> None:
        if self._on_update is not None:
            self._on_update()

    def _set_thinking(self, thinking: bool) -> None:
        self.is_thinking = thinking
        if self._on_thinking is not None:
            self._on_thinking(thinking)

    # ---- lifecycle ----

    def new_game(self) -> None:
        with self._lock:
            self._generation += 1
            self._reset_state()
        logger.info("new game: human=%s ai=%s depth=%d",
                    self.human_player.name, self.ai_player.name, self.ai_depth)
        self._trigger_update()

    def start_with_player(self, human_first: bool) -> None:
        """Red always moves first, so the human plays Red when moving first."""
        self.human_player = Player.RED if human_first else Player.BLACK
        self.ai_player = self.human_player.opponent
        self.new_game()
        self.start()

    def start(self) -> None:
        """Trigger the AI if it has the first move."""
        if self.status is GameStatus.ACTIVE and self.current_player == self.ai_player and self.auto_ai:
            self._request_ai_move()

    def is_human_turn(self) -> bool:
        return self.current_player == self.human_player

    # ---- human interaction ----

    def select_piece(self, row: int, col: int) -> bool:
        if self.status is not GameStatus.ACTIVE or not self.is_human_turn():
            return False
        if self._chain_piece is not None:
            # Mid multi-jump: only the jumping piece may be selected.
            return self._chain_piece == (row, col)

        piece = self.board.piece_at(row, col)
        piece_moves = []
        if piece is not None and piece.player == self.current_player:
            piece_moves = [pm.move for pm in MoveValidator.all_moves_for(self.board, self.current_player)
                           if (pm.from_row, pm.from_col) == (row, col)]
        if not piece_moves:
            self.selected = None
            self.valid_moves = []
            self._trigger_update()
            return False

        self.selected = (row, col)
        self.valid_moves = piece_moves
        if self.visions_enabled:
            self.update_visions()
        self._trigger_update()
        return True

    def make_move(self, to_row: int, to_col: int) -> bool:
        if self.selected is None or self.status is not GameStatus.ACTIVE or not self.is_human_turn():
            return False
        move = next((m for m in self.valid_moves if (m.to_row, m.to_col) == (to_row, to_col)), None)
        if move is None:
            return False

        self.last_ai_move = None
        from_row, from_col = self.selected
        if self._chain_piece is None:
            self._push_snapshot()
        self._execute(from_row, from_col, move)

        if move.is_capture:
            more = MoveValidator.captures_for_square(self.board, to_row, to_col)
            if more:
                self._chain_piece = (to_row, to_col)
                self.selected = (to_row, to_col)
                self.valid_moves = more
                self._trigger_update()
                return True

        self._end_turn()
        return True

    def hint(self) -> Optional[SearchResult]:
        """Best move for the side to move at the hint depth; board unchanged."""
        if self.status is not GameStatus.ACTIVE:
            return None
        if self._chain_piece is not None:
            row, col = self._chain_piece
            return self.engine.best_continuation(self.board, row, col, self.current_player,
                                                 get_engine_settings().hint_depth)
        return self.engine.search(self.board, self.current_player, get_engine_settings().hint_depth)

    # ---- AI ----

    def ai_move(self) -> Optional[SearchResult]:
        """Search and play a full turn for the side to move."""
        if self.status is not GameStatus.ACTIVE or self.is_thinking:
            return None
        self._set_thinking(True)
        try:
            result = self.engine.search(self.board, self.current_player, self.ai_depth)
        finally:
            self._set_thinking(False)
        self._apply_ai_result(result)
        return result

    def ai_move_async(self, on_complete: Optional[Callable[[Optional[SearchResult]], None]] = None) -> bool:
        """Run the search in a worker thread; ignored while a search is running."""
        with self._lock:
            if self.is_thinking or self.status is not GameStatus.ACTIVE:
                return False
            self._set_thinking(True)
            board_copy = self.board.copy()
            player = self.current_player
            depth = self.ai_depth
            generation = self._generation

        def worker() -> None:
            result: Optional[SearchResult] = None
            try:
                result = self.engine.search(board_copy, player, depth)
            except Exception:
                logger.exception("background search failed")
            with self._lock:
                self._set_thinking(False)
                if generation == self._generation:
                    self._apply_ai_result(result)
                else:
                    logger.info("discarding search result for a superseded position")
                    result = None
            if on_complete is not None:
                on_complete(result)

        threading.Thread(target=worker, daemon=True).start()
        return True

    def _request_ai_move(self) -> None:
        if self.background_ai:
            self.ai_move_async()
        else:
            self.ai_move()

    def _apply_ai_result(self, result: Optional[SearchResult]) -> None:
        if result is None:
            self._check_game_over()
            self._trigger_update()
            return

        player = self.current_player
        self._push_snapshot()
        self._execute(result.from_row, result.from_col, result.move)
        landing = (result.move.to_row, result.move.to_col)

        if result.move.is_capture:
            while True:
                nxt = self.engine.best_continuation(self.board, landing[0], landing[1], player, self.ai_depth)
                if nxt is None:
                    break
                self._execute(nxt.from_row, nxt.from_col, nxt.move)
                landing = (nxt.move.to_row, nxt.move.to_col)

        self.last_ai_move = landing
        self._end_turn()

    # ---- turn plumbing ----

    def _execute(self, from_row: int, from_col: int, move: Move) -> None:
        piece = self.board.piece_at(from_row, from_col)
        if piece is None:
            return
        was_king = piece.is_king
        execute_move(self.board, from_row, from_col, move)
        moved = self.board.piece_at(move.to_row, move.to_col)
        self.history.append(MoveRecord(
            player=piece.player,
            from_pos=(from_row, from_col),
            to_pos=(move.to_row, move.to_col),
            captured=move.captured,
            was_promotion=bool(moved is not None and moved.is_king and not was_king),
        ))

    def _end_turn(self) -> None:
        self.selected = None
        self.valid_moves = []
        self.current_visions = []
        self._chain_piece = None
        self._switch_turn()

    def _switch_turn(self) -> None:
        self.current_player = self.current_player.opponent
        self._check_game_over()
        logger.info("turn passes to %s (status=%s)", self.current_player.name, self.status.value)
        self._trigger_update()
        if self.status is GameStatus.ACTIVE and self.current_player == self.ai_player and self.auto_ai:
            self._request_ai_move()

    def _check_game_over(self) -> None:
        if not self.board.pieces_of(Player.RED):
            self.status = GameStatus.BLACK_WINS
        elif not self.board.pieces_of(Player.BLACK):
            self.status = GameStatus.RED_WINS
        elif not MoveValidator.has_any_move(self.board, self.current_player):
            self.status = _winner(self.current_player.opponent)
        if self.status is not GameStatus.ACTIVE:
            logger.info("game over: %s", self.status.value)

    # ---- undo ----

    def _push_snapshot(self) -> None:
        self._snapshots.append((self.board.copy(), self.current_player, len(self.history), self.last_ai_move))

    def undo(self) -> bool:
        """Revert the last completed or partial turn."""
        with self._lock:
            if not self.allow_undo or not self._snapshots or self.is_thinking:
                return False
            board, player, history_len, last_ai = self._snapshots.pop()
            # An automatic AI reply is undone together with the human move before it.
            while self.auto_ai and player == self.ai_player and self._snapshots:
                board, player, history_len, last_ai = self._snapshots.pop()
            self._generation += 1
            self.board = board
            self.current_player = player
            del self.history[history_len:]
            self.last_ai_move = last_ai
            self.status = GameStatus.ACTIVE
            self.selected = None
            self.valid_moves = []
            self.current_visions = []
            self._chain_piece = None
        self._trigger_update()
        self.start()
        return True

    # ---- projections ----

    def update_visions(self) -> None:
        if not self.visions_enabled or self.selected is None:
            self.current_visions = []
            return
        settings = get_projection_settings()
        self.current_visions = self.precog.get_futures(self.board, self.human_player,
                                                       settings.num_visions, settings.depth)

    def toggle_visions(self) -> None:
        self.visions_enabled = not self.visions_enabled
        if not self.visions_enabled:
            self.current_visions = []
        elif self.selected is not None:
            self.update_visions()
        self._trigger_update()
