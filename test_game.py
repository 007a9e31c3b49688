import threading

import pytest

from config import reset_config
from checkers.board import Board
from checkers.game import GameSession, GameStatus, MoveRecord
from checkers.moves import legal_moves
from checkers.types import Move, MoveKind, Piece, PieceType, Player


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    for name in ("CHECKERS_DEPTH", "CHECKERS_HINT_DEPTH", "CHECKERS_VISIONS",
                 "CHECKERS_HUMAN", "CHECKERS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def place(board, row, col, player, king=False):
    board.place(row, col, Piece(player, PieceType.KING if king else PieceType.REGULAR))


def make_session(**kwargs):
    kwargs.setdefault("human_player", Player.RED)
    kwargs.setdefault("ai_depth", 2)
    kwargs.setdefault("auto_ai", False)
    session = GameSession(**kwargs)
    session.visions_enabled = False
    return session


def test_defaults_from_config():
    session = GameSession()
    assert session.human_player is Player.RED
    assert session.ai_player is Player.BLACK
    assert session.ai_depth == 5
    assert session.current_player is Player.RED
    assert session.status is GameStatus.ACTIVE


def test_select_piece_rules():
    session = make_session()
    assert not session.select_piece(5, 0)   # opponent's piece
    assert not session.select_piece(4, 3)   # empty square
    assert not session.select_piece(1, 0)   # blocked piece
    assert session.select_piece(2, 1)
    assert {(m.to_row, m.to_col) for m in session.valid_moves} == {(3, 0), (3, 2)}


def test_select_piece_respects_forced_capture():
    session = make_session()
    board = Board.empty()
    place(board, 2, 1, Player.RED)
    place(board, 2, 5, Player.RED)
    place(board, 3, 4, Player.BLACK)
    session.board = board
    assert not session.select_piece(2, 1)
    assert session.select_piece(2, 5)
    assert session.valid_moves == [Move(4, 3, MoveKind.CAPTURE, 3, 4)]


def test_make_move_passes_turn():
    session = make_session()
    assert not session.make_move(3, 2)   # nothing selected
    session.select_piece(2, 1)
    assert not session.make_move(4, 4)
    assert session.make_move(3, 2)
    assert session.current_player is Player.BLACK
    assert session.history == [MoveRecord(Player.RED, (2, 1), (3, 2))]
    assert session.selected is None


def test_ai_replies_automatically():
    session = make_session(auto_ai=True)
    session.select_piece(2, 1)
    session.make_move(3, 2)
    assert session.current_player is Player.RED
    assert len(session.history) == 2
    assert session.history[1].player is Player.BLACK
    assert session.last_ai_move == session.history[1].to_pos


def test_ai_moves_first_when_human_plays_black():
    session = make_session(human_player=Player.BLACK, auto_ai=True)
    session.start()
    assert session.current_player is Player.BLACK
    assert session.history[0].player is Player.RED


def test_start_with_player():
    session = make_session(auto_ai=True)
    session.start_with_player(human_first=False)
    assert session.human_player is Player.BLACK
    assert session.ai_player is Player.RED
    assert len(session.history) == 1
    assert session.is_human_turn()


def test_human_multi_jump_keeps_turn():
    session = make_session()
    board = Board.empty()
    place(board, 2, 1, Player.RED)
    place(board, 2, 7, Player.RED)
    place(board, 3, 2, Player.BLACK)
    place(board, 5, 4, Player.BLACK)
    place(board, 7, 0, Player.BLACK)
    session.board = board

    assert session.select_piece(2, 1)
    assert session.make_move(4, 3)
    assert session.current_player is Player.RED
    assert session.selected == (4, 3)
    assert session.valid_moves == [Move(6, 5, MoveKind.CAPTURE, 5, 4)]
    assert not session.select_piece(2, 7)

    assert session.make_move(6, 5)
    assert session.current_player is Player.BLACK
    assert [r.captured for r in session.history] == [(3, 2), (5, 4)]
    assert session.status is GameStatus.ACTIVE


def test_capturing_last_piece_wins():
    session = make_session()
    board = Board.empty()
    place(board, 2, 1, Player.RED)
    place(board, 3, 2, Player.BLACK)
    session.board = board
    session.select_piece(2, 1)
    session.make_move(4, 3)
    assert session.status is GameStatus.RED_WINS
    assert not session.select_piece(4, 3)


def test_blocked_side_loses():
    session = make_session()
    board = Board.empty()
    place(board, 4, 5, Player.RED)
    place(board, 0, 1, Player.BLACK)  # a black regular piece on row 0 cannot move
    session.board = board
    session.select_piece(4, 5)
    session.make_move(5, 4)
    assert session.current_player is Player.BLACK
    assert session.status is GameStatus.RED_WINS


def test_promotion_is_recorded():
    session = make_session()
    board = Board.empty()
    place(board, 6, 1, Player.RED)
    place(board, 0, 7, Player.BLACK)
    session.board = board
    session.select_piece(6, 1)
    session.make_move(7, 2)
    assert session.history[-1].was_promotion
    assert session.board.piece_at(7, 2).is_king


def test_ai_multi_jump_uses_best_continuation():
    session = make_session(human_player=Player.BLACK, ai_depth=3)
    board = Board.empty()
    place(board, 2, 5, Player.RED)
    place(board, 3, 4, Player.BLACK)
    place(board, 5, 2, Player.BLACK)
    place(board, 5, 4, Player.BLACK)
    place(board, 7, 2, Player.BLACK)
    session.board = board

    result = session.ai_move()
    assert result.move == Move(4, 3, MoveKind.CAPTURE, 3, 4)
    assert [r.to_pos for r in session.history] == [(4, 3), (6, 5)]
    assert session.board.piece_at(6, 5) is not None
    assert session.board.piece_at(5, 4) is None
    assert session.board.piece_at(5, 2) is not None
    assert session.last_ai_move == (6, 5)
    assert session.current_player is Player.BLACK


def test_ai_without_moves_ends_game():
    session = make_session()
    board = Board.empty()
    place(board, 7, 0, Player.RED)
    place(board, 6, 3, Player.BLACK)
    session.board = board
    assert session.ai_move() is None
    assert session.status is GameStatus.BLACK_WINS


def test_undo_restores_previous_turn():
    session = make_session()
    session.select_piece(2, 1)
    session.make_move(3, 2)
    assert session.undo()
    assert session.board == Board()
    assert session.current_player is Player.RED
    assert session.history == []
    assert not session.undo()


def test_undo_mid_chain_restores_turn_start():
    session = make_session()
    board = Board.empty()
    place(board, 2, 1, Player.RED)
    place(board, 3, 2, Player.BLACK)
    place(board, 5, 4, Player.BLACK)
    place(board, 7, 0, Player.BLACK)
    session.board = board
    start = board.copy()
    session.select_piece(2, 1)
    session.make_move(4, 3)
    assert session.undo()
    assert session.board == start
    assert session.select_piece(2, 1)


def test_undo_disabled():
    session = make_session()
    session.allow_undo = False
    session.select_piece(2, 1)
    session.make_move(3, 2)
    assert not session.undo()


def test_hint_leaves_board_alone():
    session = make_session()
    hint = session.hint()
    assert hint is not None
    assert session.board == Board()
    assert session.history == []


def test_visions_on_selection():
    session = make_session()
    session.visions_enabled = True
    session.select_piece(2, 1)
    assert 1 <= len(session.current_visions) <= 3
    scores = [v.evaluation for v in session.current_visions]
    assert scores == sorted(scores, reverse=True)

    session.toggle_visions()
    assert session.current_visions == []
    session.toggle_visions()
    assert session.current_visions


def test_update_callback_fires():
    session = make_session()
    calls = []
    session.set_update_callback(lambda: calls.append(1))
    session.select_piece(2, 1)
    session.make_move(3, 2)
    assert calls


def test_ai_move_async_applies_result():
    session = make_session()
    session.select_piece(2, 1)
    session.make_move(3, 2)
    done = threading.Event()
    thinking = []
    received = []
    session.set_thinking_callback(thinking.append)

    def on_complete(result):
        received.append(result)
        done.set()

    assert session.ai_move_async(on_complete)
    assert done.wait(30)
    assert received[0] is not None
    assert session.current_player is Player.RED
    assert len(session.history) == 2
    assert thinking == [True, False]
    assert not session.is_thinking


def test_ai_move_async_ignored_while_thinking():
    session = make_session()
    session.is_thinking = True
    assert not session.ai_move_async()


def test_ai_move_async_discards_superseded_result():
    session = make_session()
    done = threading.Event()
    received = []

    def on_complete(result):
        received.append(result)
        done.set()

    with session._lock:
        assert session.ai_move_async(on_complete)
        session.new_game()
    assert done.wait(30)
    assert received == [None]
    assert session.history == []


def test_undo_reverts_automatic_ai_reply_with_human_move():
    session = make_session(auto_ai=True)
    session.select_piece(2, 1)
    session.make_move(3, 2)
    assert len(session.history) == 2

    assert session.undo()
    assert session.is_human_turn()
    assert session.board == Board()
    assert session.history == []
    assert session.select_piece(2, 1)


def test_undo_back_to_ai_opening_replays_it():
    session = make_session(human_player=Player.BLACK, auto_ai=True)
    session.start()
    opening = session.history[0]
    human = next(pm for pm in legal_moves(session.board, Player.BLACK))
    session.select_piece(human.from_row, human.from_col)
    session.make_move(human.move.to_row, human.move.to_col)
    assert len(session.history) == 3

    assert session.undo()
    assert session.is_human_turn()
    assert session.history == [opening]

    # Nothing earlier belongs to the human, so the AI plays its opening again.
    assert session.undo()
    assert session.is_human_turn()
    assert session.history == [opening]
    assert not session.is_thinking


def test_ai_move_refused_while_thinking():
    session = make_session()
    session.is_thinking = True
    assert session.ai_move() is None
    assert session.board == Board()
    assert session.history == []
    assert session.current_player is Player.RED


def test_hint_mid_multi_jump_names_next_jump():
    session = make_session()
    board = Board.empty()
    place(board, 2, 1, Player.RED)
    place(board, 3, 2, Player.BLACK)
    place(board, 5, 4, Player.BLACK)
    place(board, 7, 0, Player.BLACK)
    session.board = board
    session.select_piece(2, 1)
    session.make_move(4, 3)
    before = session.board.copy()

    hint = session.hint()
    assert hint is not None
    assert (hint.from_row, hint.from_col) == (4, 3)
    assert hint.move == Move(6, 5, MoveKind.CAPTURE, 5, 4)
    assert session.board == before
    assert session.selected == (4, 3)
