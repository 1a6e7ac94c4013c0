"""Unit tests for src/rules/snapshot.py"""

from src.core.models import GameSnapshot
from src.core.shared_types import CaptureType, Color, PieceType, Status
from src.rules import game
from src.rules.pieces import Piece
from src.rules.position import Position
from src.rules.snapshot import apply_snapshot, from_snapshot, get_snapshot
from src.rules.state import GameState


def sq(algebraic: str) -> Position:
    return Position.from_algebraic(algebraic)


def played_game() -> GameState:
    """A few moves in: a capture en passant, and a pending en passant target"""
    state = game.initialize()
    game.start_game(state)
    for move in "e2e4 a7a6 e4e5 d7d5 e5d6 c7c5".split():
        assert game.make_move(state, sq(move[:2]), sq(move[2:])).success, move
    return state


def test_snapshot_of_the_starting_position() -> None:
    snapshot = get_snapshot(game.initialize())
    assert snapshot.current_player == Color.LIGHT
    assert snapshot.status == Status.WAITING
    assert snapshot.en_passant_target is None
    assert snapshot.move_history == []
    assert snapshot.board[7][4] is not None
    assert snapshot.board[7][4].type == PieceType.KING
    assert snapshot.board[4] == [None] * 8


def test_round_trip_keeps_every_field() -> None:
    state = played_game()
    restored = from_snapshot(get_snapshot(state))

    assert restored.board.to_fen() == state.board.to_fen()
    assert restored.current_player == state.current_player
    assert restored.status == state.status
    assert restored.castling_rights == state.castling_rights
    assert restored.en_passant_target == sq("c6")
    assert restored.kings == state.kings
    assert restored.captured_pieces == state.captured_pieces
    assert restored.move_history == state.move_history
    assert restored.move_history[4].capture_type == CaptureType.EN_PASSANT


def test_round_trip_through_json() -> None:
    state = played_game()
    payload = get_snapshot(state).model_dump_json()
    restored = from_snapshot(GameSnapshot.model_validate_json(payload))
    assert get_snapshot(restored) == get_snapshot(state)


def test_restored_game_plays_on() -> None:
    """A restored state accepts moves right away"""
    restored = from_snapshot(get_snapshot(played_game()))
    result = game.make_move(restored, sq("d6"), sq("d7"))
    assert result.success
    assert result.captured_piece is None
    assert restored.en_passant_target is None


def test_apply_snapshot_clears_the_selection() -> None:
    state = played_game()
    snapshot = get_snapshot(state)
    game.select_piece(state, sq("g1"))
    assert state.selected is not None

    apply_snapshot(state, snapshot)
    assert state.selected is None
    assert state.valid_moves == []


def test_apply_snapshot_replaces_the_state() -> None:
    state = game.initialize()
    snapshot = get_snapshot(played_game())
    apply_snapshot(state, snapshot)

    assert state.board.piece(sq("d6")) == Piece(PieceType.PAWN, Color.LIGHT)
    assert state.captured_pieces[Color.LIGHT] == [Piece(PieceType.PAWN, Color.DARK)]
    assert len(state.move_history) == 6


def test_snapshot_is_detached_from_the_state() -> None:
    state = game.initialize()
    snapshot = get_snapshot(state)
    game.make_move(state, sq("e2"), sq("e4"))
    assert snapshot.current_player == Color.LIGHT
    assert snapshot.board[6][4] is not None
    assert snapshot.castling_rights[Color.LIGHT] == state.castling_rights.rights[Color.LIGHT]
