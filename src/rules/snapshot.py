"""Full-state export/import between a GameState and the boundary GameSnapshot."""

import logging
from typing import Optional

from src.core.models import (
    GameSnapshot,
    MoveRecordModel,
    PieceModel,
    PositionModel,
)
from src.core.shared_types import Color
from src.rules.board import Board, empty_grid
from src.rules.castling import CastlingRights
from src.rules.pieces import Piece
from src.rules.position import Position
from src.rules.state import GameState, MoveRecord

logger = logging.getLogger(__name__)


# --- domain -> boundary ---
def _position_model(position: Position) -> PositionModel:
    return PositionModel(row=position.row, col=position.col)


def _piece_model(piece: Piece) -> PieceModel:
    return PieceModel(type=piece.type, color=piece.color)


def _optional_piece_model(piece: Optional[Piece]) -> Optional[PieceModel]:
    return _piece_model(piece) if piece is not None else None


def _record_model(record: MoveRecord) -> MoveRecordModel:
    return MoveRecordModel(
        piece=_piece_model(record.piece),
        from_square=_position_model(record.from_square),
        to_square=_position_model(record.to_square),
        captured_piece=_optional_piece_model(record.captured_piece),
        special_move=record.special_move,
        capture_type=record.capture_type,
    )


def get_snapshot(state: GameState) -> GameSnapshot:
    """Everything except the local selection."""
    return GameSnapshot(
        board=[[_optional_piece_model(piece) for piece in row] for row in state.board.grid],
        current_player=state.current_player,
        status=state.status,
        castling_rights=state.castling_rights.copy().rights,
        en_passant_target=(
            _position_model(state.en_passant_target)
            if state.en_passant_target is not None
            else None
        ),
        kings={color: _position_model(square) for color, square in state.kings.items()},
        captured_pieces={
            color: [_piece_model(piece) for piece in pieces]
            for color, pieces in state.captured_pieces.items()
        },
        move_history=[_record_model(record) for record in state.move_history],
    )


# --- boundary -> domain ---
def _position(model: PositionModel) -> Position:
    return Position(model.row, model.col)


def _piece(model: PieceModel) -> Piece:
    return Piece(model.type, model.color)


def _optional_piece(model: Optional[PieceModel]) -> Optional[Piece]:
    return _piece(model) if model is not None else None


def _record(model: MoveRecordModel) -> MoveRecord:
    return MoveRecord(
        piece=_piece(model.piece),
        from_square=_position(model.from_square),
        to_square=_position(model.to_square),
        captured_piece=_optional_piece(model.captured_piece),
        special_move=model.special_move,
        capture_type=model.capture_type,
    )


def apply_snapshot(state: GameState, snapshot: GameSnapshot) -> None:
    """
    Replace the state wholesale with the snapshot's content.

    The selection is cleared unconditionally: a candidate list computed before a remote update must never be acted upon.
    """
    grid = empty_grid()
    for row, cells in enumerate(snapshot.board):
        for col, piece in enumerate(cells):
            grid[row][col] = _optional_piece(piece)

    state.board = Board(grid)
    state.current_player = snapshot.current_player
    state.status = snapshot.status
    state.castling_rights = CastlingRights(
        {color: dict(sides) for color, sides in snapshot.castling_rights.items()}
    )
    state.en_passant_target = (
        _position(snapshot.en_passant_target)
        if snapshot.en_passant_target is not None
        else None
    )
    state.kings = {color: _position(square) for color, square in snapshot.kings.items()}
    state.captured_pieces = {
        color: [_piece(piece) for piece in snapshot.captured_pieces.get(color, [])]
        for color in Color
    }
    state.move_history = [_record(record) for record in snapshot.move_history]
    state.clear_selection()
    logger.debug(
        "Applied snapshot: %s to move, status %s, %d moves played",
        state.current_player,
        state.status,
        len(state.move_history),
    )


def from_snapshot(snapshot: GameSnapshot) -> GameState:
    """Convenience method: a fresh GameState holding the snapshot's content."""
    state = GameState()
    apply_snapshot(state, snapshot)
    return state
