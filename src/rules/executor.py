"""
Executes one already-validated move and updates every piece of derived bookkeeping.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core import config
from src.core.shared_types import (
    TERMINAL_STATUSES,
    CaptureType,
    CastlingSide,
    Color,
    PieceType,
    SpecialMove,
    Status,
)
from src.rules.castling import (
    CASTLING_RULES,
    CASTLING_TAGS,
    revoke_lost_rights,
    side_for_king_move,
)
from src.rules.legality import en_passant_victim
from src.rules.moves import PROMOTION_ROW, Move
from src.rules.pieces import Piece
from src.rules.position import Position
from src.rules.state import GameState, MoveRecord
from src.rules.status import evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    success: bool
    game_status: Status
    captured_piece: Optional[Piece] = None
    special_move: SpecialMove = SpecialMove.NONE


def find_selected_move(
    state: GameState, origin: Position, target: Position
) -> Optional[Move]:
    """The move must have been computed for the piece currently selected at `origin`."""
    if state.selected != origin:
        return None
    return next((move for move in state.valid_moves if move.to == target), None)


def execute_move(
    state: GameState,
    origin: Position,
    target: Position,
    promote_to: Optional[PieceType] = None,
) -> MoveResult:
    """
    Attempt to make a move
    -----

    Rejected (no mutation at all) when the game is over, or when `target` is not among the legal moves
    computed by the last selection of the piece at `origin`.

    Otherwise:
    1. determine the capture (regular, or the pawn behind the target for en passant)
    2. relocate the piece (+ the rook when castling)
    3. promote a pawn reaching the far row
    4. recompute the en passant target
    5. revoke castling rights
    6. update the king cache, append the history record
    7. hand the turn to the opponent, clear the selection, evaluate the new status
    """
    if state.status in TERMINAL_STATUSES:
        logger.debug("Move rejected: game is over (%s)", state.status)
        return MoveResult(success=False, game_status=state.status)

    move = find_selected_move(state, origin, target)
    piece = state.board.piece(origin)
    if move is None or piece is None:
        logger.debug(
            "Move rejected: %s -> %s is not a legal move of the selection",
            origin.to_algebraic(),
            target.to_algebraic(),
        )
        return MoveResult(success=False, game_status=state.status)

    promotion_type = promote_to or config.DEFAULT_PROMOTION
    if promotion_type in (PieceType.KING, PieceType.PAWN):
        logger.debug("Move rejected: cannot promote to %s", promotion_type)
        return MoveResult(success=False, game_status=state.status)

    # 1. captures
    captured_piece, capture_type = _capture(state, piece, move)

    # 2. relocation
    state.board.move_piece(origin, target)
    special_move = SpecialMove.NONE
    if piece.type == PieceType.KING and abs(target.col - origin.col) == 2:
        side = side_for_king_move(origin, target)
        _move_castling_rook(state, piece.color, side)
        special_move = CASTLING_TAGS[side]

    # 3. promotion
    if piece.type == PieceType.PAWN and target.row == PROMOTION_ROW[piece.color]:
        state.board.place_piece(piece.promoted_to(promotion_type), target)
        special_move = SpecialMove.PROMOTION

    # 4. en passant target lives for exactly one half-move
    state.en_passant_target = _determine_en_passant_target(piece, origin, target)

    # 5. castling rights
    revoke_lost_rights(state.board, state.castling_rights)

    # 6. king cache + history
    if piece.type == PieceType.KING:
        state.kings[piece.color] = target

    state.move_history.append(
        MoveRecord(
            piece=piece,
            from_square=origin,
            to_square=target,
            captured_piece=captured_piece,
            special_move=special_move,
            capture_type=capture_type,
        )
    )

    # 7. turn, selection, status
    state.current_player = piece.color.opponent
    state.clear_selection()
    previous_status = state.status
    state.status = evaluate(state)

    logger.debug(
        "%s %s %s -> %s (captured=%s, special=%s)",
        piece.color,
        piece.type,
        origin.to_algebraic(),
        target.to_algebraic(),
        captured_piece.type if captured_piece else None,
        special_move,
    )
    if state.status != previous_status:
        logger.info("Game status changed: %s -> %s", previous_status, state.status)

    return MoveResult(
        success=True,
        game_status=state.status,
        captured_piece=captured_piece,
        special_move=special_move,
    )


# -- PRIVATE HELPERS ---
def _capture(
    state: GameState, piece: Piece, move: Move
) -> tuple[Optional[Piece], Optional[CaptureType]]:
    """Remove the captured piece (if any) and credit it to the mover."""
    captured = state.board.piece(move.to)
    capture_type: Optional[CaptureType] = CaptureType.NORMAL if captured else None
    if captured is None and move.is_en_passant:
        captured = state.board.remove_piece(en_passant_victim(move.to, piece.color))
        capture_type = CaptureType.EN_PASSANT if captured else None

    if captured is not None:
        state.captured_pieces[piece.color].append(captured)
    return captured, capture_type


def _move_castling_rook(state: GameState, color: Color, side: CastlingSide) -> None:
    """The rook lands on the square next to the king, on the side it came from."""
    squares = CASTLING_RULES[(color, side)]
    state.board.move_piece(squares.rook_from, squares.rook_to)


def _determine_en_passant_target(
    piece: Piece, origin: Position, target: Position
) -> Optional[Position]:
    """The square passed over by a pawn double-step. Any other move clears it."""
    if piece.type == PieceType.PAWN and abs(target.row - origin.row) == 2:
        return Position((origin.row + target.row) // 2, target.col)
    return None

