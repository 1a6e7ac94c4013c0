"""
The entrypoint into the rules package for the service layer (and any other collaborator).
It orchestrates selection, legal move generation and execution on an explicit GameState.
"""

import logging
from typing import Optional

from src.core.exceptions import GameStateError
from src.core.shared_types import TERMINAL_STATUSES, Color, PieceType, Status
from src.rules.board import Board
from src.rules.castling import CastlingRights, revoke_lost_rights
from src.rules.executor import MoveResult, execute_move
from src.rules.legality import filter_legal
from src.rules.moves import Move, generate_candidates
from src.rules.position import Position
from src.rules.state import GameState

logger = logging.getLogger(__name__)

__all__ = [
    "MoveResult",
    "deselect",
    "execute_move",
    "initialize",
    "is_game_over",
    "legal_moves",
    "make_move",
    "reset",
    "select_piece",
    "start_game",
    "winner",
]


def initialize(
    layout: Optional[str] = None, current_player: Color = Color.LIGHT
) -> GameState:
    """
    Standard starting position, waiting for the players, all castling rights, empty history.

    A custom `layout` (FEN piece placement) starts the game from that position instead. Castling rights are then
    only kept for kings and rooks still standing on their home squares.
    """
    if layout is None:
        return GameState(current_player=current_player)

    board = Board.from_fen(layout)
    kings: dict[Color, Position] = {}
    for color in Color:
        king = board.locate_king(color)
        if king is None:
            raise GameStateError(f"Cannot set up position {layout!r} without a {color} king.")
        kings[color] = king

    castling_rights = CastlingRights()
    revoke_lost_rights(board, castling_rights)
    return GameState(
        board=board,
        current_player=current_player,
        castling_rights=castling_rights,
        kings=kings,
    )


def reset(state: GameState) -> None:
    """Explicit reset request: back to the starting position, in place."""
    fresh = initialize()
    state.__dict__.update(fresh.__dict__)
    logger.info("Game reset to the starting position")


def start_game(state: GameState) -> bool:
    """Both sides are ready: 'waiting' -> 'active'. Any other status is left untouched."""
    if state.status != Status.WAITING:
        return False
    state.status = Status.ACTIVE
    logger.info("Game started")
    return True


def is_game_over(state: GameState) -> bool:
    return state.status in TERMINAL_STATUSES


def winner(state: GameState) -> Optional[Color]:
    """Only checkmate has a winner: the side that is NOT to move got mated."""
    if state.status != Status.CHECKMATE:
        return None
    return state.current_player.opponent


def legal_moves(state: GameState, position: Position) -> list[Move]:
    """Legal moves of whatever piece stands on `position` (empty list for an empty square)."""
    piece = state.board.piece(position)
    if piece is None:
        return []
    candidates = generate_candidates(state.board, state, position, piece)
    return filter_legal(state.board, state, position, piece, candidates)


def select_piece(state: GameState, position: Position) -> tuple[list[Move], bool]:
    """
    Select a piece of the side to move and compute its legal moves.
    ---

    Rejected (ok=False, state untouched) for an empty square, an opponent's piece, or a finished game.
    """
    piece = state.board.piece(position)
    if piece is None or piece.color != state.current_player or is_game_over(state):
        return [], False

    moves = legal_moves(state, position)
    state.selected = position
    state.valid_moves = moves
    return list(moves), True


def deselect(state: GameState) -> None:
    state.clear_selection()


def make_move(
    state: GameState,
    origin: Position,
    target: Position,
    promote_to: Optional[PieceType] = None,
) -> MoveResult:
    """Convenience method: select the piece on `origin`, then attempt the move to `target`."""
    _, ok = select_piece(state, origin)
    if not ok:
        return MoveResult(success=False, game_status=state.status)
    return execute_move(state, origin, target, promote_to)
