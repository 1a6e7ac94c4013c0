"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define candidate move sets for each piece type.

Candidates are pseudo-legal: they ignore whether the mover's own king ends up in check.
Legality is checked afterwards by src/rules/legality.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.shared_types import CastlingSide, Color, PieceType
from src.rules.attacks import (
    DIAGONALS,
    FORWARD,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Vector,
    is_attacked,
    is_king_in_check,
)
from src.rules.castling import CASTLING_RULES, CastlingRights
from src.rules.pieces import Piece
from src.rules.position import BOARD_SIZE, Position

PAWN_START_ROW: dict[Color, int] = {Color.LIGHT: 6, Color.DARK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.LIGHT: 0, Color.DARK: BOARD_SIZE - 1}


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Position) -> Optional[Piece]: ...
    def is_empty(self, square: Position) -> bool: ...
    def is_enemy(self, square: Position, color: Color) -> bool: ...


class Ancillary(Protocol):
    """Bookkeeping besides the board that some rules (castling, en passant) depend on."""

    castling_rights: CastlingRights
    en_passant_target: Optional[Position]
    kings: dict[Color, Position]


@dataclass(frozen=True)
class Move:
    """A candidate destination for the selected piece, plus the flags the executor needs."""

    to: Position
    is_en_passant: bool = False
    castling: Optional[CastlingSide] = None


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Position, piece: Piece, board: Board, directions: tuple[Vector, ...]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. An enemy piece ends the ray but can be captured, an own piece ends it without.
    """
    moves: list[Move] = []
    for d_row, d_col in directions:
        target = square.offset(d_row, d_col)
        while target.is_within_bounds():
            if not board.is_empty(target):
                if board.is_enemy(target, piece.color):
                    moves.append(Move(target))
                break
            moves.append(Move(target))
            target = target.offset(d_row, d_col)
    return moves


def single_step_move(
    square: Position, piece: Piece, board: Board, deltas: tuple[Vector, ...]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights."""
    moves: list[Move] = []
    for d_row, d_col in deltas:
        target = square.offset(d_row, d_col)
        if not target.is_within_bounds():
            continue
        if board.is_empty(target) or board.is_enemy(target, piece.color):
            moves.append(Move(target))
    return moves


def candidate_pawn_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    """
    A pawn:
    - moves a single square forward onto an empty square
    - can move by two from its starting row, if both squares are empty
    - takes diagonally
    - takes en passant by moving onto the en passant target square
    """
    moves: list[Move] = []
    direction = FORWARD[piece.color]

    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(one_step))
        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_START_ROW[piece.color] and board.is_empty(two_steps):
            moves.append(Move(two_steps))

    for d_col in (-1, 1):
        target = square.offset(direction, d_col)
        if not target.is_within_bounds():
            continue
        if board.is_enemy(target, piece.color):
            moves.append(Move(target))
        if target == ancillary.en_passant_target:
            moves.append(Move(target, is_en_passant=True))
    return moves


def candidate_knight_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, piece, board, KNIGHT_DELTAS)


def candidate_bishop_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    return raycasting_move(square, piece, board, DIAGONALS)


def candidate_rook_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    return raycasting_move(square, piece, board, STRAIGHTS)


def candidate_queen_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    """The Queen combines the rook moves and bishop moves"""
    return raycasting_move(square, piece, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(
    square: Position, piece: Piece, board: Board, ancillary: Ancillary
) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move of two files.
    """
    moves = single_step_move(square, piece, board, KING_DELTAS)
    for side in CastlingSide:
        if can_castle(board, ancillary, piece.color, side):
            king_to = CASTLING_RULES[(piece.color, side)].king_to
            moves.append(Move(king_to, castling=side))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Piece, Board, Ancillary], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate_candidates(
    board: Board, ancillary: Ancillary, position: Position, piece: Piece
) -> list[Move]:
    """Pseudo-legal moves for the piece standing on `position`. Does not mutate anything."""
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(position, piece, board, ancillary)


# -- CASTLING MOVES ---
def can_castle(
    board: Board, ancillary: Ancillary, color: Color, side: CastlingSide
) -> bool:
    """
    You are allowed to castle if
    ---

    * Castling rights for this side are not yet revoked.
    * You are not currently in check (you cannot castle out of check).
    * All squares in between king and rook are empty.
    * Your rook still stands on its corner.
    * The square the king passes over is not under attack.

    NOTE: The king's destination is not checked here. The legality filter simulates the full move anyway.
    """
    if not ancillary.castling_rights.has(color, side):
        return False

    if is_king_in_check(board, ancillary.kings, color):
        return False

    squares = CASTLING_RULES[(color, side)]
    if ancillary.kings[color] != squares.king_from:
        return False

    if any(not board.is_empty(square) for square in squares.between):
        return False

    if board.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
        return False

    return not is_attacked(board, squares.pass_through, color)
