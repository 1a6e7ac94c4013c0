"""
Capturing / attacking rules
---

Answers one question: "Is the given square attacked by the opponent of `defending_color`?"
Used for check detection and for the castling rule "the king may not pass through check".

Each threat class is checked independently. The first hit wins.
"""

from typing import Callable, Mapping, Optional, Protocol

from src.core.shared_types import Color, PieceType
from src.rules.pieces import Piece
from src.rules.position import Position

Vector = tuple[int, int]

STRAIGHTS: tuple[Vector, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONALS: tuple[Vector, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
KNIGHT_DELTAS: tuple[Vector, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_DELTAS: tuple[Vector, ...] = STRAIGHTS + DIAGONALS

# LIGHT starts on the high rows and moves towards row 0.
FORWARD: dict[Color, int] = {Color.LIGHT: -1, Color.DARK: 1}


class Board(Protocol):
    """Just the parts the attack rules need"""

    def piece(self, square: Position) -> Optional[Piece]: ...


def raycasting_attack(
    square: Position,
    by_color: Color,
    by_piece_types: frozenset[PieceType],
    board: Board,
    directions: tuple[Vector, ...],
) -> bool:
    """
    Walk each ray away from the square. Only the first occupied square along a ray matters:
    it attacks the square if it is one of `by_piece_types` of `by_color`, otherwise it blocks the ray.
    """
    for d_row, d_col in directions:
        target = square.offset(d_row, d_col)
        while target.is_within_bounds():
            piece_found = board.piece(target)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
            target = target.offset(d_row, d_col)
    return False


def single_step_attack(
    square: Position,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: tuple[Vector, ...],
) -> bool:
    """Equivalent of raycasting for pieces that only reach a single step along each direction."""
    attacker = Piece(by_piece_type, by_color)
    for d_row, d_col in deltas:
        target = square.offset(d_row, d_col)
        if target.is_within_bounds() and board.piece(target) == attacker:
            return True
    return False


def is_attacked_by_pawn(square: Position, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally forward. So to find an attacking pawn, look one row BACK from the
    attacker's point of view: the opposite of the attacker's forward direction.
    """
    d_row = -FORWARD[by_color]
    deltas: tuple[Vector, ...] = ((d_row, -1), (d_row, 1))
    return single_step_attack(square, by_color, PieceType.PAWN, board, deltas)


def is_attacked_by_knight(square: Position, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_on_straights(square: Position, by_color: Color, board: Board) -> bool:
    """Rooks and queens"""
    sliders = frozenset({PieceType.ROOK, PieceType.QUEEN})
    return raycasting_attack(square, by_color, sliders, board, STRAIGHTS)


def is_attacked_on_diagonals(square: Position, by_color: Color, board: Board) -> bool:
    """Bishops and queens"""
    sliders = frozenset({PieceType.BISHOP, PieceType.QUEEN})
    return raycasting_attack(square, by_color, sliders, board, DIAGONALS)


def is_attacked_by_king(square: Position, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Position, Color, Board], bool]
ATTACK_RULES: tuple[IsAttackedFn, ...] = (
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_on_straights,
    is_attacked_on_diagonals,
    is_attacked_by_king,
)


def is_attacked(board: Board, square: Position, defending_color: Color) -> bool:
    """True if any piece of the opponent of `defending_color` attacks the square."""
    by_color = defending_color.opponent
    return any(rule(square, by_color, board) for rule in ATTACK_RULES)


def is_king_in_check(
    board: Board, kings: Mapping[Color, Position], color: Color
) -> bool:
    """Uses the cached king location. The cache must be kept in sync with the board by the caller."""
    return is_attacked(board, kings[color], color)
